"""Health check endpoint; reports whether the credential store database is reachable."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cms_auth.core.config import Settings, get_settings
from cms_auth.core.database import check_db_connected, get_db
from cms_auth.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Used by load balancers and monitoring. Never requires authentication."""
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
