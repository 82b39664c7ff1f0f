"""FastAPI application entrypoint. No business logic; only wiring, middleware and error handlers."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI

from cms_auth.api.errors import register_exception_handlers
from cms_auth.api.middleware import NoContentPreflightCORSMiddleware
from cms_auth.api.v1 import router as v1_router
from cms_auth.core.config import settings

app = FastAPI(
    title="CMS Auth API",
    version="0.1.0",
    docs_url="/docs" if settings.APP_ENV == "dev" else None,
    redoc_url="/redoc" if settings.APP_ENV == "dev" else None,
)

# Tokens travel only in the Authorization header (no cookies), so credentials stay off.
app.add_middleware(
    NoContentPreflightCORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "CMS Auth API"}


def run() -> None:
    """Serve the API with uvicorn on settings.HOST:settings.PORT."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
