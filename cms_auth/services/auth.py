"""
CMS auth service: login, register, logout and verify over the credential store and session ledger.

Stateless per call; all state lives in the database. Expected failures raise AuthError
subclasses, which the API layer renders as JSON error bodies. Store failures propagate.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from cms_auth.core import tokens
from cms_auth.core.security import PASSWORD_MIN_LEN, hash_password, verify_password
from cms_auth.schemas.auth import BOOTSTRAP_ROLE, DEFAULT_ROLE, ROLES, Claims, UserProfile
from cms_auth.services.credential_store import (
    CredentialStore,
    UniqueConstraintViolation,
    normalize_email,
)
from cms_auth.services.session_ledger import (
    DEFAULT_SESSION_TTL,
    SessionLedger,
    as_utc,
    utcnow,
)

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base for expected auth failures. code is stable; message is safe to show to clients."""

    code = "auth_error"
    status_code = 400
    default_message = "Authentication error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFields(AuthError):
    code = "missing_fields"
    status_code = 400
    default_message = "Email and password required"


class WeakPassword(AuthError):
    code = "weak_password"
    status_code = 400
    default_message = f"Password must be at least {PASSWORD_MIN_LEN} characters"


class InvalidRole(AuthError):
    code = "invalid_role"
    status_code = 400
    default_message = f"Role must be one of {', '.join(ROLES)}"


class InvalidCredentials(AuthError):
    """Same error for unknown email and wrong password."""

    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid credentials"


class Unauthorized(AuthError):
    code = "unauthorized"
    status_code = 401
    default_message = "Authorization required"


class SessionExpired(AuthError):
    """Token signature and expiry are fine but its ledger session is gone or stale."""

    code = "session_expired"
    status_code = 401
    default_message = "Session expired"


class AccountDeactivated(AuthError):
    code = "account_deactivated"
    status_code = 403
    default_message = "Account deactivated"


class Forbidden(AuthError):
    code = "forbidden"
    status_code = 403
    default_message = "Admin access required"


class EmailExists(AuthError):
    code = "email_exists"
    status_code = 409
    default_message = "Email already exists"


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: UserProfile
    expires_at: datetime


@dataclass(frozen=True)
class RegisterResult:
    user: UserProfile
    bootstrap: bool

    @property
    def message(self) -> str:
        if self.bootstrap:
            return "Admin account created successfully"
        return "User created successfully"


@dataclass(frozen=True)
class VerifyResult:
    user: UserProfile
    expires_at: datetime
    session_id: str


class AuthService:
    """
    Orchestrates password checks, session ledger entries and token signing.

    secret is the dedicated token signing secret; it is injected, never read from settings here.
    """

    def __init__(
        self,
        db: Session,
        secret: str,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.db = db
        self.secret = secret
        self.session_ttl = session_ttl
        self.clock = clock
        self.store = CredentialStore(db)
        self.ledger = SessionLedger(db, clock=clock)

    def _decode(self, token: str | None) -> Claims:
        if not token:
            raise Unauthorized()
        claims = tokens.decode_and_verify(
            token, self.secret, now=self.clock().timestamp()
        )
        if claims is None:
            raise Unauthorized("Invalid or expired token")
        return claims

    def login(self, email: str | None, password: str | None) -> LoginResult:
        email = normalize_email(email or "")
        if not email or not password:
            raise MissingFields()

        user = self.store.get_user_by_email(email)
        if user is None:
            logger.info("Login rejected", extra={"reason": InvalidCredentials.code})
            raise InvalidCredentials()
        if not user.is_active:
            logger.info(
                "Login rejected",
                extra={"reason": AccountDeactivated.code, "user_id": user.id},
            )
            raise AccountDeactivated()
        if not verify_password(password, user.password_hash):
            logger.info(
                "Login rejected",
                extra={"reason": InvalidCredentials.code, "user_id": user.id},
            )
            raise InvalidCredentials()

        roles = self.store.list_roles(user.id)
        session = self.ledger.create(user.id, ttl=self.session_ttl)
        expires_at = as_utc(session.expires_at)
        token = tokens.encode(
            Claims(
                sub=user.id,
                email=user.email,
                name=user.name,
                roles=roles,
                session=session.id,
                exp=int(expires_at.timestamp()),
            ),
            self.secret,
        )
        self.db.commit()

        logger.info("Login succeeded", extra={"user_id": user.id, "roles": roles})
        return LoginResult(
            token=token,
            user=UserProfile(id=user.id, email=user.email, name=user.name, roles=roles),
            expires_at=expires_at,
        )

    def register(
        self,
        email: str | None,
        password: str | None,
        name: str | None = None,
        role: str | None = None,
        caller_token: str | None = None,
    ) -> RegisterResult:
        """
        Create an account. The first account ever is created without a caller token and
        is always admin; afterwards the caller must hold a live admin session.
        """
        bootstrap = self.store.count_users() == 0
        if not bootstrap:
            try:
                caller = self.verify(caller_token)
            except SessionExpired as e:
                raise Unauthorized("Invalid or expired token") from e
            if BOOTSTRAP_ROLE not in caller.user.roles:
                raise Forbidden()

        email = normalize_email(email or "")
        if not email or not password:
            raise MissingFields()
        if len(password) < PASSWORD_MIN_LEN:
            raise WeakPassword()

        if bootstrap:
            assigned_role = BOOTSTRAP_ROLE
        else:
            assigned_role = role or DEFAULT_ROLE
            if assigned_role not in ROLES:
                raise InvalidRole()

        try:
            user = self.store.insert_user(
                email, hash_password(password), name
            )
        except UniqueConstraintViolation as e:
            raise EmailExists() from e
        self.store.add_role(user.id, assigned_role)
        self.db.commit()

        logger.info(
            "User registered",
            extra={"user_id": user.id, "role": assigned_role, "bootstrap": bootstrap},
        )
        return RegisterResult(
            user=UserProfile(
                id=user.id, email=user.email, name=user.name, roles=[assigned_role]
            ),
            bootstrap=bootstrap,
        )

    def logout(self, token: str | None) -> None:
        """Revoke the session embedded in token. Revoking an already-gone session is not an error."""
        claims = self._decode(token)
        revoked = self.ledger.revoke(claims.session)
        self.db.commit()
        logger.info(
            "Logout",
            extra={"user_id": claims.sub, "sessions_revoked": revoked},
        )

    def verify(self, token: str | None) -> VerifyResult:
        """
        Full re-authentication: signature and expiry, then a live ledger session, then
        roles re-read from the store so grants and revocations apply immediately.
        """
        claims = self._decode(token)
        session = self.ledger.get_live(claims.session)
        if session is None:
            raise SessionExpired()
        roles = self.store.list_roles(claims.sub)
        return VerifyResult(
            user=UserProfile(
                id=claims.sub, email=claims.email, name=claims.name, roles=roles
            ),
            expires_at=as_utc(session.expires_at),
            session_id=session.id,
        )

    def list_users(self) -> list[UserProfile]:
        return [
            UserProfile(
                id=u.id,
                email=u.email,
                name=u.name,
                roles=[r.role for r in u.roles],
            )
            for u in self.store.list_users()
        ]
