"""
Signed session tokens: header.payload.signature, HMAC-SHA256, unpadded base64url segments.

The signing secret is always passed in by the caller; nothing here reads configuration.
"""

import time

import jwt
from pydantic import ValidationError

from cms_auth.schemas.auth import Claims

TOKEN_ALGORITHM = "HS256"
TOKEN_TYPE = "JWT"


def encode(claims: Claims, secret: str) -> str:
    """Serialize claims and sign them with secret. Returns the compact three-segment token."""
    return jwt.encode(
        claims.model_dump(),
        secret,
        algorithm=TOKEN_ALGORITHM,
        headers={"typ": TOKEN_TYPE},
    )


def decode_and_verify(token: str, secret: str, now: float | None = None) -> Claims | None:
    """
    Verify the signature and expiry of token and return its claims.

    Returns None on any failure (wrong segment count, bad signature, unparseable or
    incomplete payload, expired) so callers can treat every failure as unauthenticated.
    A token is expired once now >= exp.
    """
    if not token or not isinstance(token, str) or token.count(".") != 2:
        return None
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[TOKEN_ALGORITHM],
            # Expiry is checked below against the caller's clock.
            options={"verify_exp": False, "require": ["exp", "sub"]},
        )
    except jwt.PyJWTError:
        return None
    try:
        claims = Claims.model_validate(payload)
    except ValidationError:
        return None
    current = time.time() if now is None else now
    if current >= claims.exp:
        return None
    return claims
