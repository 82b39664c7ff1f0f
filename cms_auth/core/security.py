"""Password hashing for CMS accounts (PBKDF2-HMAC-SHA256, self-describing stored format)."""

import hashlib
import hmac
import secrets

# Stored format: pbkdf2:<iterations>:<salt-hex>:<derived-hex>
HASH_ALGORITHM_TAG = "pbkdf2"
PBKDF2_ITERATIONS = 100_000
SALT_BYTES = 16
DERIVED_KEY_BYTES = 32

PASSWORD_MIN_LEN = 8


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        iterations,
        dklen=DERIVED_KEY_BYTES,
    )


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage with a fresh random salt. Do not store plain passwords."""
    salt = secrets.token_bytes(SALT_BYTES)
    derived = _derive(plain_password, salt, PBKDF2_ITERATIONS)
    return f"{HASH_ALGORITHM_TAG}:{PBKDF2_ITERATIONS}:{salt.hex()}:{derived.hex()}"


def verify_password(plain_password: str, stored: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Uses the iteration count and salt embedded in the stored string, so hashes written
    with an older iteration count keep verifying. Malformed input returns False.
    """
    if not isinstance(stored, str):
        return False
    parts = stored.split(":")
    if len(parts) != 4 or parts[0] != HASH_ALGORITHM_TAG:
        return False
    try:
        iterations = int(parts[1])
        salt = bytes.fromhex(parts[2])
        expected = bytes.fromhex(parts[3])
    except ValueError:
        return False
    if iterations < 1 or not salt or not expected:
        return False
    derived = _derive(plain_password, salt, iterations)
    return hmac.compare_digest(derived, expected)
