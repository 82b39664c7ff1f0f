"""
Create a CMS user out of band (e.g. to recover a lost admin). Run from project root:
  python -m cms_auth.scripts.create_user EMAIL PASSWORD [role] [--name NAME]
Example:
  python -m cms_auth.scripts.create_user admin@example.com your-secure-password admin --name "Site Admin"
"""
import argparse
import sys

from cms_auth.core.database import SessionLocal
from cms_auth.core.security import PASSWORD_MIN_LEN, hash_password
from cms_auth.schemas.auth import DEFAULT_ROLE, ROLES
from cms_auth.services.credential_store import (
    CredentialStore,
    UniqueConstraintViolation,
    normalize_email,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a CMS user without going through /register.")
    parser.add_argument("email", help="Email address (stored trimmed and lower-cased)")
    parser.add_argument("password", help=f"Password (at least {PASSWORD_MIN_LEN} chars)")
    parser.add_argument("role", nargs="?", default=DEFAULT_ROLE, choices=list(ROLES))
    parser.add_argument("--name", default=None, help="Display name")
    return parser


def main(argv: list[str] | None = None, session_factory=SessionLocal) -> int:
    args = build_parser().parse_args(argv)

    email = normalize_email(args.email)
    if not email or len(email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN:
        print(f"Password must be at least {PASSWORD_MIN_LEN} characters.", file=sys.stderr)
        return 1

    db = session_factory()
    try:
        store = CredentialStore(db)
        try:
            user = store.insert_user(email, hash_password(args.password), args.name)
        except UniqueConstraintViolation:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        store.add_role(user.id, args.role)
        db.commit()
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
