"""
Create an active user directly (e.g. the first admin, who then invites everyone else).
Run from project root:
  python -m app.scripts.create_admin EMAIL NAME PASSWORD [role]
Example:
  python -m app.scripts.create_admin admin@example.org "Parish Admin" 'S3cure-password' admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.security import hash_password, validate_password_strength
from app.models import User
from app.schemas.auth import EMAIL_PATTERN


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a CMS user without an invite.")
    parser.add_argument("email", help="Login email (stored lowercased)")
    parser.add_argument("name", help="Display name")
    parser.add_argument("password", help="8+ chars with an uppercase letter, a lowercase letter and a digit")
    parser.add_argument("role", nargs="?", default="admin", choices=["admin", "editor"])
    args = parser.parse_args()

    email = args.email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        print("Invalid email address.", file=sys.stderr)
        return 1
    name = args.name.strip()
    if not name or len(name) > 255:
        print("Invalid name length.", file=sys.stderr)
        return 1
    check = validate_password_strength(args.password)
    if not check.valid:
        print(check.reason, file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            email=email,
            name=name,
            password_hash=hash_password(args.password),
            role=args.role,
            is_active=True,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
