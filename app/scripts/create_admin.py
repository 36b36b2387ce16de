# app/scripts/create_admin.py
"""
Create a staff account from the command line.

    python -m app.scripts.create_admin --username admin --email admin@example.com --password '...'
"""
import argparse
import sys

from app.config.database import SessionLocal
from app.models.user import User, UserRole
from app.services.user.user_service import UserService


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create an admin, superuser or staff account")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument(
        "--role",
        default=UserRole.ADMIN.value,
        choices=[UserRole.SUPERUSER.value, UserRole.ADMIN.value, UserRole.STAFF.value],
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.username == args.username).first()
        if existing:
            print(f"User already exists: {args.username} ({existing.role})")
            return 1

        user = UserService.create_user(
            db=db,
            username=args.username,
            email=args.email,
            password=args.password,
            role=args.role,
        )
        print(f"✅ {user.role} user created: {user.username}")
        return 0
    except ValueError as e:
        print(f"Could not create user: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
