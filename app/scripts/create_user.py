"""
Create a user directly in the database (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Ada Admin" admin@example.com your-secure-password admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.security import (
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    ROLES,
    hash_password,
)
from app.repositories import GroupRepository, UserRepository
from app.services import UserService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a user without going through POST /users (which needs an admin token)."
    )
    parser.add_argument("name", help=f"Display name (1-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email, used to log in")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="user", choices=list(ROLES))
    args = parser.parse_args(argv)

    name = args.name.strip()
    email = args.email.strip()
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if "@" not in email:
        print("Invalid email.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        users = UserService(UserRepository(db), GroupRepository(db))
        if users.find_by_email(email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        users.create(
            {
                "name": name,
                "email": email,
                "password": hash_password(args.password),
                "role": args.role,
            }
        )
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
