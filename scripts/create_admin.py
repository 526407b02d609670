"""Create (or promote) an admin account from the command line."""

from __future__ import annotations

import argparse
import getpass
import sys

from freelance_hub.core.exceptions import ConflictError, ValidationError
from freelance_hub.core.logging_config import configure_logging
from freelance_hub.database.db import get_db_session
from freelance_hub.models import User, UserRole
from freelance_hub.services.auth_service import AuthService


def create_admin(email: str, password: str) -> None:
    with get_db_session() as session:
        existing = session.query(User).filter(User.email == email.strip().lower()).first()
        if existing is not None:
            existing.role = UserRole.ADMIN
            session.commit()
            print(f"Promoted existing user {existing.email} to admin.")
            return
        AuthService(session).signup(email=email, password=password, role=UserRole.ADMIN)
        print(f"Created admin {email}.")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email")
    args = parser.parse_args()
    configure_logging()
    password = getpass.getpass("Password: ")
    if len(password) < 8:
        print("Password must be at least 8 characters.")
        return 1
    try:
        create_admin(args.email, password)
    except (ConflictError, ValidationError) as exc:
        print(f"Could not create admin: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
