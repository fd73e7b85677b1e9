"""CLI tool for admin operations.

Usage:
    python -m todo_service.cli create-user
    python -m todo_service.cli revoke-tokens <email>
"""

import sys
import getpass

from sqlmodel import Session

from todo_service.database import engine, create_db_and_tables
from todo_service.services import credential_store
from todo_service.services.errors import ServiceError


def create_user():
    """Create a user account from prompted credentials."""
    create_db_and_tables()

    email = input("Email: ").strip()
    if not email:
        print("Email cannot be empty.")
        sys.exit(1)

    password = getpass.getpass("Password: ")
    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        print("Passwords do not match.")
        sys.exit(1)

    with Session(engine) as session:
        try:
            user = credential_store.create_user(session, email, password)
        except ServiceError as e:
            print(f"Could not create user: {e}")
            sys.exit(1)

    print(f"\nUser '{user.email}' created with id {user.id}.")


def revoke_tokens(email: str):
    """Log a user out of every session."""
    create_db_and_tables()

    with Session(engine) as session:
        user = credential_store.get_user_by_email(session, email)
        if user is None:
            print(f"User '{email}' not found.")
            sys.exit(1)
        count = credential_store.revoke_all_tokens(session, user.id)

    print(f"Revoked {count} session(s) for '{email}'.")


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m todo_service.cli <command>")
        print("Commands: create-user, revoke-tokens <email>")
        sys.exit(1)

    command = sys.argv[1]
    if command == "create-user":
        create_user()
    elif command == "revoke-tokens":
        if len(sys.argv) != 3:
            print("Usage: python -m todo_service.cli revoke-tokens <email>")
            sys.exit(1)
        revoke_tokens(sys.argv[2])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
