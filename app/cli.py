"""CLI commands for Our Home."""

import argparse
import asyncio
import getpass
import sys

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.config import settings
from app.database import SessionLocal
from app.models.user import User
from app.services.auth import get_auth_provider
from app.services.partnership_service import partnership_service
from app.services.profile_service import profile_service


def create_user(email: str, password: str | None = None, full_name: str | None = None) -> None:
    """Create an account with an empty profile."""
    db: Session = SessionLocal()

    try:
        email = email.strip().lower()
        existing = db.query(User).filter(func.lower(User.email) == email).first()
        if existing:
            print(f"Error: User with email '{email}' already exists.")
            sys.exit(1)

        if not password:
            password = getpass.getpass("Password: ")
            password_confirm = getpass.getpass("Confirm password: ")
            if password != password_confirm:
                print("Error: Passwords do not match.")
                sys.exit(1)

        if len(password) < settings.password_min_length:
            print(f"Error: Password must be at least {settings.password_min_length} characters.")
            sys.exit(1)

        user = asyncio.run(
            get_auth_provider().create_user(db, email, password, full_name=full_name)
        )
        print(f"User created successfully: {user.email} ({user.id})")

    finally:
        db.close()


def show_household(email: str) -> None:
    """Print a user's partnership state and partner."""
    db: Session = SessionLocal()

    try:
        user = db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()
        if not user:
            print(f"Error: No user with email '{email}'.")
            sys.exit(1)

        state = partnership_service.state_for(db, user.id)
        print(f"User:  {user.email} ({user.id})")
        print(f"State: {state.value}")

        active = partnership_service.get_active(db, user.id)
        if active is not None:
            other = db.query(User).filter(User.id == active.other_member(user.id)).first()
            print(f"Partnership: {active.id} [{active.status.value}]")
            print(f"With:  {other.email if other else active.other_member(user.id)}")

        profiles = profile_service.household_profiles(db, user.id)
        if profiles["partner"] is not None:
            print(f"Partner name: {profiles['partner'].full_name or '-'}")

    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Our Home CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # create-user command
    create_user_parser = subparsers.add_parser("create-user", help="Create a user account")
    create_user_parser.add_argument("--email", required=True, help="Email address")
    create_user_parser.add_argument(
        "--password", help="Password (will prompt if not provided)"
    )
    create_user_parser.add_argument("--name", help="Display name")

    # household command
    household_parser = subparsers.add_parser(
        "household", help="Show a user's partnership state"
    )
    household_parser.add_argument("--email", required=True, help="Email address")

    args = parser.parse_args()

    if args.command == "create-user":
        create_user(args.email, args.password, args.name)
    elif args.command == "household":
        show_household(args.email)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
