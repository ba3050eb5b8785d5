"""Create the first manager account so teams and projects can be set up."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from teamhub.application.use_cases.users import create_user
from teamhub.domain.entities import UserRole
from teamhub.domain.errors import TeamHubError
from teamhub.infrastructure.database import SessionLocal, initialize_database


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create an initial user for the TeamHub API.",
    )
    parser.add_argument("--name", default="Administrator", help="Full name of the user")
    parser.add_argument("--email", default="admin@example.com", help="Login email")
    parser.add_argument(
        "--password",
        default=None,
        help="Password for the account. Prompted for when omitted.",
    )
    parser.add_argument(
        "--member",
        action="store_true",
        help="Create a regular member instead of a manager.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=UserRole.MEMBER if args.member else UserRole.MANAGER,
        )
    except TeamHubError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc.message}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not save the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role.value}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
