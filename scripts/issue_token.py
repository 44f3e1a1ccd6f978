# scripts/issue_token.py
"""
Local dev helper: make sure a user exists and print a bearer token for it.

    python scripts/issue_token.py owner@example.com --name "Site Owner"
"""
import argparse

from sqlalchemy import select

from portfolio_admin.auth import create_access_token
from portfolio_admin.database import SessionLocal, init_db
from portfolio_admin.models import User


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue an access token for a portfolio user")
    parser.add_argument("email")
    parser.add_argument("--name", default=None)
    parser.add_argument("--minutes", type=int, default=None, help="token lifetime")
    args = parser.parse_args()

    init_db()
    with SessionLocal() as db:
        user = db.scalars(select(User).where(User.email == args.email)).first()
        if user is None:
            user = User(email=args.email, name=args.name)
            db.add(user); db.commit(); db.refresh(user)
            print(f"created user id={user.id}")
        print(create_access_token(user.id, expires_minutes=args.minutes))


if __name__ == "__main__":
    main()
