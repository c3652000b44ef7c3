"""
Create a user (e.g. the first admin). Run from project root:
  python -m gatehouse.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m gatehouse.scripts.create_user Ada ada@example.com your-secure-password admin
"""
import argparse
import sys

from pydantic import ValidationError

from gatehouse.core.config import get_settings
from gatehouse.core.database import build_engine, build_session_factory
from gatehouse.core.security import hash_password
from gatehouse.schemas.auth import SignupForm
from gatehouse.services.errors import DuplicateEmailError
from gatehouse.services.users import UserStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Gatehouse user (admins cannot sign up).")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    try:
        form = SignupForm(name=args.name.strip(), email=args.email.strip(), password=args.password)
    except ValidationError as e:
        print(f"Invalid user details:\n{e}", file=sys.stderr)
        return 1

    settings = get_settings()
    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        store = UserStore(db)
        if store.find_by_email(form.email) is not None:
            print(f"User with email '{form.email}' already exists.", file=sys.stderr)
            return 1
        try:
            store.create_user(
                name=form.name,
                email=form.email,
                password_hash=hash_password(form.password, rounds=settings.BCRYPT_ROUNDS),
                role=args.role,
            )
        except DuplicateEmailError:
            print(f"User with email '{form.email}' already exists.", file=sys.stderr)
            return 1
        print(f"Created user '{form.email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
