from __future__ import annotations

import argparse
import secrets
import string
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from skateroom.config import build_sqlalchemy_db_url, settings  # noqa: E402
from skateroom.database import Base, SessionLocal, engine  # noqa: E402
from skateroom.models.profile import Profile  # noqa: E402
from skateroom.models.user import User  # noqa: E402
from skateroom.services.identity import IdentityError, IdentityProvider  # noqa: E402
from skateroom.utils.password_hash import hash_password  # noqa: E402


def _ensure_tables() -> None:
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


def _generate_password(length: int = 20) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Provision a user account together with its profile row."
    )
    parser.add_argument("--email", required=True, help="User email")
    parser.add_argument("--password", default=None, help="User password (generated if omitted)")
    parser.add_argument("--full-name", default=None, help="Profile display name")
    parser.add_argument(
        "--update-password",
        action="store_true",
        help="If the user exists, overwrite their password",
    )
    args = parser.parse_args(argv)

    _ensure_tables()

    email = args.email.strip().lower()
    password = args.password or _generate_password()

    try:
        response = IdentityProvider(SessionLocal).sign_up(email, password)
        created = True
        user_id = response.user.id
    except IdentityError:
        created = False
        user_id = None

    with SessionLocal() as db:
        user = db.query(User).filter(User.email == email).first()
        if user is None:
            sys.stderr.write(f"could not provision {email}\n")
            return 1
        user_id = user.id
        if not created and args.update_password:
            user.password = hash_password(password)
        profile = db.query(Profile).filter(Profile.id == user_id).first()
        if profile is None:
            # Accounts created before profiles were provisioned automatically.
            profile = Profile(id=user_id)
            db.add(profile)
        if args.full_name:
            profile.full_name = args.full_name
        db.commit()

    if created:
        print(f"created user id={user_id} email={email}")
        if args.password is None:
            print(f"generated password: {password}")
    else:
        print(f"user already exists email={email}")
        if args.update_password:
            print("password updated")
        elif args.password is None:
            print("(password not changed)")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
