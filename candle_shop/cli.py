"""
Command-line helpers: run the API, create an admin account
"""
import argparse

import uvicorn

from candle_shop.config import settings


def create_admin(name: str, email: str, password: str) -> None:
    from candle_shop.database import SessionLocal, init_db
    from candle_shop.repositories.user_repository import UserRepository
    from candle_shop.services.auth_service import hash_password

    init_db()
    db = SessionLocal()
    try:
        repository = UserRepository(db)
        user = repository.get_by_email(email)
        if user:
            repository.update(user, {"role": "admin"})
            print(f"✓ {email} promoted to admin")
        else:
            repository.create(name=name, email=email, password_hash=hash_password(password), role="admin")
            print(f"✓ Admin {email} created")
    finally:
        db.close()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="candle-shop")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=settings.SERVICE_PORT)
    serve.add_argument("--reload", action="store_true")

    admin = sub.add_parser("create-admin", help="Create or promote an admin account")
    admin.add_argument("--name", default="Admin")
    admin.add_argument("--email", required=True)
    admin.add_argument("--password", required=True)

    args = parser.parse_args(argv)
    if args.command == "serve":
        uvicorn.run("candle_shop.main:app", host=args.host, port=args.port, reload=args.reload)
    else:
        create_admin(args.name, args.email, args.password)


if __name__ == "__main__":
    main()
