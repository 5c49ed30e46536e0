#!/usr/bin/env python3
"""
Bookstore API -- books and authors catalog with JWT authentication.

Usage:
  python main.py serve
  python main.py serve --host 0.0.0.0 --port 8080
  python main.py serve --reload
  python main.py seed

Environment variables (see core/config.py for the full list):
  SECRET_KEY     JWT signing key, at least 32 characters. Required unless DEBUG=true.
  DATABASE_URL   SQLAlchemy URL. Defaults to a SQLite file in the project root.
  DEBUG          true to auto-generate SECRET_KEY for local development.
"""

import argparse
import logging
import sys


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _seed(args: argparse.Namespace) -> int:
    from auth.seed import seed_identity
    from auth.store import UserStore
    from core.config import get_settings

    settings = get_settings()
    store = UserStore(settings.database_url)
    try:
        report = seed_identity(store, settings.seed_password)
    finally:
        store.close()
    print(f"  Roles created: {report.roles_created}")
    print(f"  Users created: {report.users_created}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bookstore-api",
        description="Bookstore REST API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py serve --reload
  SECRET_KEY=... DATABASE_URL=postgresql://user:pw@host/db python main.py seed
        """,
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    serve = sub.add_parser("serve", help="Run the HTTP server with uvicorn")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    serve.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    serve.set_defaults(func=_serve)

    seed = sub.add_parser("seed", help="Create the baseline roles and users if missing")
    seed.set_defaults(func=_seed)

    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    logging.basicConfig(level=logging.INFO, format="%(levelname)-5s %(name)s %(message)s")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
