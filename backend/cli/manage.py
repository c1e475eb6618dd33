"""CLI for database migrations and admin account maintenance."""
import argparse
import getpass
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from alembic import command
from alembic.config import Config

from portfolio.core.database import get_session_local
from portfolio.core.logging_config import LoggingConfig
from portfolio.services.auth_service import AuthService

logger = LoggingConfig.get_logger(__name__)


def alembic_config(database_url=None) -> Config:
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "alembic"))
    # LoggingConfig already owns the handlers
    config.attributes["configure_logger"] = False
    if database_url:
        config.set_main_option("sqlalchemy.url", database_url)
    return config


def cmd_migrate(args):
    """Upgrade the schema to the given revision (head by default)."""
    command.upgrade(alembic_config(args.database_url), args.revision)
    print(f"Database upgraded to {args.revision}")
    return 0


def cmd_stamp(args):
    """Mark the database as being at a revision without running migrations."""
    command.stamp(alembic_config(args.database_url), args.revision)
    return 0


def cmd_create_user(args):
    """Create an admin user, or reset the password of an existing one."""
    password = args.password or getpass.getpass(f"Password for {args.username}: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 1

    db = get_session_local()()
    try:
        service = AuthService(db)
        user = service.get_user_by_username(args.username)
        if user is not None:
            if not args.reset_password:
                print(f"User '{args.username}' already exists (use --reset-password)", file=sys.stderr)
                return 1
            service.set_password(user, password)
            service.logout_all_user_sessions(user.id)
            print(f"Password reset for '{args.username}'")
            return 0

        user = service.register_user(args.username, password)
        print(f"Created user '{user.username}' (id={user.id})")
        return 0
    finally:
        db.close()


def cmd_cleanup_sessions(args):
    """Delete expired sessions."""
    db = get_session_local()()
    try:
        count = AuthService(db).cleanup_expired_sessions()
    finally:
        db.close()
    print(f"Removed {count} expired session(s)")
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="manage")
    sub = p.add_subparsers(dest="cmd")

    s = sub.add_parser("migrate", help="Run migrations (upgrade head)")
    s.add_argument("--revision", "-r", help="Target revision", default="head")
    s.add_argument("--database-url", help="Override the configured database URL")
    s.set_defaults(func=cmd_migrate)

    s = sub.add_parser("stamp", help="Stamp alembic to a revision")
    s.add_argument("--revision", "-r", help="Revision to stamp", default="head")
    s.add_argument("--database-url", help="Override the configured database URL")
    s.set_defaults(func=cmd_stamp)

    s = sub.add_parser("create-user", help="Create an admin user")
    s.add_argument("username")
    s.add_argument("--password", "-p", help="Password (prompted when omitted)")
    s.add_argument("--reset-password", action="store_true", help="Reset the password if the user exists")
    s.set_defaults(func=cmd_create_user)

    s = sub.add_parser("cleanup-sessions", help="Delete expired sessions")
    s.set_defaults(func=cmd_cleanup_sessions)
    return p


def main(argv=None):
    LoggingConfig.configure()
    p = build_parser()
    args = p.parse_args(argv)
    if not hasattr(args, "func"):
        p.print_help()
        return 2
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
