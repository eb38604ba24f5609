"""TailorHub database management CLI.

Creates and drops the SQL schema for the tailoring domain. Only providers
configured with a SQL backend are touched; the in-memory default has
nothing to create.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def _initialized_domain():
    from tailoring.domain import tailoring

    print("Initializing tailoring domain...")
    tailoring.init()
    return tailoring


def setup_databases():
    from tailoring.utils.db import setup_db

    touched = setup_db(_initialized_domain())
    if not touched:
        print("  No SQL providers configured; nothing to create.")
    for name in touched:
        print(f"  {name} schema ready.")
    print("Done.")


def drop_databases():
    from tailoring.utils.db import drop_db

    touched = drop_db(_initialized_domain())
    if not touched:
        print("  No SQL providers configured; nothing to drop.")
    for name in touched:
        print(f"  {name} schema dropped.")
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="TailorHub database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
