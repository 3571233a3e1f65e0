"""Apparel store database management CLI.

Creates or drops the relational schema of the apparel domain. Only SQL
providers are affected; the in-memory default needs no schema.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    from apparel.domain import apparel
    from apparel.utils.db import setup_db
    import apparel.api as _api  # noqa: F401  (load API package before domain traversal)

    print("Initializing apparel domain...")
    apparel.init()
    print("Creating apparel database schema...")
    tables = setup_db(apparel)
    for table in sorted(tables):
        print(f"  {table}")
    print("Done.")


def drop_database():
    from apparel.domain import apparel
    from apparel.utils.db import drop_db
    import apparel.api as _api  # noqa: F401  (load API package before domain traversal)

    print("Initializing apparel domain...")
    apparel.init()
    print("Dropping apparel database schema...")
    drop_db(apparel)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Apparel store database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
