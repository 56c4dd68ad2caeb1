"""Apply pending schema migrations: ``python -m grouphub.database.run_migrations``."""
import logging
import sys

from grouphub.database import run_migrations
from grouphub.utils.config import db_connection_string


def main(argv: list[str]) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    auto_apply = "--list" not in argv

    try:
        result = run_migrations(db_connection_string, auto_apply=auto_apply)
    except Exception as e:
        print(f"\nMigrations failed: {type(e).__name__}: {e}")
        return 1

    print("\nMigration Status:")
    print(f"  pending: {result['pending_count']}")
    for migration_id in result["newly_applied"]:
        print(f"  applied: {migration_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
