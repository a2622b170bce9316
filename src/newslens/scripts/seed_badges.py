# src/newslens/scripts/seed_badges.py
"""Insert the static badge catalog into the configured database."""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from newslens.db.session import SessionLocal, create_tables
from newslens.services.badges import BADGE_CATALOG, ensure_badge_catalog

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (local development without Alembic)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the catalog instead of writing it",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    if args.list:
        for badge in BADGE_CATALOG:
            print(f"{badge.icon} {badge.name}: {badge.description}")
        return 0

    if args.create_tables:
        create_tables()

    db = SessionLocal()
    try:
        created = ensure_badge_catalog(db)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Seeding badges failed: %s", exc)
        return 1
    finally:
        db.close()

    logger.info("%d badge(s) created, %d in catalog", created, len(BADGE_CATALOG))
    return 0


if __name__ == "__main__":
    sys.exit(main())
