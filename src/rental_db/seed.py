"""Catalog seeding CLI — ``rental-seed``.

Loads a question catalog YAML and replaces the contents of
``needs_assessment_questions`` with it in a single transaction.

Examples::

    # Seed from catalog/needs_assessment.yaml
    uv run rental-seed

    # Seed from another file, validating only
    uv run rental-seed --catalog path/to/catalog.yaml --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from rental_questionnaire.catalog import CatalogStore

logger = logging.getLogger(__name__)


async def run_seed(catalog_path: str | None = None, *, dry_run: bool = False) -> int:
    """Load the catalog file and write it to the database.

    Returns the number of questions in the catalog.
    """
    store = CatalogStore(catalog_path)
    store.load()
    if dry_run:
        logger.info("Dry run: %d questions validated from %s", len(store.questions), store.path)
        return len(store.questions)

    # Lazy imports to avoid loading DB machinery for --dry-run
    from rental_db.engine import dispose_engine, transaction
    from rental_db.repository import QuestionRepository

    repo = QuestionRepository()
    try:
        async with transaction() as db:
            count = await repo.replace_catalog(db, store.questions)
        logger.info("Seeded %d questions from %s", count, store.path)
        return count
    finally:
        await dispose_engine()


def cli() -> None:
    """Console-script entry point: ``rental-seed``."""
    parser = argparse.ArgumentParser(
        prog="rental-seed",
        description="Load the needs-assessment question catalog into the database.",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Catalog YAML file (default: catalog/needs_assessment.yaml in the repo root)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Parse and validate the catalog without touching the database",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    count = asyncio.run(run_seed(args.catalog, dry_run=args.dry_run))
    print(f"Questions: {count}")
    sys.exit(0)
