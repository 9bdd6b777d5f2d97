#!/usr/bin/env python3
"""Load the sample employee profiles into MongoDB.

Run from the repository root:

    python3 scripts/seed_sample_data.py [--keep] [--verbose]

Drops the Employee, Department, Developer and Tester collections (unless
--keep is given) and inserts three sample profiles.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from pymongo.errors import PyMongoError  # noqa: E402

from staffdb.core.config import Settings  # noqa: E402
from staffdb.services.profile_store import (  # noqa: E402
    SAMPLE_PROFILES,
    StoreConnectionError,
    open_profile_store,
)

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load sample employee profiles into MongoDB",
    )
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing documents instead of dropping the collections first",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


async def seed(args: argparse.Namespace) -> int:
    settings = Settings()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    logger.info("Connecting to MongoDB...")
    try:
        async with open_profile_store(settings) as store:
            result = await store.load_sample_data(SAMPLE_PROFILES, drop=not args.keep)
    except StoreConnectionError as err:
        logger.error("MongoDB connection failed: %s", err)
        return 1
    except PyMongoError as err:
        logger.error("Loading sample data failed: %s", err)
        return 1

    for outcome in result.outcomes:
        if outcome.ok:
            logger.info("%s: %d documents inserted", outcome.collection, outcome.affected)
        else:
            logger.error("%s: failed: %s", outcome.collection, outcome.error)

    logger.info("Sample data loaded (%d profiles)", len(SAMPLE_PROFILES))
    return 0 if result.ok else 1


def main() -> None:
    args = parse_args()
    sys.exit(asyncio.run(seed(args)))


if __name__ == "__main__":
    main()
