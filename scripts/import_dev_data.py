#!/usr/bin/env python3
"""Load or wipe the development tour data.

Reads dev-data/tours-simple.json and inserts every tour into the database
configured by DATABASE_URL (same settings as the API).

Usage:
    python scripts/import_dev_data.py --import
    python scripts/import_dev_data.py --delete
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from sqlalchemy import delete

# Add project root to path for app imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.db.base import async_session_factory, engine, init_db
from app.domain.tour import Tour, TourStartDate
from app.repositories.tour import TourRepository
from app.schemas.tour import TourCreate

logger = logging.getLogger("import_dev_data")

DATA_FILE = Path(__file__).parent.parent / "dev-data" / "tours-simple.json"


def load_tours(path: Path = DATA_FILE) -> list[TourCreate]:
    """Parse and validate the dev-data file."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    return [TourCreate.model_validate(item) for item in raw]


async def import_data(path: Path = DATA_FILE) -> int:
    tours = load_tours(path)
    await init_db()
    async with async_session_factory() as session:
        repo = TourRepository(session)
        for tour in tours:
            await repo.create(**tour.model_dump())
        await session.commit()
    logger.info("Imported %d tours from %s", len(tours), path.name)
    return len(tours)


async def delete_data() -> int:
    await init_db()
    async with async_session_factory() as session:
        await session.execute(delete(TourStartDate))
        result = await session.execute(delete(Tour))
        await session.commit()
    logger.info("Deleted %d tours", result.rowcount)
    return result.rowcount


async def _run(args: argparse.Namespace) -> None:
    try:
        if args.do_import:
            await import_data(args.file)
        else:
            await delete_data()
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument("--import", dest="do_import", action="store_true", help="insert dev tours")
    action.add_argument("--delete", dest="do_delete", action="store_true", help="delete all tours")
    parser.add_argument("--file", type=Path, default=DATA_FILE, help="JSON file to import")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)-8s | %(message)s")
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
