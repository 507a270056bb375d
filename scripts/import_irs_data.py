"""Import IRS exempt-organization CSV extracts into the irs_orgs table.

Usage:
    python -m scripts.import_irs_data
    python -m scripts.import_irs_data --data-dir data/irs --batch-size 1000
"""

import argparse
import asyncio
import sys
import time
from pathlib import Path

import structlog

from src.config import settings
from src.db.database import async_session_factory, init_db
from src.domains.nonprofits.irs_import import import_csv
from src.shared.logging import setup_logging

logger = structlog.get_logger()


async def run(data_dir: Path, batch_size: int) -> int:
    files = sorted(data_dir.glob("*.csv"))
    if not files:
        logger.error("irs_import_no_files", data_dir=str(data_dir))
        return 0

    await init_db()

    total = 0
    started = time.perf_counter()
    async with async_session_factory() as session:
        for path in files:
            summary = await import_csv(session, path, batch_size=batch_size)
            total += summary["imported"]

    logger.info(
        "irs_import_complete",
        files=len(files),
        imported=total,
        duration_s=round(time.perf_counter() - started, 1),
    )
    return total


def main() -> None:
    parser = argparse.ArgumentParser(description="Import IRS exempt-organization CSV files")
    parser.add_argument("--data-dir", type=str, default=settings.irs_data_dir)
    parser.add_argument("--batch-size", type=int, default=settings.irs_import_batch_size)
    args = parser.parse_args()

    setup_logging(settings.log_level, json_logs=settings.log_json)

    data_dir = Path(args.data_dir)
    if not data_dir.is_dir():
        print(f"Data directory does not exist: {data_dir}", file=sys.stderr)
        sys.exit(1)

    asyncio.run(run(data_dir, args.batch_size))


if __name__ == "__main__":
    main()
