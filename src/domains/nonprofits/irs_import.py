"""Loading IRS exempt-organization extracts (EO BMF CSV files) into ``irs_orgs``."""

import csv
from collections.abc import Iterator
from pathlib import Path

import structlog
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import IRSOrg

from .verification import format_ein

logger = structlog.get_logger()

# CSV column -> irs_orgs column
_COLUMN_MAP = {
    "STREET": "street",
    "CITY": "city",
    "STATE": "state",
    "ZIP": "zip_code",
    "NTEE_CD": "ntee_code",
    "DEDUCTIBILITY": "deductibility",
    "STATUS": "status",
    "CLASSIFICATION": "classification",
    "SUBSECTION": "subsection",
    "FOUNDATION": "foundation",
    "RULING": "ruling",
}


def parse_irs_row(row: dict[str, str | None]) -> dict | None:
    """Map one CSV row to column values; rows without an EIN or name are skipped."""
    ein = format_ein((row.get("EIN") or "").strip())
    name = (row.get("NAME") or "").strip()
    if not ein or not name:
        return None

    record = {"ein": ein, "name": name}
    for source, target in _COLUMN_MAP.items():
        record[target] = (row.get(source) or "").strip()
    return record


def iter_irs_records(path: Path) -> Iterator[dict | None]:
    with path.open(newline="", encoding="utf-8-sig") as f:
        for row in csv.DictReader(f):
            yield parse_irs_row(row)


async def _insert_batch(session: AsyncSession, batch: list[dict]) -> int:
    stmt = insert(IRSOrg).values(batch).on_conflict_do_nothing(index_elements=["ein"])
    result = await session.execute(stmt)
    await session.commit()
    return result.rowcount


async def import_csv(session: AsyncSession, path: Path, batch_size: int = 500) -> dict:
    """Import one CSV file. Existing EINs are left untouched."""
    imported = skipped = 0
    batch: list[dict] = []

    for record in iter_irs_records(path):
        if record is None:
            skipped += 1
            continue
        batch.append(record)
        if len(batch) >= batch_size:
            imported += await _insert_batch(session, batch)
            batch = []
            logger.info("irs_batch_imported", file=path.name, imported=imported)

    if batch:
        imported += await _insert_batch(session, batch)

    logger.info("irs_file_imported", file=path.name, imported=imported, skipped=skipped)
    return {"file": path.name, "imported": imported, "skipped": skipped}
