"""Read and maintenance queries over recorded transactions."""

import csv
import io

import structlog
from sqlalchemy import ColumnElement, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Nonprofit, Transaction
from src.domains.fraud.config import default_config
from src.shared.errors import NotFoundError

from .models import BulkUpdateFields, TransactionStatus

logger = structlog.get_logger()

TOP_RISK_FLAG_LIMIT = 5
CSV_HEADER = ["Transaction Hash", "Nonprofit", "Amount", "Status", "Fraud Score", "Timestamp"]


def flagged_condition() -> ColumnElement[bool]:
    """A transaction counts as flagged by verdict, by status, or by score alone."""
    return or_(
        Transaction.is_fraudulent.is_(True),
        Transaction.status == TransactionStatus.FLAGGED.value,
        Transaction.fraud_score >= default_config.verdict.fraud_threshold,
    )


async def list_transactions(
    session: AsyncSession,
    limit: int = 50,
    skip: int = 0,
    status: TransactionStatus | None = None,
) -> tuple[list[Transaction], int]:
    stmt = select(Transaction)
    count_stmt = select(func.count()).select_from(Transaction)
    if status:
        stmt = stmt.where(Transaction.status == status.value)
        count_stmt = count_stmt.where(Transaction.status == status.value)

    total = (await session.execute(count_stmt)).scalar_one()
    stmt = stmt.order_by(desc(Transaction.timestamp)).offset(skip).limit(limit)
    rows = (await session.execute(stmt)).scalars().all()
    return list(rows), total


async def flagged_transactions(
    session: AsyncSession,
    limit: int = 50,
    skip: int = 0,
) -> dict:
    condition = flagged_condition()
    stmt = (
        select(Transaction)
        .where(condition)
        .order_by(desc(Transaction.fraud_score), desc(Transaction.timestamp))
        .offset(skip)
        .limit(limit)
    )
    rows = (await session.execute(stmt)).scalars().all()
    total = (
        await session.execute(select(func.count()).select_from(Transaction).where(condition))
    ).scalar_one()
    avg_score = (
        await session.execute(select(func.avg(Transaction.fraud_score)).where(condition))
    ).scalar()

    return {
        "items": list(rows),
        "total_flagged": total,
        "average_fraud_score": float(avg_score or 0.0),
    }


async def get_transaction(session: AsyncSession, transaction_id: int) -> Transaction:
    row = await session.get(Transaction, transaction_id)
    if row is None:
        raise NotFoundError(f"Transaction not found: {transaction_id}")
    return row


async def get_transaction_by_hash(session: AsyncSession, transaction_hash: str) -> Transaction:
    result = await session.execute(
        select(Transaction).where(Transaction.transaction_hash == transaction_hash)
    )
    row = result.scalar_one_or_none()
    if row is None:
        raise NotFoundError(f"Transaction not found: {transaction_hash}")
    return row


async def transaction_details(session: AsyncSession, transaction_id: int) -> dict:
    """Transaction plus the registered nonprofit matching its EIN, if any."""
    row = await get_transaction(session, transaction_id)
    nonprofit = None
    if row.nonprofit_ein:
        result = await session.execute(
            select(Nonprofit).where(Nonprofit.registration_number == row.nonprofit_ein)
        )
        nonprofit = result.scalars().first()
    return {
        "transaction": row.to_dict(),
        "nonprofit": nonprofit.to_dict() if nonprofit else None,
    }


async def donor_history(session: AsyncSession, donor_address: str, limit: int = 20) -> dict:
    rows = (
        await session.execute(
            select(Transaction)
            .where(Transaction.donor_address == donor_address)
            .order_by(desc(Transaction.timestamp))
            .limit(limit)
        )
    ).scalars().all()
    total_donated = (
        await session.execute(
            select(func.coalesce(func.sum(Transaction.amount), 0.0)).where(
                Transaction.donor_address == donor_address,
                Transaction.status == TransactionStatus.VERIFIED.value,
            )
        )
    ).scalar_one()
    flagged_count = (
        await session.execute(
            select(func.count())
            .select_from(Transaction)
            .where(
                Transaction.donor_address == donor_address,
                Transaction.is_fraudulent.is_(True),
            )
        )
    ).scalar_one()

    return {
        "donor_address": donor_address,
        "total_transactions": len(rows),
        "total_donated": float(total_donated),
        "flagged_transactions": flagged_count,
        "items": [r.to_dict() for r in rows],
    }


async def fraud_statistics(session: AsyncSession) -> dict:
    total = (await session.execute(select(func.count()).select_from(Transaction))).scalar_one()
    flagged = (
        await session.execute(
            select(func.count()).select_from(Transaction).where(Transaction.is_fraudulent.is_(True))
        )
    ).scalar_one()
    verified = (
        await session.execute(
            select(func.count())
            .select_from(Transaction)
            .where(Transaction.status == TransactionStatus.VERIFIED.value)
        )
    ).scalar_one()
    avg_score = (await session.execute(select(func.avg(Transaction.fraud_score)))).scalar()

    flag = func.jsonb_array_elements_text(Transaction.risk_flags).column_valued("flag")
    top_flags = (
        await session.execute(
            select(flag, func.count().label("count"))
            .where(Transaction.is_fraudulent.is_(True))
            .group_by(flag)
            .order_by(desc("count"))
            .limit(TOP_RISK_FLAG_LIMIT)
        )
    ).all()

    return {
        "total_transactions": total,
        "flagged_count": flagged,
        "verified_count": verified,
        "flagged_percentage": round(flagged / total * 100, 2) if total else 0.0,
        "average_fraud_score": round(float(avg_score or 0.0), 4),
        "top_risk_flags": [{"flag": name, "count": count} for name, count in top_flags],
    }


async def update_status(
    session: AsyncSession,
    transaction_id: int,
    status: TransactionStatus,
    notes: str | None = None,
) -> Transaction:
    row = await get_transaction(session, transaction_id)
    row.status = status.value
    if notes:
        row.notes = notes
    await session.commit()
    await session.refresh(row)
    logger.info("transaction_status_updated", transaction_id=transaction_id, status=status.value)
    return row


async def bulk_update(
    session: AsyncSession,
    transaction_ids: list[int],
    updates: BulkUpdateFields,
) -> int:
    values = {
        key: (value.value if isinstance(value, TransactionStatus) else value)
        for key, value in updates.model_dump(exclude_none=True).items()
    }
    if not values:
        raise ValueError("Updates object is required")

    result = await session.execute(
        update(Transaction).where(Transaction.id.in_(transaction_ids)).values(**values)
    )
    await session.commit()
    logger.info("transactions_bulk_updated", matched=result.rowcount, fields=sorted(values))
    return result.rowcount


async def export_transactions(
    session: AsyncSession,
    status: TransactionStatus | None = None,
) -> list[Transaction]:
    stmt = select(Transaction).order_by(desc(Transaction.timestamp))
    if status:
        stmt = stmt.where(Transaction.status == status.value)
    return list((await session.execute(stmt)).scalars().all())


def to_csv(rows: list[Transaction]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow(
            [
                row.transaction_hash,
                row.nonprofit_name,
                row.amount,
                row.status,
                f"{row.fraud_score * 100:.2f}%",
                row.timestamp.isoformat() if row.timestamp else "",
            ]
        )
    return buffer.getvalue()
