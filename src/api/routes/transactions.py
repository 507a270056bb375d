"""Donation transaction endpoints: record with fraud scoring, then query."""

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_session
from src.domains.transactions import queries
from src.domains.transactions.models import (
    BulkUpdateRequest,
    ExportFormat,
    StatusUpdateRequest,
    TransactionCreateRequest,
    TransactionStatus,
)
from src.domains.transactions.recorder import TransactionRecorder

logger = structlog.get_logger()
router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])

_recorder = TransactionRecorder()

# Specific routes are declared before the parameterized /{tx_hash} catch-all.


@router.post("", status_code=201)
async def create_transaction(
    request: TransactionCreateRequest,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    """Score and record a donation. Duplicate hashes are rejected with 409."""
    row, verdict = await _recorder.record(request, session)

    response = {
        "fraud_score": verdict.fraud_percentage,
        "risk_flags": verdict.risk_flags,
        "analysis": verdict.analysis,
        "data": row.to_dict(),
    }
    if verdict.is_fraudulent:
        response["warning"] = "FRAUD DETECTED - Transaction flagged for review"
    else:
        response["message"] = "Transaction verified successfully"
    return response


@router.get("")
async def list_transactions(
    session: AsyncSession = Depends(get_session),  # noqa: B008
    limit: int = Query(default=50, ge=1, le=500),
    skip: int = Query(default=0, ge=0),
    status: TransactionStatus | None = None,
) -> dict:
    rows, total = await queries.list_transactions(session, limit=limit, skip=skip, status=status)
    return {
        "items": [r.to_dict() for r in rows],
        "count": len(rows),
        "total": total,
        "limit": limit,
        "skip": skip,
    }


@router.get("/flagged")
async def list_flagged(
    session: AsyncSession = Depends(get_session),  # noqa: B008
    limit: int = Query(default=50, ge=1, le=500),
    skip: int = Query(default=0, ge=0),
) -> dict:
    result = await queries.flagged_transactions(session, limit=limit, skip=skip)
    return {
        "items": [r.to_dict() for r in result["items"]],
        "count": len(result["items"]),
        "total_flagged": result["total_flagged"],
        "average_fraud_score": result["average_fraud_score"],
    }


@router.get("/stats/fraud")
async def fraud_stats(
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    return {"statistics": await queries.fraud_statistics(session)}


@router.get("/export", response_model=None)
async def export_transactions(
    session: AsyncSession = Depends(get_session),  # noqa: B008
    export_format: ExportFormat = Query(default=ExportFormat.JSON, alias="format"),
    status: TransactionStatus | None = None,
) -> dict | PlainTextResponse:
    rows = await queries.export_transactions(session, status=status)
    if export_format == ExportFormat.CSV:
        return PlainTextResponse(
            queries.to_csv(rows),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=transactions.csv"},
        )
    return {"count": len(rows), "items": [r.to_dict() for r in rows]}


@router.post("/bulk-update")
async def bulk_update(
    request: BulkUpdateRequest,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    updated = await queries.bulk_update(session, request.transaction_ids, request.updates)
    return {"matched": updated, "message": f"Updated {updated} transactions"}


@router.get("/donor/{address}")
async def donor_transactions(
    address: str,
    session: AsyncSession = Depends(get_session),  # noqa: B008
    limit: int = Query(default=20, ge=1, le=500),
) -> dict:
    return await queries.donor_history(session, address, limit=limit)


@router.get("/{transaction_id}/details")
async def transaction_details(
    transaction_id: int,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    return await queries.transaction_details(session, transaction_id)


@router.patch("/{transaction_id}/status")
async def update_transaction_status(
    transaction_id: int,
    request: StatusUpdateRequest,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    row = await queries.update_status(session, transaction_id, request.status, request.notes)
    return {
        "message": f"Transaction status updated to {request.status.value}",
        "data": row.to_dict(),
    }


@router.get("/{tx_hash}")
async def get_transaction_by_hash(
    tx_hash: str,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    row = await queries.get_transaction_by_hash(session, tx_hash)
    return {"data": row.to_dict()}
