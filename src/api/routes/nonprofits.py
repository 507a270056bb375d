"""Nonprofit registry endpoints with IRS-backed EIN verification."""

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_session
from src.db.models import Nonprofit as NonprofitDB
from src.db.models import Transaction as TransactionDB
from src.domains.nonprofits.models import (
    NonprofitRegisterRequest,
    NonprofitUpdateRequest,
    TrustLevel,
    VerificationStatus,
)
from src.domains.nonprofits.verification import format_ein, verification_stats, verify_ein
from src.shared.errors import NotFoundError

logger = structlog.get_logger()
router = APIRouter(prefix="/api/v1/nonprofits", tags=["nonprofits"])

_SORT_COLUMNS = {
    "created_at": NonprofitDB.created_at,
    "name": NonprofitDB.name,
    "trust_score": NonprofitDB.trust_score,
}


async def _get_active(session: AsyncSession, nonprofit_id: int) -> NonprofitDB:
    nonprofit = await session.get(NonprofitDB, nonprofit_id)
    if nonprofit is None or not nonprofit.is_active:
        raise NotFoundError(f"Nonprofit not found: {nonprofit_id}")
    return nonprofit


@router.get("")
async def list_nonprofits(
    session: AsyncSession = Depends(get_session),  # noqa: B008
    status: VerificationStatus | None = None,
    trust_level: TrustLevel | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
    sort_by: str = Query(default="created_at", pattern="^(created_at|name|trust_score)$"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
) -> dict:
    stmt = select(NonprofitDB).where(NonprofitDB.is_active.is_(True))
    count_stmt = (
        select(func.count()).select_from(NonprofitDB).where(NonprofitDB.is_active.is_(True))
    )

    if status:
        stmt = stmt.where(NonprofitDB.verification_status == status.value)
        count_stmt = count_stmt.where(NonprofitDB.verification_status == status.value)
    if trust_level:
        stmt = stmt.where(NonprofitDB.trust_level == trust_level.value)
        count_stmt = count_stmt.where(NonprofitDB.trust_level == trust_level.value)

    total = (await session.execute(count_stmt)).scalar_one()

    column = _SORT_COLUMNS[sort_by]
    stmt = stmt.order_by(column.desc() if sort_order == "desc" else column.asc())
    stmt = stmt.offset((page - 1) * limit).limit(limit)
    nonprofits = (await session.execute(stmt)).scalars().all()

    return {
        "items": [n.to_dict() for n in nonprofits],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": -(-total // limit),
        },
    }


@router.post("/register", status_code=201)
async def register_nonprofit(
    request: NonprofitRegisterRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    """Register a nonprofit, verifying its EIN. Re-registering returns the existing record."""
    ein = format_ein(request.ein)

    result = await session.execute(
        select(NonprofitDB).where(NonprofitDB.registration_number == ein)
    )
    existing = result.scalar_one_or_none()
    if existing is not None:
        response.status_code = 200
        return {"data": existing.to_dict(), "message": "Nonprofit already registered"}

    verification = await verify_ein(session, ein)

    nonprofit = NonprofitDB(
        name=verification.irs_data.name if verification.irs_data else request.name,
        registration_number=ein,
        contact_email=request.contact_email.lower().strip(),
        address=request.address.strip(),
        category=request.category.value,
        description=request.description.strip(),
        verification_status=verification.verification_status.value,
        trust_level=verification.trust_level.value,
        trust_score=verification.trust_score,
        irs_verified=verification.is_valid,
    )
    if verification.is_valid:
        nonprofit.verified_at = datetime.now(UTC)
        nonprofit.verified_by = "IRS_DATABASE"

    session.add(nonprofit)
    await session.commit()
    await session.refresh(nonprofit)

    logger.info(
        "nonprofit_registered",
        nonprofit_id=nonprofit.id,
        ein=ein,
        verification_status=verification.verification_status.value,
    )

    return {
        "data": nonprofit.to_dict(),
        "verification": {
            "is_valid": verification.is_valid,
            "irs_data": verification.irs_data.model_dump() if verification.irs_data else None,
            "error": verification.error,
        },
    }


@router.get("/stats/verification")
async def get_verification_stats(
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    stats = await verification_stats(session)
    stats["last_updated"] = datetime.now(UTC).isoformat()
    return stats


@router.get("/verify/{ein}")
async def verify_nonprofit_ein(
    ein: str,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    verification = await verify_ein(session, ein)
    return {"ein": format_ein(ein), **verification.model_dump(mode="json")}


@router.get("/{nonprofit_id}")
async def get_nonprofit(
    nonprofit_id: int,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    """Nonprofit with a summary of the donations recorded against its EIN."""
    nonprofit = await _get_active(session, nonprofit_id)

    stats_row = (
        await session.execute(
            select(
                func.count(),
                func.coalesce(func.sum(TransactionDB.amount), 0.0),
                func.coalesce(func.avg(TransactionDB.amount), 0.0),
                func.count(case((TransactionDB.status == "verified", 1))),
                func.count(case((TransactionDB.status == "flagged", 1))),
                func.coalesce(func.avg(TransactionDB.fraud_score), 0.0),
            ).where(TransactionDB.nonprofit_ein == nonprofit.registration_number)
        )
    ).one()
    total, total_amount, avg_amount, verified, flagged, avg_score = stats_row

    return {
        "data": {
            **nonprofit.to_dict(),
            "transaction_stats": {
                "total_transactions": total,
                "total_amount": float(total_amount),
                "avg_amount": float(avg_amount),
                "verified_count": verified,
                "flagged_count": flagged,
                "avg_fraud_score": float(avg_score),
            },
        }
    }


@router.put("/{nonprofit_id}")
async def update_nonprofit(
    nonprofit_id: int,
    request: NonprofitUpdateRequest,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    nonprofit = await _get_active(session, nonprofit_id)

    changes = request.model_dump(exclude_none=True, mode="json")
    for key, value in changes.items():
        setattr(nonprofit, key, value)
    await session.commit()
    await session.refresh(nonprofit)

    logger.info("nonprofit_updated", nonprofit_id=nonprofit_id, fields=sorted(changes))
    return {"data": nonprofit.to_dict()}


@router.delete("/{nonprofit_id}")
async def delete_nonprofit(
    nonprofit_id: int,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    """Soft delete: the record stays for historical transactions but leaves listings."""
    nonprofit = await _get_active(session, nonprofit_id)
    nonprofit.is_active = False
    await session.commit()

    logger.info("nonprofit_deactivated", nonprofit_id=nonprofit_id)
    return {"message": "Nonprofit deleted", "id": nonprofit_id}
