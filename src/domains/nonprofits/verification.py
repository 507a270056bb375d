"""EIN verification against the imported IRS exempt-organization registry."""

import re

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import IRSOrg, Nonprofit

from .models import IRSData, TrustLevel, VerificationResult, VerificationStatus

logger = structlog.get_logger()

_EIN_PATTERN = re.compile(r"^\d{2}-\d{7}$")
_EIN_STRIP = re.compile(r"[^0-9-]")

# Trust scores handed out when the registry cannot vouch for an EIN
_INVALID_FORMAT_SCORE = 0.1
_UNVERIFIED_SCORE = 0.25


def format_ein(ein: str | None) -> str:
    """Normalize an EIN: keep digits and hyphens, hyphenate bare 9-digit values."""
    if not ein:
        return ""
    cleaned = _EIN_STRIP.sub("", str(ein))
    if len(cleaned) == 9 and "-" not in cleaned:
        cleaned = f"{cleaned[:2]}-{cleaned[2:]}"
    return cleaned


def is_valid_ein_format(ein: str) -> bool:
    return bool(_EIN_PATTERN.match(ein or ""))


def calculate_trust_level(record: IRSOrg | None) -> TrustLevel:
    if record is None:
        return TrustLevel.NEW

    status = (record.status or "").lower()
    if "active" in status:
        return TrustLevel.TRUSTED
    if "revoked" in status or "terminated" in status:
        return TrustLevel.BLACKLISTED
    return TrustLevel.NEW


def calculate_trust_score(record: IRSOrg | None) -> float:
    """Score in [0.1, 1.0] from registry status, deductibility and classification."""
    if record is None:
        return _UNVERIFIED_SCORE

    status = (record.status or "").lower()
    deductibility = (record.deductibility or "").lower()
    classification = (record.classification or "").lower()

    score = 0.5
    if "active" in status:
        score += 0.3
    if "deductible" in deductibility:
        score += 0.2
    if "public charity" in classification:
        score += 0.1
    if record.ntee_code:
        score += 0.05

    if "revoked" in status:
        score -= 0.6
    if "terminated" in status:
        score -= 0.5
    if "suspended" in status:
        score -= 0.4

    return round(max(0.1, min(score, 1.0)), 4)


async def verify_ein(session: AsyncSession, ein: str | None) -> VerificationResult:
    """Check an EIN against the IRS registry.

    Registry failures degrade to a pending result instead of propagating,
    so registration can proceed and be re-verified later.
    """
    clean_ein = format_ein(ein)

    if not is_valid_ein_format(clean_ein):
        return VerificationResult(
            is_valid=False,
            verification_status=VerificationStatus.REJECTED,
            trust_level=TrustLevel.NEW,
            trust_score=_INVALID_FORMAT_SCORE,
            error="Invalid EIN format",
        )

    try:
        result = await session.execute(select(IRSOrg).where(IRSOrg.ein == clean_ein))
        record = result.scalar_one_or_none()
    except SQLAlchemyError:
        logger.warning("ein_verification_failed", ein=clean_ein, exc_info=True)
        return VerificationResult(
            is_valid=False,
            verification_status=VerificationStatus.PENDING,
            trust_level=TrustLevel.NEW,
            trust_score=_UNVERIFIED_SCORE,
            error="Verification service temporarily unavailable",
        )

    if record is None:
        logger.info("ein_not_in_registry", ein=clean_ein)
        return VerificationResult(
            is_valid=False,
            verification_status=VerificationStatus.PENDING,
            trust_level=TrustLevel.NEW,
            trust_score=_UNVERIFIED_SCORE,
            error="EIN not found in IRS database",
        )

    logger.info("ein_verified", ein=clean_ein, irs_status=record.status)
    return VerificationResult(
        is_valid=True,
        verification_status=VerificationStatus.VERIFIED,
        trust_level=calculate_trust_level(record),
        trust_score=calculate_trust_score(record),
        irs_data=IRSData(
            name=record.name,
            status=record.status or "",
            ntee_code=record.ntee_code or "",
            deductibility=record.deductibility or "",
            classification=record.classification or "",
            city=record.city or "",
            state=record.state or "",
        ),
    )


async def verification_stats(session: AsyncSession) -> dict:
    """Nonprofit counts per verification status and trust level, plus registry size."""
    status_rows = await session.execute(
        select(
            Nonprofit.verification_status,
            func.count(),
            func.avg(Nonprofit.trust_score),
        ).group_by(Nonprofit.verification_status)
    )
    trust_rows = await session.execute(
        select(Nonprofit.trust_level, func.count()).group_by(Nonprofit.trust_level)
    )
    total_irs = await session.execute(select(func.count()).select_from(IRSOrg))

    return {
        "verification_status": {
            status: {"count": count, "avg_trust_score": float(avg or 0.0)}
            for status, count, avg in status_rows.all()
        },
        "trust_levels": {level: count for level, count in trust_rows.all()},
        "total_irs_records": total_irs.scalar_one(),
    }
