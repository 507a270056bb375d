"""Resolve the nonprofit behind a donation into scoring facts."""

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Nonprofit
from src.domains.fraud.helpers import is_absent_registration_id
from src.domains.fraud.models import NonprofitFacts

logger = structlog.get_logger()


def to_facts(nonprofit: Nonprofit) -> NonprofitFacts:
    return NonprofitFacts(
        name=nonprofit.name,
        registration_id=nonprofit.registration_number,
        registry_verified=bool(nonprofit.irs_verified),
    )


async def find_nonprofit(
    session: AsyncSession,
    ein: str | None,
    name: str | None,
) -> Nonprofit | None:
    """Exact EIN match first (placeholders skipped), then case-insensitive name match."""
    if not is_absent_registration_id(ein):
        result = await session.execute(
            select(Nonprofit).where(Nonprofit.registration_number == ein.strip())
        )
        nonprofit = result.scalars().first()
        if nonprofit is not None:
            return nonprofit

    if name and name.strip():
        result = await session.execute(
            select(Nonprofit).where(func.lower(Nonprofit.name) == name.strip().lower())
        )
        return result.scalars().first()

    return None


async def resolve_nonprofit(
    session: AsyncSession,
    ein: str | None,
    name: str | None,
) -> NonprofitFacts | None:
    nonprofit = await find_nonprofit(session, ein, name)
    if nonprofit is None:
        logger.debug("nonprofit_unresolved", ein=ein, name=name)
        return None
    return to_facts(nonprofit)
