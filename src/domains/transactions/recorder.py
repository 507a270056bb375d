"""Donation recording pipeline: dedupe -> resolve nonprofit -> score -> persist."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Transaction
from src.domains.fraud.models import FraudVerdict, TransactionFacts
from src.domains.fraud.scorer import FraudScorer
from src.domains.nonprofits.resolution import resolve_nonprofit
from src.shared.errors import DuplicateTransactionError

from .models import TransactionCreateRequest

logger = structlog.get_logger()


async def get_by_hash(session: AsyncSession, transaction_hash: str) -> Transaction | None:
    result = await session.execute(
        select(Transaction).where(Transaction.transaction_hash == transaction_hash)
    )
    return result.scalar_one_or_none()


class TransactionRecorder:
    """Records each transaction hash at most once, with its fraud verdict."""

    def __init__(self, scorer: FraudScorer | None = None) -> None:
        self._scorer = scorer or FraudScorer()

    @property
    def scorer(self) -> FraudScorer:
        return self._scorer

    async def record(
        self,
        request: TransactionCreateRequest,
        session: AsyncSession,
    ) -> tuple[Transaction, FraudVerdict]:
        # 1. Reject duplicates instead of rescoring
        existing = await get_by_hash(session, request.transaction_hash)
        if existing is not None:
            raise DuplicateTransactionError(request.transaction_hash, existing.to_dict())

        # 2. Resolve nonprofit facts (None when unmatched)
        nonprofit = await resolve_nonprofit(
            session, ein=request.nonprofit_ein, name=request.nonprofit_name
        )

        # 3. Score
        verdict = self._scorer.score(
            TransactionFacts(
                amount=request.amount,
                donor_address=request.donor_address,
                recipient_address=request.recipient_address,
                nonprofit_name_claimed=request.nonprofit_name,
            ),
            nonprofit,
        )

        # 4. Persist input fields with the verdict
        row = Transaction(
            transaction_hash=request.transaction_hash,
            nonprofit_name=request.nonprofit_name,
            nonprofit_ein=request.nonprofit_ein,
            donor_address=request.donor_address,
            recipient_address=request.recipient_address,
            amount=request.amount,
            block_number=request.block_number,
            gas_used=request.gas_used,
            status=verdict.status.value,
            is_fraudulent=verdict.is_fraudulent,
            fraud_score=verdict.fraud_score,
            risk_flags=list(verdict.risk_flags),
            ai_analysis=dict(verdict.analysis),
        )
        session.add(row)
        try:
            await session.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same hash
            await session.rollback()
            winner = await get_by_hash(session, request.transaction_hash)
            raise DuplicateTransactionError(
                request.transaction_hash,
                winner.to_dict() if winner is not None else None,
            ) from exc
        await session.refresh(row)

        logger.info(
            "transaction_recorded",
            transaction_hash=request.transaction_hash,
            fraud_score=verdict.fraud_score,
            status=verdict.status.value,
            nonprofit_resolved=nonprofit is not None,
            risk_flags=verdict.risk_flags,
        )

        return row, verdict
