"""Unit tests for the transaction recording pipeline."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.db.models import Nonprofit, Transaction
from src.domains.fraud.scorer import FraudScorer
from src.domains.transactions.models import TransactionCreateRequest
from src.domains.transactions.recorder import TransactionRecorder
from src.shared.errors import DuplicateTransactionError
from tests.conftest import FixedRandom, make_mock_session


@pytest.fixture
def recorder():
    return TransactionRecorder(scorer=FraudScorer(rng_factory=FixedRandom))


def _make_request(**kwargs) -> TransactionCreateRequest:
    defaults = {
        "transaction_hash": "0xabc123",
        "nonprofit_name": "Helping Hands",
        "donor_address": "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb",
        "recipient_address": "0xRecipient",
        "amount": 0.05,
    }
    defaults.update(kwargs)
    return TransactionCreateRequest(**defaults)


class TestTransactionCreateRequest:
    @pytest.mark.parametrize("ein", [None, "", "   "])
    def test_missing_ein_defaults_to_unknown(self, ein):
        assert _make_request(nonprofit_ein=ein).nonprofit_ein == "Unknown"

    def test_ein_is_trimmed(self):
        assert _make_request(nonprofit_ein=" 53-0196605 ").nonprofit_ein == "53-0196605"

    def test_defaults(self):
        request = _make_request()
        assert request.block_number == 0
        assert request.gas_used == "21000"

    def test_non_positive_amount_rejected(self):
        with pytest.raises(ValueError):
            _make_request(amount=0)


class TestTransactionRecorder:
    @pytest.mark.asyncio
    async def test_records_unknown_nonprofit(self, recorder):
        session = make_mock_session()

        row, verdict = await recorder.record(_make_request(), session)

        session.add.assert_called_once_with(row)
        session.commit.assert_awaited_once()
        session.refresh.assert_awaited_once_with(row)
        assert verdict.fraud_score == 0.6
        assert row.transaction_hash == "0xabc123"
        assert row.nonprofit_ein == "Unknown"
        assert row.status == "verified"
        assert row.is_fraudulent is False
        assert row.fraud_score == 0.6
        assert row.risk_flags == ["Unverified EIN", "Not in IRS database"]
        assert row.ai_analysis["confidence_level"] == "40% legitimacy confidence"

    @pytest.mark.asyncio
    async def test_flagged_transaction_persisted_with_flagged_status(self, recorder):
        session = make_mock_session()

        row, verdict = await recorder.record(_make_request(amount=1.0), session)

        assert verdict.is_fraudulent is True
        assert row.status == "flagged"
        assert row.is_fraudulent is True
        assert row.fraud_score == 0.75

    @pytest.mark.asyncio
    async def test_verified_nonprofit_lowers_score(self, recorder):
        nonprofit = Nonprofit(
            name="American Red Cross", registration_number="53-0196605", irs_verified=True
        )
        session = make_mock_session(scalars_first=nonprofit)

        row, verdict = await recorder.record(
            _make_request(nonprofit_name="American Red Cross", nonprofit_ein="53-0196605"),
            session,
        )

        assert verdict.fraud_score == 0.0
        assert row.risk_flags == []

    @pytest.mark.asyncio
    async def test_duplicate_hash_rejected_without_rescoring(self):
        existing = Transaction(transaction_hash="0xabc123", fraud_score=0.6, status="verified")
        session = make_mock_session(scalar_one_or_none=existing)
        scorer = MagicMock()
        recorder = TransactionRecorder(scorer=scorer)

        with pytest.raises(DuplicateTransactionError) as exc_info:
            await recorder.record(_make_request(), session)

        assert exc_info.value.transaction_hash == "0xabc123"
        assert exc_info.value.existing["fraud_score"] == 0.6
        scorer.score.assert_not_called()
        session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_insert_maps_to_duplicate(self, recorder):
        winner = Transaction(transaction_hash="0xabc123", fraud_score=0.75, status="flagged")
        session = make_mock_session()
        # Absent on the pre-insert check, present once the other insert has committed
        session.execute.return_value.scalar_one_or_none.side_effect = [None, winner]
        session.commit = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("unique violation"))
        )

        with pytest.raises(DuplicateTransactionError) as exc_info:
            await recorder.record(_make_request(), session)

        session.rollback.assert_awaited_once()
        session.refresh.assert_not_called()
        assert exc_info.value.existing["transaction_hash"] == "0xabc123"
        assert exc_info.value.existing["fraud_score"] == 0.75

    @pytest.mark.asyncio
    async def test_concurrent_insert_without_visible_winner(self, recorder):
        session = make_mock_session()
        session.commit = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("unique violation"))
        )

        with pytest.raises(DuplicateTransactionError) as exc_info:
            await recorder.record(_make_request(), session)

        assert exc_info.value.existing is None
