"""Unit tests for EIN normalization, trust scoring and registry verification."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.db.models import IRSOrg
from src.domains.nonprofits.models import TrustLevel, VerificationStatus
from src.domains.nonprofits.verification import (
    calculate_trust_level,
    calculate_trust_score,
    format_ein,
    is_valid_ein_format,
    verification_stats,
    verify_ein,
)
from tests.conftest import make_mock_session


def _irs_org(**kwargs) -> IRSOrg:
    defaults = {
        "ein": "53-0196605",
        "name": "AMERICAN NATIONAL RED CROSS",
        "status": "Active",
        "deductibility": "Contributions are deductible",
        "classification": "Public Charity",
        "ntee_code": "P20",
        "city": "WASHINGTON",
        "state": "DC",
    }
    defaults.update(kwargs)
    return IRSOrg(**defaults)


class TestFormatEIN:
    def test_hyphenates_bare_digits(self):
        assert format_ein("530196605") == "53-0196605"

    def test_keeps_hyphenated(self):
        assert format_ein("53-0196605") == "53-0196605"

    def test_strips_noise(self):
        assert format_ein(" 53 0196605 ") == "53-0196605"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty(self, value):
        assert format_ein(value) == ""

    def test_short_value_left_alone(self):
        assert format_ein("1234") == "1234"


class TestIsValidEINFormat:
    @pytest.mark.parametrize("value", ["53-0196605", "13-1760110"])
    def test_valid(self, value):
        assert is_valid_ein_format(value)

    @pytest.mark.parametrize("value", ["530196605", "5-30196605", "ab-cdefghi", "", "53-01966050"])
    def test_invalid(self, value):
        assert not is_valid_ein_format(value)


class TestTrustLevel:
    def test_missing_record(self):
        assert calculate_trust_level(None) == TrustLevel.NEW

    def test_active(self):
        assert calculate_trust_level(_irs_org()) == TrustLevel.TRUSTED

    @pytest.mark.parametrize("status", ["Revoked", "Terminated"])
    def test_revoked_or_terminated(self, status):
        assert calculate_trust_level(_irs_org(status=status)) == TrustLevel.BLACKLISTED

    def test_unknown_status(self):
        assert calculate_trust_level(_irs_org(status=None)) == TrustLevel.NEW


class TestTrustScore:
    def test_missing_record(self):
        assert calculate_trust_score(None) == 0.25

    def test_capped_at_one(self):
        assert calculate_trust_score(_irs_org()) == 1.0

    def test_partial(self):
        record = _irs_org(deductibility="", classification="Private Foundation", ntee_code=None)
        assert calculate_trust_score(record) == 0.8

    def test_floor(self):
        record = _irs_org(status="Revoked", deductibility="", classification="", ntee_code="")
        assert calculate_trust_score(record) == 0.1


class TestVerifyEIN:
    @pytest.mark.asyncio
    async def test_invalid_format_skips_registry(self):
        session = make_mock_session()
        result = await verify_ein(session, "12-34")

        assert result.is_valid is False
        assert result.verification_status == VerificationStatus.REJECTED
        assert result.trust_score == 0.1
        assert result.error == "Invalid EIN format"
        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found(self):
        session = make_mock_session(scalar_one_or_none=None)
        result = await verify_ein(session, "123456789")

        assert result.is_valid is False
        assert result.verification_status == VerificationStatus.PENDING
        assert result.trust_level == TrustLevel.NEW
        assert result.trust_score == 0.25
        assert result.error == "EIN not found in IRS database"

    @pytest.mark.asyncio
    async def test_found(self):
        session = make_mock_session(scalar_one_or_none=_irs_org())
        result = await verify_ein(session, "530196605")

        assert result.is_valid is True
        assert result.verification_status == VerificationStatus.VERIFIED
        assert result.trust_level == TrustLevel.TRUSTED
        assert result.trust_score == 1.0
        assert result.irs_data.name == "AMERICAN NATIONAL RED CROSS"
        assert result.irs_data.state == "DC"
        assert result.error is None

    @pytest.mark.asyncio
    async def test_registry_failure_degrades_to_pending(self):
        session = make_mock_session()
        session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))
        result = await verify_ein(session, "53-0196605")

        assert result.is_valid is False
        assert result.verification_status == VerificationStatus.PENDING
        assert result.error == "Verification service temporarily unavailable"


class TestVerificationStats:
    @pytest.mark.asyncio
    async def test_shapes_grouped_counts(self):
        session = make_mock_session()
        status_result = MagicMock()
        status_result.all.return_value = [("verified", 3, 0.9), ("pending", 2, None)]
        trust_result = MagicMock()
        trust_result.all.return_value = [("trusted", 3), ("new", 2)]
        total_result = MagicMock()
        total_result.scalar_one.return_value = 1200
        session.execute = AsyncMock(side_effect=[status_result, trust_result, total_result])

        stats = await verification_stats(session)

        assert stats["verification_status"] == {
            "verified": {"count": 3, "avg_trust_score": 0.9},
            "pending": {"count": 2, "avg_trust_score": 0.0},
        }
        assert stats["trust_levels"] == {"trusted": 3, "new": 2}
        assert stats["total_irs_records"] == 1200
