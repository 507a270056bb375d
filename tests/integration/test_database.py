"""Integration tests for database models."""

import pytest

pytestmark = pytest.mark.integration


class TestDatabase:
    def test_models_importable(self):
        from src.db.models import IRSOrg, Nonprofit, Transaction

        assert Transaction.__tablename__ == "transactions"
        assert Nonprofit.__tablename__ == "nonprofits"
        assert IRSOrg.__tablename__ == "irs_orgs"

    def test_transaction_model_fields(self):
        from src.db.models import Transaction

        columns = {c.name for c in Transaction.__table__.columns}
        assert "transaction_hash" in columns
        assert "fraud_score" in columns
        assert "is_fraudulent" in columns
        assert "risk_flags" in columns
        assert "ai_analysis" in columns
        assert "timestamp" in columns

    def test_transaction_hash_unique(self):
        from src.db.models import Transaction

        assert Transaction.__table__.columns["transaction_hash"].unique is True

    def test_nonprofit_model_fields(self):
        from src.db.models import Nonprofit

        columns = {c.name for c in Nonprofit.__table__.columns}
        assert "registration_number" in columns
        assert "irs_verified" in columns
        assert "trust_score" in columns
        assert "is_active" in columns
        assert Nonprofit.__table__.columns["registration_number"].unique is True

    def test_irs_org_model_fields(self):
        from src.db.models import IRSOrg

        columns = {c.name for c in IRSOrg.__table__.columns}
        assert "ein" in columns
        assert "deductibility" in columns
        assert "classification" in columns
        assert IRSOrg.__table__.columns["ein"].unique is True

    def test_transaction_to_dict(self):
        from src.db.models import Transaction

        row = Transaction(
            transaction_hash="0xabc",
            nonprofit_name="Helping Hands",
            amount=0.05,
            risk_flags=["Unverified EIN"],
        )
        data = row.to_dict()
        assert data["transaction_hash"] == "0xabc"
        assert data["risk_flags"] == ["Unverified EIN"]
        assert data["ai_analysis"] == {}
        assert data["timestamp"] is None
