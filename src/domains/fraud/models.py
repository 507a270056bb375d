"""Pydantic models for the fraud domain."""

from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from .helpers import format_percent


class RandomSource(Protocol):
    """Anything with a uniform ``random()`` draw in [0.0, 1.0)."""

    def random(self) -> float: ...


class VerdictStatus(StrEnum):
    VERIFIED = "verified"
    FLAGGED = "flagged"


class AnalysisField(StrEnum):
    EIN_STATUS = "ein_status"
    IRS_STATUS = "irs_status"
    AMOUNT_ANOMALY = "amount_anomaly"
    WALLET_AGE = "wallet_age"
    PATTERN_MATCH = "pattern_match"
    VELOCITY_CHECK = "velocity_check"
    RECOMMENDATION = "recommendation"
    CONFIDENCE_LEVEL = "confidence_level"


class TransactionFacts(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float
    donor_address: str
    recipient_address: str
    nonprofit_name_claimed: str = ""


class NonprofitFacts(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    registration_id: str | None = None
    registry_verified: bool = False


class FraudScoreRequest(BaseModel):
    """Dry-run scoring request: nothing is persisted."""

    amount: float = Field(gt=0, allow_inf_nan=False)
    donor_address: str = Field(min_length=1)
    recipient_address: str = Field(min_length=1)
    nonprofit_name: str = ""
    nonprofit_ein: str = "Unknown"

    def to_facts(self) -> TransactionFacts:
        return TransactionFacts(
            amount=self.amount,
            donor_address=self.donor_address,
            recipient_address=self.recipient_address,
            nonprofit_name_claimed=self.nonprofit_name,
        )


class RuleResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_name: str
    triggered: bool
    weight: float = 0.0
    flag: str = ""
    analysis_key: AnalysisField | None = None
    analysis: str = ""
    category: str = ""


class FraudVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    fraud_score: float = Field(ge=0.0, le=1.0)
    is_fraudulent: bool
    status: VerdictStatus
    risk_flags: list[str] = Field(default_factory=list)
    analysis: dict[str, str] = Field(default_factory=dict)
    rule_results: list[RuleResult] = Field(default_factory=list)

    @property
    def fraud_percentage(self) -> str:
        """Score rendered as a whole percentage, e.g. ``"75%"``."""
        return f"{format_percent(self.fraud_score)}%"
