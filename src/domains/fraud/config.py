"""Fraud scoring constants.

The rule set is fixed: weights, thresholds and phrase lists are frozen and
shared by the scorer and its tests.
"""

from dataclasses import dataclass, field

from .helpers import ABSENT_REGISTRATION_IDS


@dataclass(frozen=True)
class RuleWeights:
    unverified_ein: float = 0.35
    not_in_irs_database: float = 0.25
    amount_anomaly: float = 0.15
    new_donor_wallet: float = 0.10
    name_pattern_match: float = 0.09
    transaction_velocity: float = 0.06
    suspicious_recipient: float = 0.20


@dataclass(frozen=True)
class AmountThresholds:
    # Base-unit amounts (native token): 0.05 ~ $100, 0.5 ~ $1000
    average_donation: float = 0.05
    max_normal_donation: float = 0.5


@dataclass(frozen=True)
class RegistrationSettings:
    absent_ids: tuple[str, ...] = ABSENT_REGISTRATION_IDS


@dataclass(frozen=True)
class PatternSettings:
    suspicious_phrases: tuple[str, ...] = (
        "relief fund",
        "foundation",
        "charity fund",
        "donation center",
        "aid society",
        "help fund",
        "support group",
        "community trust",
        "humanitarian",
        "crisis",
        "emergency",
    )
    suspicious_recipient_keyword: str = "scam"


@dataclass(frozen=True)
class SimulationThresholds:
    """Cut-offs for the two simulated checks, compared against uniform draws."""

    new_wallet_below: float = 0.3
    velocity_above: float = 0.7


@dataclass(frozen=True)
class VerdictSettings:
    fraud_threshold: float = 0.65
    max_score: float = 1.0
    block_recommendation: str = "BLOCK - High confidence fraud detection"
    approve_recommendation: str = "APPROVE - Transaction appears legitimate"


@dataclass(frozen=True)
class FraudConfig:
    weights: RuleWeights = field(default_factory=RuleWeights)
    amount: AmountThresholds = field(default_factory=AmountThresholds)
    registration: RegistrationSettings = field(default_factory=RegistrationSettings)
    patterns: PatternSettings = field(default_factory=PatternSettings)
    simulation: SimulationThresholds = field(default_factory=SimulationThresholds)
    verdict: VerdictSettings = field(default_factory=VerdictSettings)


# Module-level default instance
default_config = FraudConfig()
