"""Fraud detection domain."""

from .config import FraudConfig, default_config
from .helpers import format_percent, is_absent_registration_id
from .models import (
    AnalysisField,
    FraudScoreRequest,
    FraudVerdict,
    NonprofitFacts,
    RandomSource,
    RuleResult,
    TransactionFacts,
    VerdictStatus,
)
from .rules import ALL_RULES
from .rules_engine import RulesEngine
from .scorer import FraudScorer

__all__ = [
    "ALL_RULES",
    "AnalysisField",
    "FraudConfig",
    "FraudScoreRequest",
    "FraudScorer",
    "FraudVerdict",
    "NonprofitFacts",
    "RandomSource",
    "RuleResult",
    "RulesEngine",
    "TransactionFacts",
    "VerdictStatus",
    "default_config",
    "format_percent",
    "is_absent_registration_id",
]
