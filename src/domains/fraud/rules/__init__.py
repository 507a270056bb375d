"""Fraud detection rules package.

Exports ALL_RULES (list of all rule instances, in evaluation order) and
individual rule classes for direct use.
"""

from .amount import AmountAnomalyRule
from .base import FraudRule
from .patterns import NamePatternRule, match_suspicious_phrases
from .registration import NotInIRSDatabaseRule, UnverifiedEINRule
from .velocity import TransactionVelocityRule
from .wallet import NewDonorWalletRule, SuspiciousRecipientRule

# All rule instances in evaluation order; risk flags follow this order
ALL_RULES: tuple[FraudRule, ...] = (
    UnverifiedEINRule(),
    NotInIRSDatabaseRule(),
    AmountAnomalyRule(),
    NewDonorWalletRule(),
    NamePatternRule(),
    TransactionVelocityRule(),
    SuspiciousRecipientRule(),
)

__all__ = [
    "ALL_RULES",
    "FraudRule",
    "match_suspicious_phrases",
    # Registration
    "UnverifiedEINRule",
    "NotInIRSDatabaseRule",
    # Amount
    "AmountAnomalyRule",
    # Wallet
    "NewDonorWalletRule",
    "SuspiciousRecipientRule",
    # Patterns
    "NamePatternRule",
    # Velocity
    "TransactionVelocityRule",
]
