"""Nonprofit registry domain: EIN verification and resolution for scoring."""

from .models import (
    IRSData,
    NonprofitRegisterRequest,
    NonprofitUpdateRequest,
    TrustLevel,
    VerificationResult,
    VerificationStatus,
)
from .resolution import find_nonprofit, resolve_nonprofit, to_facts
from .verification import (
    calculate_trust_level,
    calculate_trust_score,
    format_ein,
    is_valid_ein_format,
    verification_stats,
    verify_ein,
)

__all__ = [
    "IRSData",
    "NonprofitRegisterRequest",
    "NonprofitUpdateRequest",
    "TrustLevel",
    "VerificationResult",
    "VerificationStatus",
    "calculate_trust_level",
    "calculate_trust_score",
    "find_nonprofit",
    "format_ein",
    "is_valid_ein_format",
    "resolve_nonprofit",
    "to_facts",
    "verification_stats",
    "verify_ein",
]
