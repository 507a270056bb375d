"""Registration-based fraud detection rules (EIN and IRS registry)."""

from ..config import FraudConfig
from ..helpers import is_absent_registration_id
from ..models import AnalysisField, NonprofitFacts, RandomSource, RuleResult, TransactionFacts
from .base import FraudRule


class UnverifiedEINRule(FraudRule):
    """Triggers when no usable registration id backs the nonprofit."""

    rule_id = "unverified_ein"
    category = "registration"
    flag = "Unverified EIN"
    analysis_key = AnalysisField.EIN_STATUS

    def evaluate(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None,
        rng: RandomSource,
        config: FraudConfig,
    ) -> RuleResult:
        if nonprofit is not None and not is_absent_registration_id(
            nonprofit.registration_id, config.registration.absent_ids
        ):
            return self._not_triggered()

        return self._triggered(config, analysis="Invalid or missing EIN")


class NotInIRSDatabaseRule(FraudRule):
    """Triggers when the nonprofit is unknown or not confirmed by the IRS registry."""

    rule_id = "not_in_irs_database"
    category = "registration"
    flag = "Not in IRS database"
    analysis_key = AnalysisField.IRS_STATUS

    def evaluate(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None,
        rng: RandomSource,
        config: FraudConfig,
    ) -> RuleResult:
        if nonprofit is not None and nonprofit.registry_verified:
            return self._not_triggered()

        return self._triggered(config, analysis="Organization not found in IRS records")
