"""Amount-based fraud detection rules."""

from ..config import FraudConfig
from ..helpers import format_percent, to_decimal
from ..models import AnalysisField, NonprofitFacts, RandomSource, RuleResult, TransactionFacts
from .base import FraudRule


class AmountAnomalyRule(FraudRule):
    """Triggers for donations above the normal ceiling.

    The explanation reports how far the amount sits above the average
    donation, e.g. 1.0 against an average of 0.05 is "1900% above".
    """

    rule_id = "amount_anomaly"
    category = "amount"
    flag = "Unusually high donation amount"
    analysis_key = AnalysisField.AMOUNT_ANOMALY

    def evaluate(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None,
        rng: RandomSource,
        config: FraudConfig,
    ) -> RuleResult:
        amount = transaction.amount
        if amount <= config.amount.max_normal_donation:
            return self._not_triggered()

        # Decimal division; a float ratio overflows to inf for very large amounts
        ratio = to_decimal(amount) / to_decimal(config.amount.average_donation) - 1
        percent_above = format_percent(ratio)
        return self._triggered(
            config,
            analysis=f"{percent_above}% above average donation size",
        )
