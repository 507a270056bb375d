"""Velocity-based fraud detection rules."""

from ..config import FraudConfig
from ..models import AnalysisField, NonprofitFacts, RandomSource, RuleResult, TransactionFacts
from .base import FraudRule


class TransactionVelocityRule(FraudRule):
    """Simulated velocity check: a uniform draw above the cut-off stands in for a burst."""

    rule_id = "transaction_velocity"
    category = "velocity"
    flag = "Suspicious transaction velocity"
    analysis_key = AnalysisField.VELOCITY_CHECK

    def evaluate(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None,
        rng: RandomSource,
        config: FraudConfig,
    ) -> RuleResult:
        if rng.random() <= config.simulation.velocity_above:
            return self._not_triggered()

        return self._triggered(
            config, analysis="Multiple rapid transactions detected from this wallet"
        )
