"""Abstract base class for fraud detection rules."""

from abc import ABC, abstractmethod

from ..config import FraudConfig
from ..models import AnalysisField, NonprofitFacts, RandomSource, RuleResult, TransactionFacts


class FraudRule(ABC):
    """Base class for all fraud rules.

    Rules are synchronous and side-effect free. Each receives the transaction,
    the resolved nonprofit (or None), the per-call random source and the
    frozen config. The rule's weight is looked up in ``config.weights`` by
    ``rule_id``.
    """

    rule_id: str
    category: str  # "registration" | "amount" | "wallet" | "patterns" | "velocity"
    flag: str
    analysis_key: AnalysisField | None = None

    def weight(self, config: FraudConfig) -> float:
        return getattr(config.weights, self.rule_id)

    @abstractmethod
    def evaluate(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None,
        rng: RandomSource,
        config: FraudConfig,
    ) -> RuleResult:
        """Evaluate this rule and return a RuleResult."""
        ...

    def _not_triggered(self) -> RuleResult:
        """Convenience: return a non-triggered result for this rule."""
        return RuleResult(
            rule_name=self.rule_id,
            triggered=False,
            category=self.category,
        )

    def _triggered(self, config: FraudConfig, analysis: str = "") -> RuleResult:
        """Convenience: return a triggered result carrying this rule's weight and flag."""
        return RuleResult(
            rule_name=self.rule_id,
            triggered=True,
            weight=self.weight(config),
            flag=self.flag,
            analysis_key=self.analysis_key,
            analysis=analysis,
            category=self.category,
        )
