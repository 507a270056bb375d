"""Ordered rule evaluation with additive weighting."""

import structlog

from .config import FraudConfig, default_config
from .models import NonprofitFacts, RandomSource, RuleResult, TransactionFacts
from .rules import ALL_RULES, FraudRule

logger = structlog.get_logger()


class RulesEngine:
    """Evaluates a donation against every fraud rule, in order.

    Scoring is additive (0.0-1.0):
    1. Run all rules -> list[RuleResult] (no short-circuiting)
    2. Sum the weights of triggered rules
    3. Cap at the configured maximum
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        rules: tuple[FraudRule, ...] | None = None,
    ) -> None:
        self._config = config or default_config
        self._rules = tuple(rules) if rules is not None else ALL_RULES

    @property
    def rules(self) -> tuple[FraudRule, ...]:
        return self._rules

    def evaluate(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None,
        rng: RandomSource,
    ) -> list[RuleResult]:
        """Evaluate all rules. Results come back in rule order, triggered or not."""
        return [
            rule.evaluate(transaction, nonprofit, rng, self._config) for rule in self._rules
        ]

    def aggregate(self, results: list[RuleResult]) -> float:
        """Sum of triggered weights, capped and rounded to cancel float drift."""
        total = sum(r.weight for r in results if r.triggered)
        return round(min(total, self._config.verdict.max_score), 4)
