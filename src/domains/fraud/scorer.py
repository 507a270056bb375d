"""Fraud scoring: rules -> weighted score -> verdict with explanation."""

import random
from collections.abc import Callable

import structlog

from .config import FraudConfig, default_config
from .helpers import format_percent
from .models import (
    AnalysisField,
    FraudVerdict,
    NonprofitFacts,
    RandomSource,
    RuleResult,
    TransactionFacts,
    VerdictStatus,
)
from .rules_engine import RulesEngine

logger = structlog.get_logger()


class FraudScorer:
    """Turns a donation and its resolved nonprofit into a FraudVerdict.

    Scoring is pure apart from the two simulated checks, which draw from a
    random source. Each call gets its own source from ``rng_factory``
    (a freshly seeded ``random.Random`` by default) unless one is passed in,
    so concurrent calls never share random state.
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        rng_factory: Callable[[], RandomSource] | None = None,
    ) -> None:
        self._config = config or default_config
        self._rules_engine = RulesEngine(config=self._config)
        self._rng_factory = rng_factory or random.Random

    @property
    def config(self) -> FraudConfig:
        return self._config

    @property
    def rules_engine(self) -> RulesEngine:
        return self._rules_engine

    def score(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None = None,
        rng: RandomSource | None = None,
    ) -> FraudVerdict:
        """Score one transaction. ``nonprofit`` is None when no registry record matched."""
        rng = rng if rng is not None else self._rng_factory()

        rule_results = self._rules_engine.evaluate(transaction, nonprofit, rng)
        fraud_score = self._rules_engine.aggregate(rule_results)
        is_fraudulent = fraud_score >= self._config.verdict.fraud_threshold

        triggered = [r for r in rule_results if r.triggered]
        verdict = FraudVerdict(
            fraud_score=fraud_score,
            is_fraudulent=is_fraudulent,
            status=VerdictStatus.FLAGGED if is_fraudulent else VerdictStatus.VERIFIED,
            risk_flags=[r.flag for r in triggered],
            analysis=self._build_analysis(triggered, fraud_score, is_fraudulent),
            rule_results=rule_results,
        )

        logger.debug(
            "transaction_scored",
            fraud_score=fraud_score,
            status=verdict.status.value,
            triggered_count=len(triggered),
            risk_flags=verdict.risk_flags,
        )

        return verdict

    def _build_analysis(
        self,
        triggered: list[RuleResult],
        fraud_score: float,
        is_fraudulent: bool,
    ) -> dict[str, str]:
        analysis = {
            r.analysis_key.value: r.analysis for r in triggered if r.analysis_key is not None
        }

        if is_fraudulent:
            recommendation = self._config.verdict.block_recommendation
            confidence = f"{format_percent(fraud_score)}% fraud probability"
        else:
            recommendation = self._config.verdict.approve_recommendation
            confidence = f"{format_percent(1 - fraud_score)}% legitimacy confidence"

        analysis[AnalysisField.RECOMMENDATION.value] = recommendation
        analysis[AnalysisField.CONFIDENCE_LEVEL.value] = confidence
        return analysis
