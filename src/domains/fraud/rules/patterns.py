"""Pattern-based fraud detection rules."""

from ..config import FraudConfig
from ..models import AnalysisField, NonprofitFacts, RandomSource, RuleResult, TransactionFacts
from .base import FraudRule


def match_suspicious_phrases(name: str, phrases: tuple[str, ...]) -> list[str]:
    """Return the phrases contained in ``name`` (case-insensitive), in phrase order."""
    lowered = name.lower()
    return [phrase for phrase in phrases if phrase in lowered]


class NamePatternRule(FraudRule):
    """Typosquatting check: generic charity wording on an unverified organization.

    The registered name is preferred over the name claimed with the
    transaction when a nonprofit record was resolved.
    """

    rule_id = "name_pattern_match"
    category = "patterns"
    flag = "Similar name to legitimate charity"
    analysis_key = AnalysisField.PATTERN_MATCH

    def evaluate(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None,
        rng: RandomSource,
        config: FraudConfig,
    ) -> RuleResult:
        if nonprofit is not None and nonprofit.registry_verified:
            return self._not_triggered()

        name = (nonprofit.name if nonprofit else None) or transaction.nonprofit_name_claimed or ""
        matches = match_suspicious_phrases(name, config.patterns.suspicious_phrases)
        if not matches:
            return self._not_triggered()

        return self._triggered(
            config,
            analysis=f'Name pattern matches known fraud schemes: "{", ".join(matches)}"',
        )
