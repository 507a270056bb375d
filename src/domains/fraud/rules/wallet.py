"""Wallet-based fraud detection rules."""

from ..config import FraudConfig
from ..models import AnalysisField, NonprofitFacts, RandomSource, RuleResult, TransactionFacts
from .base import FraudRule


class NewDonorWalletRule(FraudRule):
    """Simulated wallet-age check.

    No chain data is consulted: one uniform draw below the configured cut-off
    stands in for a wallet created within the last 24 hours.
    """

    rule_id = "new_donor_wallet"
    category = "wallet"
    flag = "New donor wallet (created < 24h ago)"
    analysis_key = AnalysisField.WALLET_AGE

    def evaluate(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None,
        rng: RandomSource,
        config: FraudConfig,
    ) -> RuleResult:
        if rng.random() >= config.simulation.new_wallet_below:
            return self._not_triggered()

        return self._triggered(config, analysis="Wallet created recently - high risk pattern")


class SuspiciousRecipientRule(FraudRule):
    """Triggers when the recipient address contains a known scam marker."""

    rule_id = "suspicious_recipient"
    category = "wallet"
    flag = "Suspicious recipient address"

    def evaluate(
        self,
        transaction: TransactionFacts,
        nonprofit: NonprofitFacts | None,
        rng: RandomSource,
        config: FraudConfig,
    ) -> RuleResult:
        keyword = config.patterns.suspicious_recipient_keyword
        if keyword not in (transaction.recipient_address or "").lower():
            return self._not_triggered()

        return self._triggered(config)
