"""Donation request generator with fraud injection.

Produces bodies for ``POST /api/v1/transactions``. Clean donations go to
registered nonprofits with ordinary amounts; injected ones use look-alike
names, unknown EINs, oversized amounts or scam-tagged recipients.
"""

from typing import Any

from .base import BaseGenerator
from .utils.charities import LEGITIMATE_NONPROFITS, LOOKALIKE_NAMES, SCAM_RECIPIENTS


class DonationGenerator(BaseGenerator):
    def generate(self, num_donations: int = 100) -> list[dict[str, Any]]:
        config = self.config
        rng = self.rng

        num_donors = config.get("num_donors", 50)

        donors = [self._wallet() for _ in range(num_donors)]
        recipients = {ein: self._wallet() for _, ein in LEGITIMATE_NONPROFITS}
        amount_range = config.get("amount_range", [0.01, 0.2])

        donations: list[dict[str, Any]] = []
        block_number = config.get("start_block", 18_456_789)

        for _ in range(num_donations):
            name, ein = rng.choice(LEGITIMATE_NONPROFITS)
            donation = {
                "transaction_hash": self._tx_hash(),
                "nonprofit_name": name,
                "nonprofit_ein": ein,
                "donor_address": rng.choice(donors),
                "recipient_address": recipients[ein],
                "amount": round(rng.uniform(*amount_range), 4),
                "block_number": block_number,
                "gas_used": "21000",
            }
            block_number += rng.randint(1, 20)

            # Fraud injection: look-alike organization without a registration
            if rng.random() < config.get("lookalike_injection_rate", 0.0):
                donation["nonprofit_name"] = rng.choice(LOOKALIKE_NAMES)
                donation["nonprofit_ein"] = "Unknown"
                donation["recipient_address"] = self._wallet()

            # Fraud injection: oversized donation
            if rng.random() < config.get("large_amount_injection_rate", 0.0):
                donation["amount"] = round(rng.uniform(0.6, 5.0), 4)

            # Fraud injection: scam-tagged recipient
            if rng.random() < config.get("scam_recipient_injection_rate", 0.0):
                donation["recipient_address"] = rng.choice(SCAM_RECIPIENTS)

            donations.append(donation)

        return donations
