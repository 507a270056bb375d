"""Tests for the donation request generator."""

from generators.donation_generator import DonationGenerator
from generators.utils.charities import LEGITIMATE_NONPROFITS, LOOKALIKE_NAMES, SCAM_RECIPIENTS
from src.domains.transactions.models import TransactionCreateRequest

CLEAN_CONFIG = {
    "num_donors": 10,
    "amount_range": [0.01, 0.2],
    "lookalike_injection_rate": 0.0,
    "large_amount_injection_rate": 0.0,
    "scam_recipient_injection_rate": 0.0,
}


class TestDonationGenerator:
    def test_deterministic_output(self):
        first = DonationGenerator(config=CLEAN_CONFIG, seed=42).generate(num_donations=50)
        second = DonationGenerator(config=CLEAN_CONFIG, seed=42).generate(num_donations=50)
        assert first == second

    def test_different_seeds_differ(self):
        first = DonationGenerator(config=CLEAN_CONFIG, seed=1).generate(num_donations=10)
        second = DonationGenerator(config=CLEAN_CONFIG, seed=2).generate(num_donations=10)
        assert first != second

    def test_records_are_valid_create_requests(self):
        donations = DonationGenerator(config=CLEAN_CONFIG, seed=42).generate(num_donations=25)
        assert len(donations) == 25
        for donation in donations:
            TransactionCreateRequest(**donation)

    def test_hashes_are_unique(self):
        donations = DonationGenerator(config=CLEAN_CONFIG, seed=42).generate(num_donations=200)
        hashes = [d["transaction_hash"] for d in donations]
        assert len(set(hashes)) == len(hashes)
        assert all(h.startswith("0x") and len(h) == 66 for h in hashes)

    def test_clean_config_uses_registered_nonprofits(self):
        registered = dict(LEGITIMATE_NONPROFITS)
        donations = DonationGenerator(config=CLEAN_CONFIG, seed=42).generate(num_donations=50)
        for donation in donations:
            assert registered[donation["nonprofit_name"]] == donation["nonprofit_ein"]
            assert 0.01 <= donation["amount"] <= 0.2

    def test_block_numbers_increase(self):
        donations = DonationGenerator(config=CLEAN_CONFIG, seed=42).generate(num_donations=20)
        blocks = [d["block_number"] for d in donations]
        assert blocks == sorted(blocks)

    def test_lookalike_injection(self):
        config = {**CLEAN_CONFIG, "lookalike_injection_rate": 1.0}
        donations = DonationGenerator(config=config, seed=42).generate(num_donations=20)
        assert all(d["nonprofit_name"] in LOOKALIKE_NAMES for d in donations)
        assert all(d["nonprofit_ein"] == "Unknown" for d in donations)

    def test_large_amount_injection(self):
        config = {**CLEAN_CONFIG, "large_amount_injection_rate": 1.0}
        donations = DonationGenerator(config=config, seed=42).generate(num_donations=20)
        assert all(d["amount"] > 0.5 for d in donations)

    def test_scam_recipient_injection(self):
        config = {**CLEAN_CONFIG, "scam_recipient_injection_rate": 1.0}
        donations = DonationGenerator(config=config, seed=42).generate(num_donations=20)
        assert all(d["recipient_address"] in SCAM_RECIPIENTS for d in donations)
