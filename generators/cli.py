"""CLI entry point for demo data generators.

Usage:
    python -m generators.cli donation --seed 42 --count 100
    python -m generators.cli donation --config configs/demo_donations.yaml --output file
"""

import argparse
import json
import sys
from pathlib import Path

import yaml

DEFAULT_DONATION_CONFIG = {
    "num_donors": 50,
    "amount_range": [0.01, 0.2],
    "lookalike_injection_rate": 0.1,
    "large_amount_injection_rate": 0.05,
    "scam_recipient_injection_rate": 0.03,
}


def main() -> None:
    parser = argparse.ArgumentParser(description="CharityGuard demo data generators")
    parser.add_argument("generator", choices=["donation"], help="Which generator to run")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config file")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
    parser.add_argument("--count", type=int, default=100, help="Number of records to generate")
    parser.add_argument(
        "--output",
        type=str,
        default="stdout",
        choices=["stdout", "file"],
        help="Output destination",
    )
    parser.add_argument("--output-file", type=str, default=None, help="Output file path")

    args = parser.parse_args()

    config = dict(DEFAULT_DONATION_CONFIG)
    if args.config:
        with open(args.config) as f:
            config.update(yaml.safe_load(f) or {})

    from .donation_generator import DonationGenerator

    records = DonationGenerator(config=config, seed=args.seed).generate(num_donations=args.count)

    if args.output == "stdout":
        for record in records:
            print(json.dumps(record, default=str))
    else:
        output_path = args.output_file or f"output/{args.generator}_requests.jsonl"
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            for record in records:
                f.write(json.dumps(record, default=str) + "\n")
        print(f"Wrote {len(records)} records to {output_path}", file=sys.stderr)

    print(f"Generated {len(records)} records", file=sys.stderr)


if __name__ == "__main__":
    main()
