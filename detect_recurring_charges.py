#!/usr/bin/env python3
"""
Script to detect recurring charges in a CSV ledger export.

Reads the export, runs one detection pass and prints the report as JSON.
Configuration can be passed as a JSON file (typically the "config" block of
a previous report) and is echoed back in the output so it can be reused.

Usage:
    python3 detect_recurring_charges.py LEDGER_CSV [--config CONFIG_JSON] [--run-date YYYY-MM-DD]
"""

import sys
import os
import argparse
import json
import logging
from datetime import date
from typing import List, Optional

# Add the src directory to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from services.recurring_charges import DetectionConfig, RecurringChargeDetectionService
from utils.lambda_utils import DecimalEncoder
from utils.ledger_csv import parse_ledger_csv

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def load_config(path: Optional[str]) -> DetectionConfig:
    """Load detection options from a JSON file; missing file means defaults."""
    if not path:
        return DetectionConfig()
    with open(path, encoding='utf-8') as f:
        raw = json.load(f)
    if isinstance(raw, dict) and isinstance(raw.get('config'), dict):
        raw = raw['config']
    return DetectionConfig.from_mapping(raw if isinstance(raw, dict) else None)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run detection over a ledger export."""
    parser = argparse.ArgumentParser(description='Detect recurring charges in a CSV ledger export')
    parser.add_argument('ledger', help='Path to the CSV ledger export')
    parser.add_argument('--config', type=str,
                       help='JSON file with amountTolerance/minOccurrences/monthsToAnalyze/minAmount')
    parser.add_argument('--run-date', type=date.fromisoformat,
                       help='Anchor the analysis window to this date (default: today)')

    args = parser.parse_args(argv)

    try:
        with open(args.ledger, encoding='utf-8-sig') as f:
            transactions = parse_ledger_csv(f.read())
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Unable to load input: {str(e)}")
        return 1

    report = RecurringChargeDetectionService(config).detect_recurring_charges(
        transactions, run_date=args.run_date
    )

    output = report.to_dict()
    output['config'] = config.to_dict()
    print(json.dumps(output, cls=DecimalEncoder, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
