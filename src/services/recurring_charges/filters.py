"""
Transaction filter for recurring charge detection.

Drops the records the detector should never look at: pending charges,
anything older than the analysis window and charges below the minimum amount.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from models.transaction import TransactionRecord
from services.recurring_charges.config import DetectionConfig, DEFAULT_CONFIG
from utils.temporal_utils import subtract_months

logger = logging.getLogger(__name__)


def analysis_cutoff(run_date: date, config: DetectionConfig = DEFAULT_CONFIG) -> date:
    """Earliest date (inclusive) that falls inside the analysis window."""
    return subtract_months(run_date, config.months_to_analyze)


def filter_transactions(
    transactions: Iterable[TransactionRecord],
    config: DetectionConfig = DEFAULT_CONFIG,
    run_date: Optional[date] = None
) -> List[TransactionRecord]:
    """
    Keep settled, recent, large-enough transactions in their original order.

    Args:
        transactions: Ledger records in store order
        config: Detection configuration
        run_date: Date the run is anchored to (default: today)

    Returns:
        The order-preserving subsequence that passed every check
    """
    cutoff = analysis_cutoff(run_date or date.today(), config)

    kept = [
        txn for txn in transactions
        if not txn.pending
        and txn.date >= cutoff
        and txn.absolute_amount >= config.min_amount
    ]

    logger.debug(f"Filter kept {len(kept)} transactions on or after {cutoff.isoformat()}")
    return kept
