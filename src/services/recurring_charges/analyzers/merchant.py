"""
Merchant normalization and grouping for recurring charge detection.

Reduces free-text merchant strings to a stable key and buckets transactions
by that key.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from models.transaction import TransactionRecord
from models.recurring_charge import MerchantGroup

logger = logging.getLogger(__name__)

MAX_KEY_LENGTH = 20

_NON_ALPHANUMERIC = re.compile(r'[^A-Z0-9]')
# Store numbers, terminal IDs and reference numbers
_LONG_DIGIT_RUN = re.compile(r'\d{4,}')


def normalize_merchant(raw_merchant: Optional[str]) -> str:
    """
    Map a raw merchant string to its grouping key.

    Uppercases, keeps only ASCII letters and digits, removes runs of four or
    more digits and truncates to 20 characters.

    Args:
        raw_merchant: Merchant text as it appears on the statement

    Returns:
        Normalized key, or "" when nothing usable remains

    Examples:
        >>> normalize_merchant("NETFLIX.COM 123456")
        'NETFLIXCOM'
        >>> normalize_merchant("Spotify USA #1234")
        'SPOTIFYUSA'
    """
    if not raw_merchant:
        return ""

    key = _NON_ALPHANUMERIC.sub('', raw_merchant.upper())
    key = _LONG_DIGIT_RUN.sub('', key)
    return key[:MAX_KEY_LENGTH]


class MerchantGrouper:
    """
    Buckets transactions by normalized merchant key.

    Groups keep first-seen order, and each group's metadata comes from the
    first transaction encountered for its key.
    """

    def group(self, transactions: Iterable[TransactionRecord]) -> List[MerchantGroup]:
        """
        Partition transactions by merchant key.

        Transactions whose merchant normalizes to an empty key are dropped.

        Args:
            transactions: Filtered transactions in ledger order

        Returns:
            Merchant groups in first-seen order
        """
        groups: Dict[str, MerchantGroup] = {}
        dropped = 0

        for txn in transactions:
            key = normalize_merchant(txn.merchant_raw)
            if not key:
                dropped += 1
                continue

            group = groups.get(key)
            if group is None:
                group = MerchantGroup(
                    normalized_key=key,
                    original_name=txn.merchant_raw,
                    category=txn.category_primary,
                    account=txn.account_name
                )
                groups[key] = group
            group.add(txn.date, txn.amount)

        if dropped:
            logger.debug(f"Dropped {dropped} transactions without a usable merchant name")

        return list(groups.values())
