"""
Amount analyzer for recurring charge detection.

Amount statistics are computed with Decimal so that tolerance boundaries
compare exactly.
"""

import logging
from decimal import Decimal
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class AmountAnalyzer:
    """Mean, tolerance and spread of a group's absolute amounts."""

    def __init__(self, tolerance: Decimal):
        self.tolerance = tolerance

    def mean(self, amounts: Sequence[Decimal]) -> Optional[Decimal]:
        """Arithmetic mean, or None for an empty sequence."""
        if not amounts:
            return None
        return sum(amounts, Decimal("0")) / len(amounts)

    def within_tolerance(self, amounts: Sequence[Decimal]) -> bool:
        """
        Check every amount against the group mean.

        A single amount outside the tolerance fails the whole group. The
        comparison is cross-multiplied against the unrounded total, so a
        deviation of exactly the tolerance passes even when the mean does not
        terminate.

        Args:
            amounts: Absolute amounts with a non-zero total

        Returns:
            True when |amount - mean| / mean <= tolerance for all amounts
        """
        total = sum(amounts, Decimal("0"))
        count = len(amounts)
        limit = self.tolerance * total
        return all(abs(amount * count - total) <= limit for amount in amounts)

    def variance_percent(self, amounts: Sequence[Decimal], mean: Decimal) -> Decimal:
        """Spread between the largest and smallest amount as a fraction of the mean."""
        return (max(amounts) - min(amounts)) / mean
