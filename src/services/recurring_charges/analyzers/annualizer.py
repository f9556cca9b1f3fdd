"""
Annualizer for recurring charge detection.

Projects a per-charge average to a yearly cost and breaks observed spend
down by calendar month.
"""

import logging
from decimal import Decimal
from typing import Dict, Optional

from models.recurring_charge import MerchantGroup, RecurrenceFrequency
from utils.temporal_utils import month_key

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


class Annualizer:
    """
    Converts average charges into yearly cost estimates.

    The yearly figure always comes from the frequency multiplier table so the
    displayed frequency label and the annualized number agree.
    """

    def monthly_breakdown(self, group: MerchantGroup) -> Dict[str, Decimal]:
        """
        Sum absolute amounts per ``YYYY-MM``.

        Args:
            group: Merchant group with entries sorted by date

        Returns:
            Month key to total spend, in chronological order
        """
        breakdown: Dict[str, Decimal] = {}
        for entry_date, amount in group.entries:
            key = month_key(entry_date)
            breakdown[key] = breakdown.get(key, Decimal("0")) + amount
        return breakdown

    def annualize(
        self,
        frequency: Optional[RecurrenceFrequency],
        avg_amount: Decimal,
        monthly_spend: Dict[str, Decimal]
    ) -> Decimal:
        """
        Estimate yearly spend for a series.

        Args:
            frequency: Detected cadence
            avg_amount: Mean charge amount
            monthly_spend: Observed spend per month, used only when no
                cadence was resolved

        Returns:
            Estimated yearly spend (unrounded)
        """
        if frequency is not None:
            return avg_amount * frequency.occurrences_per_year

        # Extrapolate from observed spend over the months with activity
        if not monthly_spend:
            return Decimal("0")
        logger.warning("No frequency resolved, extrapolating from monthly spend")
        total = sum(monthly_spend.values(), Decimal("0"))
        return total / len(monthly_spend) * MONTHS_PER_YEAR
