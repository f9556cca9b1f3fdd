"""
Pattern analyzer for recurring charge detection.

Decides whether a merchant group is a recurring series and, if so, extracts
the statistics the scorer and annualizer need.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from models.recurring_charge import MerchantGroup, RecurrenceFrequency
from services.recurring_charges.analyzers.amount import AmountAnalyzer
from services.recurring_charges.analyzers.frequency import FrequencyAnalyzer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternAnalysis:
    """Statistics for a group that passed every recurrence check."""
    group: MerchantGroup
    avg_amount: Decimal
    avg_days: Optional[float]
    frequency: RecurrenceFrequency
    variance_percent: Decimal

    @property
    def occurrence_count(self) -> int:
        return self.group.occurrence_count


class PatternAnalyzer:
    """
    Runs the recurrence checks on a merchant group.

    A group is rejected when it has too few charges, a zero mean, or any
    charge outside the amount tolerance. There is no outlier trimming: one
    stray charge disqualifies the whole merchant.
    """

    def __init__(
        self,
        amount_analyzer: AmountAnalyzer,
        frequency_analyzer: FrequencyAnalyzer,
        min_occurrences: int
    ):
        self.amount_analyzer = amount_analyzer
        self.frequency_analyzer = frequency_analyzer
        self.min_occurrences = min_occurrences

    def analyze(self, group: MerchantGroup) -> Optional[PatternAnalysis]:
        """
        Analyze one merchant group.

        Sorts the group's entries by date in place.

        Args:
            group: Merchant group in ledger order

        Returns:
            PatternAnalysis, or None when the group is not recurring
        """
        if group.occurrence_count < self.min_occurrences:
            logger.debug(
                f"{group.normalized_key}: {group.occurrence_count} charges, "
                f"need {self.min_occurrences}"
            )
            return None

        group.sort_entries()
        amounts = group.amounts

        avg_amount = self.amount_analyzer.mean(amounts)
        if not avg_amount:
            logger.debug(f"{group.normalized_key}: zero average amount")
            return None

        if not self.amount_analyzer.within_tolerance(amounts):
            logger.debug(f"{group.normalized_key}: amounts outside tolerance of {avg_amount:.2f}")
            return None

        avg_days = self.frequency_analyzer.average_interval(group.dates)
        if avg_days is None:
            # A lone charge (min_occurrences of 1) has no gap and bills once a year
            frequency = RecurrenceFrequency.ANNUAL
        else:
            frequency = self.frequency_analyzer.classify(avg_days)

        return PatternAnalysis(
            group=group,
            avg_amount=avg_amount,
            avg_days=avg_days,
            frequency=frequency,
            variance_percent=self.amount_analyzer.variance_percent(amounts, avg_amount)
        )
