"""
Frequency analyzer for recurring charge detection.

Analyzes transaction intervals to detect recurrence frequency.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence, Tuple

import numpy as np

from models.recurring_charge import RecurrenceFrequency
from utils.temporal_utils import day_gaps

logger = logging.getLogger(__name__)


class FrequencyAnalyzer:
    """
    Analyzes transaction intervals to detect recurrence frequency.

    Calculates mean interval between transactions and buckets it into one of
    the standard cadences using half-open bins.
    """

    def __init__(self, frequency_bins: List[Tuple[float, RecurrenceFrequency]]):
        """
        Initialize the frequency analyzer.

        Args:
            frequency_bins: Ordered (exclusive upper bound, frequency) pairs;
                averages past the last bound are Annual
        """
        self.frequency_bins = frequency_bins

    def average_interval(self, dates: Sequence[date]) -> Optional[float]:
        """
        Mean gap in days across all adjacent pairs.

        Args:
            dates: Dates sorted ascending

        Returns:
            Mean interval, or None with fewer than two dates
        """
        gaps = day_gaps(dates)
        if gaps.size == 0:
            return None
        return float(np.mean(gaps))

    def classify(self, average_days: float) -> RecurrenceFrequency:
        """
        Match mean interval to frequency category.

        Args:
            average_days: Mean interval in days

        Returns:
            The first bin whose upper bound exceeds the interval
        """
        for upper_bound, frequency in self.frequency_bins:
            if average_days < upper_bound:
                return frequency
        return RecurrenceFrequency.ANNUAL
