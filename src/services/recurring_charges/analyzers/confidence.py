"""
Confidence score calculator for recurring charge detection.

Calculates an additive 0-100 confidence score from occurrence count, amount
consistency and cadence regularity.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from services.recurring_charges.config import ConfidenceWeights

logger = logging.getLogger(__name__)


class ConfidenceScoreCalculator:
    """
    Calculates additive confidence scores for recurring charge patterns.

    Considers:
    - Sample size (more charges = higher confidence, capped)
    - Amount consistency (smaller max-min spread = higher confidence)
    - Canonical cadence (average gap near a week or a month)

    The cadence bonuses look at the raw average gap, not at the frequency
    bucket, so a Bi-Weekly or Quarterly series never earns one while a
    Monthly series only earns it from day 25 upward.
    """

    def __init__(self, weights: Optional[ConfidenceWeights] = None):
        """
        Initialize the confidence score calculator.

        Args:
            weights: Optional custom point values.
                    If None, uses default weights (50 base, 30/10/10/10 adjustments)
        """
        self.weights = weights or ConfidenceWeights()

    def calculate(
        self,
        occurrence_count: int,
        variance_percent: Decimal,
        avg_days: Optional[float]
    ) -> int:
        """
        Calculate confidence score (0-100).

        Args:
            occurrence_count: Number of charges in the series
            variance_percent: (max - min) / mean of the amounts
            avg_days: Mean interval between charges in days, None for a lone charge

        Returns:
            Integer score, rounded half-up and clamped to [0, 100]
        """
        w = self.weights

        occurrence_points = min(occurrence_count * w.points_per_occurrence, w.max_occurrence_points)
        consistency_points = (1 - min(variance_percent, Decimal("1"))) * w.max_consistency_points
        cadence_points = self._cadence_bonus(avg_days)

        score = Decimal(w.base_score) + occurrence_points + consistency_points + cadence_points
        rounded = int(score.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

        return max(0, min(100, rounded))

    def _cadence_bonus(self, avg_days: Optional[float]) -> int:
        """
        Bonus points for a canonical monthly or weekly gap.

        The two ranges are checked independently of each other.
        """
        if avg_days is None:
            return 0

        w = self.weights
        bonus = 0

        monthly_low, monthly_high = w.monthly_bonus_range
        if monthly_low <= avg_days <= monthly_high:
            bonus += w.cadence_bonus

        weekly_low, weekly_high = w.weekly_bonus_range
        if weekly_low <= avg_days <= weekly_high:
            bonus += w.cadence_bonus

        return bonus
