"""
Configuration classes for recurring charge detection.

Centralizes all configuration parameters, thresholds, and weights used
in the detection pipeline. ``DetectionConfig`` holds the four user-editable
options; the remaining classes hold the fixed scoring and cadence tables.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models.recurring_charge import RecurrenceFrequency

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrequencyThresholds:
    """
    Exclusive upper bounds (in days) for frequency classification.

    Bins are evaluated in order and the first match wins, so an average gap
    of exactly 10 days is Bi-Weekly, not Weekly. Anything at or above the
    semi-annual bound is Annual.
    """

    weekly: float = 10
    """Weekly recurrence: average gap below 10 days."""

    bi_weekly: float = 20
    """Bi-weekly recurrence: average gap below 20 days."""

    monthly: float = 35
    """Monthly recurrence: average gap below 35 days."""

    quarterly: float = 100
    """Quarterly recurrence: average gap below 100 days."""

    semi_annual: float = 200
    """Semi-annual recurrence: average gap below 200 days."""

    def to_bins(self) -> List[Tuple[float, RecurrenceFrequency]]:
        """
        Convert thresholds to an ordered list of (upper_bound, frequency) bins.

        Returns:
            List of bins, shortest cadence first
        """
        return [
            (self.weekly, RecurrenceFrequency.WEEKLY),
            (self.bi_weekly, RecurrenceFrequency.BI_WEEKLY),
            (self.monthly, RecurrenceFrequency.MONTHLY),
            (self.quarterly, RecurrenceFrequency.QUARTERLY),
            (self.semi_annual, RecurrenceFrequency.SEMI_ANNUAL),
        ]


@dataclass(frozen=True)
class ConfidenceWeights:
    """
    Point values for the additive confidence score.

    The final score is base + occurrence points + consistency points + cadence
    bonuses, rounded and clamped to [0, 100].
    """

    base_score: int = 50
    """Starting score for every candidate that passed the tolerance check."""

    points_per_occurrence: int = 10
    """Points per observed charge."""

    max_occurrence_points: int = 30
    """Cap on occurrence points (reached at three charges)."""

    max_consistency_points: int = 10
    """Points for a perfectly flat amount, scaled down by the amount spread."""

    monthly_bonus_range: Tuple[float, float] = (25, 35)
    """Inclusive average-gap range that earns the monthly cadence bonus."""

    weekly_bonus_range: Tuple[float, float] = (6, 8)
    """Inclusive average-gap range that earns the weekly cadence bonus."""

    cadence_bonus: int = 10
    """Points for each cadence bonus range the average gap falls into."""


DEFAULT_AMOUNT_TOLERANCE = Decimal("0.05")
DEFAULT_MIN_OCCURRENCES = 3
DEFAULT_MONTHS_TO_ANALYZE = 12
DEFAULT_MIN_AMOUNT = Decimal("5")


def _parse_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return parsed if parsed.is_finite() else None


def _parse_int(value: Any) -> Optional[int]:
    parsed = _parse_decimal(value)
    if parsed is None or parsed != parsed.to_integral_value():
        return None
    return int(parsed)


@dataclass(frozen=True)
class DetectionConfig:
    """
    Master configuration for recurring charge detection.

    Immutable for the duration of a run. The caller owns persistence: it
    builds the config with ``from_mapping`` from whatever the user last
    edited, and stores ``to_dict()`` to hand back next time.
    """

    amount_tolerance: Decimal = DEFAULT_AMOUNT_TOLERANCE
    """Maximum fractional deviation of any charge from the group mean."""

    min_occurrences: int = DEFAULT_MIN_OCCURRENCES
    """Minimum number of charges for a merchant to count as recurring."""

    months_to_analyze: int = DEFAULT_MONTHS_TO_ANALYZE
    """How many calendar months of history to look back over."""

    min_amount: Decimal = DEFAULT_MIN_AMOUNT
    """Charges smaller than this (in absolute value) are ignored."""

    frequency_thresholds: FrequencyThresholds = field(default_factory=FrequencyThresholds)
    confidence_weights: ConfidenceWeights = field(default_factory=ConfidenceWeights)

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "DetectionConfig":
        """
        Build a config from user-edited values.

        Accepts camelCase or snake_case keys. Unknown keys are ignored and
        each invalid value falls back to its default on its own; this never
        raises.

        Args:
            values: Raw option values, typically strings or numbers

        Returns:
            DetectionConfig with every recognized option resolved
        """
        if not values:
            return cls()

        def lookup(camel: str, snake: str) -> Any:
            if camel in values:
                return values[camel]
            return values.get(snake)

        resolved: Dict[str, Any] = {}

        raw = lookup("amountTolerance", "amount_tolerance")
        tolerance = _parse_decimal(raw)
        if tolerance is not None and tolerance >= 0:
            resolved["amount_tolerance"] = tolerance
        elif raw is not None:
            logger.warning(f"Invalid amountTolerance {raw!r}, using {DEFAULT_AMOUNT_TOLERANCE}")

        raw = lookup("minOccurrences", "min_occurrences")
        occurrences = _parse_int(raw)
        if occurrences is not None and occurrences >= 1:
            resolved["min_occurrences"] = occurrences
        elif raw is not None:
            logger.warning(f"Invalid minOccurrences {raw!r}, using {DEFAULT_MIN_OCCURRENCES}")

        raw = lookup("monthsToAnalyze", "months_to_analyze")
        months = _parse_int(raw)
        if months is not None and months >= 1:
            resolved["months_to_analyze"] = months
        elif raw is not None:
            logger.warning(f"Invalid monthsToAnalyze {raw!r}, using {DEFAULT_MONTHS_TO_ANALYZE}")

        raw = lookup("minAmount", "min_amount")
        min_amount = _parse_decimal(raw)
        if min_amount is not None and min_amount >= 0:
            resolved["min_amount"] = min_amount
        elif raw is not None:
            logger.warning(f"Invalid minAmount {raw!r}, using {DEFAULT_MIN_AMOUNT}")

        return cls(**resolved)

    def to_dict(self) -> Dict[str, Any]:
        """Return the user-editable options keyed the way ``from_mapping`` reads them."""
        return {
            "amountTolerance": self.amount_tolerance,
            "minOccurrences": self.min_occurrences,
            "monthsToAnalyze": self.months_to_analyze,
            "minAmount": self.min_amount,
        }


# Default configuration instance
DEFAULT_CONFIG = DetectionConfig()
