"""
Recurring Charge Detection Models.

This module provides the Pydantic models for rule-based recurring charge
detection: the cadence enum, the transient merchant group built during a run,
the detected candidate and the report handed to the renderer.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ConfigDict, field_validator

logger = logging.getLogger(__name__)

# Constants
CONFIDENCE_ERROR_MESSAGE = "confidence must be between 0 and 100"
MONTH_KEY_ERROR_MESSAGE = "monthlySpend keys must be formatted as YYYY-MM"


class RecurrenceFrequency(str, Enum):
    """Frequency of recurring charges."""
    WEEKLY = "Weekly"                 # < 10 day intervals
    BI_WEEKLY = "Bi-Weekly"           # < 20 day intervals
    MONTHLY = "Monthly"               # < 35 day intervals
    QUARTERLY = "Quarterly"           # < 100 day intervals
    SEMI_ANNUAL = "Semi-Annual"       # < 200 day intervals
    ANNUAL = "Annual"                 # everything longer

    @property
    def occurrences_per_year(self) -> int:
        """Number of charges a year at this cadence."""
        return _OCCURRENCES_PER_YEAR[self]


_OCCURRENCES_PER_YEAR: Dict[RecurrenceFrequency, int] = {
    RecurrenceFrequency.WEEKLY: 52,
    RecurrenceFrequency.BI_WEEKLY: 26,
    RecurrenceFrequency.MONTHLY: 12,
    RecurrenceFrequency.QUARTERLY: 4,
    RecurrenceFrequency.SEMI_ANNUAL: 2,
    RecurrenceFrequency.ANNUAL: 1,
}


@dataclass
class MerchantGroup:
    """
    Transactions sharing one normalized merchant key.

    Metadata (original name, category, account) comes from the first
    transaction seen for the key. Entries are (date, absolute amount) pairs;
    call ``sort_entries`` before any cadence analysis.
    """
    normalized_key: str
    original_name: str
    category: str
    account: str
    entries: List[Tuple[date, Decimal]] = field(default_factory=list)

    @property
    def occurrence_count(self) -> int:
        return len(self.entries)

    @property
    def dates(self) -> List[date]:
        return [entry_date for entry_date, _ in self.entries]

    @property
    def amounts(self) -> List[Decimal]:
        return [amount for _, amount in self.entries]

    def add(self, entry_date: date, amount: Decimal) -> None:
        self.entries.append((entry_date, abs(amount)))

    def sort_entries(self) -> None:
        # list.sort is stable, so same-day charges keep their ledger order
        self.entries.sort(key=lambda entry: entry[0])


class RecurringCandidate(BaseModel):
    """
    A merchant series that passed every recurrence check.

    Monetary fields are quantized to cents; ``monthly_spend`` is keyed by
    ``YYYY-MM`` in chronological order.
    """
    merchant: str
    account: str
    category: str
    annualized_spend: Decimal = Field(alias="annualizedSpend")
    avg_amount: Decimal = Field(alias="avgAmount")
    frequency: RecurrenceFrequency
    occurrence_count: int = Field(alias="occurrenceCount", ge=1)
    confidence: int = Field(ge=0, le=100)
    monthly_spend: Dict[str, Decimal] = Field(default_factory=dict, alias="monthlySpend")
    average_interval_days: Optional[float] = Field(default=None, alias="averageIntervalDays", ge=0)
    first_occurrence: date = Field(alias="firstOccurrence")
    last_occurrence: date = Field(alias="lastOccurrence")

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        use_enum_values=False  # Preserve enum objects (not strings) for type safety
    )

    @field_validator('confidence')
    @classmethod
    def check_confidence_range(cls, v: int) -> int:
        if not (0 <= v <= 100):
            raise ValueError(CONFIDENCE_ERROR_MESSAGE)
        return v

    @field_validator('monthly_spend')
    @classmethod
    def check_month_keys(cls, v: Dict[str, Decimal]) -> Dict[str, Decimal]:
        for key in v:
            if len(key) != 7 or key[4] != '-' or not (key[:4] + key[5:]).isdigit():
                raise ValueError(MONTH_KEY_ERROR_MESSAGE)
        return v

    def to_dict(self) -> Dict[str, object]:
        """Serialize with camelCase keys and the frequency label as a string."""
        data = self.model_dump(by_alias=True)
        data['frequency'] = self.frequency.value
        return data


class DetectionReport(BaseModel):
    """Ordered candidates plus the two summary scalars consumed by the renderer."""
    candidates: List[RecurringCandidate] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)
    total_annualized: Decimal = Field(default=Decimal("0"), alias="totalAnnualized")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def from_candidates(cls, candidates: List[RecurringCandidate]) -> "DetectionReport":
        total = sum((c.annualized_spend for c in candidates), Decimal("0"))
        return cls(candidates=candidates, count=len(candidates), totalAnnualized=total)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def to_dict(self) -> Dict[str, object]:
        return {
            'count': self.count,
            'totalAnnualized': self.total_annualized,
            'candidates': [candidate.to_dict() for candidate in self.candidates],
        }

    def find(self, merchant: str) -> Optional[RecurringCandidate]:
        """
        Look up one merchant's row by its displayed (original) name.

        Convenience for report consumers, such as a renderer highlighting a
        merchant the user picked; the pipeline itself never calls it.
        """
        for candidate in self.candidates:
            if candidate.merchant == merchant:
                return candidate
        return None
