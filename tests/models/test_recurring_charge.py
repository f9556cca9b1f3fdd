"""
Unit tests for recurring charge models.

Tests cover:
- RecurrenceFrequency enum and its yearly multipliers
- MerchantGroup ordering
- RecurringCandidate validation and serialization
- DetectionReport summary scalars
"""

import pytest
from decimal import Decimal
from datetime import date
from pydantic import ValidationError

from models.recurring_charge import (
    RecurrenceFrequency,
    MerchantGroup,
    RecurringCandidate,
    DetectionReport,
)


def _candidate(**overrides) -> RecurringCandidate:
    data = dict(
        merchant="NETFLIX.COM 123456",
        account="Visa",
        category="Entertainment",
        annualizedSpend=Decimal("185.88"),
        avgAmount=Decimal("15.49"),
        frequency=RecurrenceFrequency.MONTHLY,
        occurrenceCount=3,
        confidence=100,
        monthlySpend={"2024-10": Decimal("15.49"), "2024-11": Decimal("30.98")},
        averageIntervalDays=30.0,
        firstOccurrence=date(2024, 10, 1),
        lastOccurrence=date(2024, 11, 30),
    )
    data.update(overrides)
    return RecurringCandidate(**data)


class TestRecurrenceFrequency:
    """Test cases for RecurrenceFrequency enum."""

    def test_enum_values(self):
        """Labels match what the report shows."""
        assert RecurrenceFrequency.WEEKLY.value == "Weekly"
        assert RecurrenceFrequency.BI_WEEKLY.value == "Bi-Weekly"
        assert RecurrenceFrequency.MONTHLY.value == "Monthly"
        assert RecurrenceFrequency.QUARTERLY.value == "Quarterly"
        assert RecurrenceFrequency.SEMI_ANNUAL.value == "Semi-Annual"
        assert RecurrenceFrequency.ANNUAL.value == "Annual"

    @pytest.mark.parametrize("frequency,expected", [
        (RecurrenceFrequency.WEEKLY, 52),
        (RecurrenceFrequency.BI_WEEKLY, 26),
        (RecurrenceFrequency.MONTHLY, 12),
        (RecurrenceFrequency.QUARTERLY, 4),
        (RecurrenceFrequency.SEMI_ANNUAL, 2),
        (RecurrenceFrequency.ANNUAL, 1),
    ])
    def test_occurrences_per_year(self, frequency, expected):
        assert frequency.occurrences_per_year == expected

    def test_enum_from_string(self):
        freq = RecurrenceFrequency("Bi-Weekly")
        assert freq == RecurrenceFrequency.BI_WEEKLY
        assert isinstance(freq, RecurrenceFrequency)


class TestMerchantGroup:
    """Test cases for MerchantGroup."""

    def test_add_stores_absolute_amount(self):
        group = MerchantGroup("NETFLIXCOM", "NETFLIX.COM", "Entertainment", "Visa")
        group.add(date(2024, 1, 1), Decimal("-15.49"))
        assert group.amounts == [Decimal("15.49")]
        assert group.occurrence_count == 1

    def test_sort_entries_is_stable(self):
        group = MerchantGroup("GYM", "GYM", "Fitness", "Checking")
        group.add(date(2024, 3, 1), Decimal("30"))
        group.add(date(2024, 1, 1), Decimal("10"))
        group.add(date(2024, 3, 1), Decimal("31"))
        group.add(date(2024, 2, 1), Decimal("20"))

        group.sort_entries()

        assert group.dates == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1), date(2024, 3, 1)]
        # Same-day charges keep their insertion order
        assert group.amounts == [Decimal("10"), Decimal("20"), Decimal("30"), Decimal("31")]


class TestRecurringCandidate:
    """Test cases for RecurringCandidate model."""

    def test_create_with_aliases(self):
        candidate = _candidate()
        assert candidate.annualized_spend == Decimal("185.88")
        assert candidate.frequency is RecurrenceFrequency.MONTHLY
        assert isinstance(candidate.frequency, RecurrenceFrequency)

    def test_create_with_field_names(self):
        candidate = RecurringCandidate(
            merchant="GYM",
            account="Checking",
            category="Fitness",
            annualized_spend=Decimal("1040.00"),
            avg_amount=Decimal("20.00"),
            frequency=RecurrenceFrequency.WEEKLY,
            occurrence_count=6,
            confidence=100,
            average_interval_days=7.0,
            first_occurrence=date(2024, 11, 4),
            last_occurrence=date(2024, 12, 9),
        )
        assert candidate.monthly_spend == {}

    @pytest.mark.parametrize("confidence", [-1, 101])
    def test_confidence_out_of_range(self, confidence):
        with pytest.raises(ValidationError):
            _candidate(confidence=confidence)

    def test_bad_month_key(self):
        with pytest.raises(ValidationError):
            _candidate(monthlySpend={"2024-1": Decimal("1.00")})

    def test_frozen(self):
        candidate = _candidate()
        with pytest.raises(ValidationError):
            candidate.confidence = 10

    def test_to_dict(self):
        data = _candidate().to_dict()
        assert data["frequency"] == "Monthly"
        assert data["annualizedSpend"] == Decimal("185.88")
        assert data["occurrenceCount"] == 3
        assert list(data["monthlySpend"]) == ["2024-10", "2024-11"]
        assert data["firstOccurrence"] == date(2024, 10, 1)


class TestDetectionReport:
    """Test cases for DetectionReport model."""

    def test_from_candidates(self):
        report = DetectionReport.from_candidates([
            _candidate(),
            _candidate(merchant="SPOTIFY", annualizedSpend=Decimal("131.88")),
        ])
        assert report.count == 2
        assert report.total_annualized == Decimal("317.76")
        assert not report.is_empty
        assert report.find("SPOTIFY").annualized_spend == Decimal("131.88")
        assert report.find("HULU") is None

    def test_empty(self):
        report = DetectionReport.from_candidates([])
        assert report.is_empty
        assert report.to_dict() == {"count": 0, "totalAnnualized": 0, "candidates": []}
