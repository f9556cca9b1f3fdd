"""
Unit tests for detection configuration and the transaction filter.
"""

import logging
import pytest
from datetime import date
from decimal import Decimal

from services.recurring_charges.config import (
    DEFAULT_CONFIG,
    DetectionConfig,
    FrequencyThresholds,
)
from services.recurring_charges.filters import analysis_cutoff, filter_transactions
from models.recurring_charge import RecurrenceFrequency
from tests.fixtures.recurring_charge_fixtures import RUN_DATE, create_transaction


class TestDetectionConfig:
    """Tests for DetectionConfig."""

    def test_defaults(self):
        config = DetectionConfig()
        assert config.amount_tolerance == Decimal("0.05")
        assert config.min_occurrences == 3
        assert config.months_to_analyze == 12
        assert config.min_amount == Decimal("5")
        assert config == DEFAULT_CONFIG

    @pytest.mark.parametrize("values", [None, {}])
    def test_from_empty_mapping(self, values):
        assert DetectionConfig.from_mapping(values) == DEFAULT_CONFIG

    def test_from_camel_case_strings(self):
        config = DetectionConfig.from_mapping({
            "amountTolerance": "0.1",
            "minOccurrences": "4",
            "monthsToAnalyze": "6",
            "minAmount": "2.50",
        })
        assert config.amount_tolerance == Decimal("0.1")
        assert config.min_occurrences == 4
        assert config.months_to_analyze == 6
        assert config.min_amount == Decimal("2.50")

    def test_from_snake_case_numbers(self):
        config = DetectionConfig.from_mapping({"min_occurrences": 2, "months_to_analyze": 24.0})
        assert config.min_occurrences == 2
        assert config.months_to_analyze == 24

    def test_camel_case_wins_over_snake_case(self):
        config = DetectionConfig.from_mapping({"minOccurrences": 5, "min_occurrences": 2})
        assert config.min_occurrences == 5

    @pytest.mark.parametrize("key,value,attribute", [
        ("amountTolerance", "abc", "amount_tolerance"),
        ("amountTolerance", -0.01, "amount_tolerance"),
        ("minOccurrences", 0, "min_occurrences"),
        ("minOccurrences", "2.5", "min_occurrences"),
        ("minOccurrences", True, "min_occurrences"),
        ("monthsToAnalyze", "", "months_to_analyze"),
        ("minAmount", "NaN", "min_amount"),
        ("minAmount", "-1", "min_amount"),
    ])
    def test_invalid_value_falls_back_to_default(self, key, value, attribute, caplog):
        with caplog.at_level(logging.WARNING):
            config = DetectionConfig.from_mapping({key: value})

        assert getattr(config, attribute) == getattr(DEFAULT_CONFIG, attribute)
        assert f"Invalid {key}" in caplog.text

    def test_invalid_value_does_not_affect_other_options(self):
        config = DetectionConfig.from_mapping({"minOccurrences": "lots", "minAmount": "10"})
        assert config.min_occurrences == 3
        assert config.min_amount == Decimal("10")

    def test_zero_tolerance_and_amount_are_valid(self):
        config = DetectionConfig.from_mapping({"amountTolerance": 0, "minAmount": 0})
        assert config.amount_tolerance == 0
        assert config.min_amount == 0

    def test_unknown_keys_ignored(self):
        assert DetectionConfig.from_mapping({"theme": "dark"}) == DEFAULT_CONFIG

    def test_to_dict_round_trips(self):
        config = DetectionConfig(min_occurrences=4, min_amount=Decimal("1.00"))
        assert config.to_dict() == {
            "amountTolerance": Decimal("0.05"),
            "minOccurrences": 4,
            "monthsToAnalyze": 12,
            "minAmount": Decimal("1.00"),
        }
        assert DetectionConfig.from_mapping(config.to_dict()) == config

    def test_frequency_bins_in_cadence_order(self):
        bins = FrequencyThresholds().to_bins()
        assert [upper for upper, _ in bins] == [10, 20, 35, 100, 200]
        assert bins[0][1] == RecurrenceFrequency.WEEKLY
        assert bins[-1][1] == RecurrenceFrequency.SEMI_ANNUAL


class TestFilterTransactions:
    """Tests for the pre-grouping filter."""

    def test_cutoff_is_inclusive(self):
        assert analysis_cutoff(RUN_DATE) == date(2023, 12, 31)
        transactions = [
            create_transaction(date(2023, 12, 30), "GYM", Decimal("40")),
            create_transaction(date(2023, 12, 31), "GYM", Decimal("40")),
        ]

        kept = filter_transactions(transactions, run_date=RUN_DATE)

        assert [t.date for t in kept] == [date(2023, 12, 31)]

    def test_pending_dropped(self):
        transactions = [
            create_transaction(date(2024, 12, 1), "NETFLIX", Decimal("15.49"), pending=True),
            create_transaction(date(2024, 11, 1), "NETFLIX", Decimal("15.49")),
        ]

        kept = filter_transactions(transactions, run_date=RUN_DATE)

        assert len(kept) == 1
        assert not kept[0].pending

    def test_min_amount_uses_absolute_value(self):
        transactions = [
            create_transaction(date(2024, 6, 1), "A", Decimal("4.99")),
            create_transaction(date(2024, 6, 1), "B", Decimal("5.00")),
            create_transaction(date(2024, 6, 1), "C", Decimal("-5.00")),
            create_transaction(date(2024, 6, 1), "D", Decimal("-4.99")),
        ]

        kept = filter_transactions(transactions, run_date=RUN_DATE)

        assert [t.merchant_raw for t in kept] == ["B", "C"]

    def test_order_preserved(self):
        transactions = [
            create_transaction(date(2024, 9, 1), "Z", Decimal("10")),
            create_transaction(date(2024, 1, 1), "A", Decimal("10")),
            create_transaction(date(2024, 5, 1), "M", Decimal("10")),
        ]

        kept = filter_transactions(transactions, run_date=RUN_DATE)

        assert [t.merchant_raw for t in kept] == ["Z", "A", "M"]

    def test_custom_window(self):
        config = DetectionConfig(months_to_analyze=1)
        transactions = [
            create_transaction(date(2024, 11, 30), "X", Decimal("10")),
            create_transaction(date(2024, 3, 31), "Y", Decimal("10")),
        ]

        kept = filter_transactions(transactions, config, run_date=date(2024, 12, 31))

        assert [t.merchant_raw for t in kept] == ["X"]
