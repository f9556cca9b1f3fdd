"""
Recurring Charge Detection Services.

This package provides rule-based recurring charge and subscription detection
over a ledger of bank transactions.

Public API:
    - RecurringChargeDetectionService: Filter, group, analyze, score and rank
    - detect_recurring_charges: One-shot convenience wrapper
    - DetectionConfig: Configuration for detection parameters
    - DEFAULT_CONFIG: Default configuration instance
"""

from services.recurring_charges.detection_service import (
    RecurringChargeDetectionService,
    detect_recurring_charges,
    rank_candidates,
)
from services.recurring_charges.filters import filter_transactions
from services.recurring_charges.config import (
    DetectionConfig,
    DEFAULT_CONFIG,
    ConfidenceWeights,
    FrequencyThresholds,
)
from services.recurring_charges.analyzers import (
    MerchantGrouper,
    normalize_merchant,
    AmountAnalyzer,
    FrequencyAnalyzer,
    PatternAnalyzer,
    ConfidenceScoreCalculator,
    Annualizer,
)

__all__ = [
    'RecurringChargeDetectionService',
    'detect_recurring_charges',
    'rank_candidates',
    'filter_transactions',
    'DetectionConfig',
    'DEFAULT_CONFIG',
    'ConfidenceWeights',
    'FrequencyThresholds',
    'MerchantGrouper',
    'normalize_merchant',
    'AmountAnalyzer',
    'FrequencyAnalyzer',
    'PatternAnalyzer',
    'ConfidenceScoreCalculator',
    'Annualizer',
]
