"""
Pattern analyzers for recurring charge detection.

This package provides the specialized stages that turn filtered transactions
into scored, annualized recurring series.
"""

from services.recurring_charges.analyzers.merchant import MerchantGrouper, normalize_merchant
from services.recurring_charges.analyzers.amount import AmountAnalyzer
from services.recurring_charges.analyzers.frequency import FrequencyAnalyzer
from services.recurring_charges.analyzers.pattern import PatternAnalyzer, PatternAnalysis
from services.recurring_charges.analyzers.confidence import ConfidenceScoreCalculator
from services.recurring_charges.analyzers.annualizer import Annualizer

__all__ = [
    'MerchantGrouper',
    'normalize_merchant',
    'AmountAnalyzer',
    'FrequencyAnalyzer',
    'PatternAnalyzer',
    'PatternAnalysis',
    'ConfidenceScoreCalculator',
    'Annualizer',
]
