"""
Models package for the recurring charge detector.
"""

from .transaction import TransactionRecord

from .recurring_charge import (
    RecurrenceFrequency,
    MerchantGroup,
    RecurringCandidate,
    DetectionReport,
)

__all__ = [
    'TransactionRecord',
    'RecurrenceFrequency',
    'MerchantGroup',
    'RecurringCandidate',
    'DetectionReport',
]
