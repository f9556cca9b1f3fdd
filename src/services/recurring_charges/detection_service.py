"""
Recurring Charge Detection Service.

This module orchestrates rule-based recurring charge detection over a fully
materialized set of ledger transactions.

## Detection Pipeline

```mermaid
graph TD
    A[Transactions + DetectionConfig] --> B[Transaction Filter]
    B --> C[Merchant Normalizer + Grouping]
    C --> D[PatternAnalyzer]
    D --> E{Enough charges, within tolerance?}
    E -->|No| F[Discard group]
    E -->|Yes| G[ConfidenceScoreCalculator]
    G --> H[Annualizer]
    H --> I[Rank by confidence, then average amount]
    I --> J[DetectionReport]
```

Every stage is a pure function of its inputs; the service holds no state
between runs.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from models.transaction import TransactionRecord
from models.recurring_charge import DetectionReport, RecurringCandidate
from services.recurring_charges.analyzers import (
    Annualizer,
    AmountAnalyzer,
    ConfidenceScoreCalculator,
    FrequencyAnalyzer,
    MerchantGrouper,
    PatternAnalysis,
    PatternAnalyzer,
)
from services.recurring_charges.config import DetectionConfig, DEFAULT_CONFIG
from services.recurring_charges.filters import filter_transactions
from utils.detection_metrics import DetectionPerformanceTracker

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def rank_candidates(candidates: List[RecurringCandidate]) -> List[RecurringCandidate]:
    """
    Order candidates by confidence, then average amount, both descending.

    The amount key is the reported, cent-rounded ``avg_amount``. The sort is
    stable: candidates equal on both keys keep their input order.
    """
    return sorted(candidates, key=lambda c: (-c.confidence, -c.avg_amount))


class RecurringChargeDetectionService:
    """
    Orchestrates recurring charge detection using specialized analyzers.

    Filters the ledger, groups transactions by normalized merchant, keeps the
    groups that look like a recurring series, then scores, annualizes and
    ranks them.
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        """
        Initialize the detection service.

        Args:
            config: Optional detection configuration. If None, uses DEFAULT_CONFIG.
        """
        self.config = config or DEFAULT_CONFIG

        self.grouper = MerchantGrouper()

        self.frequency_analyzer = FrequencyAnalyzer(
            frequency_bins=self.config.frequency_thresholds.to_bins()
        )

        self.pattern_analyzer = PatternAnalyzer(
            amount_analyzer=AmountAnalyzer(tolerance=self.config.amount_tolerance),
            frequency_analyzer=self.frequency_analyzer,
            min_occurrences=self.config.min_occurrences
        )

        self.confidence_calculator = ConfidenceScoreCalculator(
            weights=self.config.confidence_weights
        )

        self.annualizer = Annualizer()

    def detect_recurring_charges(
        self,
        transactions: Iterable[TransactionRecord],
        run_date: Optional[date] = None
    ) -> DetectionReport:
        """
        Detect recurring charges in transaction history.

        Args:
            transactions: Ledger records in store order
            run_date: Date the analysis window ends on (default: today)

        Returns:
            DetectionReport with ranked candidates, their count and total
            annualized spend; empty when nothing recurring was found
        """
        transactions = list(transactions)

        with DetectionPerformanceTracker("recurring_charge_detection") as tracker:
            tracker.set_transaction_count(len(transactions))

            # Stage 1: Filtering
            with tracker.stage("filter"):
                filtered = filter_transactions(transactions, self.config, run_date)
                tracker.set_filtered_count(len(filtered))

            # Stage 2: Normalization and grouping
            with tracker.stage("grouping"):
                groups = self.grouper.group(filtered)
                tracker.set_groups_identified(len(groups))

            # Stage 3: Pattern analysis, scoring and annualization
            with tracker.stage("pattern_analysis"):
                candidates = []
                for group in groups:
                    analysis = self.pattern_analyzer.analyze(group)
                    if analysis is not None:
                        candidates.append(self._build_candidate(analysis))

            # Stage 4: Ranking
            with tracker.stage("ranking"):
                report = DetectionReport.from_candidates(rank_candidates(candidates))
                tracker.set_candidates_detected(report.count)

        if report.is_empty:
            logger.info(
                f"No recurring charges detected in {len(filtered)} of "
                f"{len(transactions)} transactions"
            )
        else:
            logger.info(
                f"Detected {report.count} recurring charges across {len(groups)} merchants, "
                f"{report.total_annualized} a year"
            )

        return report

    def _build_candidate(self, analysis: PatternAnalysis) -> RecurringCandidate:
        """
        Score and annualize an accepted pattern.

        Args:
            analysis: Statistics of a group that passed the recurrence checks

        Returns:
            RecurringCandidate with monetary values rounded to cents
        """
        group = analysis.group

        confidence = self.confidence_calculator.calculate(
            analysis.occurrence_count, analysis.variance_percent, analysis.avg_days
        )

        monthly_spend = self.annualizer.monthly_breakdown(group)
        annualized = self.annualizer.annualize(
            analysis.frequency, analysis.avg_amount, monthly_spend
        )

        cadence = "single charge" if analysis.avg_days is None else f"every {analysis.avg_days:.1f} days"
        logger.debug(
            f"{group.normalized_key}: {analysis.frequency.value}, {cadence}, confidence {confidence}"
        )

        return RecurringCandidate(
            merchant=group.original_name,
            account=group.account,
            category=group.category,
            annualizedSpend=to_cents(annualized),
            avgAmount=to_cents(analysis.avg_amount),
            frequency=analysis.frequency,
            occurrenceCount=analysis.occurrence_count,
            confidence=confidence,
            monthlySpend={month: to_cents(total) for month, total in monthly_spend.items()},
            averageIntervalDays=analysis.avg_days,
            firstOccurrence=group.dates[0],
            lastOccurrence=group.dates[-1]
        )


def detect_recurring_charges(
    transactions: Iterable[TransactionRecord],
    config: Optional[DetectionConfig] = None,
    run_date: Optional[date] = None
) -> DetectionReport:
    """Run one detection pass with a throwaway service instance."""
    return RecurringChargeDetectionService(config).detect_recurring_charges(transactions, run_date)
