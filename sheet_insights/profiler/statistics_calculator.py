"""
Statistics Calculator - Column Summaries for Data Profiling.

Computes the summary of a coerced column: row count, missing count and the
type-specific statistics.

Architecture:
    StatisticsCalculator.summarize() filters missing values to get the
    clean set, then dispatches on the semantic type:
    1. Number  - min, max, mean
    2. String / Boolean - top three values by frequency
    3. Date    - chronological min and max

Design Decisions:
    - Statistics that need data are omitted (None) for columns without any
      non-missing value, never reported as 0 or NaN
    - The mean uses math.fsum for exact accumulation, so large magnitudes
      mixed with small ones do not lose precision. Sums that overflow a
      float are recomputed with fractions.Fraction; a mean outside the float
      range is omitted (None) rather than reported as inf
    - Frequency ties keep first-seen order, making the top list deterministic

Usage:
    calculator = StatisticsCalculator()
    summary = calculator.summarize([1, 2000.0, 30.0, None], SemanticType.NUMBER)
"""

import logging
import math
from collections import Counter
from fractions import Fraction
from typing import Any, List, Optional, Sequence, Tuple

import pandas as pd

from sheet_insights.core.constants import TOP_VALUES_COUNT
from sheet_insights.profiler.profile_result import ColumnSummary, SemanticType
from sheet_insights.profiler.value_coercer import to_iso_instant

logger = logging.getLogger(__name__)


class StatisticsCalculator:
    """
    Summary statistics for coerced columns.

    Attributes:
        top_count: Number of (value, frequency) pairs kept for categorical columns

    Example:
        >>> calculator = StatisticsCalculator()
        >>> summary = calculator.summarize(["a", "b", "a", None], SemanticType.STRING)
        >>> summary.top
        [('a', 2), ('b', 1)]
        >>> summary.missing
        1
    """

    def __init__(self, top_count: int = TOP_VALUES_COUNT):
        self.top_count = top_count

    def summarize(self, values: Sequence[Any], semantic_type: SemanticType) -> ColumnSummary:
        """
        Summarize a coerced column.

        Args:
            values: Coerced values (canonical typed value or None)
            semantic_type: Semantic type the values were coerced to

        Returns:
            ColumnSummary with count, missing and type-specific statistics
        """
        clean = [value for value in values if value is not None]
        summary = ColumnSummary(
            type=semantic_type,
            count=len(values),
            missing=len(values) - len(clean),
        )

        if semantic_type is SemanticType.NUMBER:
            self._calculate_numeric_stats(summary, clean)
        elif semantic_type is SemanticType.DATE:
            self._calculate_date_stats(summary, clean)
        else:
            summary.top = self.top_values(clean)

        return summary

    def _calculate_numeric_stats(self, summary: ColumnSummary, numbers: List[Any]) -> None:
        """Calculate min/max/mean in place."""
        if not numbers:
            return

        summary.min = min(numbers)
        summary.max = max(numbers)
        summary.mean = self.mean(numbers)

    @staticmethod
    def mean(numbers: Sequence[Any]) -> Optional[float]:
        """Exact mean of finite numbers, None if it does not fit in a float."""
        try:
            return math.fsum(numbers) / len(numbers)
        except OverflowError:
            pass

        exact = sum(map(Fraction, numbers), Fraction(0)) / len(numbers)
        try:
            return float(exact)
        except OverflowError:
            logger.debug("Mean exceeds the float range, omitted")
            return None

    def _calculate_date_stats(self, summary: ColumnSummary, instants: List[str]) -> None:
        """Calculate chronological min/max in place."""
        if not instants:
            return

        timestamps = [pd.Timestamp(instant) for instant in instants]
        summary.min = to_iso_instant(min(timestamps))
        summary.max = to_iso_instant(max(timestamps))

    def top_values(self, values: Sequence[Any]) -> List[Tuple[Any, int]]:
        """
        Most frequent values, descending by frequency.

        Counter keeps insertion order and sorted() is stable, so ties stay in
        first-seen order.
        """
        counts = Counter(values)
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return ranked[:self.top_count]
