"""
Type Inferrer - Semantic Type Detection for Loosely-Typed Columns.

This module classifies a column of raw spreadsheet/CSV values into one of
four semantic types: boolean, date, number or string.

Architecture:
    TypeInferrer applies an ordered list of checks, first match wins:
    1. Boolean - every non-missing value is a native boolean or boolean token
    2. Date    - enough of the leading sample parses as a date
    3. Number  - enough of the leading sample parses as a finite number
    4. String  - fallback, always succeeds

Design Decisions:
    - Boolean is checked against the full column (exact answer, cheap) and
      before date/number because "1"/"0" would otherwise count as numeric
    - Date and number checks only inspect a leading sample (default 200)
      to bound cost on large tables
    - The match threshold is min(cap, ceil(fraction * column_length)): small
      columns need proportionally few matches, while one or two matches in a
      huge column never trigger a classification
    - A column without any non-missing value falls through to string

Usage:
    inferrer = TypeInferrer()
    semantic_type = inferrer.classify(["yes", "no", "YES"])  # SemanticType.BOOLEAN
"""

import logging
import math
from typing import Any, Callable, Optional, Sequence

from sheet_insights.core.config import ProfilerConfig
from sheet_insights.profiler.profile_result import SemanticType
from sheet_insights.profiler.value_coercer import (
    is_missing,
    is_boolean_like,
    parse_date,
    parse_number,
)

logger = logging.getLogger(__name__)


def match_threshold(total: int, fraction: float, cap: int) -> int:
    """Number of matches a sample must EXCEED to qualify a column."""
    return min(cap, math.ceil(fraction * total))


class TypeInferrer:
    """
    Bounded-sample semantic type classification.

    Attributes:
        config: Thresholds and sample sizes (defaults from core.constants)

    Example:
        >>> inferrer = TypeInferrer()
        >>> inferrer.classify(["2024-01-15", "2024-02-01", None])
        <SemanticType.DATE: 'date'>
        >>> inferrer.classify(["$1,200", "15%", "3"])
        <SemanticType.NUMBER: 'number'>
        >>> inferrer.classify([None, ""])
        <SemanticType.STRING: 'string'>
    """

    def __init__(self, config: Optional[ProfilerConfig] = None):
        self.config = config or ProfilerConfig()

    def classify(self, values: Sequence[Any]) -> SemanticType:
        """
        Infer the semantic type of a column.

        Args:
            values: Raw column values (any mix of None, bool, numbers, strings, dates)

        Returns:
            The inferred SemanticType
        """
        values = list(values)

        if self.is_boolean_column(values):
            return SemanticType.BOOLEAN
        if self.is_date_column(values):
            return SemanticType.DATE
        if self.is_number_column(values):
            return SemanticType.NUMBER
        return SemanticType.STRING

    def is_boolean_column(self, values: Sequence[Any]) -> bool:
        """Every non-missing value is boolean-like, and there is at least one."""
        present = [value for value in values if not is_missing(value)]
        return bool(present) and all(is_boolean_like(value) for value in present)

    def is_date_column(self, values: Sequence[Any]) -> bool:
        cfg = self.config
        matches = self._count_matches(values, cfg.date_sample_size, lambda v: parse_date(v) is not None)
        threshold = match_threshold(len(values), cfg.date_match_fraction, cfg.date_min_matches)
        logger.debug(f"Date candidates: {matches} (threshold > {threshold})")
        return matches > threshold

    def is_number_column(self, values: Sequence[Any]) -> bool:
        cfg = self.config
        matches = self._count_matches(values, cfg.number_sample_size, lambda v: parse_number(v) is not None)
        threshold = match_threshold(len(values), cfg.number_match_fraction, cfg.number_min_matches)
        logger.debug(f"Numeric candidates: {matches} (threshold > {threshold})")
        return matches > threshold

    @staticmethod
    def _count_matches(values: Sequence[Any], sample_size: int, predicate: Callable[[Any], bool]) -> int:
        return sum(1 for value in values[:sample_size] if not is_missing(value) and predicate(value))
