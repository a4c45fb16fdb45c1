"""
Visual Recommender - Rule-Based Chart Suggestions from a Table Profile.

Evaluates a fixed, ordered rule table against the column types of a profile.
Every rule that applies contributes one recommendation; the list keeps rule
priority and is capped at MAX_RECOMMENDATIONS.

Rules (first declared column of each role is used):
    1. TimeSeries - a date column and a number column
    2. Bar        - a categorical (string/boolean) column and a number column
    3. Histogram  - a number column
    4. Scatter    - two number columns

The recommender only reads the profile, never the table itself. A profile
without a qualifying column combination yields an empty list.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from sheet_insights.core.constants import MAX_RECOMMENDATIONS
from sheet_insights.core.exceptions import ConfigError
from sheet_insights.profiler.chart_models import (
    BarRecommendation,
    ChartKind,
    HistogramRecommendation,
    ScatterRecommendation,
    TimeSeriesRecommendation,
    VisualRecommendation,
)
from sheet_insights.profiler.profile_result import SemanticType, TableProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnRoles:
    """Profile columns grouped by the role they can play in a chart."""
    dates: List[str]
    numbers: List[str]
    categories: List[str]

    @classmethod
    def from_profile(cls, profile: TableProfile) -> "ColumnRoles":
        return cls(
            dates=profile.columns_of_type(SemanticType.DATE),
            numbers=profile.columns_of_type(SemanticType.NUMBER),
            categories=profile.columns_of_type(SemanticType.STRING, SemanticType.BOOLEAN),
        )


Rule = Callable[[ColumnRoles], Optional[VisualRecommendation]]


def _time_series_rule(roles: ColumnRoles) -> Optional[VisualRecommendation]:
    if roles.dates and roles.numbers:
        return TimeSeriesRecommendation(date_column=roles.dates[0], value_column=roles.numbers[0])
    return None


def _bar_rule(roles: ColumnRoles) -> Optional[VisualRecommendation]:
    if roles.categories and roles.numbers:
        return BarRecommendation(category_column=roles.categories[0], value_column=roles.numbers[0])
    return None


def _histogram_rule(roles: ColumnRoles) -> Optional[VisualRecommendation]:
    if roles.numbers:
        return HistogramRecommendation(value_column=roles.numbers[0])
    return None


def _scatter_rule(roles: ColumnRoles) -> Optional[VisualRecommendation]:
    if len(roles.numbers) >= 2:
        return ScatterRecommendation(x_column=roles.numbers[0], y_column=roles.numbers[1])
    return None


# Priority order. Every ChartKind must have exactly one rule.
RULES: Tuple[Tuple[ChartKind, Rule], ...] = (
    (ChartKind.TIME_SERIES, _time_series_rule),
    (ChartKind.BAR, _bar_rule),
    (ChartKind.HISTOGRAM, _histogram_rule),
    (ChartKind.SCATTER, _scatter_rule),
)

_rule_kinds = [kind for kind, _ in RULES]
if sorted(_rule_kinds, key=lambda k: k.value) != sorted(ChartKind, key=lambda k: k.value):
    raise RuntimeError(f"Chart rule table out of sync with ChartKind: {_rule_kinds}")


def _checked_cap(value: int, name: str) -> int:
    """Validate a recommendation cap; values above MAX_RECOMMENDATIONS are clamped."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}", field=name)
    return min(value, MAX_RECOMMENDATIONS)


class VisualRecommender:
    """
    Selects chart recommendations for a profiled table.

    Attributes:
        max_recommendations: Cap on the list length (never above MAX_RECOMMENDATIONS)

    Example:
        >>> recommender = VisualRecommender()
        >>> [rec.kind for rec in recommender.recommend(profile)]
        [<ChartKind.TIME_SERIES: 'timeseries'>, <ChartKind.HISTOGRAM: 'histogram'>]
    """

    def __init__(self, max_recommendations: int = MAX_RECOMMENDATIONS):
        self.max_recommendations = _checked_cap(max_recommendations, "max_recommendations")

    def recommend(self, profile: TableProfile, limit: Optional[int] = None) -> List[VisualRecommendation]:
        """
        Recommend charts for a profile.

        Args:
            profile: Aggregate table profile
            limit: Per-call cap (defaults to max_recommendations, never above MAX_RECOMMENDATIONS)

        Returns:
            Recommendations in rule priority order, at most the cap

        Raises:
            ConfigError: If limit is not a positive integer
        """
        cap = self.max_recommendations if limit is None else _checked_cap(limit, "limit")
        roles = ColumnRoles.from_profile(profile)
        recommendations: List[VisualRecommendation] = []

        for kind, rule in RULES:
            recommendation = rule(roles)
            if recommendation is not None:
                recommendations.append(recommendation)
                logger.debug(f"Rule {kind.value} applied: {recommendation.title}")

        if len(recommendations) > cap:
            logger.debug(f"Truncating {len(recommendations)} recommendations to {cap}")

        return recommendations[:cap]
