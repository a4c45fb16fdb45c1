"""
Sheet Insights - type inference, column profiling and chart recommendations
for loosely-typed tables such as spreadsheets and CSV files.

Usage:
    from sheet_insights import profile_table, recommend_visuals

    result = profile_table(rows)
    charts = recommend_visuals(result.profile)
"""

from typing import List, Optional

__version__ = "0.1.0"

from sheet_insights.core.config import ProfilerConfig
from sheet_insights.profiler.chart_models import ChartKind, VisualRecommendation
from sheet_insights.profiler.engine import DataProfiler, Table
from sheet_insights.profiler.profile_result import (
    ColumnSummary,
    ProfileResult,
    SemanticType,
    TableProfile,
)
from sheet_insights.profiler.visual_recommender import VisualRecommender


def profile_table(
    table: Table,
    in_place: bool = False,
    config: Optional[ProfilerConfig] = None
) -> ProfileResult:
    """Profile a table (rows of mappings or a DataFrame) with default or given thresholds."""
    return DataProfiler(config).profile(table, in_place=in_place)


def recommend_visuals(profile: TableProfile, config: Optional[ProfilerConfig] = None) -> List[VisualRecommendation]:
    """Recommend charts for a profile."""
    config = config or ProfilerConfig()
    return VisualRecommender(config.max_recommendations).recommend(profile)


__all__ = [
    "__version__",
    "ChartKind",
    "ColumnSummary",
    "DataProfiler",
    "ProfileResult",
    "ProfilerConfig",
    "SemanticType",
    "TableProfile",
    "VisualRecommendation",
    "VisualRecommender",
    "profile_table",
    "recommend_visuals",
]
