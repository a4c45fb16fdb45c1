"""
Unit tests for VisualRecommender.

Profiles are built directly from ColumnSummary objects so each rule can be
exercised in isolation.
"""

import pytest

from sheet_insights import recommend_visuals
from sheet_insights.core.config import ProfilerConfig
from sheet_insights.core.exceptions import ConfigError
from sheet_insights.profiler.chart_models import (
    ChartKind,
    Mark,
    Role,
    Aggregate,
    TimeSeriesRecommendation,
)
from sheet_insights.profiler.profile_result import ColumnSummary, SemanticType, TableProfile
from sheet_insights.profiler.visual_recommender import RULES, ColumnRoles, VisualRecommender


def make_profile(**column_types):
    """Build a profile whose columns have the given types, in keyword order."""
    columns = {name: ColumnSummary(type=semantic_type, count=10) for name, semantic_type in column_types.items()}
    return TableProfile(row_count=10, column_count=len(columns), columns=columns)


def kinds(recommendations):
    return [rec.kind for rec in recommendations]


class TestRules:
    """Each rule and its priority."""

    def test_date_and_number_gives_one_time_series(self):
        profile = make_profile(order_date=SemanticType.DATE, revenue=SemanticType.NUMBER)

        recommendations = VisualRecommender().recommend(profile)
        time_series = [rec for rec in recommendations if rec.kind is ChartKind.TIME_SERIES]

        assert len(time_series) == 1
        assert time_series[0].columns == ["order_date", "revenue"]
        assert ChartKind.BAR not in kinds(recommendations)
        assert ChartKind.SCATTER not in kinds(recommendations)
        assert kinds(recommendations) == [ChartKind.TIME_SERIES, ChartKind.HISTOGRAM]

    def test_two_numbers_gives_histogram_then_scatter(self):
        profile = make_profile(height=SemanticType.NUMBER, weight=SemanticType.NUMBER)

        recommendations = VisualRecommender().recommend(profile)

        assert kinds(recommendations) == [ChartKind.HISTOGRAM, ChartKind.SCATTER]
        assert recommendations[0].columns == ["height"]
        assert recommendations[1].columns == ["height", "weight"]
        assert recommendations[1].title == "weight vs height"

    def test_category_and_number_gives_bar(self):
        profile = make_profile(region=SemanticType.STRING, sales=SemanticType.NUMBER)

        recommendations = VisualRecommender().recommend(profile)

        assert kinds(recommendations) == [ChartKind.BAR, ChartKind.HISTOGRAM]
        assert recommendations[0].title == "sales by region"

    def test_boolean_counts_as_category(self):
        profile = make_profile(paid=SemanticType.BOOLEAN, amount=SemanticType.NUMBER)

        assert kinds(VisualRecommender().recommend(profile))[0] is ChartKind.BAR

    def test_all_rules_in_priority_order(self):
        profile = make_profile(
            region=SemanticType.STRING,
            units=SemanticType.NUMBER,
            day=SemanticType.DATE,
            price=SemanticType.NUMBER,
        )

        assert kinds(VisualRecommender().recommend(profile)) == [
            ChartKind.TIME_SERIES, ChartKind.BAR, ChartKind.HISTOGRAM, ChartKind.SCATTER
        ]

    def test_first_declared_column_wins(self):
        profile = make_profile(
            shipped=SemanticType.DATE,
            ordered=SemanticType.DATE,
            revenue=SemanticType.NUMBER,
        )

        recommendation = VisualRecommender().recommend(profile)[0]

        assert recommendation == TimeSeriesRecommendation(date_column="shipped", value_column="revenue")

    @pytest.mark.parametrize("column_types", [
        {},
        {"name": SemanticType.STRING},
        {"name": SemanticType.STRING, "day": SemanticType.DATE, "ok": SemanticType.BOOLEAN},
    ])
    def test_no_number_column_gives_nothing(self, column_types):
        assert VisualRecommender().recommend(make_profile(**column_types)) == []


class TestCap:
    """The list never exceeds the cap."""

    def test_never_more_than_six(self):
        column_types = {f"col{i}": semantic_type
                        for i, semantic_type in enumerate(list(SemanticType) * 5)}

        assert len(VisualRecommender().recommend(make_profile(**column_types))) <= 6

    def test_custom_cap_keeps_priority(self):
        profile = make_profile(day=SemanticType.DATE, a=SemanticType.NUMBER, b=SemanticType.NUMBER)

        recommendations = VisualRecommender(max_recommendations=2).recommend(profile)

        assert kinds(recommendations) == [ChartKind.TIME_SERIES, ChartKind.HISTOGRAM]

    def test_per_call_limit(self):
        profile = make_profile(a=SemanticType.NUMBER, b=SemanticType.NUMBER)

        assert kinds(VisualRecommender().recommend(profile, limit=1)) == [ChartKind.HISTOGRAM]
        assert len(VisualRecommender().recommend(profile, limit=99)) == 2

    @pytest.mark.parametrize("limit", [0, -1, 1.5, True])
    def test_invalid_per_call_limit(self, limit):
        profile = make_profile(a=SemanticType.NUMBER, b=SemanticType.NUMBER)

        with pytest.raises(ConfigError) as exc_info:
            VisualRecommender().recommend(profile, limit=limit)

        assert exc_info.value.field == "limit"

    def test_invalid_constructor_cap(self):
        with pytest.raises(ConfigError):
            VisualRecommender(max_recommendations=0)

    def test_cap_cannot_exceed_six(self):
        assert VisualRecommender(max_recommendations=50).max_recommendations == 6

    def test_public_helper_uses_config_cap(self):
        profile = make_profile(a=SemanticType.NUMBER, b=SemanticType.NUMBER)

        recommendations = recommend_visuals(profile, ProfilerConfig(max_recommendations=1))

        assert kinds(recommendations) == [ChartKind.HISTOGRAM]


class TestRuleTable:
    """Rule table structure."""

    def test_every_kind_has_one_rule(self):
        assert sorted(kind.value for kind, _ in RULES) == sorted(kind.value for kind in ChartKind)

    def test_column_roles(self):
        profile = make_profile(d=SemanticType.DATE, n=SemanticType.NUMBER,
                               s=SemanticType.STRING, b=SemanticType.BOOLEAN)

        roles = ColumnRoles.from_profile(profile)

        assert roles.dates == ["d"]
        assert roles.numbers == ["n"]
        assert roles.categories == ["s", "b"]


class TestChartSpecs:
    """Chart specifications and their Vega-Lite rendering."""

    def test_time_series_spec(self):
        spec = TimeSeriesRecommendation("order_date", "revenue").chart_spec

        assert spec.mark is Mark.LINE
        assert spec.x.field == "order_date"
        assert spec.x.role is Role.TEMPORAL
        assert spec.y.role is Role.QUANTITATIVE

    def test_time_series_vega_lite(self):
        vega = TimeSeriesRecommendation("order_date", "revenue").chart_spec.to_vega_lite()

        assert vega["$schema"].startswith("https://vega.github.io/schema/vega-lite/v5")
        assert vega["data"] == {"name": "table"}
        assert vega["mark"] == {"type": "line", "interpolate": "monotone"}
        assert vega["encoding"]["x"] == {"field": "order_date", "type": "temporal", "title": "order_date"}

    def test_bar_vega_lite(self):
        profile = make_profile(region=SemanticType.STRING, sales=SemanticType.NUMBER)
        bar = VisualRecommender().recommend(profile)[0]

        vega = bar.chart_spec.to_vega_lite()

        assert bar.chart_spec.y.aggregate is Aggregate.SUM
        assert vega["encoding"]["x"]["sort"] == "-y"
        assert vega["encoding"]["y"] == {
            "aggregate": "sum", "field": "sales", "type": "quantitative", "title": "Sum of sales"
        }

    def test_histogram_vega_lite(self):
        histogram = VisualRecommender().recommend(make_profile(amount=SemanticType.NUMBER))[0]

        vega = histogram.chart_spec.to_vega_lite(data_name="rows", height=300)

        assert vega["mark"] == "bar"
        assert vega["height"] == 300
        assert vega["data"] == {"name": "rows"}
        assert vega["encoding"]["x"] == {"bin": True, "field": "amount", "type": "quantitative"}
        assert vega["encoding"]["y"] == {"aggregate": "count", "type": "quantitative", "title": "Count"}

    def test_recommendation_to_dict(self):
        recommendation = TimeSeriesRecommendation("order_date", "revenue")

        data = recommendation.to_dict()

        assert data["kind"] == "timeseries"
        assert data["title"] == "revenue over time"
        assert data["rationale"] == "Auto: detected date (order_date) + metric (revenue)."
        assert data["columns"] == ["order_date", "revenue"]
        assert data["chart_spec"]["mark"] == "line"
        assert "vega_lite" in data
