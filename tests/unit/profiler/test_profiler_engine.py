"""
Unit tests for DataProfiler.

Tests end-to-end profiling of row sequences and DataFrames: column order,
coerced output, mutation policy and schema drift handling.
"""

import copy
import logging

import numpy as np
import pandas as pd
import pytest

from sheet_insights import profile_table
from sheet_insights.core.config import ProfilerConfig
from sheet_insights.core.exceptions import ProfilerError, SchemaConsistencyError
from sheet_insights.profiler.engine import DataProfiler, dataframe_to_rows
from sheet_insights.profiler.profile_result import SemanticType


@pytest.fixture
def sales_rows():
    """Small mixed-type sales table as it would come out of a spreadsheet."""
    return [
        {"order_date": "2024-01-05", "region": "North", "revenue": "$1,200", "paid": "yes"},
        {"order_date": "2024-01-12", "region": "South", "revenue": "950", "paid": "no"},
        {"order_date": "2024-02-03", "region": "North", "revenue": "1,500.50", "paid": "Y"},
        {"order_date": "", "region": None, "revenue": "n/a", "paid": None},
    ]


class TestProfileBasics:
    """Types, summaries and column order."""

    def test_mixed_number_column(self):
        rows = [{"amount": value} for value in [1, "2,000", "$30", None, "bad"]]

        result = DataProfiler().profile(rows)
        summary = result.profile.columns["amount"]

        assert summary.type == SemanticType.NUMBER
        assert summary.min == 1
        assert summary.max == 2000
        assert summary.mean == pytest.approx(677.67, abs=0.01)
        assert summary.missing == 2
        assert [row["amount"] for row in result.rows] == [1, 2000.0, 30.0, None, None]

    def test_sales_table_types(self, sales_rows):
        profile = DataProfiler().profile(sales_rows).profile

        assert profile.columns["order_date"].type == SemanticType.DATE
        assert profile.columns["region"].type == SemanticType.STRING
        assert profile.columns["revenue"].type == SemanticType.NUMBER
        assert profile.columns["paid"].type == SemanticType.BOOLEAN

    def test_column_order_follows_first_row(self, sales_rows):
        profile = DataProfiler().profile(sales_rows).profile

        assert list(profile.columns) == ["order_date", "region", "revenue", "paid"]

    def test_counts(self, sales_rows):
        profile = DataProfiler().profile(sales_rows).profile

        assert profile.row_count == 4
        assert profile.column_count == 4
        for summary in profile.columns.values():
            assert summary.count == profile.row_count
            assert 0 <= summary.missing <= summary.count

    def test_date_summary(self, sales_rows):
        summary = DataProfiler().profile(sales_rows).profile.columns["order_date"]

        assert summary.min == "2024-01-05T00:00:00.000Z"
        assert summary.max == "2024-02-03T00:00:00.000Z"
        assert summary.missing == 1

    def test_empty_table(self):
        result = DataProfiler().profile([])

        assert result.profile.row_count == 0
        assert result.profile.column_count == 0
        assert result.profile.columns == {}
        assert result.rows == []

    def test_missing_keys_read_as_none(self):
        rows = [{"a": "x", "b": "1"}, {"a": "y"}]

        result = DataProfiler().profile(rows)

        assert result.rows[1]["b"] is None
        assert result.profile.columns["b"].missing == 1


class TestLargeMagnitudes:
    """Columns near the float range profile without errors."""

    def test_overflowing_sum(self):
        rows = [{"v": "1e308"}, {"v": "1.5e308"}, {"v": "3"}]

        summary = DataProfiler().profile(rows).profile.columns["v"]

        assert summary.type == SemanticType.NUMBER
        assert summary.max == 1.5e308
        assert summary.mean == pytest.approx(2.5e308 / 3)


class TestCoercedOutput:
    """The coerced table returned alongside the profile."""

    def test_cells_are_canonical(self, sales_rows):
        rows = DataProfiler().profile(sales_rows).rows

        assert rows[0] == {
            "order_date": "2024-01-05T00:00:00.000Z",
            "region": "North",
            "revenue": 1200.0,
            "paid": True,
        }
        assert rows[3] == {"order_date": None, "region": None, "revenue": None, "paid": None}

    def test_type_homogeneous_columns(self, sales_rows):
        expected = {
            SemanticType.BOOLEAN: (bool,),
            SemanticType.DATE: (str,),
            SemanticType.NUMBER: (int, float),
            SemanticType.STRING: (str,),
        }
        result = DataProfiler().profile(sales_rows)

        for col, summary in result.profile.columns.items():
            for row in result.rows:
                value = row[col]
                assert value is None or isinstance(value, expected[summary.type])

    def test_profiling_coerced_rows_is_stable(self, sales_rows):
        """Profiling an already-coerced table yields the same profile and rows."""
        profiler = DataProfiler()
        first = profiler.profile(sales_rows)
        second = profiler.profile(first.rows)

        assert second.rows == first.rows
        assert second.profile.to_dict() == first.profile.to_dict()

    def test_deterministic(self, sales_rows):
        first = DataProfiler().profile(sales_rows)
        second = DataProfiler().profile(sales_rows)

        assert first.profile.to_dict() == second.profile.to_dict()
        assert first.rows == second.rows


class TestMutationPolicy:
    """Rows are only rewritten when in_place is requested."""

    def test_default_leaves_input_untouched(self, sales_rows):
        original = copy.deepcopy(sales_rows)

        DataProfiler().profile(sales_rows)

        assert sales_rows == original

    def test_in_place_rewrites_rows(self, sales_rows):
        first_row = sales_rows[0]

        result = DataProfiler().profile(sales_rows, in_place=True)

        assert first_row["revenue"] == 1200.0
        assert first_row["paid"] is True
        assert result.rows[0] is first_row

    def test_in_place_requires_mutable_rows(self):
        from types import MappingProxyType

        with pytest.raises(ProfilerError):
            DataProfiler().profile([MappingProxyType({"a": 1})], in_place=True)

    def test_in_place_rejected_for_dataframe(self):
        with pytest.raises(ProfilerError):
            DataProfiler().profile(pd.DataFrame({"a": [1, 2]}), in_place=True)

    def test_non_mapping_rows_rejected(self):
        with pytest.raises(ProfilerError, match="Row 1"):
            DataProfiler().profile([{"a": 1}, ["a", 1]])

    def test_public_helper(self, sales_rows):
        result = profile_table(sales_rows)

        assert result.profile.columns["revenue"].type == SemanticType.NUMBER


class TestSchemaDrift:
    """Columns that appear only after the first row."""

    ROWS = [
        {"name": "a", "score": "1"},
        {"name": "b", "score": "2", "notes": "late"},
        {"name": "c", "score": "3", "extra": "x"},
    ]

    def test_extra_columns_reported_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="sheet_insights"):
            profile = DataProfiler().profile(self.ROWS).profile

        assert list(profile.columns) == ["name", "score"]
        assert profile.ignored_columns == ["notes", "extra"]
        assert profile.to_dict()["ignored_columns"] == ["notes", "extra"]
        assert "notes" in caplog.text

    def test_strict_mode_raises(self):
        with pytest.raises(SchemaConsistencyError) as exc_info:
            DataProfiler().profile(self.ROWS, strict=True)

        assert exc_info.value.columns == ["notes", "extra"]
        assert exc_info.value.row_index == 1

    def test_strict_mode_from_config(self):
        with pytest.raises(SchemaConsistencyError):
            DataProfiler(ProfilerConfig(strict_schema=True)).profile(self.ROWS)

    def test_consistent_table_has_no_ignored_columns(self):
        profile = DataProfiler().profile([{"a": 1}, {"a": 2}]).profile

        assert profile.ignored_columns == []
        assert "ignored_columns" not in profile.to_dict()


class TestDataFrameInput:
    """DataFrames are converted to rows and never modified."""

    def test_profile_dataframe(self):
        df = pd.DataFrame({
            "a": [1.0, 2.0, np.nan, 4.0, 5.0],
            "b": ["x", "y", None, "x", "z"],
        })
        original = df.copy()

        result = DataProfiler().profile(df, name="frame")

        assert result.profile.columns["a"].type == SemanticType.NUMBER
        assert result.profile.columns["a"].missing == 1
        assert result.profile.columns["b"].type == SemanticType.STRING
        assert result.profile.columns["b"].top == [("x", 2), ("y", 1), ("z", 1)]
        assert result.source_name == "frame"
        pd.testing.assert_frame_equal(df, original)

    def test_dataframe_to_rows_missing_markers(self):
        df = pd.DataFrame({"a": [1.0, np.nan], "b": ["x", None]})

        assert dataframe_to_rows(df) == [{"a": 1.0, "b": "x"}, {"a": None, "b": None}]

    def test_duplicate_column_names_last_wins(self):
        df = pd.DataFrame([[1, "a"], [2, "b"]], columns=["x", "x"])

        assert dataframe_to_rows(df) == [{"x": "a"}, {"x": "b"}]


class TestResultSerialization:
    """ProfileResult.to_dict."""

    def test_to_dict_without_rows(self, sales_rows):
        report = DataProfiler().profile(sales_rows, name="sales").to_dict()

        assert report["source_name"] == "sales"
        assert "rows" not in report
        assert report["profile"]["columns"]["revenue"]["type"] == "number"

    def test_to_dict_with_rows(self, sales_rows):
        report = DataProfiler().profile(sales_rows).to_dict(include_rows=True)

        assert len(report["rows"]) == 4
        assert report["rows"][1]["revenue"] == 950.0
