"""
Table profiler engine.

Drives type inference, coercion and summarization for every column of a
table and assembles the aggregate profile.

The upstream contract is a sequence of rows, each a mapping from column name
to raw value, with missing cells as None. Columns are discovered from the
first row's keys and profiled in that order. Later rows that omit a column
are read as None for it.

By default profiling leaves the caller's rows untouched and returns a new
coerced table alongside the profile. Passing in_place=True rewrites the
caller's rows instead; callers that still need the raw table must copy it
first.

Known limitation: keys that only appear after the first row are not
profiled. They are reported in TableProfile.ignored_columns and logged as a
warning, or rejected with SchemaConsistencyError in strict schema mode.
Duplicate column names in a DataFrame source resolve last-write-wins.
"""

import logging
import time
from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from sheet_insights.core.config import ProfilerConfig
from sheet_insights.core.exceptions import ProfilerError, SchemaConsistencyError
from sheet_insights.profiler.profile_result import ProfileResult, TableProfile
from sheet_insights.profiler.statistics_calculator import StatisticsCalculator
from sheet_insights.profiler.type_inferrer import TypeInferrer
from sheet_insights.profiler.value_coercer import ValueCoercer

logger = logging.getLogger(__name__)

Row = Mapping
Table = Union[Sequence[Row], pd.DataFrame]


def dataframe_to_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Convert a DataFrame to the row contract.

    Column names become strings, pandas missing markers become None.
    Repeated column names keep the last column's value.
    """
    columns = [str(col) for col in df.columns]
    rows = []
    for record in df.itertuples(index=False, name=None):
        rows.append({col: (None if _is_scalar_na(value) else value) for col, value in zip(columns, record)})
    return rows


def _is_scalar_na(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class DataProfiler:
    """
    Profiles an in-memory table: infers column types, coerces values and
    computes summary statistics.

    Example:
        >>> profiler = DataProfiler()
        >>> result = profiler.profile([{"region": "North", "sales": "$1,200"},
        ...                            {"region": "South", "sales": "950"}])
        >>> result.profile.columns["sales"].type
        <SemanticType.NUMBER: 'number'>
        >>> result.rows[0]["sales"]
        1200.0
    """

    def __init__(self, config: Optional[ProfilerConfig] = None):
        """
        Initialize data profiler.

        Args:
            config: Profiling thresholds and options (defaults when omitted)
        """
        self.config = config or ProfilerConfig()
        self.type_inferrer = TypeInferrer(self.config)
        self.value_coercer = ValueCoercer()
        self.stats_calculator = StatisticsCalculator()

    def profile(
        self,
        table: Table,
        in_place: bool = False,
        strict: Optional[bool] = None,
        name: Optional[str] = None
    ) -> ProfileResult:
        """
        Profile a table.

        Args:
            table: Sequence of row mappings, or a pandas DataFrame
            in_place: Rewrite the caller's rows with coerced values
            strict: Raise on columns absent from the first row
                (defaults to config.strict_schema)
            name: Optional label for the profiled source

        Returns:
            ProfileResult with the profile and the coerced rows

        Raises:
            ProfilerError: If rows are not mappings, or in_place is requested
                for a DataFrame
            SchemaConsistencyError: In strict mode, if later rows add columns
        """
        if isinstance(table, pd.DataFrame):
            if in_place:
                raise ProfilerError("In-place profiling requires a sequence of row mappings, not a DataFrame",
                                    operation="profile")
            return self.profile_dataframe(table, name=name, strict=strict)

        start_time = time.time()
        strict = self.config.strict_schema if strict is None else strict
        rows = list(table)
        self._check_rows(rows, in_place)

        if not rows:
            logger.info(f"Profiled {name or 'table'}: empty table")
            return ProfileResult(
                profile=TableProfile(row_count=0, column_count=0, columns={}),
                rows=rows if in_place else [],
                processing_time_seconds=time.time() - start_time,
                source_name=name
            )

        columns = list(rows[0].keys())
        ignored = self._check_schema(rows, strict)

        profile = TableProfile(row_count=len(rows), ignored_columns=ignored)
        coerced_columns: Dict[str, List[Any]] = {}

        for col in columns:
            raw_values = [row.get(col) for row in rows]
            semantic_type = self.type_inferrer.classify(raw_values)
            coerced = self.value_coercer.coerce(raw_values, semantic_type)
            summary = self.stats_calculator.summarize(coerced, semantic_type)

            coerced_columns[col] = coerced
            profile.columns[col] = summary
            logger.debug(
                f"Column '{col}': type={semantic_type.value}, "
                f"missing={summary.missing}/{summary.count}"
            )

        profile.column_count = len(profile.columns)

        if in_place:
            for idx, row in enumerate(rows):
                for col in columns:
                    row[col] = coerced_columns[col][idx]
            result_rows = rows
        else:
            result_rows = [
                {col: coerced_columns[col][idx] for col in columns}
                for idx in range(len(rows))
            ]

        elapsed = time.time() - start_time
        logger.info(
            f"Profiled {name or 'table'}: {profile.row_count:,} rows, "
            f"{profile.column_count} columns in {elapsed:.2f}s"
        )

        return ProfileResult(
            profile=profile,
            rows=result_rows,
            processing_time_seconds=elapsed,
            source_name=name
        )

    def profile_dataframe(
        self,
        df: pd.DataFrame,
        name: str = "dataframe",
        strict: Optional[bool] = None
    ) -> ProfileResult:
        """
        Profile an in-memory DataFrame. The DataFrame itself is never modified.

        Args:
            df: pandas DataFrame to profile
            name: Name for the profile (e.g., sheet name)
            strict: See profile()

        Returns:
            ProfileResult with the profile and coerced rows
        """
        logger.debug(f"Starting profile of DataFrame: {name}")
        return self.profile(dataframe_to_rows(df), strict=strict, name=name)

    @staticmethod
    def _check_rows(rows: List[Any], in_place: bool) -> None:
        expected = MutableMapping if in_place else Mapping
        for idx, row in enumerate(rows):
            if not isinstance(row, expected):
                kind = "mutable mappings" if in_place else "mappings"
                raise ProfilerError(
                    f"Row {idx} is a {type(row).__name__}; table rows must be {kind}",
                    operation="profile"
                )

    @staticmethod
    def _check_schema(rows: List[Row], strict: bool) -> List[str]:
        """Find keys introduced after the first row."""
        known = set(rows[0].keys())
        extra: List[str] = []
        first_offender: Optional[int] = None

        for idx, row in enumerate(rows[1:], start=1):
            for key in row.keys():
                if key not in known:
                    known.add(key)
                    extra.append(str(key))
                    if first_offender is None:
                        first_offender = idx

        if extra:
            if strict:
                raise SchemaConsistencyError(extra, row_index=first_offender)
            logger.warning(
                f"Columns absent from the first row are not profiled: {', '.join(extra)} "
                f"(first seen in row {first_offender})"
            )

        return extra
