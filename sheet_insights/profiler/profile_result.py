"""
Data structures for storing profiling results.

Contains the semantic type enumeration, per-column summaries, the aggregate
table profile and the result of a profiling pass (profile plus coerced rows).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Any, Optional, Tuple

import numpy as np


def convert_numpy_types(obj):
    """
    Recursively convert numpy types to Python native types for JSON serialization.

    Args:
        obj: Any object that might contain numpy types

    Returns:
        Object with numpy types converted to Python types
    """
    if isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {key: convert_numpy_types(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [convert_numpy_types(item) for item in obj]
    elif isinstance(obj, tuple):
        return tuple(convert_numpy_types(item) for item in obj)
    else:
        return obj


class SemanticType(Enum):
    """Inferred logical type of a column."""
    BOOLEAN = "boolean"
    DATE = "date"
    NUMBER = "number"
    STRING = "string"

    @property
    def is_categorical(self) -> bool:
        """String and boolean columns are treated as categories."""
        return self in (SemanticType.STRING, SemanticType.BOOLEAN)


@dataclass
class ColumnSummary:
    """
    Summary statistics for a single coerced column.

    Attributes:
        type: Inferred semantic type
        count: Total number of rows (including missing)
        missing: Number of missing values after coercion
        min: Minimum (number: numeric value, date: ISO-8601 instant)
        max: Maximum (number: numeric value, date: ISO-8601 instant)
        mean: Arithmetic mean of non-missing values (number only)
        top: Up to three (value, frequency) pairs (string/boolean only)

    Statistics that need at least one non-missing value are None when the
    column has none, and are left out of to_dict().
    """
    type: SemanticType
    count: int = 0
    missing: int = 0
    min: Optional[Any] = None
    max: Optional[Any] = None
    mean: Optional[float] = None
    top: Optional[List[Tuple[Any, int]]] = None

    @property
    def present(self) -> int:
        """Number of non-missing values."""
        return self.count - self.missing

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "type": self.type.value,
            "count": int(self.count),
            "missing": int(self.missing),
        }

        if self.min is not None:
            result["min"] = self.min
        if self.max is not None:
            result["max"] = self.max
        if self.mean is not None:
            result["mean"] = float(self.mean)
        if self.top is not None:
            result["top"] = [[value, int(freq)] for value, freq in self.top]

        return convert_numpy_types(result)


@dataclass
class TableProfile:
    """
    Aggregate profile of a table.

    Attributes:
        row_count: Number of rows in the table
        column_count: Number of profiled columns (always len(columns))
        columns: Column name to summary, in first-row column order
        ignored_columns: Columns that only appear after the first row and
            were therefore not profiled
    """
    row_count: int = 0
    column_count: int = 0
    columns: Dict[str, ColumnSummary] = field(default_factory=dict)
    ignored_columns: List[str] = field(default_factory=list)

    def columns_of_type(self, *types: SemanticType) -> List[str]:
        """Return column names whose type is one of ``types``, in declaration order."""
        return [name for name, summary in self.columns.items() if summary.type in types]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "row_count": self.row_count,
            "column_count": self.column_count,
            "columns": {name: summary.to_dict() for name, summary in self.columns.items()},
        }
        if self.ignored_columns:
            result["ignored_columns"] = list(self.ignored_columns)
        return result


@dataclass
class ProfileResult:
    """
    Outcome of one profiling pass.

    Attributes:
        profile: Aggregate table profile
        rows: Coerced table (each cell a canonical typed value or None)
        profiled_at: Timestamp of profiling
        processing_time_seconds: Time taken to profile
        source_name: Optional label of the profiled source (file/sheet)
    """
    profile: TableProfile
    rows: List[Dict[str, Any]]
    profiled_at: datetime = field(default_factory=datetime.now)
    processing_time_seconds: float = 0.0
    source_name: Optional[str] = None

    def to_dict(self, include_rows: bool = False) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "source_name": self.source_name,
            "profiled_at": self.profiled_at.isoformat(),
            "processing_time_seconds": round(self.processing_time_seconds, 3),
            "profile": self.profile.to_dict(),
        }
        if include_rows:
            result["rows"] = convert_numpy_types(self.rows)
        return result
