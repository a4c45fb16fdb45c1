"""
Value Coercer - Canonical Typed Values for Profiled Columns.

Converts raw cell values to the canonical representation of a column's
semantic type, or to None when a value cannot be represented:

    boolean -> True / False
    date    -> ISO-8601 UTC instant string ("2024-01-15T00:00:00.000Z")
    number  -> int / float (finite only)
    string  -> str

Coercion never raises. Malformed or unrecognized values always degrade to
None so that a single bad cell cannot abort profiling of a column.
Coercion is a fixed point: coercing already-coerced values again with the
same type yields equal values.

The parsing helpers in this module are shared with TypeInferrer so that
classification and coercion agree on what counts as a boolean, a date or
a number.
"""

import logging
import math
import numbers
import re
import warnings
from datetime import date, datetime
from typing import Any, List, Optional, Sequence

import numpy as np
import pandas as pd

from sheet_insights.core.constants import (
    TRUTHY_TOKENS,
    FALSY_TOKENS,
    BOOLEAN_TOKENS,
    NUMERIC_STRIP_PATTERN,
)
from sheet_insights.profiler.profile_result import SemanticType

logger = logging.getLogger(__name__)

_NUMERIC_STRIP_RE = re.compile(NUMERIC_STRIP_PATTERN)
_DIGIT_RE = re.compile(r"\d")


def is_missing(value: Any) -> bool:
    """
    Check whether a raw value is a missing marker.

    None, pandas/numpy missing markers (NaN, NaT, pd.NA) and empty or
    whitespace-only strings are missing.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    # Containers must be checked BEFORE pd.isna() to avoid "ambiguous truth value" error
    if isinstance(value, (list, tuple, dict, set, np.ndarray)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def is_native_number(value: Any) -> bool:
    """True for real numbers (Python or numpy), excluding booleans."""
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def parse_boolean(value: Any) -> Optional[bool]:
    """Return True/False for a native boolean or recognized token, else None."""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, str):
        token = value.strip().lower()
        if token in TRUTHY_TOKENS:
            return True
        if token in FALSY_TOKENS:
            return False
    return None


def is_boolean_like(value: Any) -> bool:
    """True for a native boolean or one of the recognized boolean tokens."""
    if isinstance(value, (bool, np.bool_)):
        return True
    return isinstance(value, str) and value.strip().lower() in BOOLEAN_TOKENS


def parse_number(value: Any) -> Optional[numbers.Real]:
    """
    Parse a raw value as a finite number.

    Native numbers pass through (numpy scalars become Python int/float).
    Strings have percent, comma, currency symbols and whitespace stripped
    before parsing, so "$1,200" and "12 %" parse as 1200.0 and 12.0.

    Returns:
        int or float, or None if the value is not a finite number
    """
    if isinstance(value, (bool, np.bool_)):
        return None

    if is_native_number(value):
        if isinstance(value, numbers.Integral):
            return int(value)
        number = float(value)
        return number if math.isfinite(number) else None

    if isinstance(value, str):
        text = _NUMERIC_STRIP_RE.sub("", value)
        # float() accepts digit-group underscores, plain spreadsheet text never means that
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None

    return None


def parse_date(value: Any) -> Optional[pd.Timestamp]:
    """
    Parse a raw value as a calendar date/time.

    Datetime objects are accepted as-is. Strings are parsed with
    pandas.to_datetime; strings without any digit and strings that are
    plain numbers are rejected so that bare numerals ("42", "2,000") and
    words such as "now" are never taken for dates. Native numbers and
    booleans are never dates.

    Returns:
        UTC pandas Timestamp, or None if the value is not a date
    """
    if is_missing(value) or isinstance(value, (bool, np.bool_)) or is_native_number(value):
        return None

    if isinstance(value, (datetime, date, np.datetime64)):
        candidate = value
    elif isinstance(value, str):
        text = value.strip()
        if not _DIGIT_RE.search(text) or parse_number(text) is not None:
            return None
        candidate = text
    else:
        return None

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            timestamp = pd.to_datetime(candidate, errors="coerce")
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug(f"Date parsing failed for {value!r}: {e}")
        return None

    if not isinstance(timestamp, pd.Timestamp) or pd.isna(timestamp):
        return None

    if timestamp.tzinfo is None:
        return timestamp.tz_localize("UTC")
    return timestamp.tz_convert("UTC")


def to_iso_instant(timestamp: pd.Timestamp) -> str:
    """Format a UTC timestamp as an ISO-8601 instant with millisecond precision."""
    return f"{timestamp.strftime('%Y-%m-%dT%H:%M:%S')}.{timestamp.microsecond // 1000:03d}Z"


class ValueCoercer:
    """
    Converts raw column values to the canonical form of a semantic type.

    Example:
        >>> coercer = ValueCoercer()
        >>> coercer.coerce(["yes", "N", "maybe", None], SemanticType.BOOLEAN)
        [True, False, None, None]
        >>> coercer.coerce(["$1,200", 3, "n/a"], SemanticType.NUMBER)
        [1200.0, 3, None]
    """

    def coerce(self, values: Sequence[Any], semantic_type: SemanticType) -> List[Any]:
        """
        Coerce every value of a column.

        Args:
            values: Raw column values
            semantic_type: Inferred type of the column

        Returns:
            List of the same length, index-aligned with ``values``
        """
        converter = {
            SemanticType.BOOLEAN: self.coerce_boolean,
            SemanticType.DATE: self.coerce_date,
            SemanticType.NUMBER: self.coerce_number,
            SemanticType.STRING: self.coerce_string,
        }[semantic_type]
        return [converter(value) for value in values]

    @staticmethod
    def coerce_boolean(value: Any) -> Optional[bool]:
        return parse_boolean(value)

    @staticmethod
    def coerce_date(value: Any) -> Optional[str]:
        timestamp = parse_date(value)
        return to_iso_instant(timestamp) if timestamp is not None else None

    @staticmethod
    def coerce_number(value: Any) -> Optional[numbers.Real]:
        return parse_number(value)

    @staticmethod
    def coerce_string(value: Any) -> Optional[str]:
        if is_missing(value):
            return None
        return value if isinstance(value, str) else str(value)
