"""
JSON serialization utilities for profile reports.

Handles numpy scalars, pandas timestamps and enums that can appear in rows
or summaries, so reports can always be written with the standard json module.
"""

import json
import math
from datetime import datetime, date
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd


class ProfileJSONEncoder(json.JSONEncoder):
    """
    JSON encoder for profile reports.

    Converts:
    - numpy int/float/bool scalars → Python int/float/bool (NaN/inf → null)
    - numpy arrays → lists
    - pandas Timestamp, datetime, date → ISO format string
    - Enum → its value
    - sets → lists
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.integer):
            return int(obj)

        if isinstance(obj, np.floating):
            if np.isnan(obj) or np.isinf(obj):
                return None
            return float(obj)

        if isinstance(obj, np.bool_):
            return bool(obj)

        if isinstance(obj, np.ndarray):
            return obj.tolist()

        if isinstance(obj, pd.Timestamp):
            return obj.isoformat()

        if isinstance(obj, (datetime, date)):
            return obj.isoformat()

        if isinstance(obj, Enum):
            return obj.value

        if isinstance(obj, set):
            return list(obj)

        return super().default(obj)


def _replace_non_finite(obj: Any) -> Any:
    """Python floats never reach default(); replace NaN/inf with None up front."""
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, dict):
        return {key: _replace_non_finite(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_replace_non_finite(item) for item in obj]
    return obj


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """
    Safely serialize object to JSON string using the profile encoder.

    Args:
        obj: Object to serialize
        **kwargs: Additional arguments to pass to json.dumps

    Returns:
        JSON string
    """
    kwargs.setdefault('cls', ProfileJSONEncoder)
    kwargs.setdefault('indent', 2)
    kwargs.setdefault('ensure_ascii', False)

    return json.dumps(_replace_non_finite(obj), **kwargs)


def safe_json_dump(obj: Any, fp, **kwargs) -> None:
    """
    Safely serialize object to a JSON file using the profile encoder.

    Args:
        obj: Object to serialize
        fp: File pointer to write to
        **kwargs: Additional arguments to pass to json.dump
    """
    kwargs.setdefault('cls', ProfileJSONEncoder)
    kwargs.setdefault('indent', 2)
    kwargs.setdefault('ensure_ascii', False)

    json.dump(_replace_non_finite(obj), fp, **kwargs)
