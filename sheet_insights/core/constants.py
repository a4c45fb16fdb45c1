"""
Sheet Insights Constants.

This module defines all magic numbers, heuristic thresholds and defaults used
throughout the profiler and recommender. The classification thresholds are
empirical and must be preserved for behavioral compatibility; tune them here
(or through ProfilerConfig) rather than in the classification logic.
"""

# ============================================================================
# Type Classification Constants
# ============================================================================

# Maximum number of leading values inspected when counting date candidates
DATE_SAMPLE_SIZE: int = 200

# A column is a date column when the number of parseable dates in the sample
# exceeds min(DATE_MIN_MATCHES, ceil(DATE_MATCH_FRACTION * column_length))
DATE_MATCH_FRACTION: float = 0.2
DATE_MIN_MATCHES: int = 10

# Maximum number of leading values inspected when counting numeric candidates
NUMBER_SAMPLE_SIZE: int = 200

# A column is numeric when the number of numeric-looking values in the sample
# exceeds min(NUMBER_MIN_MATCHES, ceil(NUMBER_MATCH_FRACTION * column_length))
NUMBER_MATCH_FRACTION: float = 0.4
NUMBER_MIN_MATCHES: int = 10

# Tokens (after trimming and case-folding) recognized as booleans
TRUTHY_TOKENS: frozenset = frozenset({"true", "yes", "y", "1"})
FALSY_TOKENS: frozenset = frozenset({"false", "no", "n", "0"})
BOOLEAN_TOKENS: frozenset = TRUTHY_TOKENS | FALSY_TOKENS

# Characters stripped from text before numeric parsing.
# Percent, thousands separator, currency symbols and any whitespace.
NUMERIC_STRIP_PATTERN: str = r"[%,$₹€£\s]"


# ============================================================================
# Summary Constants
# ============================================================================

# Number of (value, frequency) pairs reported for string/boolean columns
TOP_VALUES_COUNT: int = 3


# ============================================================================
# Recommendation Constants
# ============================================================================

# Hard cap on the number of chart recommendations per profiling pass
MAX_RECOMMENDATIONS: int = 6

# Vega-Lite schema emitted with every chart specification
VEGA_LITE_SCHEMA: str = "https://vega.github.io/schema/vega-lite/v5.json"

# Default chart height (pixels) in emitted Vega-Lite specifications
DEFAULT_CHART_HEIGHT: int = 260


# ============================================================================
# File Loading Constants
# ============================================================================

# Largest file accepted by the loaders (50MB)
MAX_FILE_SIZE_BYTES: int = 50 * 1024 * 1024

# Bytes sampled for delimiter/encoding detection
DELIMITER_SAMPLE_BYTES: int = 8192

# Candidate encodings, tried in order
CANDIDATE_ENCODINGS: list = ["utf-8", "utf-8-sig", "cp1252", "latin-1"]

# File extension to format mapping
FILE_EXTENSION_MAP: dict = {
    ".csv": "csv",
    ".tsv": "csv",
    ".txt": "csv",
    ".xlsx": "excel",
    ".xlsm": "excel",
    ".xls": "excel",
}


# ============================================================================
# Configuration Security Limits
# ============================================================================

# Maximum YAML configuration file size (1MB)
MAX_YAML_FILE_SIZE: int = 1024 * 1024


# ============================================================================
# Logging Constants
# ============================================================================

# Default log message format
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Log date format
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
