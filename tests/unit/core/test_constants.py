"""
Unit tests for constants module.

Tests that the classification thresholds keep their reference values.
"""

from sheet_insights.core.constants import (
    DATE_SAMPLE_SIZE,
    DATE_MATCH_FRACTION,
    DATE_MIN_MATCHES,
    NUMBER_SAMPLE_SIZE,
    NUMBER_MATCH_FRACTION,
    NUMBER_MIN_MATCHES,
    TRUTHY_TOKENS,
    FALSY_TOKENS,
    BOOLEAN_TOKENS,
    TOP_VALUES_COUNT,
    MAX_RECOMMENDATIONS,
    MAX_FILE_SIZE_BYTES,
    FILE_EXTENSION_MAP,
)


class TestClassificationConstants:
    """Test type classification thresholds."""

    def test_sample_sizes(self):
        assert DATE_SAMPLE_SIZE == 200
        assert NUMBER_SAMPLE_SIZE == 200

    def test_match_thresholds(self):
        assert DATE_MATCH_FRACTION == 0.2
        assert DATE_MIN_MATCHES == 10
        assert NUMBER_MATCH_FRACTION == 0.4
        assert NUMBER_MIN_MATCHES == 10

    def test_boolean_tokens(self):
        """Truthy and falsy tokens are disjoint and together form the token set."""
        assert TRUTHY_TOKENS == {"true", "yes", "y", "1"}
        assert FALSY_TOKENS == {"false", "no", "n", "0"}
        assert not TRUTHY_TOKENS & FALSY_TOKENS
        assert BOOLEAN_TOKENS == TRUTHY_TOKENS | FALSY_TOKENS


class TestOutputConstants:
    """Test summary and recommendation limits."""

    def test_limits(self):
        assert TOP_VALUES_COUNT == 3
        assert MAX_RECOMMENDATIONS == 6

    def test_file_limits(self):
        assert MAX_FILE_SIZE_BYTES == 50 * 1024 * 1024
        assert FILE_EXTENSION_MAP[".csv"] == "csv"
        assert FILE_EXTENSION_MAP[".xlsx"] == "excel"
