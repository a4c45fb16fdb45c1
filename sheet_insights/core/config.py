"""Profiler configuration parsing and validation."""

import os
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from sheet_insights.core.constants import (
    DATE_SAMPLE_SIZE,
    DATE_MATCH_FRACTION,
    DATE_MIN_MATCHES,
    NUMBER_SAMPLE_SIZE,
    NUMBER_MATCH_FRACTION,
    NUMBER_MIN_MATCHES,
    MAX_RECOMMENDATIONS,
    MAX_YAML_FILE_SIZE,
)
from sheet_insights.core.exceptions import ConfigError


@dataclass
class ProfilerConfig:
    """
    Tunable classification thresholds and profiling options.

    Defaults come from core.constants; override them only to tune the
    classification heuristics for unusual data.

    Attributes:
        date_sample_size: Leading values inspected for date candidates
        date_match_fraction: Fraction of column length used in the date threshold
        date_min_matches: Upper bound of the date threshold
        number_sample_size: Leading values inspected for numeric candidates
        number_match_fraction: Fraction of column length used in the number threshold
        number_min_matches: Upper bound of the number threshold
        max_recommendations: Chart recommendation cap (1..6)
        strict_schema: Raise SchemaConsistencyError when later rows add columns
    """
    date_sample_size: int = DATE_SAMPLE_SIZE
    date_match_fraction: float = DATE_MATCH_FRACTION
    date_min_matches: int = DATE_MIN_MATCHES
    number_sample_size: int = NUMBER_SAMPLE_SIZE
    number_match_fraction: float = NUMBER_MATCH_FRACTION
    number_min_matches: int = NUMBER_MIN_MATCHES
    max_recommendations: int = MAX_RECOMMENDATIONS
    strict_schema: bool = False

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        for name in ("date_sample_size", "number_sample_size", "date_min_matches", "number_min_matches"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}", field=name)

        for name in ("date_match_fraction", "number_match_fraction"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 < value <= 1:
                raise ConfigError(f"{name} must be between 0 and 1, got {value!r}", field=name)

        max_recs = self.max_recommendations
        if isinstance(max_recs, bool) or not isinstance(max_recs, int) or not 1 <= max_recs <= MAX_RECOMMENDATIONS:
            raise ConfigError(
                f"max_recommendations must be between 1 and {MAX_RECOMMENDATIONS}, got {max_recs!r}",
                field="max_recommendations"
            )

        if not isinstance(self.strict_schema, bool):
            raise ConfigError(f"strict_schema must be true or false, got {self.strict_schema!r}",
                              field="strict_schema")

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> "ProfilerConfig":
        """
        Build a configuration from a plain dictionary.

        Accepts either the settings at top level or nested under a
        'profiler' key. Unknown keys are rejected.

        Raises:
            ConfigError: If the structure or any value is invalid
        """
        if config_dict is None:
            return cls()
        if not isinstance(config_dict, dict):
            raise ConfigError("Configuration must be a mapping")

        settings = config_dict.get("profiler", config_dict)
        if settings is None:
            return cls()
        if not isinstance(settings, dict):
            raise ConfigError("'profiler' section must be a mapping", field="profiler")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(settings) - known)
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys: {', '.join(map(str, unknown))}",
                field=str(unknown[0])
            )

        return cls(**settings)

    @classmethod
    def from_yaml(cls, config_path: str) -> "ProfilerConfig":
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            ProfilerConfig instance

        Raises:
            ConfigError: If file not found, too large or invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        file_size = os.path.getsize(config_file)
        if file_size > MAX_YAML_FILE_SIZE:
            raise ConfigError(
                f"Configuration file too large: {file_size:,} bytes. "
                f"Maximum allowed: {MAX_YAML_FILE_SIZE:,} bytes"
            )

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML file: {str(e)}")
        except UnicodeDecodeError as e:
            raise ConfigError(f"Invalid file encoding (expected UTF-8): {str(e)}")

        return cls.from_dict(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return asdict(self)
