"""
Sheet Insights Exception Hierarchy.

The profiling engine itself never raises for messy data: malformed cells
degrade to missing values and degenerate tables produce empty profiles. The
exceptions below belong to the layers around the engine (configuration, file
loading, strict schema checking) and give them one consistent shape.

Exception Severity Levels:
    - FATAL: Stop all processing immediately (bad configuration)
    - CRITICAL: Stop processing the current file
    - RECOVERABLE: Log error, caller decides whether to continue
    - WARNING: Log warning, processing continues
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorSeverity(Enum):
    """
    Classify error severity for handling decisions.

    Attributes:
        FATAL: Unrecoverable error, stop all processing
        CRITICAL: File-level error, stop processing this file
        RECOVERABLE: Operation-level error, caller may continue
        WARNING: Non-critical issue, log and continue
    """
    FATAL = "fatal"
    CRITICAL = "critical"
    RECOVERABLE = "recoverable"
    WARNING = "warning"


class SheetInsightsException(Exception):
    """
    Root of the Sheet Insights error tree.

    The CLI catches this type, prints ``message`` and exits non-zero;
    to_dict() gives the structured form written to debug logs.

    Attributes:
        message (str): Text shown to the user
        severity (ErrorSeverity): How far up the failure should propagate
        details (Dict[str, Any]): Structured context such as file path or sheet
        original_exception (Optional[Exception]): Wrapped parser/IO error, if any

    Example:
        >>> try:
        ...     frame = pd.read_excel("sales.xlsx")
        ... except ValueError as e:
        ...     raise SheetInsightsException(
        ...         "Workbook is unreadable",
        ...         severity=ErrorSeverity.CRITICAL,
        ...         details={'file_path': 'sales.xlsx'},
        ...         original_exception=e
        ...     )
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.RECOVERABLE,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error description
            severity: Error severity level (default: RECOVERABLE)
            details: Additional context dictionary
            original_exception: Original exception if this wraps another error
        """
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.details = details or {}
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize exception to dictionary for logging/reporting.

        Returns:
            Dictionary containing exception details suitable for JSON serialization
        """
        return {
            'type': self.__class__.__name__,
            'message': self.message,
            'severity': self.severity.value,
            'details': self.details,
            'original_error': str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Configuration Errors (Fatal)
# ============================================================================

class ConfigError(SheetInsightsException):
    """
    Configuration errors (fatal - stop all processing).

    Raised when:
    - Configuration file not found or too large
    - Invalid YAML syntax
    - Unknown configuration keys
    - Threshold values out of range

    Attributes:
        field (Optional[str]): Specific config field that caused error

    Example:
        >>> raise ConfigError(
        ...     "date_match_fraction must be between 0 and 1",
        ...     field="date_match_fraction"
        ... )
    """

    def __init__(self, message: str, field: Optional[str] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            field: Specific config field that failed (optional)
        """
        super().__init__(
            message,
            severity=ErrorSeverity.FATAL,
            details={'field': field} if field else {}
        )
        self.field = field


# ============================================================================
# Data Loading Errors (Critical)
# ============================================================================

class DataLoadError(SheetInsightsException):
    """
    Source file loading errors (critical - stop processing this file).

    Raised when the file cannot be read or parsed into rows.

    Attributes:
        file_path (str): Path to file that failed to load
    """

    def __init__(
        self,
        message: str,
        file_path: str,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize data load error.

        Args:
            message: Error description
            file_path: Path to file being loaded
            original_exception: Original exception from the parser
        """
        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            details={'file_path': file_path},
            original_exception=original_exception
        )
        self.file_path = file_path


class FileTooLargeError(DataLoadError):
    """
    Source file exceeds the maximum accepted size.

    Example:
        >>> raise FileTooLargeError("huge.xlsx", file_size=60_000_000, max_size=52_428_800)
    """

    def __init__(self, file_path: str, file_size: int, max_size: int):
        super().__init__(
            f"File is larger than {max_size // (1024 * 1024)}MB ({file_size:,} bytes). "
            f"Please use a smaller file.",
            file_path
        )
        self.details.update({
            'file_size': file_size,
            'max_size': max_size
        })


class UnsupportedFormatError(DataLoadError):
    """File extension not handled by any loader."""

    def __init__(self, file_path: str, format: str, supported_formats: List[str]):
        super().__init__(
            f"Unsupported file format '{format}'. Supported: {', '.join(supported_formats)}",
            file_path
        )
        self.details.update({
            'format': format,
            'supported_formats': supported_formats
        })


class SheetNotFoundError(DataLoadError):
    """Requested sheet does not exist in the workbook."""

    def __init__(self, file_path: str, sheet: str, available_sheets: List[str]):
        super().__init__(
            f"Sheet '{sheet}' not found. Available: {', '.join(available_sheets)}",
            file_path
        )
        self.details.update({
            'sheet': sheet,
            'available_sheets': available_sheets
        })


# ============================================================================
# Profiler Errors
# ============================================================================

class ProfilerError(SheetInsightsException):
    """
    Data profiling errors.

    Example:
        >>> raise ProfilerError(
        ...     "Table rows must be mappings",
        ...     operation="profile_table"
        ... )
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        column: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize profiler error.

        Args:
            message: Error description
            operation: Profiling operation that failed
            column: Column being profiled
            original_exception: Original exception
        """
        super().__init__(
            message,
            severity=ErrorSeverity.RECOVERABLE,
            details={
                'operation': operation,
                'column': column
            },
            original_exception=original_exception
        )


class SchemaConsistencyError(ProfilerError):
    """
    Later rows introduce columns absent from the first row.

    Only raised in strict schema mode; by default the extra columns are
    reported on the profile instead.

    Example:
        >>> raise SchemaConsistencyError(["region"], row_index=12)
    """

    def __init__(self, columns: List[str], row_index: int):
        super().__init__(
            f"Row {row_index} introduces columns absent from the first row: {', '.join(columns)}",
            operation="schema_check"
        )
        self.details.update({
            'columns': list(columns),
            'row_index': row_index
        })
        self.columns = list(columns)
        self.row_index = row_index
