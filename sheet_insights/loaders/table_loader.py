"""
Table loader for delimited text files and Excel workbooks.

Produces the row contract the profiler consumes: a list of dicts mapping
column name to raw value, with missing cells as None. Delimited files are
read as raw text so that type inference sees the values as written; Excel
cells keep the types the workbook stores (numbers, dates, booleans).
Only one sheet is loaded at a time.
"""

import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from sheet_insights.core.constants import (
    CANDIDATE_ENCODINGS,
    DELIMITER_SAMPLE_BYTES,
    FILE_EXTENSION_MAP,
    MAX_FILE_SIZE_BYTES,
)
from sheet_insights.core.exceptions import (
    DataLoadError,
    FileTooLargeError,
    SheetNotFoundError,
    UnsupportedFormatError,
)
from sheet_insights.profiler.engine import dataframe_to_rows

logger = logging.getLogger(__name__)


def detect_delimiter(file_path: str, sample_size: int = DELIMITER_SAMPLE_BYTES) -> str:
    """
    Auto-detect the delimiter used in a delimited text file.

    Args:
        file_path: Path to the file
        sample_size: Number of characters to sample for detection

    Returns:
        Detected delimiter character, defaults to ',' if detection fails
    """
    for encoding in CANDIDATE_ENCODINGS:
        try:
            with open(file_path, 'r', newline='', encoding=encoding) as f:
                sample = f.read(sample_size)

            sniffer = csv.Sniffer()
            dialect = sniffer.sniff(sample, delimiters=',\t|;:')
            return dialect.delimiter
        except UnicodeDecodeError:
            continue
        except csv.Error:
            break

    return ','


def detect_encoding(file_path: str) -> str:
    """
    Detect the encoding of a file by trying common encodings.

    Args:
        file_path: Path to the file

    Returns:
        Detected encoding name, defaults to 'utf-8'
    """
    for encoding in CANDIDATE_ENCODINGS:
        try:
            with open(file_path, 'r', encoding=encoding) as f:
                f.read(DELIMITER_SAMPLE_BYTES)
            return encoding
        except UnicodeDecodeError:
            continue

    return 'utf-8'


class TableLoader:
    """
    Loads one table (sheet) from a CSV/TSV or Excel file.

    Example:
        >>> loader = TableLoader("sales.xlsx")
        >>> loader.list_sheets()
        ['2024', '2023']
        >>> rows = loader.load(sheet="2023")
    """

    def __init__(
        self,
        file_path: str,
        delimiter: Optional[str] = None,
        encoding: Optional[str] = None,
        max_file_size: int = MAX_FILE_SIZE_BYTES
    ):
        """
        Initialize loader and check the file.

        Args:
            file_path: Path to the source file
            delimiter: Column delimiter for text files (auto-detected when None)
            encoding: Text encoding (auto-detected when None)
            max_file_size: Largest accepted file size in bytes

        Raises:
            DataLoadError: If the file does not exist
            FileTooLargeError: If the file exceeds max_file_size
            UnsupportedFormatError: If the extension is not supported
        """
        self.file_path = Path(file_path)
        if not self.file_path.is_file():
            raise DataLoadError(f"File not found: {file_path}", str(file_path))

        file_size = self.file_path.stat().st_size
        if file_size > max_file_size:
            raise FileTooLargeError(str(file_path), file_size=file_size, max_size=max_file_size)

        suffix = self.file_path.suffix.lower()
        if suffix not in FILE_EXTENSION_MAP:
            raise UnsupportedFormatError(str(file_path), suffix.lstrip('.') or 'unknown',
                                         sorted({ext.lstrip('.') for ext in FILE_EXTENSION_MAP}))
        self.format = FILE_EXTENSION_MAP[suffix]
        self.delimiter = delimiter
        self.encoding = encoding

    @property
    def name(self) -> str:
        """File name without extension."""
        return self.file_path.stem

    def list_sheets(self) -> List[str]:
        """Sheet names in workbook order; a delimited file has a single sheet named after the file."""
        if self.format == "csv":
            return [self.name]

        try:
            with pd.ExcelFile(self.file_path) as workbook:
                return [str(name) for name in workbook.sheet_names]
        except (ValueError, ImportError, OSError) as e:
            raise DataLoadError(f"Could not read workbook {self.file_path}: {e}", str(self.file_path),
                                original_exception=e)

    def load_dataframe(self, sheet: Optional[str] = None) -> pd.DataFrame:
        """
        Load a sheet as a DataFrame.

        Args:
            sheet: Sheet name (first sheet when None)

        Raises:
            SheetNotFoundError: If the sheet does not exist
            DataLoadError: If the file cannot be parsed
        """
        if self.format == "csv":
            if sheet is not None and sheet != self.name:
                raise SheetNotFoundError(str(self.file_path), sheet, [self.name])
            return self._read_delimited()

        sheets = self.list_sheets()
        if not sheets:
            return pd.DataFrame()
        if sheet is None:
            sheet = sheets[0]
        elif sheet not in sheets:
            raise SheetNotFoundError(str(self.file_path), sheet, sheets)

        logger.info(f"Loading sheet '{sheet}' from {self.file_path}")
        try:
            return pd.read_excel(self.file_path, sheet_name=sheet)
        except (ValueError, ImportError, OSError) as e:
            raise DataLoadError(f"Could not parse sheet '{sheet}' of {self.file_path}: {e}",
                                str(self.file_path), original_exception=e)

    def load(self, sheet: Optional[str] = None) -> List[Dict[str, Any]]:
        """Load a sheet as rows (dicts of column name to raw value, None for missing cells)."""
        return dataframe_to_rows(self.load_dataframe(sheet))

    def _read_delimited(self) -> pd.DataFrame:
        delimiter = self.delimiter or detect_delimiter(str(self.file_path))
        encoding = self.encoding or detect_encoding(str(self.file_path))
        if delimiter != ',':
            logger.info(f"Auto-detected delimiter: {repr(delimiter)}")
        if encoding != 'utf-8':
            logger.info(f"Auto-detected encoding: {encoding}")

        try:
            return pd.read_csv(
                self.file_path,
                sep=delimiter,
                encoding=encoding,
                dtype=str,
                skipinitialspace=True,
            )
        except pd.errors.EmptyDataError:
            logger.warning(f"Empty file: {self.file_path}")
            return pd.DataFrame()
        except pd.errors.ParserError as e:
            raise DataLoadError(
                f"Parsing error in {self.file_path}: rows have inconsistent numbers of columns. "
                f"Check the delimiter (current: {repr(delimiter)}).",
                str(self.file_path),
                original_exception=e
            )
        except UnicodeDecodeError as e:
            raise DataLoadError(
                f"Encoding error in {self.file_path}: cannot decode file with {encoding} encoding.",
                str(self.file_path),
                original_exception=e
            )
