"""
Terminal output for the CLI.

Colored, symbol-prefixed status lines, section banners and a compact table
used to print column summaries, plus compact number formatting.
"""

import math
import os
from decimal import Decimal

from colorama import Fore, Style


def pretty_number(value) -> str:
    """
    Format a number compactly for display.

    Values of a thousand or more get a one-decimal K/M/B suffix; missing or
    NaN values render as an em-dash.

    Example:
        >>> pretty_number(1530)
        '1.5K'
        >>> pretty_number(None)
        '—'
    """
    if value is None or isinstance(value, bool):
        return "—" if value is None else str(value)
    try:
        number = float(value)
    except OverflowError:
        return f"{Decimal(value):.1e}"
    except (TypeError, ValueError):
        return str(value)
    if math.isnan(number):
        return "—"

    magnitude = abs(number)
    for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
        if magnitude >= threshold:
            return f"{number / threshold:.1f}{suffix}"
    if number.is_integer():
        return str(int(number))
    return f"{number:.2f}"


class PrettyOutput:
    """Colored status lines and tables for the profile report."""

    ACCENT = Fore.CYAN
    GOOD = Fore.GREEN
    CAUTION = Fore.YELLOW
    NOTE = Fore.BLUE
    BANNER = Fore.WHITE + Style.BRIGHT
    MUTED = Style.DIM
    RESET = Style.RESET_ALL

    CHECK = "✓"
    ARROW = "→"
    BULLET = "•"
    WARN = "⚠"
    INFO_SYMBOL = "ℹ"
    MAGNIFY = "🔍"

    @staticmethod
    def _line(symbol, color, message, indent):
        print(f"{' ' * indent}{color}{symbol}{PrettyOutput.RESET} {message}")

    @staticmethod
    def banner_width():
        """Terminal width capped at 80 columns (80 when there is no terminal)."""
        try:
            return min(os.get_terminal_size().columns, 80)
        except OSError:
            return 80

    @staticmethod
    def section(text, width=None):
        """Print a banner framing a report section."""
        rule = "─" * (width or PrettyOutput.banner_width())
        print(f"\n{PrettyOutput.BANNER}{rule}\n{PrettyOutput.ARROW} {text}\n{rule}{PrettyOutput.RESET}\n")

    @staticmethod
    def success(message, indent=0):
        PrettyOutput._line(PrettyOutput.CHECK, PrettyOutput.GOOD, message, indent)

    @staticmethod
    def warning(message, indent=0):
        PrettyOutput._line(PrettyOutput.WARN, PrettyOutput.CAUTION, message, indent)

    @staticmethod
    def info(message, indent=0):
        PrettyOutput._line(PrettyOutput.INFO_SYMBOL, PrettyOutput.NOTE, message, indent)

    @staticmethod
    def item(message, indent=0):
        PrettyOutput._line(PrettyOutput.BULLET, PrettyOutput.MUTED, message, indent)

    @staticmethod
    def task_start(message, icon=None):
        """Announce the file (and sheet) being profiled."""
        print(f"\n{icon or PrettyOutput.MAGNIFY} {PrettyOutput.BANNER}{message}{PrettyOutput.RESET}")

    @staticmethod
    def metric(label, value, indent=2):
        """Print a 'label: value' pair such as the row count."""
        print(f"{' ' * indent}{PrettyOutput.MUTED}{label}:{PrettyOutput.RESET} "
              f"{PrettyOutput.ACCENT}{value}{PrettyOutput.RESET}")

    @staticmethod
    def output_file(label, path, indent=2):
        """Print where a report was written."""
        print(f"{' ' * indent}{PrettyOutput.ARROW} {PrettyOutput.MUTED}{label}:{PrettyOutput.RESET} {path}")

    @staticmethod
    def compact_table(headers, rows):
        """
        Print left-aligned columns sized to their widest cell.

        Args:
            headers: Header strings
            rows: Row tuples, one cell per header
        """
        widths = [len(str(header)) for header in headers]
        for row in rows:
            widths = [max(width, len(str(cell))) for width, cell in zip(widths, row)]

        def render(cells):
            return "  ".join(f"{str(cell):<{width}}" for cell, width in zip(cells, widths))

        header_line = render(headers)
        print(f"  {PrettyOutput.BANNER}{header_line}{PrettyOutput.RESET}")
        print(f"  {PrettyOutput.MUTED}{'─' * len(header_line)}{PrettyOutput.RESET}")
        for row in rows:
            print(f"  {render(row)}")
