"""
Command-line interface for Sheet Insights.

Provides commands for:
- Profiling a spreadsheet or delimited file and suggesting charts
- Listing the sheets of a workbook
"""

import sys
from pathlib import Path

import click

from sheet_insights import __version__
from sheet_insights.core.config import ProfilerConfig
from sheet_insights.core.exceptions import SheetInsightsException
from sheet_insights.core.logging_config import setup_logging, get_logger
from sheet_insights.core.pretty_output import PrettyOutput as po, pretty_number
from sheet_insights.profiler.profile_result import SemanticType

logger = get_logger(__name__)


def _summary_row(name, summary):
    """One display row of the profile table: column, type, missing, min, max, mean/top."""
    if summary.type is SemanticType.NUMBER:
        low, high = pretty_number(summary.min), pretty_number(summary.max)
        center = pretty_number(summary.mean)
    elif summary.type is SemanticType.DATE:
        low, high, center = summary.min or "—", summary.max or "—", "—"
    else:
        low = high = "—"
        center = ", ".join(f"{value} ({count})" for value, count in summary.top) if summary.top else "—"
    return (name, summary.type.value, pretty_number(summary.missing), low, high, center)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    Sheet Insights - quick data profiles and chart suggestions.

    Infers column types of a spreadsheet or CSV file, summarizes every
    column and recommends the most informative charts for its schema.
    """
    pass


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--sheet', '-s', default=None, help='Sheet to profile (default: first sheet)')
@click.option('--delimiter', '-d', default=None, help='Column delimiter for text files (auto-detected). Use "\\t" for tab.')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML file overriding profiler thresholds')
@click.option('--json-output', '-j', type=click.Path(dir_okay=False), help='Path for JSON report output')
@click.option('--include-rows', is_flag=True, help='Include the coerced rows in the JSON report')
@click.option('--max-recommendations', '-n', type=click.IntRange(1, 6), default=None,
              help='Maximum number of chart recommendations (1-6)')
@click.option('--strict-schema', is_flag=True, default=None,
              help='Fail if later rows introduce columns missing from the first row')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default='WARNING', help='Logging level')
@click.option('--log-file', type=click.Path(dir_okay=False), help='Optional log file path')
def profile(file_path, sheet, delimiter, config_file, json_output, include_rows, max_recommendations,
            strict_schema, log_level, log_file):
    """
    Profile a data file and suggest charts.

    FILE_PATH: Path to a .csv/.tsv/.txt or .xlsx/.xls file (max 50MB)

    Examples:

    \b
    # Profile the first sheet of a workbook
    sheet-insights profile sales.xlsx

    \b
    # Profile a specific sheet and write a JSON report
    sheet-insights profile sales.xlsx --sheet 2023 -j report.json
    """
    from sheet_insights.loaders.table_loader import TableLoader
    from sheet_insights.profiler.engine import DataProfiler
    from sheet_insights.profiler.json_utils import safe_json_dump
    from sheet_insights.profiler.visual_recommender import VisualRecommender

    setup_logging(level=log_level, log_file=log_file)
    logger.info(f"Starting profile of: {file_path}")

    try:
        config = ProfilerConfig.from_yaml(config_file) if config_file else ProfilerConfig()
        if max_recommendations is not None:
            config.max_recommendations = max_recommendations
        if strict_schema:
            config.strict_schema = True

        if delimiter:
            # Handle escape sequences like \t for tab
            delimiter = delimiter.encode().decode('unicode_escape')

        loader = TableLoader(file_path, delimiter=delimiter)
        available_sheets = loader.list_sheets()
        sheet_name = sheet or (available_sheets[0] if available_sheets else None)
        po.task_start(f"Profiling {file_path}" + (f" [{sheet_name}]" if sheet_name else ""))

        rows = loader.load(sheet=sheet)
        result = DataProfiler(config).profile(rows, name=sheet_name or loader.name)
        recommendations = VisualRecommender(config.max_recommendations).recommend(result.profile)

    except SheetInsightsException as e:
        logger.debug(f"Profiling failed: {e.to_dict()}")
        click.echo(f"❌ Error: {e.message}", err=True)
        sys.exit(1)

    table_profile = result.profile
    po.metric("Rows", pretty_number(table_profile.row_count))
    po.metric("Columns", pretty_number(table_profile.column_count))
    if table_profile.ignored_columns:
        po.warning(f"Not profiled (absent from first row): {', '.join(table_profile.ignored_columns)}", indent=2)

    po.section("Quick data profile")
    if table_profile.columns:
        po.compact_table(
            ["Column", "Type", "Missing", "Min", "Max", "Mean / Top"],
            [_summary_row(name, summary) for name, summary in table_profile.columns.items()]
        )
    else:
        po.info("No rows to profile")

    po.section("Suggested visuals")
    if recommendations:
        for idx, recommendation in enumerate(recommendations, start=1):
            po.success(f"{idx}. {recommendation.title}")
            po.item(recommendation.rationale, indent=4)
    else:
        po.info("No chart fits this table's column types")

    if json_output:
        report = result.to_dict(include_rows=include_rows)
        report["recommendations"] = [rec.to_dict() for rec in recommendations]
        Path(json_output).parent.mkdir(parents=True, exist_ok=True)
        with open(json_output, "w", encoding="utf-8") as f:
            safe_json_dump(report, f)
        po.output_file("JSON", json_output)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
def sheets(file_path):
    """List the sheets of a workbook (a delimited file has exactly one)."""
    from sheet_insights.loaders.table_loader import TableLoader

    try:
        names = TableLoader(file_path).list_sheets()
    except SheetInsightsException as e:
        click.echo(f"❌ Error: {e.message}", err=True)
        sys.exit(1)

    for name in names:
        click.echo(name)


@cli.command()
def version():
    """Display version information."""
    click.echo(f"Sheet Insights v{__version__}")
    click.echo("Quick data profiles and chart suggestions for spreadsheets")


def main():
    cli()


if __name__ == '__main__':
    main()
