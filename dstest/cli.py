"""
Command-line interface for DSTest.

This module provides the CLI entry point for the installed package.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dstest import __version__
from dstest.collector import collect_test_run
from dstest.config import settings
from dstest.core.db.sqlite import SQLiteDatabase, TestRunRepository, TestSuiteRepository
from dstest.core.models import TestRun, TestRunStatus, TestSuite
from dstest.exceptions import DSTestError, TestRunNotFoundError, UpstreamFetchError
from dstest.formatters import CSVResultFormatter, RunReportFormatter, SuiteFormatter, summarize
from dstest.logger import get_logger, setup_logger

# Initialize console for rich output
console = Console()
logger = get_logger(__name__)


def setup_cli_logging(verbose: bool = False) -> None:
    """Setup logging for CLI usage."""
    if verbose:
        setup_logger(level="DEBUG", log_format="simple")
    else:
        setup_logger(level=settings.log_level, log_format=settings.log_format)


def print_run(test_run: TestRun) -> None:
    """Print the text report and a summary panel for a run."""
    console.print(RunReportFormatter().format(test_run), markup=False, highlight=False)
    
    summary = summarize(test_run)
    style = "green" if summary.status == TestRunStatus.COMPLETE else "yellow"
    console.print(Panel(
        f"Succeeded: {summary.succeeded}  Failed: {summary.failed}  "
        f"No transaction: {summary.not_found}  Total: {summary.total}\n"
        f"Status: [bold]{summary.status.name}[/bold]",
        title=f"Test Run {test_run.name}",
        border_style=style
    ))


async def _load_stored(db_path: str, loader):
    database = SQLiteDatabase(db_path)
    try:
        await database.initialize()
        return await loader(database.connection)
    finally:
        await database.close()


@click.group()
def cli():
    """DSTest - verify recorded HTTP traffic against test suites."""
    pass


@cli.command()
@click.argument("run_id")
@click.option("--db", "db_path", default=None, help="SQLite database path (default: from config)")
@click.option("--csv", "csv_path", default=None, type=click.Path(dir_okay=False),
              help="Also write per-test-case verdicts to this CSV file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def collect(run_id: str, db_path: Optional[str], csv_path: Optional[str], verbose: bool) -> None:
    """Match recorded transactions to the test run RUN_ID and store the results."""
    setup_cli_logging(verbose)
    
    try:
        test_run = asyncio.run(collect_test_run(run_id, db_path=db_path))
    except TestRunNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    except UpstreamFetchError as e:
        console.print(f"[red]Error during run collection: {e}[/red]")
        sys.exit(1)
    except DSTestError as e:
        console.print(f"[red]Error: {e}[/red]")
        logger.exception("Collection failed")
        sys.exit(1)
    
    print_run(test_run)
    
    if csv_path:
        try:
            CSVResultFormatter(Path(csv_path)).write(test_run)
        except DSTestError as e:
            console.print(f"[red]Error: {e}[/red]")
            sys.exit(1)
        console.print(f"[green]✓ Verdicts written to {csv_path}[/green]")


@cli.command()
@click.argument("run_id")
@click.option("--db", "db_path", default=None, help="SQLite database path (default: from config)")
def report(run_id: str, db_path: Optional[str]) -> None:
    """Show the stored report for RUN_ID without collecting again."""
    try:
        test_run = asyncio.run(
            _load_stored(db_path or settings.db_path, lambda conn: TestRunRepository(conn).get(run_id))
        )
    except DSTestError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    if test_run is None:
        console.print(f"[red]No stored test run {run_id}[/red]")
        sys.exit(1)
    print_run(test_run)


@cli.command()
@click.argument("suite_id")
@click.option("--db", "db_path", default=None, help="SQLite database path (default: from config)")
def suite(suite_id: str, db_path: Optional[str]) -> None:
    """Pretty print the stored test suite SUITE_ID."""
    try:
        test_suite: Optional[TestSuite] = asyncio.run(
            _load_stored(db_path or settings.db_path, lambda conn: TestSuiteRepository(conn).get(suite_id))
        )
    except DSTestError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    if test_suite is None:
        console.print(f"[red]No stored test suite {suite_id}[/red]")
        sys.exit(1)
    console.print(SuiteFormatter().format(test_suite), markup=False, highlight=False)


@cli.command()
def version():
    """Show version information."""
    console.print(f"DSTest version {__version__}")


@cli.command()
def info():
    """Show configuration information."""
    table = Table(title="DSTest Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    
    table.add_row("Version", __version__)
    table.add_row("Python", sys.version.split()[0])
    table.add_row("Runs API", settings.runs_api_url)
    table.add_row("Database", settings.db_path)
    table.add_row("HTTP Timeout", f"{settings.http_timeout}s")
    table.add_row("HTTP Retries", str(settings.http_max_retries))
    table.add_row("Reset Results", str(settings.reset_results))
    table.add_row("Filter By API Key", str(settings.filter_by_api_key))
    
    console.print(table)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
