"""
Command-line script for DSTest.

This script provides a simple entry point for collecting the results of a
test run: fetch the run, match recorded transactions, store and print it.
"""

import asyncio
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from dstest import __version__
from dstest.cli import print_run, setup_cli_logging
from dstest.collector import collect_test_run
from dstest.config import settings
from dstest.exceptions import DSTestError, UpstreamFetchError
from dstest.formatters import CSVResultFormatter

# Initialize console for rich output
console = Console()


@click.command()
@click.argument("run_id")
@click.option(
    "--db",
    "db_path",
    default=None,
    help=f"SQLite database path (default: {settings.db_path})"
)
@click.option(
    "--csv",
    "csv_path",
    default=None,
    help="Write per-test-case verdicts to this CSV file"
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging"
)
@click.version_option(version=__version__, prog_name="DSTest")
def main(run_id: str, db_path: str, csv_path: str, verbose: bool) -> None:
    """
    Collect results for a recorded test run.
    
    Examples:
        python run.py 62828e4072277df7cd3a4254
        python run.py 62828e4072277df7cd3a4254 --csv verdicts.csv
    """
    setup_cli_logging(verbose)
    
    console.print()
    console.print(Panel.fit(
        "[bold blue]DSTest[/bold blue]\n"
        "Record and replay verification",
        border_style="blue"
    ))
    
    config_table = Table(show_header=False, box=None)
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="white")
    config_table.add_row("Test Run", run_id)
    config_table.add_row("Runs API", settings.runs_api_url)
    config_table.add_row("Database", db_path or settings.db_path)
    console.print(Panel(config_table, title="Configuration", border_style="green"))
    
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True
        ) as progress:
            progress.add_task("Matching transactions...", total=None)
            test_run = asyncio.run(collect_test_run(run_id, db_path=db_path))
        
        print_run(test_run)
        
        if csv_path:
            CSVResultFormatter(Path(csv_path)).write(test_run)
            console.print(f"[green]✓ Verdicts written to {csv_path}[/green]")
    
    except UpstreamFetchError as e:
        console.print(f"[red]Error during run collection: {e}[/red]")
        sys.exit(1)
    except DSTestError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Collection interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
