"""Main CLI application."""
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from ..checks import get_all_checks
from ..core.engine import AuditEngine
from ..core.errors import ConfigError, SnapshotError
from ..state import SnapshotStateReader, get_live_reader
from ..utils.config import load_config
from ..utils.log import setup_logging
from .ui.console import (
    console, print_banner, print_source, print_report,
    print_error, print_success, print_info, create_progress
)
from .ui.export import export_report


app = typer.Typer(
    name="winposture",
    help="winposture - Windows security posture audit",
    add_completion=False,
    no_args_is_help=True
)


@app.command()
def audit(
    check: Optional[List[str]] = typer.Option(
        None,
        "--check", "-c",
        help="Check id to run (repeatable, default: all)"
    ),
    snapshot: Optional[Path] = typer.Option(
        None,
        "--snapshot", "-s",
        help="Evaluate a recorded YAML state snapshot instead of this host"
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="YAML config file merged over the defaults"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output file path for report export"
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format", "-f",
        help="Export format: json or csv"
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 1 if any finding is non-compliant"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show detailed output and debug logging"
    )
):
    """Run the compliance audit."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=2)

    setup_logging("DEBUG" if verbose else config.log_level)

    if snapshot is not None:
        try:
            reader = SnapshotStateReader.from_file(snapshot)
        except SnapshotError as e:
            print_error(str(e))
            raise typer.Exit(code=2)
        source = f"snapshot {snapshot}"
    elif sys.platform == "win32":
        reader = get_live_reader()
        source = "local host"
    else:
        print_error("Auditing the local host requires Windows. Use --snapshot to evaluate a recorded state.")
        raise typer.Exit(code=2)

    print_banner()
    print_source(source)

    engine = AuditEngine(reader)
    engine.register_checks(get_all_checks())
    check_ids = check or config.enabled_checks

    with create_progress() as progress:
        task = progress.add_task("Running audit...", total=100)

        def update_progress(current: int, total: int, name: str):
            if total > 0:
                pct = (current / total) * 100
                progress.update(task, completed=pct, description=f"Checking: {name}")

        try:
            report = engine.run_audit(check_ids=check_ids, progress_callback=update_progress)
        except KeyError as e:
            print_error(e.args[0])
            raise typer.Exit(code=2)

    print_report(report, verbose=verbose)

    if output:
        export_format = (fmt or config.export_format).lower()
        try:
            export_report(report, str(output), export_format)
        except (OSError, ValueError) as e:
            print_error(f"Export failed: {e}")
            raise typer.Exit(code=2)
        print_success(f"Report saved to {output}")

    if (strict or config.strict) and report.non_compliant_count > 0:
        print_info(f"{report.non_compliant_count} non-compliant finding(s)")
        raise typer.Exit(code=1)


@app.command()
def list_checks():
    """List all available checks."""
    print_banner()

    table = Table(title="Available Checks")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Category", style="green")
    table.add_column("Description", style="dim")

    for item in get_all_checks():
        table.add_row(item.check_id, item.name, item.category, item.description)

    console.print(table)


@app.command()
def version():
    """Show version information."""
    from .. import __version__
    console.print(f"winposture - Windows security posture audit v{__version__}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
