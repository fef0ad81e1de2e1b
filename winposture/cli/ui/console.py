"""Rich console wrapper and display utilities."""
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.markup import escape

from ...core.result import AuditReport, CheckResult, Compliance, Finding


# Global console instance
console = Console()

COMPLIANCE_ICONS = {
    Compliance.COMPLIANT: "[green][PASS][/green]",
    Compliance.NON_COMPLIANT: "[red][FAIL][/red]",
    Compliance.UNKNOWN: "[yellow][????][/yellow]",
    Compliance.NOT_APPLICABLE: "[dim][N/A ][/dim]",
}


def print_banner():
    """Print the application banner."""
    from ... import __version__
    banner = f"""
+==============================================================+
|                       winposture v{__version__:<8}                   |
|              Windows security posture audit                  |
+==============================================================+
"""
    console.print(banner, style="bold cyan")


def print_source(source: str):
    """Print where the audited state comes from."""
    console.print(f"[dim]State source: {escape(source)}[/dim]")
    console.print()


def create_progress() -> Progress:
    """Create a progress bar for auditing."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True
    )


def print_finding(finding: Finding, verbose: bool = False):
    """Print a single finding."""
    icon = COMPLIANCE_ICONS.get(finding.compliance, "[dim][????][/dim]")
    name = finding.field_name or finding.subject
    console.print(f"  {icon} {escape(name)} = {escape(finding.display_value)}")
    console.print(f"      [dim]{escape(finding.description)}[/dim]")
    if verbose:
        console.print(f"      [dim]{escape(finding.subject)}[/dim]")
        for key, value in finding.details.items():
            console.print(f"      [dim]{escape(key)}: {escape(str(value))}[/dim]")


def print_check_result(result: CheckResult, verbose: bool = False):
    """Print results from a single check."""
    status = "[green][OK][/green]" if result.success else "[red][X][/red]"
    console.print(f"\n{status} [bold]{escape(result.check_name)}[/bold] ({result.duration_ms:.0f}ms)")

    if result.error:
        console.print(f"  [red]Error: {escape(result.error)}[/red]")
    if not result.findings:
        console.print("  [dim]Nothing to report[/dim]")
    for finding in result.findings:
        print_finding(finding, verbose)


def print_report(report: AuditReport, verbose: bool = False):
    """Print the full audit report."""
    # Group results by category
    categories = {}
    for result in report.results:
        categories.setdefault(result.category.upper(), []).append(result)

    for category, results in categories.items():
        console.print(f"\n[bold cyan]=== {category} ===[/bold cyan]")
        for result in results:
            print_check_result(result, verbose)

    print_summary(report)


def print_summary(report: AuditReport):
    """Print summary statistics."""
    console.print("\n" + "=" * 60)
    console.print("[bold]SUMMARY[/bold]")
    console.print("=" * 60)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right")

    table.add_row("OS Version", str(report.system_info.get("os_version", "unknown")))
    table.add_row("Checks Run", str(len(report.results)))
    table.add_row("Duration", f"{report.total_duration_ms:.0f}ms")
    table.add_row("[green]Compliant[/green]", f"[green]{report.compliant_count}[/green]")
    table.add_row("[red]Non-compliant[/red]", f"[red]{report.non_compliant_count}[/red]")
    table.add_row("[yellow]Unknown / N/A[/yellow]", f"[yellow]{report.unknown_count}[/yellow]")

    console.print(table)

    console.print()
    if report.non_compliant_count > 0:
        console.print("[red bold][!!] Hardening gaps found - review the failed findings[/red bold]")
    elif report.unknown_count > 0:
        console.print("[yellow bold][!] No gaps found, but some settings could not be assessed[/yellow bold]")
    else:
        console.print("[green bold][OK] All assessed settings are compliant[/green bold]")
    console.print()


def print_error(message: str):
    """Print an error message."""
    console.print(f"[red bold]Error:[/red bold] {escape(message)}")


def print_success(message: str):
    """Print a success message."""
    console.print(f"[green][OK][/green] {escape(message)}")


def print_info(message: str):
    """Print an info message."""
    console.print(f"[blue][i][/blue] {escape(message)}")
