"""
contrafuzz terminal UI theme.
"""

from rich.console import Console
from rich.table import Table
from rich.theme import Theme
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeElapsedColumn
from rich import box

from contrafuzz import __version__

# ── Custom Theme ─────────────────────────────────────────────────────────────

CONTRAFUZZ_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "danger": "red bold",
    "success": "green bold",
    "muted": "dim white",
    "accent": "bold cyan",
    "verdict.success": "green",
    "verdict.warning": "yellow",
    "verdict.error": "bold red",
    "endpoint": "bold magenta",
    "value": "green",
})

console = Console(theme=CONTRAFUZZ_THEME)

SMALL_BANNER = f"[bold cyan]⚡ contrafuzz[/bold cyan] [dim]v{__version__}[/dim]"


def print_banner():
    console.print(SMALL_BANNER)


def print_section(title: str, icon: str = "─"):
    """Print a section divider."""
    console.print()
    console.rule(f"[bold cyan] {icon} {title} [/bold cyan]", style="dim cyan")
    console.print()


def print_case(case_id: str, fuzzer: str, verdict: str, reason: str = ""):
    """Print one finished test case."""
    style = f"verdict.{verdict}"
    console.print(
        f"  [{style}]{verdict.upper().ljust(8)}[/{style}] "
        f"[bold white]{case_id}[/bold white] [muted]{fuzzer}[/muted]"
    )
    if reason:
        console.print(f"           [muted]{reason}[/muted]")


def print_summary(total: int, success: int, warnings: int, errors: int):
    """Print run summary."""
    console.print()
    table = Table(
        box=box.DOUBLE_EDGE,
        title="[bold white]Run Summary[/bold white]",
        border_style="cyan",
        padding=(0, 2),
    )
    table.add_column("Result", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("[verdict.success]SUCCESS[/verdict.success]", str(success))
    table.add_row("[verdict.warning]WARNING[/verdict.warning]", str(warnings))
    table.add_row("[verdict.error]ERROR[/verdict.error]", str(errors))
    table.add_section()
    table.add_row("[bold white]TOTAL[/bold white]", f"[bold white]{total}[/bold white]")
    console.print(table)

    if errors > 0:
        console.print("\n  [danger]⚠  Some responses did not match the expected code family.[/danger]")
    elif total == 0:
        console.print("\n  [warning]No test cases were executed.[/warning]")
    else:
        console.print("\n  [success]✔  All responses matched their expectations.[/success]")
    console.print()


def print_execution_details(details):
    """Print response time statistics for one endpoint."""
    console.print(f"  Details for path [endpoint]{details.path}[/endpoint]")
    console.print(f"    [yellow]Average response time:[/yellow] [bold]{details.average:,.2f}ms[/bold]")
    console.print(f"    [red]Worst case response time:[/red] [bold]{details.worst_case}[/bold]")
    console.print(f"    [green]Best case response time:[/green] [bold]{details.best_case}[/bold]")
    console.print(
        f"    [muted]{len(details.executions)} executed tests (sorted by response time):[/muted] "
        f"{', '.join(details.executions)}"
    )
    console.print()


def get_progress() -> Progress:
    """Get a styled progress bar."""
    return Progress(
        SpinnerColumn("dots", style="cyan"),
        TextColumn("[bold cyan]{task.description}"),
        BarColumn(bar_width=30, style="dim cyan", complete_style="cyan"),
        TextColumn("[muted]{task.percentage:>3.0f}%[/muted]"),
        TimeElapsedColumn(),
        console=console,
    )
