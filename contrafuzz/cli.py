"""
contrafuzz CLI — the main entry point.

Usage:
    contrafuzz list-fuzzers
    contrafuzz mutate " abc" --into "john"
    contrafuzz config --output-dir reports --timestamp
    contrafuzz run --url http://localhost:8080 --path /users --method POST \\
        --body '{"name": "john"}' --required name -H "X-Api-Key: secret"
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx
import typer
from rich import box
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from contrafuzz import __version__
from contrafuzz.client.http_caller import HttpCaller
from contrafuzz.config import get_reporting_config, save_config
from contrafuzz.fuzzer.registry import ALL_VARIANTS, VARIANT_MAP, get_variants
from contrafuzz.fuzzer.runner import FuzzRunner
from contrafuzz.fuzzer.strategy import classify, format_value, merge
from contrafuzz.models import FuzzingData
from contrafuzz.report.exporter import TestCaseExporter
from contrafuzz.report.listener import TestCaseListener
from contrafuzz.ui import console, print_banner, print_section

app = typer.Typer(
    name="contrafuzz",
    help="⚡ Negative testing for REST APIs — edge-case values in fields and headers.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_headers(header_list: list[str]) -> dict[str, str]:
    """Parse list of 'Key: Value' strings into a dictionary."""
    headers = {}
    for h in header_list:
        if ":" in h:
            key, value = h.split(":", 1)
            headers[key.strip()] = value.strip()
        else:
            console.print(
                f"[yellow]Warning: Invalid header format '{h}', expected 'Key: Value'[/yellow]"
            )
    return headers


def _split(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def _version_callback(value: bool):
    if value:
        console.print(f"contrafuzz v{__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-V", help="Show version and exit.", callback=_version_callback, is_eager=True),
):
    """contrafuzz — negative testing for REST API contracts."""
    if ctx.invoked_subcommand is None:
        print_banner()


# ─── LIST-FUZZERS COMMAND ────────────────────────────────────────────────────

@app.command("list-fuzzers")
def list_fuzzers():
    """List registered fuzzers and the response codes they expect."""
    table = Table(box=box.SIMPLE_HEAVY, border_style="cyan")
    table.add_column("Fuzzer", style="bold magenta")
    table.add_column("Target")
    table.add_column("Strategy")
    table.add_column("Req field", justify="center")
    table.add_column("Opt field", justify="center")
    table.add_column("Pattern", justify="center")
    table.add_column("Req header", justify="center")
    table.add_column("Opt header", justify="center")

    for variant in ALL_VARIANTS:
        policy = variant.policy.as_dict()
        table.add_row(
            variant.name,
            variant.target.value,
            variant.kind.value if variant.kind else "auto",
            policy["required_field"],
            policy["optional_field"],
            policy["pattern_mismatch_field"],
            policy["required_header"],
            policy["optional_header"],
        )
    console.print(table)
    console.print(f"  [muted]{len(ALL_VARIANTS)} fuzzers registered[/muted]")


# ─── MUTATE COMMAND ──────────────────────────────────────────────────────────

@app.command()
def mutate(
    value: str = typer.Argument(..., help="Fuzz value to classify"),
    into: str = typer.Option("", "--into", "-i", help="Valid sample value to merge the fuzz value into"),
):
    """Show how a fuzz value is classified and merged into a sample value."""
    strategy = classify(value)
    console.print(f"  [accent]Strategy:[/accent] {strategy.truncated_value()}")
    console.print(f"  [accent]Merged:[/accent]   {format_value(merge(value, into))}")


# ─── RUN COMMAND ─────────────────────────────────────────────────────────────

@app.command()
def run(
    url: str = typer.Option(..., "--url", "-u", help="Base URL of the service"),
    path: str = typer.Option(..., "--path", "-p", help="Operation path, e.g. /users"),
    method: str = typer.Option("POST", "--method", "-m", help="HTTP method"),
    body: str = typer.Option("{}", "--body", "-b", help="Valid JSON request body"),
    required: Optional[str] = typer.Option(None, "--required", "-r", help="Comma-separated required fields"),
    header: list[str] = typer.Option([], "--header", "-H", help="HTTP header in 'Key: Value' format"),
    required_headers: Optional[str] = typer.Option(None, "--required-headers", help="Comma-separated required headers"),
    fuzzers: Optional[str] = typer.Option(None, "--fuzzers", "-f", help="Comma-separated fuzzer names (default: all)"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Report directory"),
    timestamp: Optional[bool] = typer.Option(None, "--timestamp/--no-timestamp", help="Write the report in a timestamped sub folder"),
    stats: Optional[bool] = typer.Option(None, "--stats/--no-stats", help="Print response time statistics per endpoint"),
    timeout: float = typer.Option(5.0, "--timeout", "-t", help="Request timeout in seconds"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print the summary"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Verbose logging"),
):
    """Fuzz one API operation and write the HTML report."""
    _setup_logging(debug)

    try:
        target = httpx.URL(f"{url.rstrip('/')}{path}")
    except httpx.InvalidURL as e:
        console.print(f"[danger]Invalid --url: {escape(str(e))}[/danger]")
        raise typer.Exit(1)
    if target.scheme not in ("http", "https") or not target.host:
        console.print(f"[danger]Invalid --url {escape(url)!r}, expected an http or https URL with a host[/danger]")
        raise typer.Exit(1)

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        console.print(f"[danger]Invalid --body JSON: {e}[/danger]")
        raise typer.Exit(1)
    if not isinstance(payload, dict):
        console.print("[danger]--body must be a JSON object[/danger]")
        raise typer.Exit(1)

    names = _split(fuzzers)
    unknown = [n for n in names if n not in VARIANT_MAP]
    if unknown:
        console.print(f"[danger]Unknown fuzzers: {', '.join(unknown)}[/danger]")
        raise typer.Exit(1)

    data = FuzzingData(
        path=path,
        method=method.upper(),
        payload=payload,
        required_fields=_split(required),
        headers=_parse_headers(header),
        required_headers=_split(required_headers),
    )
    config = get_reporting_config(
        output_dir=output_dir,
        timestamp_reports=timestamp,
        print_execution_statistics=stats,
    )

    if not quiet:
        print_banner()
        print_section("Fuzzing", "🔥")

    exporter = TestCaseExporter(config)
    report_path = exporter.initialize()
    listener = TestCaseListener(exporter, quiet=quiet)

    with HttpCaller(url, timeout=timeout) as caller:
        FuzzRunner(caller, listener, get_variants(names), show_progress=not quiet).run(data)

    listener.end_session()
    console.print(f"  [accent]Report:[/accent] {report_path.resolve() / 'index.html'}")
    if listener.errors:
        raise typer.Exit(1)


# ─── CONFIG COMMAND ──────────────────────────────────────────────────────────

@app.command("config")
def configure(
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Default report directory"),
    timestamp: Optional[bool] = typer.Option(None, "--timestamp/--no-timestamp", help="Write reports in timestamped sub folders by default"),
    stats: Optional[bool] = typer.Option(None, "--stats/--no-stats", help="Print response time statistics by default"),
):
    """
    Save default report settings.

    Saves config to ~/.contrafuzz/config.json for all future runs. Without
    options, shows the settings currently in effect.
    """
    settings = {
        "output_dir": output_dir,
        "timestamp_reports": timestamp,
        "print_execution_statistics": stats,
    }
    settings = {k: v for k, v in settings.items() if v is not None}
    if settings:
        save_config(**settings)
        console.print("  [success]✔ Saved to ~/.contrafuzz/config.json[/success]")

    current = get_reporting_config()
    console.print(f"  [accent]Report directory:[/accent] {escape(current.output_dir)}")
    console.print(f"  [accent]Timestamped:[/accent]      {current.timestamp_reports}")
    console.print(f"  [accent]Statistics:[/accent]       {current.print_execution_statistics}")


if __name__ == "__main__":
    app()
