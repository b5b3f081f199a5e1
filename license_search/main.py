from __future__ import annotations

import sys
from typing import Optional

import typer

from license_search.config import get_settings
from license_search.domain.models import FilterCriteria
from license_search.domain.query import build_where_clause
from license_search.errors import ConfigurationError
from license_search.orchestrator import SearchConfig, search as run_search_session
from license_search.reporter import (
    OUTPUT_FORMATS,
    ConsoleRenderer,
    print_session_stats,
    summary_line,
)
from license_search.utils.logging import configure_logging

app = typer.Typer(help="Search Texas professional license records.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    token_state = "set" if (settings.app_token or "").strip() else "missing"
    typer.echo(
        f"API={settings.api_url} | APP_TOKEN={token_state} | "
        f"page_size={settings.page_size} timeout={settings.timeout_seconds}s "
        f"log_level={settings.log_level}"
    )


@app.command()
def search(
    exp_date: str = typer.Option("", "--exp-date", "-e", help="The expiration date (eg. 12/16/2025)"),
    license_number: str = typer.Option(
        "", "--license-number", "-n", help="The license number (eg. 90210)"
    ),
    license_type: str = typer.Option(
        "", "--license-type", "-t", help="The license type to search for (eg. A/C Technician)"
    ),
    business_county: str = typer.Option(
        "", "--county", "-c", help="The business county (eg. HARRIS)"
    ),
    license_subtype: str = typer.Option(
        "", "--subtype", "-st", help="The license sub-type (eg. REG)"
    ),
    business_name: str = typer.Option(
        "", "--business-name", "-bn", help="The business name (eg. BOB'S PLUMBING)"
    ),
    owner_name: str = typer.Option("", "--owner-name", "-on", help="The owner name (eg. BOBS, BOBBY)"),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", min=1, help="The timeout in seconds (default from settings)."
    ),
    limit: int = typer.Option(0, "--limit", min=0, help="The max records to retrieve (0 = no limit)."),
    output_format: str = typer.Option(
        "pretty", "--format", "-f", help=f"Record output format: {', '.join(OUTPUT_FORMATS)}."
    ),
    stats: bool = typer.Option(False, "--stats", help="Print a session summary table."),
    show_query: bool = typer.Option(
        False, "--show-query", help="Print the generated where clause and exit."
    ),
) -> None:
    """
    Stream matching license records to stderr and print the total to stdout.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    criteria = FilterCriteria(
        exp_date=exp_date,
        license_number=license_number,
        license_type=license_type,
        business_county=business_county,
        license_subtype=license_subtype,
        business_name=business_name,
        owner_name=owner_name,
    )
    if show_query:
        typer.echo(build_where_clause(criteria) or "(no filters)")
        return

    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter(
            f"must be one of: {', '.join(OUTPUT_FORMATS)}", param_hint="--format"
        )

    try:
        config = SearchConfig.from_settings(settings, limit=limit, timeout_seconds=timeout)
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    renderer = ConsoleRenderer(output_format=output_format)
    summary = run_search_session(criteria, config, renderer)
    if stats:
        print_session_stats(summary, console=renderer.console)
    typer.echo(summary_line(summary["count"]))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
