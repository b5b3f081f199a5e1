from __future__ import annotations

import json
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from license_search.domain.models import LicenseRecord
from license_search.pipeline.abstract import SearchSummary

OUTPUT_FORMATS = ("pretty", "json")


def summary_line(count: int) -> str:
    return f"Found {count} total licenses"


class ConsoleRenderer:
    """
    Render records and errors to a rich console (stderr by default).

    ``pretty`` prints each record as indented, syntax-highlighted JSON;
    ``json`` prints one compact JSON object per line for piping into other
    tools.
    """

    def __init__(self, output_format: str = "pretty", console: Optional[Console] = None) -> None:
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format '{output_format}'. Available: {', '.join(OUTPUT_FORMATS)}"
            )
        self.output_format = output_format
        self.console = console or Console(stderr=True)

    def render_record(self, record: LicenseRecord) -> None:
        if self.output_format == "json":
            self.console.print(
                json.dumps(record, ensure_ascii=False),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        else:
            self.console.print_json(data=record)

    def render_error(self, error: BaseException) -> None:
        self.console.print(
            "[bold red]There was an error while processing your request:[/bold red] "
            f"{escape(str(error))}"
        )


def print_session_stats(summary: SearchSummary, console: Optional[Console] = None) -> None:
    """
    Render the session bookkeeping as a rich table.
    """
    console = console or Console(stderr=True)
    session = summary.get("session") or {}

    table = Table(title="License Search Session", box=box.ROUNDED)
    table.add_column("Outcome", style="cyan", no_wrap=True)
    table.add_column("Pages", justify="right", style="blue")
    table.add_column("Records", justify="right", style="magenta")
    table.add_column("Errors", justify="right", style="red")
    table.add_column("Duration (s)", justify="right", style="green")

    table.add_row(
        str(session.get("outcome", "unknown")),
        str(session.get("pages", 0)),
        f"{summary.get('count', 0):,}",
        str(len(summary.get("errors", []))),
        f"{summary.get('duration_seconds', 0.0):.2f}",
    )
    console.print(table)


__all__ = ["OUTPUT_FORMATS", "ConsoleRenderer", "print_session_stats", "summary_line"]
