"""Terminal and JSON output for suggestion records."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from prsift_core.models import SuggestionRecord

console = Console()

_KIND_STYLE = {"actionable": "red", "nit": "dim", "duplicate": "yellow", "additional": "blue"}
_SEVERITY_STYLE = {"high": "red", "medium": "yellow", "low": "dim"}


def _location(record: SuggestionRecord) -> str:
    path = record.file_path or ""
    if record.line_start is None:
        return path
    if record.line_end == record.line_start:
        return f"{path}:{record.line_start}"
    return f"{path}:{record.line_start}-{record.line_end}"


def print_json(records: list[SuggestionRecord]) -> None:
    click.echo(json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False))


def print_records(records: list[SuggestionRecord], show_prompts: bool = False) -> None:
    if not records:
        console.print("[green]No unresolved CodeRabbit suggestions.[/green]")
        return

    table = Table(title=f"CodeRabbit suggestions ({len(records)})", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Kind")
    table.add_column("Severity")
    table.add_column("Category")
    table.add_column("Location", overflow="fold")
    table.add_column("Summary", max_width=60)

    for r in records:
        kind_style = _KIND_STYLE.get(r.kind or "", "white")
        sev_style = _SEVERITY_STYLE.get(r.severity or "", "white")
        summary = r.body.strip().splitlines()[0] if r.body.strip() else ""
        table.add_row(
            str(r.id),
            f"[{kind_style}]{r.kind or '-'}[/{kind_style}]",
            f"[{sev_style}]{r.severity or '-'}[/{sev_style}]",
            escape(r.category or "-"),
            escape(_location(r)),
            escape(summary),
        )
    console.print(table)

    if show_prompts:
        for r in records:
            if r.agent_prompt:
                console.print(f"\n[bold]#{r.id}[/bold]  [cyan]{escape(_location(r))}[/cyan]")
                console.print(r.agent_prompt, markup=False)
