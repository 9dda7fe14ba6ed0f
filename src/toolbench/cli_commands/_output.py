"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from toolbench.protocols.mcp.models import MCPToolDef  # noqa: TC001
from toolbench.results.plan import (
    AudioDirective,
    ImageDirective,
    InvalidResultPlan,
    JsonDirective,
    LegacyPlan,
    RenderPlan,
    SuccessPlan,
    TextDirective,
)
from toolbench.schema.form import FallbackField, FormField, iter_fields

console = Console()


def print_tools_table(tools: list[MCPToolDef]) -> None:
    """Pretty-print tool definitions as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Parameters")

    for tool in tools:
        table.add_row(
            tool.name,
            _truncate(tool.description),
            ", ".join(tool.parameters()) or "-",
        )

    console.print(table)


def print_form(root: FormField) -> None:
    """Print every field of a rendered parameter form with its current value."""
    table = Table(title="Parameters")
    table.add_column("Path", style="cyan")
    table.add_column("Kind")
    table.add_column("Value")
    table.add_column("Description")

    for field in iter_fields(root):
        if not field.path or field.children:
            continue
        shown = (
            json.dumps(field.display, default=str)
            if isinstance(field, FallbackField)
            else str(field.display)
        )
        table.add_row(
            field.display_name,
            field.schema.kind,
            _truncate(shown),
            _truncate(field.schema.description or ""),
        )

    console.print(table)


def print_render_plan(plan: RenderPlan | None, *, as_json: bool = False) -> None:
    """Print a classified tool result."""
    if plan is None:
        console.print("[yellow]No result to show.[/yellow]")
        return

    if as_json:
        console.print_json(plan.model_dump_json())
        return

    if isinstance(plan, SuccessPlan):
        status = "[red]Error[/red]" if plan.is_error else "[green]Success[/green]"
        console.print(f"[bold]Tool Result:[/bold] {status}")
        for directive in plan.directives:
            _print_directive(directive)
    elif isinstance(plan, InvalidResultPlan):
        console.print("[bold]Invalid Tool Result:[/bold]")
        _print_json(plan.raw)
        console.print("[bold]Errors:[/bold]")
        for error in plan.errors:
            _print_json(error)
    elif isinstance(plan, LegacyPlan):
        console.print("[bold]Tool Result (Legacy):[/bold]")
        _print_json(plan.value)


def _print_directive(
    directive: TextDirective | ImageDirective | AudioDirective | JsonDirective,
) -> None:
    if isinstance(directive, TextDirective):
        console.print(Text(directive.text, style="red" if directive.is_error else ""))
    elif isinstance(directive, ImageDirective):
        console.print(f"[magenta]image[/magenta] {directive.mime_type}  {_truncate(directive.src)}")
    elif isinstance(directive, AudioDirective):
        console.print(f"[magenta]audio[/magenta] {directive.mime_type}  {_truncate(directive.src)}")
    else:
        _print_json(directive.data)


def _print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
