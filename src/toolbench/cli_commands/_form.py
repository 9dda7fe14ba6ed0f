"""Terminal editing of a controller's parameter form."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from toolbench.cli_commands._output import console
from toolbench.errors import ToolbenchError
from toolbench.schema.fallback import JsonEditor
from toolbench.schema.form import (
    CheckboxField,
    FallbackField,
    FormField,
    find_field,
    iter_fields,
    parse_path,
    set_at,
)

if TYPE_CHECKING:
    from toolbench.session.controller import ToolInvocationController


def split_assignment(assignment: str) -> tuple[str, str]:
    """Split ``PATH=VALUE``; the value may itself contain ``=``."""
    path, sep, value = assignment.partition("=")
    if not sep or not path:
        msg = f"expected PATH=VALUE, got {assignment!r}"
        raise ValueError(msg)
    return path, value


def apply_assignments(controller: ToolInvocationController, assignments: list[str]) -> None:
    """Apply each ``PATH=VALUE`` edit in order, re-rendering between edits."""
    for assignment in assignments:
        path, value = split_assignment(assignment)
        set_at(controller.form(), parse_path(path), value)


def prompt_parameters(controller: ToolInvocationController) -> None:
    """Ask for every leaf field in declaration order."""
    paths = [f.path for f in iter_fields(controller.form()) if f.path and not f.children]
    for path in paths:
        while True:
            field = find_field(controller.form(), path)
            if field is None:
                break
            text = click.prompt(
                f"{field.display_name} ({field.schema.kind})",
                default=_default_text(field),
                show_default=True,
            )
            try:
                field.set_text(text)
            except (ToolbenchError, ValueError) as exc:
                console.print(f"[red]{exc}[/red]")
                continue
            break


def _default_text(field: FormField) -> str:
    if isinstance(field, CheckboxField):
        return "true" if field.display else "false"
    if isinstance(field, FallbackField):
        if isinstance(field.editor, JsonEditor):
            return json.dumps(field.editor.value)
        return json.dumps(field.value, default=str)
    return str(field.display)
