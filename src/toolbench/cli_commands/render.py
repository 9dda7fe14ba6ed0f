"""``toolbench render`` — classify and print a saved tool result."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from toolbench.cli_commands._output import console, print_render_plan
from toolbench.results.classifier import classify


@click.command("render")
@click.argument("result_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the render plan as JSON.")
def render_cmd(result_file: str, as_json: bool) -> None:
    """Classify a saved ``tools/call`` result and print it.

    RESULT_FILE is a JSON file holding the result payload.
    """
    path = Path(result_file)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        console.print(f"[red]Error loading result:[/red] {exc}")
        sys.exit(1)

    print_render_plan(classify(payload), as_json=as_json)
