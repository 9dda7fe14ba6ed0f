"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from toolbench.cli_commands.render import render_cmd
    from toolbench.cli_commands.tools import tools

    cli.add_command(tools)
    cli.add_command(render_cmd)
