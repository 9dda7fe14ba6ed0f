"""toolbench CLI entrypoint."""

from __future__ import annotations

import logging
import sys

import click

from toolbench import __version__


@click.group()
@click.version_option(version=__version__, prog_name="toolbench")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=False, dir_okay=False),
    help="Config YAML (defaults to ./toolbench.yaml when present).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """toolbench — fill in, call, and inspect MCP tools."""
    from toolbench.cli_commands._output import console
    from toolbench.config import load_config
    from toolbench.errors import ConfigError

    _configure_logging(verbose)

    try:
        config = load_config(config_path)
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    if config.telemetry.enabled:
        from toolbench.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                export_to_console=config.telemetry.otlp_endpoint is None,
                otlp_endpoint=config.telemetry.otlp_endpoint,
            )
        except ImportError as exc:
            console.print(f"[yellow]Telemetry disabled:[/yellow] {exc}")

    ctx.obj = config


def _configure_logging(verbose: bool) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


# Register subcommands
from toolbench.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
