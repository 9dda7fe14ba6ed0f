"""``toolbench tools`` — list, seed, and call tools on an MCP server."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import TYPE_CHECKING

import click

from toolbench.cli_commands._form import apply_assignments, prompt_parameters, split_assignment
from toolbench.cli_commands._output import console, print_form, print_render_plan, print_tools_table
from toolbench.errors import ToolbenchError

if TYPE_CHECKING:
    from toolbench.config import BenchConfig, MCPServerRef
    from toolbench.protocols.mcp.models import MCPToolDef
    from toolbench.results.plan import RenderPlan

_transport_option = click.option(
    "--transport",
    type=click.Choice(["stdio", "websocket"]),
    default="stdio",
    help="MCP server transport type (ignored for servers named in the config).",
)


@click.group()
def tools() -> None:
    """List, seed, and call tools."""


@tools.command("list")
@click.argument("server")
@_transport_option
@click.option("--all", "fetch_all", is_flag=True, help="Follow pagination to the last page.")
@click.pass_obj
def list_tools(config: BenchConfig, server: str, transport: str, fetch_all: bool) -> None:
    """List the tools exposed by SERVER.

    SERVER is a name from the config, or the command (for stdio) or URL
    (for websocket) of the MCP server.
    """
    from toolbench.protocols.mcp.client import MCPClient
    from toolbench.session.catalog import ToolCatalog

    ref = config.resolve_server(server, transport)

    async def _list() -> ToolCatalog:
        catalog = ToolCatalog()
        async with MCPClient(ref) as client:
            if fetch_all:
                await catalog.load_all(client)
            else:
                await catalog.load_more(client)
        return catalog

    try:
        catalog = asyncio.run(_list())
    except Exception as exc:
        console.print(f"[red]Discovery error:[/red] {exc}")
        sys.exit(1)

    if not catalog.tools:
        console.print("[yellow]No tools discovered.[/yellow]")
        return

    print_tools_table(catalog.tools)
    if catalog.next_cursor:
        console.print("[dim]More tools available; rerun with --all to list them.[/dim]")


@tools.command("defaults")
@click.argument("server")
@click.argument("tool_name")
@_transport_option
@click.pass_obj
def defaults(config: BenchConfig, server: str, tool_name: str, transport: str) -> None:
    """Print the default parameters synthesized for TOOL_NAME."""
    from toolbench.schema.synthesizer import synthesize_parameters

    ref = config.resolve_server(server, transport)
    try:
        tool = asyncio.run(_fetch_tool(ref, tool_name))
    except Exception as exc:
        console.print(f"[red]Discovery error:[/red] {exc}")
        sys.exit(1)

    console.print_json(json.dumps(synthesize_parameters(tool.parameters()), default=str))


def _validate_assignments(
    _ctx: click.Context, _param: click.Parameter, value: tuple[str, ...]
) -> list[str]:
    for assignment in value:
        try:
            split_assignment(assignment)
        except ValueError as exc:
            raise click.BadParameter(str(exc)) from exc
    return list(value)


@tools.command("call")
@click.argument("server")
@click.argument("tool_name")
@_transport_option
@click.option(
    "--set",
    "assignments",
    multiple=True,
    callback=_validate_assignments,
    metavar="PATH=VALUE",
    help="Set a parameter; nested paths use dots (e.g. options.depth=2).",
)
@click.option("--interactive", "-i", is_flag=True, help="Prompt for every parameter.")
@click.option("--json", "as_json", is_flag=True, help="Print the render plan as JSON.")
@click.pass_obj
def call(
    config: BenchConfig,
    server: str,
    tool_name: str,
    transport: str,
    assignments: list[str],
    interactive: bool,
    as_json: bool,
) -> None:
    """Fill in the parameters of TOOL_NAME, call it, and print the result."""
    from toolbench.protocols.errors import ToolNotFoundError
    from toolbench.protocols.mcp.client import MCPClient
    from toolbench.session.catalog import ToolCatalog
    from toolbench.session.controller import ToolInvocationController

    ref = config.resolve_server(server, transport)

    async def _call() -> RenderPlan | None:
        async with MCPClient(ref) as client:
            controller = ToolInvocationController(client)
            catalog = ToolCatalog(controller)
            await catalog.load_all(client)
            if catalog.get(tool_name) is None:
                raise ToolNotFoundError(tool_name)
            catalog.select(tool_name)

            try:
                apply_assignments(controller, assignments)
                if interactive:
                    prompt_parameters(controller)
            except (ToolbenchError, ValueError, LookupError) as exc:
                raise click.UsageError(f"Parameter error: {exc}") from exc

            if not as_json:
                print_form(controller.form())
            await controller.invoke()
            return controller.render_plan

    try:
        plan = asyncio.run(_call())
    except click.UsageError:
        raise
    except Exception as exc:
        console.print(f"[red]Invocation error:[/red] {exc}")
        sys.exit(1)

    print_render_plan(plan, as_json=as_json)


async def _fetch_tool(ref: MCPServerRef, tool_name: str) -> MCPToolDef:
    from toolbench.protocols.errors import ToolNotFoundError
    from toolbench.protocols.mcp.client import MCPClient

    async with MCPClient(ref) as client:
        for tool in await client.list_all_tools():
            if tool.name == tool_name:
                return tool
    raise ToolNotFoundError(tool_name)

