"""ToolSource protocol — what the invocation controller and catalog need from a server.

:class:`~toolbench.protocols.mcp.client.MCPClient` satisfies it; tests
substitute in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from toolbench.protocols.mcp.models import ToolPage


@runtime_checkable
class ToolSource(Protocol):
    """Lists and calls tools exposed by an external service."""

    async def list_tools(self, cursor: str | None = None) -> ToolPage:
        """Return one page of tools, starting after *cursor*."""
        ...

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        """Call a tool by name and return its raw result payload."""
        ...
