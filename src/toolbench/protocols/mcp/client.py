"""MCPClient — connects to an MCP server and lists and calls its tools.

Implements tool discovery (``tools/list``, with cursor pagination) and
execution (``tools/call``) over an :class:`MCPTransport`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from toolbench import __version__
from toolbench.protocols.errors import (
    ConnectionError,
    ProtocolError,
    ToolExecutionError,
    ToolNotFoundError,
)
from toolbench.protocols.mcp.models import JsonRpcRequest, JsonRpcResponse, MCPToolDef, ToolPage
from toolbench.protocols.mcp.transport import MCPTransport, StdioTransport, WebSocketTransport

if TYPE_CHECKING:
    from toolbench.config import MCPServerRef

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"


class MCPClient:
    """Async context manager that connects to an MCP server.

    Satisfies the :class:`~toolbench.protocols.provider.ToolSource` protocol.

    Usage::

        ref = MCPServerRef(name="fs", command="npx @mcp/filesystem")
        async with MCPClient(ref) as client:
            page = await client.list_tools()
            payload = await client.call_tool("read_file", {"path": "/tmp/x"})
    """

    def __init__(self, server_ref: MCPServerRef) -> None:
        self._ref = server_ref
        self._transport: MCPTransport | None = None
        self._tools: dict[str, MCPToolDef] = {}
        self._next_id = 1

    async def __aenter__(self) -> MCPClient:
        await self.connect()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def connect(self) -> None:
        """Create the transport, connect, and perform the initialize handshake."""
        self._transport = self._create_transport()
        try:
            await self._transport.connect()
        except Exception as exc:
            raise ConnectionError(str(exc)) from exc
        await self._handshake()

    async def close(self) -> None:
        """Close the underlying transport."""
        if self._transport is not None:
            await self._transport.close()
            self._transport = None

    async def list_tools(self, cursor: str | None = None) -> ToolPage:
        """Send ``tools/list`` and return one page of tool definitions.

        Tools seen on any page become callable through :meth:`call_tool`.
        """
        params: dict[str, Any] = {"cursor": cursor} if cursor else {}
        response = await self._send_request("tools/list", params=params)
        if response.error is not None:
            msg = f"tools/list failed: {response.error.message}"
            raise ConnectionError(msg)

        page = ToolPage.model_validate(response.result or {})
        for tool in page.tools:
            self._tools[tool.name] = tool
        logger.debug("MCPClient: listed %d tool(s), next cursor %r", len(page.tools), page.next_cursor)
        return page

    async def list_all_tools(self) -> list[MCPToolDef]:
        """Follow ``nextCursor`` until every page has been fetched."""
        tools: list[MCPToolDef] = []
        cursor: str | None = None
        while True:
            page = await self.list_tools(cursor)
            tools.extend(page.tools)
            cursor = page.next_cursor
            if not cursor:
                return tools

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Send ``tools/call`` for the named tool and return the raw result payload."""
        if name not in self._tools:
            raise ToolNotFoundError(name)

        response = await self._send_request(
            "tools/call",
            params={"name": name, "arguments": arguments},
        )

        if response.error is not None:
            raise ToolExecutionError(name, response.error.message, code=response.error.code)
        return response.result or {}

    def _create_transport(self) -> MCPTransport:
        """Build the appropriate transport from the server reference."""
        if self._ref.transport == "stdio":
            if not self._ref.command:
                msg = "MCPServerRef with stdio transport must specify 'command'"
                raise ValueError(msg)
            env = dict(self._ref.env) if self._ref.env else None
            return StdioTransport(command=self._ref.command, env=env)
        if not self._ref.url:
            msg = "MCPServerRef with websocket transport must specify 'url'"
            raise ValueError(msg)
        return WebSocketTransport(url=self._ref.url)

    async def _handshake(self) -> None:
        """Perform the MCP initialize handshake."""
        response = await self._send_request(
            "initialize",
            params={
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": "toolbench", "version": __version__},
            },
        )
        if response.error is not None:
            raise ConnectionError(f"initialize failed: {response.error.message}")
        await self._send_notification("notifications/initialized")

    async def _send_notification(self, method: str) -> None:
        if self._transport is None:
            msg = "Client not connected"
            raise RuntimeError(msg)
        await self._transport.send({"jsonrpc": "2.0", "method": method})

    async def _send_request(
        self,
        method: str,
        params: dict[str, Any] | None = None,
    ) -> JsonRpcResponse:
        """Send a JSON-RPC request and wait for the response carrying its id.

        Server notifications and requests received in between are skipped.
        """
        if self._transport is None:
            msg = "Client not connected"
            raise RuntimeError(msg)

        request_id = self._next_id
        self._next_id += 1

        request = JsonRpcRequest(
            method=method,
            id=request_id,
            params=params or {},
        )
        await self._transport.send(request.model_dump())
        while True:
            raw = await self._transport.receive()
            if "method" not in raw:
                if raw.get("id") == request_id:
                    return JsonRpcResponse.model_validate(raw)
                if raw.get("id") is None and "error" in raw:
                    # The server could not tell which request failed (e.g. a parse error).
                    error = JsonRpcResponse.model_validate(raw).error
                    detail = error.message if error else "unknown error"
                    raise ProtocolError(f"{method} failed: server reported {detail}")
            logger.debug("MCPClient: skipping message %s while awaiting %s", raw.get("method"), method)
