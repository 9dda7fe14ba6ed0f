"""MCP protocol — Model Context Protocol client."""

from toolbench.protocols.mcp.client import MCPClient
from toolbench.protocols.mcp.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    ToolPage,
)
from toolbench.protocols.mcp.transport import MCPTransport, StdioTransport, WebSocketTransport

__all__ = [
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPClient",
    "MCPToolDef",
    "MCPTransport",
    "StdioTransport",
    "ToolPage",
    "WebSocketTransport",
]
