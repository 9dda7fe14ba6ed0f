"""Shared error types for the protocol layer."""


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class ConnectionError(ProtocolError):
    """Failed to connect to an MCP server."""


class ToolNotFoundError(ProtocolError):
    """Requested tool was not returned by the server's ``tools/list``."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class ToolExecutionError(ProtocolError):
    """The server answered ``tools/call`` with a JSON-RPC error."""

    def __init__(self, name: str, detail: str = "", code: int | None = None) -> None:
        self.name = name
        self.detail = detail
        self.code = code
        super().__init__(f"Tool execution failed: {name}" + (f": {detail}" if detail else ""))
