"""Protocol layer — MCP client and the tool source interface."""

from toolbench.protocols.errors import (
    ConnectionError,
    ProtocolError,
    ToolExecutionError,
    ToolNotFoundError,
)
from toolbench.protocols.provider import ToolSource

__all__ = [
    "ConnectionError",
    "ProtocolError",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolSource",
]
