"""MCP transports — stdio and websocket communication layers.

Each transport satisfies the :class:`MCPTransport` protocol, providing
``connect``, ``send``, ``receive``, and ``close`` methods.  Both frame
messages with :func:`encode_message` and :func:`decode_message`.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
import os
import shlex
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from toolbench.protocols.errors import ProtocolError

logger = logging.getLogger(__name__)


@runtime_checkable
class MCPTransport(Protocol):
    """Abstract transport for MCP JSON-RPC communication."""

    async def connect(self) -> None: ...
    async def send(self, data: dict[str, Any]) -> None: ...
    async def receive(self) -> dict[str, Any]: ...
    async def close(self) -> None: ...


def encode_message(data: Mapping[str, Any]) -> str:
    """Serialize an outgoing message as strict JSON.

    ``nan`` and the infinities have no JSON spelling; they are sent as
    ``null``, which is what a browser's ``JSON.stringify`` does.
    """
    return json.dumps(_finite(data), allow_nan=False, ensure_ascii=False)


def decode_message(raw: str | bytes) -> dict[str, Any]:
    """Parse one incoming frame; it must be a JSON object."""
    try:
        message = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ProtocolError(f"Malformed message from server: {exc}") from exc
    if not isinstance(message, dict):
        raise ProtocolError(f"Expected a JSON object from server, got {type(message).__name__}")
    return message


def _finite(value: Any) -> Any:
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Mapping):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


class StdioTransport:
    """Talks to a server subprocess in newline-delimited JSON.

    Extra variables in *env* are layered over the current environment; the
    server's stderr is discarded.
    """

    def __init__(self, command: str, env: dict[str, str] | None = None) -> None:
        self._command = command
        self._env = env
        self._process: asyncio.subprocess.Process | None = None

    async def connect(self) -> None:
        argv = shlex.split(self._command)
        logger.debug("StdioTransport: launching %s", argv)
        self._process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
            env={**os.environ, **self._env} if self._env else None,
        )

    async def send(self, data: dict[str, Any]) -> None:
        stdin = self._pipes()[0]
        stdin.write(encode_message(data).encode() + b"\n")
        await stdin.drain()

    async def receive(self) -> dict[str, Any]:
        """Return the next message, skipping blank lines."""
        stdout = self._pipes()[1]
        while True:
            line = await stdout.readline()
            if not line:
                msg = "Transport closed"
                raise RuntimeError(msg)
            if line.strip():
                return decode_message(line)

    async def close(self) -> None:
        process, self._process = self._process, None
        if process is None:
            return
        if process.stdin:
            process.stdin.close()
        if process.returncode is None:
            process.terminate()
        await process.wait()

    def _pipes(self) -> tuple[asyncio.StreamWriter, asyncio.StreamReader]:
        process = self._process
        if process is None or process.stdin is None or process.stdout is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        return process.stdin, process.stdout


class WebSocketTransport:
    """Talks to a server over a WebSocket, one JSON message per frame.

    Requires the ``websockets`` package (optional dependency ``mcp-ws``).
    """

    def __init__(self, url: str) -> None:
        self._url = url
        self._ws: Any = None  # websockets.WebSocketClientProtocol

    async def connect(self) -> None:
        try:
            import websockets  # type: ignore[import-untyped]
        except ImportError as exc:
            msg = "websockets package required; install with: pip install toolbench[mcp-ws]"
            raise ImportError(msg) from exc
        logger.debug("WebSocketTransport: connecting to %s", self._url)
        self._ws = await websockets.connect(self._url, subprotocols=["mcp"])  # type: ignore[no-untyped-call]

    async def send(self, data: dict[str, Any]) -> None:
        await self._socket().send(encode_message(data))

    async def receive(self) -> dict[str, Any]:
        return decode_message(await self._socket().recv())

    async def close(self) -> None:
        ws, self._ws = self._ws, None
        if ws is not None:
            await ws.close()

    def _socket(self) -> Any:
        if self._ws is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        return self._ws
