"""Configuration — the optional ``toolbench.yaml`` server registry.

Example YAML::

    servers:
      fs:
        transport: stdio
        command: npx @modelcontextprotocol/server-filesystem ${HOME}
        env: {LOG_LEVEL: debug}
      remote:
        transport: websocket
        url: ws://localhost:8080
    telemetry:
      enabled: true
      otlp_endpoint: http://localhost:4317
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from toolbench.errors import ConfigError

DEFAULT_CONFIG_FILE = "toolbench.yaml"


class MCPServerRef(BaseModel):
    """How to reach one MCP server."""

    name: str
    transport: Literal["stdio", "websocket"] = "stdio"
    command: str | None = None
    url: str | None = None
    env: dict[str, str] = {}


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class BenchConfig(BaseModel):
    """Top-level configuration parsed from YAML."""

    servers: dict[str, MCPServerRef] = Field(default_factory=dict)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @model_validator(mode="before")
    @classmethod
    def _name_servers(cls, data: Any) -> Any:
        # Server entries are keyed by name; the name need not be repeated inside.
        if isinstance(data, dict) and isinstance(data.get("servers"), dict):
            servers = {
                name: {"name": name, **entry} if isinstance(entry, dict) else entry
                for name, entry in data["servers"].items()
            }
            data = {**data, "servers": servers}
        return data

    def resolve_server(self, server: str, transport: str = "stdio") -> MCPServerRef:
        """Look *server* up by name, else treat it as a command or URL."""
        if server in self.servers:
            return self.servers[server]
        if transport == "websocket":
            return MCPServerRef(name="cli", transport="websocket", url=server)
        return MCPServerRef(name="cli", transport="stdio", command=server)


class ConfigLoader:
    """Load and validate a config YAML file into a :class:`BenchConfig`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> BenchConfig:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  An empty file
        yields the default configuration.

        Raises:
            ConfigError: On read errors, YAML parse errors, or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            return BenchConfig()
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")

        try:
            return BenchConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_config(path: str | Path | None = None) -> BenchConfig:
    """Load *path*, or ``toolbench.yaml`` from the working directory if present."""
    if path is not None:
        return ConfigLoader(Path(path)).load()
    default = Path.cwd() / DEFAULT_CONFIG_FILE
    if default.is_file():
        return ConfigLoader(default).load()
    return BenchConfig()
