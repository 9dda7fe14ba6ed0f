"""Shared error types for the toolbench core."""


class ToolbenchError(Exception):
    """Base error for all toolbench failures outside the protocol layer."""


class ConfigError(ToolbenchError):
    """Raised when a config file fails reading, parsing, or validation."""


class NoToolSelectedError(ToolbenchError):
    """An invocation was requested but no tool is selected."""

    def __init__(self) -> None:
        super().__init__("No tool selected")


class JsonEditError(ToolbenchError):
    """Text submitted to the generic JSON editor is not valid JSON."""

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        msg = f"Invalid JSON for {path or '<root>'}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
