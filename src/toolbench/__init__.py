"""toolbench — schema-driven parameter forms and result classification for MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from toolbench.results.classifier import classify as classify
    from toolbench.schema.form import render as render
    from toolbench.schema.synthesizer import synthesize as synthesize
    from toolbench.session.controller import ToolInvocationController as ToolInvocationController

_LAZY_EXPORTS = {
    "classify": "toolbench.results.classifier",
    "render": "toolbench.schema.form",
    "synthesize": "toolbench.schema.synthesizer",
    "ToolInvocationController": "toolbench.session.controller",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'toolbench' has no attribute {name!r}")
