"""Session layer — tool catalog and the invocation controller."""

from toolbench.session.catalog import ToolCatalog
from toolbench.session.controller import InvocationState, ToolInvocationController

__all__ = [
    "InvocationState",
    "ToolCatalog",
    "ToolInvocationController",
]
