"""ToolInvocationController — selection, parameter editing, and single-flight calls.

The controller owns the ParameterSet of the selected tool.  Selecting a tool
re-synthesizes every parameter from its schema; each edit replaces the whole
ParameterSet with a new mapping.  :meth:`ToolInvocationController.invoke`
allows at most one call in flight: while one is running, further calls
return ``None`` without reaching the tool source.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from toolbench.errors import NoToolSelectedError
from toolbench.results.classifier import classify
from toolbench.schema.fallback import DEFAULT_FALLBACK, FallbackEditor
from toolbench.schema.form import FormField, render
from toolbench.schema.models import ObjectSchema, SchemaNode
from toolbench.schema.synthesizer import synthesize_parameters
from toolbench.utils.telemetry import (
    ATTR_RESULT_KIND,
    ATTR_TOOL_ARGUMENT_COUNT,
    ATTR_TOOL_NAME,
    SPAN_TOOL_INVOKE,
    get_tracer,
)

if TYPE_CHECKING:
    from toolbench.protocols.mcp.models import MCPToolDef
    from toolbench.protocols.provider import ToolSource
    from toolbench.results.plan import RenderPlan

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class InvocationState(str, Enum):
    """Whether a tool call is in flight."""

    IDLE = "idle"
    RUNNING = "running"


class ToolInvocationController:
    """Drives one tool: seed parameters, collect edits, invoke, hold the result.

    Usage::

        controller = ToolInvocationController(client)
        controller.select(tool)
        controller.edit("path", "/tmp/notes.txt")
        await controller.invoke()
        plan = controller.render_plan
    """

    def __init__(self, source: ToolSource, *, fallback: FallbackEditor = DEFAULT_FALLBACK) -> None:
        self._source = source
        self._fallback = fallback
        self._tool: MCPToolDef | None = None
        self._properties: dict[str, SchemaNode] = {}
        self._params: dict[str, Any] = {}
        self._result: Any = None
        self._state = InvocationState.IDLE

    # -- selection -----------------------------------------------------------

    @property
    def selected_tool(self) -> MCPToolDef | None:
        return self._tool

    def select(self, tool: MCPToolDef | None) -> None:
        """Select *tool* (or nothing) and seed a fresh ParameterSet.

        Does not cancel a call already in flight; its result still lands in
        the result slot when it arrives.
        """
        self._tool = tool
        self._properties = tool.parameters() if tool is not None else {}
        self._params = synthesize_parameters(self._properties, self._fallback)
        self._result = None
        logger.debug(
            "ToolInvocationController: selected %s with %d parameter(s)",
            tool.name if tool is not None else None,
            len(self._params),
        )

    # -- parameters ----------------------------------------------------------

    @property
    def params(self) -> dict[str, Any]:
        """The current ParameterSet.  Replaced, never mutated, on edit."""
        return self._params

    @property
    def properties(self) -> dict[str, SchemaNode]:
        return self._properties

    def form(self) -> FormField:
        """Render the ParameterSet; edits through the fields replace :attr:`params`."""
        root = ObjectSchema(properties=self._properties)
        return render(root, (), self._params, self._replace_params, self._fallback)

    def edit(self, key: str, value: Any) -> None:
        """Replace top-level parameter *key* with *value*."""
        self._replace_params({**self._params, key: value})

    def _replace_params(self, params: dict[str, Any]) -> None:
        self._params = params

    # -- invocation ----------------------------------------------------------

    @property
    def state(self) -> InvocationState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is InvocationState.RUNNING

    @property
    def result(self) -> Any:
        """The last payload delivered, or ``None``."""
        return self._result

    @property
    def render_plan(self) -> RenderPlan | None:
        return classify(self._result)

    async def invoke(self) -> Any:
        """Call the selected tool with the current ParameterSet.

        Returns the payload, or ``None`` if a call is already running.  Errors
        from the tool source propagate and leave the result slot untouched;
        the controller is idle again either way.

        Raises:
            NoToolSelectedError: If no tool is selected.
        """
        if self._tool is None:
            raise NoToolSelectedError
        if self._state is InvocationState.RUNNING:
            logger.debug("ToolInvocationController: %s already running, ignoring", self._tool.name)
            return None

        name = self._tool.name
        params = self._params
        self._state = InvocationState.RUNNING
        try:
            with _tracer.start_as_current_span(SPAN_TOOL_INVOKE) as span:
                span.set_attribute(ATTR_TOOL_NAME, name)
                span.set_attribute(ATTR_TOOL_ARGUMENT_COUNT, len(params))
                logger.debug("ToolInvocationController: invoking %s", name)
                payload = await self._source.call_tool(name, params)
                plan = classify(payload)
                span.set_attribute(ATTR_RESULT_KIND, plan.kind if plan is not None else "none")
            self._result = payload
            return payload
        finally:
            self._state = InvocationState.IDLE
            logger.debug("ToolInvocationController: %s settled", name)
