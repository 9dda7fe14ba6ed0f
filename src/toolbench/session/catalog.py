"""ToolCatalog — the paginated list of tools a server exposes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toolbench.protocols.mcp.models import MCPToolDef
    from toolbench.protocols.provider import ToolSource
    from toolbench.session.controller import ToolInvocationController

logger = logging.getLogger(__name__)


class ToolCatalog:
    """Accumulates ``tools/list`` pages and forwards selections to a controller.

    ``next_cursor`` is the server's pagination cursor; once the list is loaded
    and no cursor remains there is nothing more to fetch.
    """

    def __init__(self, controller: ToolInvocationController | None = None) -> None:
        self._controller = controller
        self.tools: list[MCPToolDef] = []
        self.next_cursor: str | None = None

    @property
    def can_load_more(self) -> bool:
        return bool(self.next_cursor) or not self.tools

    @property
    def button_text(self) -> str:
        return "List More Tools" if self.next_cursor else "List Tools"

    async def load_more(self, source: ToolSource) -> list[MCPToolDef]:
        """Fetch the next page from *source* and append it; returns the new tools."""
        page = await source.list_tools(self.next_cursor)
        self.tools.extend(page.tools)
        self.next_cursor = page.next_cursor
        logger.debug("ToolCatalog: %d tool(s) loaded, cursor %r", len(self.tools), self.next_cursor)
        return page.tools

    async def load_all(self, source: ToolSource) -> list[MCPToolDef]:
        """Fetch pages until no cursor remains."""
        await self.load_more(source)
        while self.next_cursor:
            await self.load_more(source)
        return self.tools

    def clear(self) -> None:
        """Forget every loaded tool and deselect."""
        self.tools = []
        self.next_cursor = None
        if self._controller is not None:
            self._controller.select(None)

    def get(self, name: str) -> MCPToolDef | None:
        return next((tool for tool in self.tools if tool.name == name), None)

    def select(self, name: str) -> MCPToolDef:
        """Select the tool called *name* on the controller.

        Raises:
            KeyError: If no loaded tool has that name.
        """
        tool = self.get(name)
        if tool is None:
            raise KeyError(name)
        if self._controller is not None:
            self._controller.select(tool)
        return tool
