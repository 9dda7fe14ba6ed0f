"""Tests for ``toolbench tools`` CLI commands."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from toolbench.cli import main
from toolbench.protocols.errors import ToolExecutionError
from toolbench.protocols.mcp.models import MCPToolDef, ToolPage

CONFIGURE = MCPToolDef(
    name="configure",
    description="Configure the widget",
    input_schema={
        "type": "object",
        "properties": {
            "flag": {"type": "boolean"},
            "options": {
                "type": "object",
                "properties": {"depth": {"type": "integer"}, "label": {"type": "string"}},
            },
            "items": {"type": "array", "items": {"type": "string"}},
        },
    },
)


def _mock_client(
    mock_client_cls: MagicMock,
    *,
    pages: list[ToolPage] | None = None,
    payload: Any = None,
    call_error: Exception | None = None,
) -> MagicMock:
    instance = mock_client_cls.return_value
    instance.__aenter__ = AsyncMock(return_value=instance)
    instance.__aexit__ = AsyncMock(return_value=False)
    instance.list_tools = AsyncMock(side_effect=pages or [ToolPage(tools=[CONFIGURE])])
    instance.list_all_tools = AsyncMock(return_value=[CONFIGURE])
    instance.call_tool = AsyncMock(return_value=payload, side_effect=call_error)
    return instance


class TestToolsList:
    def test_list_tools(self) -> None:
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls)
            result = CliRunner().invoke(main, ["tools", "list", "npx @mcp/fs"])

        assert result.exit_code == 0
        assert "configure" in result.output

    def test_list_reports_more_pages(self) -> None:
        pages = [ToolPage(tools=[CONFIGURE], next_cursor="c2")]
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls, pages=pages)
            result = CliRunner().invoke(main, ["tools", "list", "npx @mcp/fs"])

        assert result.exit_code == 0
        assert "--all" in result.output

    def test_list_all_follows_cursor(self) -> None:
        pages = [
            ToolPage(tools=[CONFIGURE], next_cursor="c2"),
            ToolPage(tools=[MCPToolDef(name="ping")]),
        ]
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            instance = _mock_client(mock_client_cls, pages=pages)
            result = CliRunner().invoke(main, ["tools", "list", "npx @mcp/fs", "--all"])

        assert result.exit_code == 0
        assert "ping" in result.output
        assert instance.list_tools.await_count == 2

    def test_list_no_tools(self) -> None:
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls, pages=[ToolPage()])
            result = CliRunner().invoke(main, ["tools", "list", "npx @mcp/fs"])

        assert result.exit_code == 0
        assert "No tools discovered" in result.output

    def test_list_error(self) -> None:
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            instance = mock_client_cls.return_value
            instance.__aenter__ = AsyncMock(side_effect=RuntimeError("fail"))
            instance.__aexit__ = AsyncMock(return_value=False)
            result = CliRunner().invoke(main, ["tools", "list", "bad-server"])

        assert result.exit_code == 1
        assert "Discovery error" in result.output


class TestToolsDefaults:
    def test_prints_synthesized_params(self) -> None:
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls)
            result = CliRunner().invoke(main, ["tools", "defaults", "srv", "configure"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "flag": False,
            "options": {"depth": 0, "label": ""},
            "items": [],
        }

    def test_unknown_tool(self) -> None:
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls)
            result = CliRunner().invoke(main, ["tools", "defaults", "srv", "nope"])

        assert result.exit_code == 1
        assert "Tool not found" in result.output


class TestToolsCall:
    def test_call_with_assignments(self) -> None:
        payload = {"content": [{"type": "text", "text": "configured"}]}
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            instance = _mock_client(mock_client_cls, payload=payload)
            result = CliRunner().invoke(
                main,
                [
                    "tools", "call", "srv", "configure",
                    "--set", "flag=true",
                    "--set", "options.depth=3",
                    "--set", "items.0=alpha",
                ],
            )

        assert result.exit_code == 0, result.output
        instance.call_tool.assert_awaited_once_with(
            "configure",
            {"flag": True, "options": {"depth": 3, "label": ""}, "items": ["alpha"]},
        )
        assert "Success" in result.output
        assert "configured" in result.output

    def test_call_json_output(self) -> None:
        payload = {"toolResult": {"ok": True}}
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls, payload=payload)
            result = CliRunner().invoke(main, ["tools", "call", "srv", "configure", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"kind": "legacy", "value": {"ok": True}}

    def test_call_interactive(self) -> None:
        payload = {"content": [], "isError": True}
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            instance = _mock_client(mock_client_cls, payload=payload)
            result = CliRunner().invoke(
                main,
                ["tools", "call", "srv", "configure", "-i"],
                input="yes\n7\nlabel text\n[\"x\"]\n",
            )

        assert result.exit_code == 0, result.output
        instance.call_tool.assert_awaited_once_with(
            "configure",
            {"flag": True, "options": {"depth": 7, "label": "label text"}, "items": ["x"]},
        )
        assert "Error" in result.output

    def test_bad_assignment_syntax(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "srv", "configure", "--set", "flag"])
        assert result.exit_code == 2
        assert "PATH=VALUE" in result.output

    def test_unknown_parameter(self) -> None:
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            instance = _mock_client(mock_client_cls)
            result = CliRunner().invoke(
                main, ["tools", "call", "srv", "configure", "--set", "missing=1"]
            )

        assert result.exit_code == 2
        assert "Parameter error" in result.output
        instance.call_tool.assert_not_awaited()

    def test_invocation_failure(self) -> None:
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls, call_error=ToolExecutionError("configure", "boom"))
            result = CliRunner().invoke(main, ["tools", "call", "srv", "configure"])

        assert result.exit_code == 1
        assert "Invocation error" in result.output
        assert "boom" in result.output

    def test_unknown_tool(self) -> None:
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls)
            result = CliRunner().invoke(main, ["tools", "call", "srv", "nope"])

        assert result.exit_code == 1
        assert "Tool not found" in result.output

    def test_named_server_from_config(self, tmp_path: Any) -> None:
        config = tmp_path / "toolbench.yaml"
        config.write_text("servers:\n  fs:\n    command: my-fs-server\n")
        with patch("toolbench.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls, payload={"content": []})
            result = CliRunner().invoke(
                main, ["--config", str(config), "tools", "call", "fs", "configure"]
            )

        assert result.exit_code == 0, result.output
        ref = mock_client_cls.call_args.args[0]
        assert ref.name == "fs"
        assert ref.command == "my-fs-server"
