"""Tests for the generic JSON editor."""

import pytest

from toolbench.errors import JsonEditError
from toolbench.schema.fallback import FallbackEditor, JsonEditor, JsonFallbackEditor
from toolbench.schema.models import ArraySchema, ObjectSchema, OtherSchema, StringSchema


class TestJsonFallbackEditor:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(JsonFallbackEditor(), FallbackEditor)

    def test_synthesize_by_declared_type(self) -> None:
        editor = JsonFallbackEditor()
        assert editor.synthesize(ObjectSchema()) == {}
        assert editor.synthesize(ArraySchema()) == []
        assert editor.synthesize(OtherSchema(raw={"type": "object"})) == {}
        assert editor.synthesize(OtherSchema(raw={"type": "array"})) == []
        assert editor.synthesize(OtherSchema(raw={"type": ["string", "null"]})) is None
        assert editor.synthesize(OtherSchema(raw=None)) is None

    def test_render_returns_json_editor(self) -> None:
        seen: list[object] = []
        editor = JsonFallbackEditor().render(StringSchema(), {"a": 1}, seen.append)
        assert isinstance(editor, JsonEditor)
        assert '"a": 1' in editor.text


class TestJsonEditor:
    def test_submit_parses(self) -> None:
        seen: list[object] = []
        JsonEditor(OtherSchema(), None, seen.append).submit('{"k": [1, null]}')
        assert seen == [{"k": [1, None]}]

    def test_submit_invalid_reports_nothing(self) -> None:
        seen: list[object] = []
        editor = JsonEditor(OtherSchema(), None, seen.append)
        with pytest.raises(JsonEditError, match="Invalid JSON"):
            editor.submit("[1,")
        assert seen == []

    def test_submit_invalid_names_root(self) -> None:
        editor = JsonEditor(OtherSchema(), None, print)
        with pytest.raises(JsonEditError, match="<root>"):
            editor.submit("{")
