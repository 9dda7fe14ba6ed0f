"""Tests for tool result classification."""

from __future__ import annotations

from typing import Any

import pytest

from toolbench.results.classifier import classify
from toolbench.results.plan import (
    AudioDirective,
    ImageDirective,
    InvalidResultPlan,
    JsonDirective,
    LegacyPlan,
    SuccessPlan,
    TextDirective,
)


def _text(text: str = "hello") -> dict[str, Any]:
    return {"type": "text", "text": text}


class TestSuccess:
    def test_single_text_item(self) -> None:
        plan = classify({"content": [_text()], "isError": False})
        assert isinstance(plan, SuccessPlan)
        assert plan.is_error is False
        assert plan.directives == [TextDirective(text="hello", is_error=False)]

    def test_is_error_defaults_to_false(self) -> None:
        plan = classify({"content": [_text()]})
        assert isinstance(plan, SuccessPlan)
        assert plan.is_error is False

    def test_error_flag_styles_every_text_item(self) -> None:
        plan = classify({"content": [_text("a"), _text("b")], "isError": True})
        assert isinstance(plan, SuccessPlan)
        assert plan.is_error is True
        assert [d.is_error for d in plan.directives] == [True, True]  # type: ignore[union-attr]

    def test_empty_content(self) -> None:
        plan = classify({"content": []})
        assert plan == SuccessPlan(is_error=False, directives=[])

    def test_image_becomes_data_uri(self) -> None:
        plan = classify({"content": [{"type": "image", "data": "iVBORw0=", "mimeType": "image/png"}]})
        assert isinstance(plan, SuccessPlan)
        assert plan.directives == [
            ImageDirective(mime_type="image/png", src="data:image/png;base64,iVBORw0=")
        ]

    def test_audio_resource(self) -> None:
        item = {
            "type": "resource",
            "resource": {"uri": "file:///a.wav", "mimeType": "audio/wav", "blob": "UklGRg=="},
        }
        plan = classify({"content": [item]})
        assert isinstance(plan, SuccessPlan)
        assert plan.directives == [
            AudioDirective(mime_type="audio/wav", src="data:audio/wav;base64,UklGRg==")
        ]

    def test_other_resource_is_json_view(self) -> None:
        resource = {"uri": "file:///notes.md", "mimeType": "text/markdown", "text": "# Notes"}
        plan = classify({"content": [{"type": "resource", "resource": resource}]})
        assert isinstance(plan, SuccessPlan)
        assert plan.directives == [JsonDirective(data=resource)]

    def test_audio_mime_with_text_body_is_json_view(self) -> None:
        resource = {"uri": "file:///a.txt", "mimeType": "audio/x-transcript", "text": "la"}
        plan = classify({"content": [{"type": "resource", "resource": resource}]})
        assert isinstance(plan, SuccessPlan)
        assert isinstance(plan.directives[0], JsonDirective)

    def test_directives_keep_item_order(self) -> None:
        plan = classify({
            "content": [
                _text("first"),
                {"type": "image", "data": "AA==", "mimeType": "image/gif"},
                _text("last"),
            ]
        })
        assert isinstance(plan, SuccessPlan)
        assert [d.kind for d in plan.directives] == ["text", "image", "text"]

    def test_extra_keys_allowed(self) -> None:
        plan = classify({"content": [{**_text(), "annotations": {}}], "meta": {"x": 1}})
        assert isinstance(plan, SuccessPlan)

    def test_content_wins_over_tool_result(self) -> None:
        plan = classify({"content": [_text()], "toolResult": 1})
        assert isinstance(plan, SuccessPlan)


class TestInvalid:
    def test_missing_type(self) -> None:
        payload = {"content": [{"text": "no type"}], "isError": False}
        plan = classify(payload)
        assert isinstance(plan, InvalidResultPlan)
        assert plan.raw == payload
        assert len(plan.errors) >= 1
        assert plan.errors[0]["loc"][:2] == ("content", 0)

    @pytest.mark.parametrize(
        "payload",
        [
            {"content": "text"},
            {"content": [{"type": "audio", "data": "AA=="}]},
            {"content": [{"type": "image", "data": "AA=="}]},
            {"content": [{"type": "text", "text": 5}]},
            {"content": [_text()], "isError": "true"},
            {"content": [{"type": "resource", "resource": {"uri": "x"}}]},
        ],
    )
    def test_malformed_shapes(self, payload: dict[str, Any]) -> None:
        plan = classify(payload)
        assert isinstance(plan, InvalidResultPlan)
        assert plan.errors

    def test_every_error_kept_in_order(self) -> None:
        payload = {"content": [{"text": "a"}, _text(), {"type": "text"}]}
        plan = classify(payload)
        assert isinstance(plan, InvalidResultPlan)
        locs = [error["loc"][:2] for error in plan.errors]
        assert locs == [("content", 0), ("content", 2)]


class TestLegacyAndEmpty:
    def test_legacy(self) -> None:
        assert classify({"toolResult": 42}) == LegacyPlan(value=42)

    def test_legacy_keeps_structure(self) -> None:
        plan = classify({"toolResult": {"rows": [1, 2]}})
        assert isinstance(plan, LegacyPlan)
        assert plan.value == {"rows": [1, 2]}

    @pytest.mark.parametrize("payload", [None, {}, {"other": 1}, 42, "text", [1]])
    def test_nothing_to_show(self, payload: Any) -> None:
        assert classify(payload) is None
