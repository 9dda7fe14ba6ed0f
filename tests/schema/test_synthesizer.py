"""Tests for default value synthesis."""

from typing import Any

from toolbench.schema.models import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    OtherSchema,
    SchemaNode,
    StringSchema,
    parse_schema,
)
from toolbench.schema.synthesizer import synthesize, synthesize_parameters


class _SentinelFallback:
    def synthesize(self, schema: SchemaNode) -> Any:
        return "<fallback>"

    def render(self, schema: SchemaNode, value: Any, on_change: Any, path: Any = ()) -> Any:
        return None


class TestSynthesizePrimitives:
    def test_boolean(self) -> None:
        assert synthesize(BooleanSchema()) is False

    def test_string(self) -> None:
        assert synthesize(StringSchema()) == ""

    def test_number_and_integer(self) -> None:
        assert synthesize(NumberSchema()) == 0
        assert synthesize(NumberSchema(kind="integer")) == 0


class TestSynthesizeContainers:
    def test_flag_and_items_example(self) -> None:
        schema = ObjectSchema(
            properties={
                "flag": BooleanSchema(),
                "items": ArraySchema(items=StringSchema()),
            }
        )
        assert synthesize(schema) == {"flag": False, "items": []}

    def test_array_never_materializes_elements(self) -> None:
        schema = ArraySchema(items=ObjectSchema(properties={"a": BooleanSchema()}))
        assert synthesize(schema) == []

    def test_array_without_items(self) -> None:
        assert synthesize(ArraySchema()) == []

    def test_nested_objects(self) -> None:
        schema = parse_schema({
            "type": "object",
            "properties": {
                "outer": {
                    "type": "object",
                    "properties": {
                        "inner": {
                            "type": "object",
                            "properties": {"enabled": {"type": "boolean"}},
                        },
                        "name": {"type": "string"},
                    },
                },
            },
        })
        assert synthesize(schema) == {"outer": {"inner": {"enabled": False}, "name": ""}}

    def test_object_keys_follow_declaration_order(self) -> None:
        schema = ObjectSchema(properties={"b": StringSchema(), "a": NumberSchema()})
        assert list(synthesize(schema)) == ["b", "a"]


class TestSynthesizeFallback:
    def test_other_uses_default_json_fallback(self) -> None:
        assert synthesize(OtherSchema(raw={"type": "null"})) is None
        assert synthesize(OtherSchema(raw={"oneOf": []})) is None

    def test_object_without_properties_is_empty_mapping(self) -> None:
        assert synthesize(ObjectSchema()) == {}

    def test_custom_fallback_for_other_properties(self) -> None:
        schema = ObjectSchema(
            properties={"any": OtherSchema(raw={}), "flag": BooleanSchema()}
        )
        assert synthesize(schema, _SentinelFallback()) == {"any": "<fallback>", "flag": False}

    def test_deterministic(self) -> None:
        schema = parse_schema({
            "type": "object",
            "properties": {"x": {"type": "number"}, "y": {"type": "array"}},
        })
        first = synthesize(schema)
        second = synthesize(schema)
        assert first == second
        assert first is not second


class TestSynthesizeParameters:
    def test_one_entry_per_property(self) -> None:
        params = synthesize_parameters({"path": StringSchema(), "depth": NumberSchema()})
        assert params == {"path": "", "depth": 0}

    def test_empty(self) -> None:
        assert synthesize_parameters({}) == {}
