"""Default value synthesis for schema nodes."""

from __future__ import annotations

from typing import Any

from toolbench.schema.fallback import DEFAULT_FALLBACK, FallbackEditor
from toolbench.schema.models import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    SchemaNode,
    StringSchema,
)


def synthesize(schema: SchemaNode, fallback: FallbackEditor = DEFAULT_FALLBACK) -> Any:
    """Return the default value for *schema*.

    Total and deterministic.  Arrays are always empty, even when an item
    schema is declared; object properties are filled in declaration order.
    Shapes without a dedicated editor get ``fallback.synthesize(schema)``.
    """
    if isinstance(schema, BooleanSchema):
        return False
    if isinstance(schema, StringSchema):
        return ""
    if isinstance(schema, NumberSchema):
        return 0
    if isinstance(schema, ObjectSchema) and schema.properties is not None:
        return {key: synthesize(prop, fallback) for key, prop in schema.properties.items()}
    if isinstance(schema, ArraySchema):
        return []
    return fallback.synthesize(schema)


def synthesize_parameters(
    properties: dict[str, SchemaNode],
    fallback: FallbackEditor = DEFAULT_FALLBACK,
) -> dict[str, Any]:
    """Seed a full ParameterSet, one entry per top-level property."""
    return {key: synthesize(prop, fallback) for key, prop in properties.items()}
