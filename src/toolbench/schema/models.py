"""Schema nodes — the closed subset of JSON Schema that gets a dedicated editor.

A raw JSON Schema (as found in an MCP tool's ``inputSchema``) is converted by
:func:`parse_schema` into one of six node types discriminated on ``kind``.
Anything outside the handled subset becomes an :class:`OtherSchema` carrying
the untouched raw schema, which is later handed to the generic JSON editor.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

Path = tuple[str | int, ...]
"""Segments from the root value to a nested value (property names or indices)."""


class _SchemaBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str | None = None


class BooleanSchema(_SchemaBase):
    """``{"type": "boolean"}``"""

    kind: Literal["boolean"] = "boolean"


class StringSchema(_SchemaBase):
    """``{"type": "string"}``"""

    kind: Literal["string"] = "string"


class NumberSchema(_SchemaBase):
    """``{"type": "number"}`` or ``{"type": "integer"}``."""

    kind: Literal["number", "integer"] = "number"


class ObjectSchema(_SchemaBase):
    """An object schema.

    ``properties`` keeps declaration order.  ``None`` means the schema
    declared no properties at all, in which case the node is not specialized.
    """

    kind: Literal["object"] = "object"
    properties: dict[str, SchemaNode] | None = None


class ArraySchema(_SchemaBase):
    """An array schema; ``items`` is ``None`` when no item schema was declared."""

    kind: Literal["array"] = "array"
    items: SchemaNode | None = None


class OtherSchema(_SchemaBase):
    """Any schema shape without a dedicated editor."""

    kind: Literal["other"] = "other"
    raw: Any = None


SchemaNode = Annotated[
    BooleanSchema | StringSchema | NumberSchema | ObjectSchema | ArraySchema | OtherSchema,
    Field(discriminator="kind"),
]

ObjectSchema.model_rebuild()
ArraySchema.model_rebuild()

schema_adapter: TypeAdapter[SchemaNode] = TypeAdapter(SchemaNode)


def parse_schema(raw: Any) -> SchemaNode:
    """Convert a raw JSON Schema into a :data:`SchemaNode`.

    Never fails: unknown, missing, or list-valued ``type`` entries, and
    non-mapping schemas, all become :class:`OtherSchema`.
    """
    if not isinstance(raw, Mapping):
        return OtherSchema(raw=raw)

    description = raw.get("description")
    if not isinstance(description, str):
        description = None

    schema_type = raw.get("type")
    if schema_type == "boolean":
        return BooleanSchema(description=description)
    if schema_type == "string":
        return StringSchema(description=description)
    if schema_type in ("number", "integer"):
        return NumberSchema(kind=schema_type, description=description)
    if schema_type == "object":
        props = raw.get("properties")
        properties = (
            {str(key): parse_schema(value) for key, value in props.items()}
            if isinstance(props, Mapping)
            else None
        )
        return ObjectSchema(description=description, properties=properties)
    if schema_type == "array":
        items = raw.get("items")
        return ArraySchema(
            description=description,
            items=parse_schema(items) if isinstance(items, Mapping) else None,
        )
    return OtherSchema(description=description, raw=dict(raw))


def top_level_properties(input_schema: Any) -> dict[str, SchemaNode]:
    """Return the ordered top-level properties of a tool's input schema.

    Only the ``properties`` mapping matters here; a missing or malformed one
    yields an empty ParameterSet.
    """
    if not isinstance(input_schema, Mapping):
        return {}
    props = input_schema.get("properties")
    if not isinstance(props, Mapping):
        return {}
    return {str(key): parse_schema(value) for key, value in props.items()}
