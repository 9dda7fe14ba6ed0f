"""Schema layer — schema nodes, default synthesis, and the form tree."""

from toolbench.schema.fallback import DEFAULT_FALLBACK, FallbackEditor, JsonEditor, JsonFallbackEditor
from toolbench.schema.form import (
    CheckboxField,
    FallbackField,
    FormField,
    NumberField,
    ObjectGroup,
    TextField,
    assign,
    coerce_number,
    find_field,
    iter_fields,
    parse_path,
    render,
    set_at,
)
from toolbench.schema.models import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    OtherSchema,
    Path,
    SchemaNode,
    StringSchema,
    parse_schema,
    schema_adapter,
    top_level_properties,
)
from toolbench.schema.synthesizer import synthesize, synthesize_parameters

__all__ = [
    "DEFAULT_FALLBACK",
    "ArraySchema",
    "BooleanSchema",
    "CheckboxField",
    "FallbackEditor",
    "FallbackField",
    "FormField",
    "JsonEditor",
    "JsonFallbackEditor",
    "NumberField",
    "NumberSchema",
    "ObjectGroup",
    "ObjectSchema",
    "OtherSchema",
    "Path",
    "SchemaNode",
    "StringSchema",
    "TextField",
    "assign",
    "coerce_number",
    "find_field",
    "iter_fields",
    "parse_path",
    "parse_schema",
    "render",
    "schema_adapter",
    "set_at",
    "synthesize",
    "synthesize_parameters",
    "top_level_properties",
]
