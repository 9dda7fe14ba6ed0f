"""Generic JSON editor used for schema shapes without a dedicated field.

- ``FallbackEditor`` — runtime-checkable protocol the form tree delegates to.
- ``JsonFallbackEditor`` — edits any value as JSON text.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from toolbench.errors import JsonEditError
from toolbench.schema.models import (
    ArraySchema,
    ObjectSchema,
    OtherSchema,
    Path,
    SchemaNode,
)

logger = logging.getLogger(__name__)

OnChange = Callable[[Any], None]


@runtime_checkable
class FallbackEditor(Protocol):
    """Supplies empty values and editors for unspecialized schema shapes."""

    def synthesize(self, schema: SchemaNode) -> Any:
        """Return the empty value for *schema*."""
        ...

    def render(
        self, schema: SchemaNode, value: Any, on_change: OnChange, path: Path = ()
    ) -> Any:
        """Return an editor bound to *value* at *path* that reports edits to *on_change*."""
        ...


@dataclass(frozen=True)
class JsonEditor:
    """Edits a value as JSON text."""

    schema: SchemaNode
    value: Any
    on_change: OnChange
    path: Path = ()

    @property
    def text(self) -> str:
        return json.dumps(self.value, indent=2, ensure_ascii=False)

    def submit(self, text: str) -> None:
        """Parse *text* and report the parsed value.

        Raises:
            JsonEditError: If *text* is not valid JSON; nothing is reported.
        """
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise JsonEditError(".".join(str(s) for s in self.path), str(exc)) from exc
        self.on_change(parsed)


class JsonFallbackEditor:
    """Default :class:`FallbackEditor` backed by :class:`JsonEditor`."""

    def synthesize(self, schema: SchemaNode) -> Any:
        declared = _declared_type(schema)
        if declared == "object":
            return {}
        if declared == "array":
            return []
        return None

    def render(
        self, schema: SchemaNode, value: Any, on_change: OnChange, path: Path = ()
    ) -> JsonEditor:
        logger.debug("JsonFallbackEditor: editing %s schema as JSON", schema.kind)
        return JsonEditor(schema=schema, value=value, on_change=on_change, path=path)


def _declared_type(schema: SchemaNode) -> str | None:
    if isinstance(schema, ObjectSchema):
        return "object"
    if isinstance(schema, ArraySchema):
        return "array"
    if isinstance(schema, OtherSchema) and isinstance(schema.raw, Mapping):
        declared = schema.raw.get("type")
        return declared if isinstance(declared, str) else None
    return None


DEFAULT_FALLBACK: FallbackEditor = JsonFallbackEditor()
