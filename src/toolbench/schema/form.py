"""Schema-directed form tree.

:func:`render` turns a schema node plus its current value into a tree of
editable fields.  Every field reports a new value through its ``on_change``
callback; object groups wrap their children's callbacks so that an edit at
any depth arrives at the root callback exactly once, as a fresh top-level
value built by copying each ancestor and replacing a single key.  The
rendered tree is a snapshot: after an edit, render again from the new value.

Usage::

    root = render(schema, (), params, on_change=store)
    find_field(root, ("options", "verbose")).toggle()
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from toolbench.errors import JsonEditError
from toolbench.schema.fallback import DEFAULT_FALLBACK, FallbackEditor
from toolbench.schema.models import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    Path,
    SchemaNode,
    StringSchema,
)
from toolbench.schema.synthesizer import synthesize

logger = logging.getLogger(__name__)

OnChange = Callable[[Any], None]

_TRUE_WORDS = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "n", "off", ""})


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FormField:
    """An editable view of the value at :attr:`path`."""

    schema: SchemaNode
    path: Path
    value: Any
    on_change: OnChange = field(repr=False, compare=False)

    @property
    def name(self) -> str:
        return str(self.path[-1]) if self.path else ""

    @property
    def display_name(self) -> str:
        return ".".join(str(segment) for segment in self.path)

    @property
    def label(self) -> str:
        return self.schema.description or self.name

    @property
    def display(self) -> Any:
        """The value as shown to the user."""
        return self.value

    @property
    def children(self) -> tuple[FormField, ...]:
        return ()

    def set(self, new_value: Any) -> None:
        """Report *new_value* as the value at this field's path."""
        self.on_change(new_value)

    def set_text(self, text: str) -> None:
        """Coerce user-typed *text* to this field's type and report it."""
        self.set(_parse_json(text, self.display_name))


@dataclass(frozen=True)
class CheckboxField(FormField):
    @property
    def label(self) -> str:
        return self.schema.description or f"Toggle {self.name}"

    @property
    def display(self) -> bool:
        return bool(self.value)

    def toggle(self) -> None:
        self.set(not self.display)

    def set_text(self, text: str) -> None:
        word = text.strip().lower()
        if word in _TRUE_WORDS:
            self.set(True)
        elif word in _FALSE_WORDS:
            self.set(False)
        else:
            msg = f"{self.display_name or '<root>'}: expected a boolean, got {text!r}"
            raise ValueError(msg)


@dataclass(frozen=True)
class TextField(FormField):
    @property
    def display(self) -> str:
        if self.value is None:
            return ""
        return self.value if isinstance(self.value, str) else str(self.value)

    def set_text(self, text: str) -> None:
        self.set(text)


@dataclass(frozen=True)
class NumberField(FormField):
    @property
    def display(self) -> str:
        if self.value is None:
            return ""
        if isinstance(self.value, float) and math.isnan(self.value):
            return "NaN"
        if isinstance(self.value, float) and math.isinf(self.value):
            return "Infinity" if self.value > 0 else "-Infinity"
        return str(self.value)

    def set_text(self, text: str) -> None:
        self.set(coerce_number(text, integer=self.schema.kind == "integer"))


@dataclass(frozen=True)
class ObjectGroup(FormField):
    fields: tuple[FormField, ...] = ()

    @property
    def children(self) -> tuple[FormField, ...]:
        return self.fields


@dataclass(frozen=True)
class FallbackField(FormField):
    """A value handed to the generic editor; ``editor`` is what it rendered."""

    editor: Any = field(default=None, repr=False, compare=False)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render(
    schema: SchemaNode,
    path: Path,
    value: Any,
    on_change: OnChange,
    fallback: FallbackEditor = DEFAULT_FALLBACK,
) -> FormField:
    """Build the editable field for *value* described by *schema*."""
    if isinstance(schema, BooleanSchema):
        return CheckboxField(schema, path, value, on_change)
    if isinstance(schema, StringSchema):
        return TextField(schema, path, value, on_change)
    if isinstance(schema, NumberSchema):
        return NumberField(schema, path, value, on_change)
    if isinstance(schema, ObjectSchema) and schema.properties is not None:
        fields = tuple(
            _render_property(key, prop, path, value, on_change, fallback)
            for key, prop in schema.properties.items()
        )
        return ObjectGroup(schema, path, value, on_change, fields=fields)
    if isinstance(schema, ArraySchema) and schema.items is not None:
        narrowed = ArraySchema(items=schema.items, description=schema.description)
        current = [] if value is None else value
        editor = fallback.render(narrowed, current, on_change, path=path)
        return FallbackField(narrowed, path, current, on_change, editor=editor)

    logger.debug("render: delegating %s at %r to fallback editor", schema.kind, path)
    editor = fallback.render(schema, value, on_change, path=path)
    return FallbackField(schema, path, value, on_change, editor=editor)


def _render_property(
    key: str,
    prop: SchemaNode,
    path: Path,
    value: Any,
    on_change: OnChange,
    fallback: FallbackEditor,
) -> FormField:
    current = value.get(key) if isinstance(value, Mapping) else None
    if current is None:
        current = synthesize(prop, fallback)

    def update(new_child: Any) -> None:
        updated = dict(value) if isinstance(value, Mapping) else {}
        updated[key] = new_child
        on_change(updated)

    return render(prop, (*path, key), current, update, fallback)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def parse_path(dotted: str) -> Path:
    """Split ``"a.0.b"`` into ``("a", "0", "b")``.

    Segments stay text so property names such as ``"007"`` match exactly;
    :func:`set_at` reads digit segments as list indices once the path
    leaves the rendered fields.
    """
    if not dotted:
        return ()
    return tuple(dotted.split("."))


def assign(tree: Any, path: Sequence[str | int], leaf: Any) -> Any:
    """Return a copy of *tree* with *leaf* placed at *path*.

    Only the containers along *path* are copied; *tree* itself is never
    modified.  Missing mappings are created.  An index equal to the list
    length appends.
    """
    if not path:
        return leaf
    head, rest = path[0], path[1:]

    if isinstance(head, int):
        items = list(tree) if isinstance(tree, list) else []
        if head == len(items):
            items.append(assign(None, rest, leaf))
        elif 0 <= head < len(items):
            items[head] = assign(items[head], rest, leaf)
        else:
            msg = f"index {head} out of range for list of length {len(items)}"
            raise IndexError(msg)
        return items

    updated = dict(tree) if isinstance(tree, Mapping) else {}
    updated[head] = assign(updated.get(head), rest, leaf)
    return updated


def find_field(root: FormField, path: Path) -> FormField | None:
    """Return the rendered field at *path*, relative to *root*'s path."""
    node = root
    for segment in path:
        node = next((child for child in node.children if child.name == str(segment)), None)
        if node is None:
            return None
    return node


def set_at(root: FormField, path: Path, text: str) -> None:
    """Apply user-typed *text* at *path*.

    The deepest rendered field on *path* receives the edit.  When the path
    continues past it (into a value owned by the generic editor), *text* is
    parsed as JSON, falling back to the raw string, and placed with
    :func:`assign`.
    """
    node = root
    depth = 0
    for segment in path:
        child = next((c for c in node.children if c.name == str(segment)), None)
        if child is None:
            break
        node = child
        depth += 1

    remainder = path[depth:]
    if not remainder:
        node.set_text(text)
        return
    if not isinstance(node, FallbackField):
        msg = f"{'.'.join(str(s) for s in path)}: no such field"
        raise KeyError(msg)

    try:
        leaf: Any = json.loads(text)
    except json.JSONDecodeError:
        leaf = text
    node.set(assign(node.value, _as_indices(node.value, remainder), leaf))


def _as_indices(tree: Any, path: Path) -> Path:
    # Digit segments index lists; under a mapping they stay keys.
    resolved: list[str | int] = []
    for segment in path:
        if isinstance(segment, str) and not isinstance(tree, Mapping) and _is_index(segment):
            segment = int(segment)
        resolved.append(segment)
        if isinstance(tree, Mapping):
            tree = tree.get(segment)
        elif isinstance(tree, list) and isinstance(segment, int) and 0 <= segment < len(tree):
            tree = tree[segment]
        else:
            tree = None
    return tuple(resolved)


def _is_index(segment: str) -> bool:
    return segment.isascii() and segment.isdigit()


def iter_fields(root: FormField) -> Iterator[FormField]:
    """Yield *root* and its descendants depth-first, in declaration order."""
    yield root
    for child in root.children:
        yield from iter_fields(child)


def coerce_number(text: str, *, integer: bool = False) -> int | float:
    """Convert typed text to a number the way a browser number input does.

    Accepts decimal literals (optional sign, fraction, exponent),
    ``Infinity`` and unsigned ``0x``/``0o``/``0b`` literals.  Blank text is
    ``0``; anything else (``1_000``, ``nan``, ``inf``, ``12abc``) becomes ``nan``
    and is passed along rather than rejected.
    """
    stripped = text.strip()
    if not stripped:
        return 0
    if _RADIX_LITERAL.fullmatch(stripped):
        return int(stripped, 0)
    match = _DECIMAL_LITERAL.fullmatch(stripped)
    if match is None:
        return math.nan
    if match["infinity"]:
        return -math.inf if stripped.startswith("-") else math.inf
    if "." not in stripped and match["exponent"] is None:
        return int(stripped)
    number = float(stripped)
    if integer and number.is_integer():
        return int(number)
    return number


_RADIX_LITERAL = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_DECIMAL_LITERAL = re.compile(
    r"[+-]?(?:(?P<infinity>Infinity)"
    r"|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?P<exponent>[eE][+-]?[0-9]+)?)"
)


def _parse_json(text: str, where: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise JsonEditError(where, str(exc)) from exc
