"""Render plans — the display-ready breakdown of a tool result."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class TextDirective(BaseModel):
    """Show *text*, styled as an error when the whole result is an error."""

    kind: Literal["text"] = "text"
    text: str
    is_error: bool = False


class ImageDirective(BaseModel):
    """Show an inline image from a ``data:`` URI."""

    kind: Literal["image"] = "image"
    mime_type: str
    src: str


class AudioDirective(BaseModel):
    """Play inline audio from a ``data:`` URI."""

    kind: Literal["audio"] = "audio"
    mime_type: str
    src: str


class JsonDirective(BaseModel):
    """Show *data* as a structured JSON view."""

    kind: Literal["json"] = "json"
    data: Any = None


RenderDirective = Annotated[
    TextDirective | ImageDirective | AudioDirective | JsonDirective,
    Field(discriminator="kind"),
]


class SuccessPlan(BaseModel):
    """A result that passed validation; one directive per content item."""

    kind: Literal["success"] = "success"
    is_error: bool = False
    directives: list[RenderDirective] = []


class InvalidResultPlan(BaseModel):
    """A result with ``content`` that failed validation.

    ``errors`` holds every validation error, in the order reported.
    """

    kind: Literal["invalid"] = "invalid"
    raw: Any = None
    errors: list[dict[str, Any]] = []


class LegacyPlan(BaseModel):
    """A legacy ``{"toolResult": ...}`` result."""

    kind: Literal["legacy"] = "legacy"
    value: Any = None


RenderPlan = Annotated[
    SuccessPlan | InvalidResultPlan | LegacyPlan,
    Field(discriminator="kind"),
]


def data_uri(mime_type: str, data: str) -> str:
    """Build a base64 ``data:`` URI."""
    return f"data:{mime_type};base64,{data}"
