"""MCP ``tools/call`` result models.

Mirrors the ``CallToolResult`` shape of the Model Context Protocol: an
ordered list of content items (text, image, embedded resource) plus an
optional ``isError`` flag.  Primitive fields are strict so that a payload is
only accepted when it already has the protocol's exact types; unknown extra
keys are kept.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

_PASSTHROUGH = ConfigDict(extra="allow", populate_by_name=True)


# ---------------------------------------------------------------------------
# Resource contents
# ---------------------------------------------------------------------------


class TextResourceContents(BaseModel):
    """A resource whose body is inline text."""

    model_config = _PASSTHROUGH

    uri: StrictStr
    mime_type: StrictStr | None = Field(default=None, alias="mimeType")
    text: StrictStr


class BlobResourceContents(BaseModel):
    """A resource whose body is base64-encoded binary data."""

    model_config = _PASSTHROUGH

    uri: StrictStr
    mime_type: StrictStr | None = Field(default=None, alias="mimeType")
    blob: StrictStr


ResourceContents = TextResourceContents | BlobResourceContents


# ---------------------------------------------------------------------------
# Content items
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """Plain text content item."""

    model_config = _PASSTHROUGH

    type: Literal["text"] = "text"
    text: StrictStr


class ImageContent(BaseModel):
    """Inline base64 image content item."""

    model_config = _PASSTHROUGH

    type: Literal["image"] = "image"
    data: StrictStr
    mime_type: StrictStr = Field(alias="mimeType")


class EmbeddedResource(BaseModel):
    """A resource embedded directly in the result."""

    model_config = _PASSTHROUGH

    type: Literal["resource"] = "resource"
    resource: ResourceContents


ContentItem = Annotated[
    TextContent | ImageContent | EmbeddedResource,
    Field(discriminator="type"),
]


class CallToolResult(BaseModel):
    """The current-format result of ``tools/call``."""

    model_config = _PASSTHROUGH

    content: list[ContentItem]
    is_error: StrictBool = Field(default=False, alias="isError")
