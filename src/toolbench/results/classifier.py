"""Classify a raw ``tools/call`` payload into a render plan.

Decision order (first match wins):

1. a mapping with ``content`` — validated as :class:`CallToolResult`;
   success yields a :class:`SuccessPlan`, failure an
   :class:`InvalidResultPlan` carrying the raw payload and every error;
2. a mapping with ``toolResult`` — a :class:`LegacyPlan`;
3. anything else — ``None``, nothing to show.

Never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from toolbench.results.models import (
    BlobResourceContents,
    CallToolResult,
    ContentItem,
    EmbeddedResource,
    ImageContent,
    TextContent,
)
from toolbench.results.plan import (
    AudioDirective,
    ImageDirective,
    InvalidResultPlan,
    JsonDirective,
    LegacyPlan,
    RenderDirective,
    RenderPlan,
    SuccessPlan,
    TextDirective,
    data_uri,
)

logger = logging.getLogger(__name__)


def classify(payload: Any) -> RenderPlan | None:
    """Return the render plan for *payload*, or ``None`` when there is nothing to show."""
    if not isinstance(payload, Mapping):
        return None

    if "content" in payload:
        try:
            result = CallToolResult.model_validate(payload)
        except ValidationError as exc:
            errors = exc.errors(include_url=False)
            logger.info("classify: invalid tool result (%d error(s))", len(errors))
            return InvalidResultPlan(raw=payload, errors=[dict(e) for e in errors])
        return SuccessPlan(
            is_error=result.is_error,
            directives=[_directive(item, result.is_error) for item in result.content],
        )

    if "toolResult" in payload:
        return LegacyPlan(value=payload["toolResult"])

    return None


def _directive(item: ContentItem, is_error: bool) -> RenderDirective:
    if isinstance(item, TextContent):
        return TextDirective(text=item.text, is_error=is_error)
    if isinstance(item, ImageContent):
        return ImageDirective(mime_type=item.mime_type, src=data_uri(item.mime_type, item.data))
    return _resource_directive(item)


def _resource_directive(item: EmbeddedResource) -> RenderDirective:
    resource = item.resource
    mime_type = resource.mime_type or ""
    if mime_type.startswith("audio/") and isinstance(resource, BlobResourceContents):
        return AudioDirective(mime_type=mime_type, src=data_uri(mime_type, resource.blob))
    return JsonDirective(data=resource.model_dump(by_alias=True, exclude_unset=True))
