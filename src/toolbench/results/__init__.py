"""Result layer — MCP result models, render plans, and the classifier."""

from toolbench.results.classifier import classify
from toolbench.results.models import (
    BlobResourceContents,
    CallToolResult,
    EmbeddedResource,
    ImageContent,
    TextContent,
    TextResourceContents,
)
from toolbench.results.plan import (
    AudioDirective,
    ImageDirective,
    InvalidResultPlan,
    JsonDirective,
    LegacyPlan,
    RenderPlan,
    SuccessPlan,
    TextDirective,
)

__all__ = [
    "AudioDirective",
    "BlobResourceContents",
    "CallToolResult",
    "EmbeddedResource",
    "ImageContent",
    "ImageDirective",
    "InvalidResultPlan",
    "JsonDirective",
    "LegacyPlan",
    "RenderPlan",
    "SuccessPlan",
    "TextContent",
    "TextDirective",
    "TextResourceContents",
    "classify",
]
