"""API resource wrappers used by the RenderDocs client."""

from .documents import DocumentsResource
from .templates import TemplatesResource
from .webhooks import WebhooksResource

__all__ = [
    "DocumentsResource",
    "TemplatesResource",
    "WebhooksResource",
]
