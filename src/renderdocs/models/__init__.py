"""Wire models for the RenderDocs API.

Document Generation:
    - GenerateDocumentOptions / GenerateDocumentResponse
    - GenerateBatchOptions / BatchDocument / GenerateBatchResponse
    - DocumentJob: Observed snapshot of a rendering job

Templates:
    - Template, TemplateVariable, ListTemplatesOptions

Webhooks:
    - WebhookEvent: Verified callback payload
    - SignatureHeader: Parsed signature header
    - WebhookSubscription, CreateWebhookOptions, UpdateWebhookOptions

Shared:
    - Page, PaginationMeta, User
"""

from .base import ApiModel, OutputFormat, Page, PaginationMeta, User
from .document import (
    TERMINAL_STATUSES,
    BatchDocument,
    DocumentJob,
    DocumentJobStatus,
    GenerateBatchOptions,
    GenerateBatchResponse,
    GenerateDocumentOptions,
    GenerateDocumentResponse,
    ListDocumentJobsOptions,
)
from .template import ListTemplatesOptions, Template, TemplateVariable
from .webhook import (
    ALL_EVENT_TYPES,
    CreateWebhookOptions,
    SignatureHeader,
    UpdateWebhookOptions,
    WebhookEvent,
    WebhookEventType,
    WebhookSubscription,
)

__all__ = [
    # Base types
    "ApiModel",
    "OutputFormat",
    "Page",
    "PaginationMeta",
    "User",
    # Documents
    "TERMINAL_STATUSES",
    "BatchDocument",
    "DocumentJob",
    "DocumentJobStatus",
    "GenerateBatchOptions",
    "GenerateBatchResponse",
    "GenerateDocumentOptions",
    "GenerateDocumentResponse",
    "ListDocumentJobsOptions",
    # Templates
    "ListTemplatesOptions",
    "Template",
    "TemplateVariable",
    # Webhooks
    "ALL_EVENT_TYPES",
    "CreateWebhookOptions",
    "SignatureHeader",
    "UpdateWebhookOptions",
    "WebhookEvent",
    "WebhookEventType",
    "WebhookSubscription",
]
