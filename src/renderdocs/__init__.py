"""RenderDocs: Python client for the RenderDocs document-generation API.

Generate PDF and Excel documents from templates, wait for rendering jobs
to finish, and verify the webhooks the service sends when they do.

Quick Start:
    from renderdocs import RenderDocs

    async with RenderDocs(api_key="rd_live_...") as client:
        result = await client.documents.generate_pdf(
            "tmpl_invoice",
            variables={"invoiceNumber": "INV-001"},
        )
        job = await client.documents.wait_for_completion(result.job_id)
        print(job.download_url)

Webhooks:
    from renderdocs import verify_webhook_signature

    event = verify_webhook_signature(
        payload=raw_body,
        signature=headers["X-RenderDocs-Signature"],
        secret=webhook_secret,
    )
"""

__version__ = "0.1.0"

# Client
from .client import RenderDocs, create_client

# Configuration
from .config import Settings

# Exceptions
from .exceptions import (
    APIError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    NotFoundError,
    PollCancelledError,
    PollTimeoutError,
    RenderDocsError,
    SignatureVerificationError,
    TransportError,
    ValidationError,
)

# Logging
from .logging import bind_context, clear_context, configure_logging, get_logger, unbind_context

# Models
from .models import (
    DocumentJob,
    DocumentJobStatus,
    GenerateBatchResponse,
    GenerateDocumentResponse,
    Page,
    PaginationMeta,
    SignatureHeader,
    Template,
    User,
    WebhookEvent,
    WebhookEventType,
    WebhookSubscription,
)

# Polling
from .polling import (
    CancellationToken,
    CompletionWaiter,
    PollConfig,
    PollState,
    async_wait_for_completion,
    wait_for_completion,
)

# Webhook verification
from .webhooks import (
    SIGNATURE_HEADER,
    compute_signature,
    parse_signature_header,
    sign_payload,
    verify_webhook_signature,
)

__all__ = [
    # Version
    "__version__",
    # Client
    "RenderDocs",
    "create_client",
    # Configuration
    "Settings",
    # Exceptions
    "RenderDocsError",
    "ValidationError",
    "ConfigurationError",
    "SignatureVerificationError",
    "PollTimeoutError",
    "PollCancelledError",
    "TransportError",
    "APIError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "unbind_context",
    # Models
    "DocumentJob",
    "DocumentJobStatus",
    "GenerateDocumentResponse",
    "GenerateBatchResponse",
    "Page",
    "PaginationMeta",
    "SignatureHeader",
    "Template",
    "User",
    "WebhookEvent",
    "WebhookEventType",
    "WebhookSubscription",
    # Polling
    "CancellationToken",
    "CompletionWaiter",
    "PollConfig",
    "PollState",
    "wait_for_completion",
    "async_wait_for_completion",
    # Webhook verification
    "SIGNATURE_HEADER",
    "compute_signature",
    "parse_signature_header",
    "sign_payload",
    "verify_webhook_signature",
]
