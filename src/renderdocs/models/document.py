"""Document generation models.

Covers generation requests, batch requests and the DocumentJob snapshot
returned while a document is rendered by the service.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from .base import ApiModel, OutputFormat

# Job lifecycle: queued -> processing -> completed | failed
DocumentJobStatus = Literal["queued", "processing", "completed", "failed"]

TERMINAL_STATUSES: frozenset[str] = frozenset({"completed", "failed"})


class GenerateDocumentOptions(ApiModel):
    """Request body for generating a single document.

    Attributes:
        template_id: Template to render.
        format: Output format.
        variables: Values substituted into the template.
        workspace_id: Target workspace (defaults to the key's workspace).
        webhook_url: URL notified when the job finishes.
        webhook_secret: Secret used to sign the completion webhook.
        metadata: Free-form data echoed back on the job and webhook.
    """

    template_id: str = Field(min_length=1)
    format: OutputFormat
    variables: dict[str, Any] = Field(default_factory=dict)
    workspace_id: str | None = None
    webhook_url: str | None = None
    webhook_secret: str | None = None
    metadata: dict[str, Any] | None = None


class GenerateDocumentResponse(ApiModel):
    """Immediate response to a generation request."""

    job_id: str
    status: DocumentJobStatus
    download_url: str | None = None
    expires_at: str | None = None
    created_at: str | None = None


class BatchDocument(ApiModel):
    """One document within a batch request."""

    variables: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] | None = None


class GenerateBatchOptions(ApiModel):
    """Request body for generating many documents from one template."""

    template_id: str = Field(min_length=1)
    format: OutputFormat
    documents: list[BatchDocument] = Field(min_length=1)
    workspace_id: str | None = None
    webhook_url: str | None = None
    webhook_secret: str | None = None


class GenerateBatchResponse(ApiModel):
    """Immediate response to a batch request."""

    batch_id: str
    status: str
    total_documents: int = Field(ge=0)
    completed: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    created_at: str | None = None


class DocumentJob(ApiModel):
    """Snapshot of a rendering job as reported by the service.

    The service owns the job; the client only observes it. Once the
    status is ``completed`` or ``failed`` it no longer changes.
    """

    id: str
    status: DocumentJobStatus
    format: OutputFormat | None = None
    template_id: str | None = None
    template_name: str | None = None
    download_url: str | None = None
    expires_at: str | None = None
    file_size: int | None = None
    duration: int | None = Field(default=None, description="Processing time in milliseconds")
    error: str | None = None
    metadata: dict[str, Any] | None = None
    started_at: str | None = None
    completed_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_terminal(self) -> bool:
        """Whether the job has finished, successfully or not."""
        return self.status in TERMINAL_STATUSES


class ListDocumentJobsOptions(ApiModel):
    """Filters for listing document jobs."""

    status: DocumentJobStatus | None = None
    format: OutputFormat | None = None
    template_id: str | None = None
    workspace_id: str | None = None
    date_from: str | datetime | None = None
    date_to: str | datetime | None = None
    limit: int | None = Field(default=None, ge=1)
    page: int | None = Field(default=None, ge=1)
