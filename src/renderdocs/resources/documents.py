"""Documents resource: generation requests and job tracking."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

from renderdocs.config import Settings
from renderdocs.http import HttpClient
from renderdocs.models import (
    BatchDocument,
    DocumentJob,
    DocumentJobStatus,
    GenerateBatchOptions,
    GenerateBatchResponse,
    GenerateDocumentOptions,
    GenerateDocumentResponse,
    ListDocumentJobsOptions,
    OutputFormat,
    Page,
)
from renderdocs.polling import CancellationToken, CompletionWaiter, PollConfig

from .base import BaseResource, build_options, path_segment


class DocumentsResource(BaseResource):
    """Document generation operations.

    Example:
        ```python
        result = await client.documents.generate(
            template_id="tmpl_invoice",
            format="pdf",
            variables={"invoiceNumber": "INV-001", "total": 99.99},
        )
        job = await client.documents.wait_for_completion(result.job_id)
        print(job.download_url)
        ```
    """

    def __init__(
        self,
        http: HttpClient,
        settings: Settings,
        *,
        clock: Callable[[], float] = time.monotonic,
        async_sleep: Callable[[float, CancellationToken], Awaitable[None]] | None = None,
    ) -> None:
        super().__init__(http)
        self._settings = settings
        self._clock = clock
        self._async_sleep = async_sleep

    async def generate(
        self,
        template_id: str,
        format: OutputFormat,
        *,
        variables: dict[str, Any] | None = None,
        workspace_id: str | None = None,
        webhook_url: str | None = None,
        webhook_secret: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> GenerateDocumentResponse:
        """Start rendering a document from a template.

        Returns as soon as the job is queued; use :meth:`wait_for_completion`
        or a webhook to learn when it finishes.
        """
        options = build_options(
            GenerateDocumentOptions,
            template_id=template_id,
            format=format,
            variables=variables or {},
            workspace_id=workspace_id,
            webhook_url=webhook_url,
            webhook_secret=webhook_secret,
            metadata=metadata,
        )
        body = await self._http.post("/api/v1/documents/generate", options.to_wire())
        return self._one(GenerateDocumentResponse, body)

    async def generate_pdf(self, template_id: str, **kwargs: Any) -> GenerateDocumentResponse:
        """Shortcut for :meth:`generate` with ``format="pdf"``."""
        return await self.generate(template_id, "pdf", **kwargs)

    async def generate_excel(self, template_id: str, **kwargs: Any) -> GenerateDocumentResponse:
        """Shortcut for :meth:`generate` with ``format="excel"``."""
        return await self.generate(template_id, "excel", **kwargs)

    async def generate_batch(
        self,
        template_id: str,
        format: OutputFormat,
        documents: list[BatchDocument | dict[str, Any]],
        *,
        workspace_id: str | None = None,
        webhook_url: str | None = None,
        webhook_secret: str | None = None,
    ) -> GenerateBatchResponse:
        """Render many documents from one template in a single batch."""
        options = build_options(
            GenerateBatchOptions,
            template_id=template_id,
            format=format,
            documents=documents,
            workspace_id=workspace_id,
            webhook_url=webhook_url,
            webhook_secret=webhook_secret,
        )
        body = await self._http.post("/api/v1/documents/generate/batch", options.to_wire())
        return self._one(GenerateBatchResponse, body)

    async def get_job(self, job_id: str) -> DocumentJob:
        """Fetch the current snapshot of a job."""
        body = await self._http.get(f"/api/v1/documents/jobs/{path_segment(job_id)}")
        return self._one(DocumentJob, body)

    async def list_jobs(
        self,
        *,
        status: DocumentJobStatus | None = None,
        format: OutputFormat | None = None,
        template_id: str | None = None,
        workspace_id: str | None = None,
        date_from: str | datetime | None = None,
        date_to: str | datetime | None = None,
        limit: int | None = None,
        page: int | None = None,
    ) -> Page[DocumentJob]:
        """List jobs matching the given filters. Returns a single page."""
        options = build_options(
            ListDocumentJobsOptions,
            status=status,
            format=format,
            template_id=template_id,
            workspace_id=workspace_id,
            date_from=date_from,
            date_to=date_to,
            limit=limit,
            page=page,
        )
        body = await self._http.get(
            "/api/v1/documents/jobs",
            options.model_dump(by_alias=True, exclude_none=True),
        )
        return self._page(DocumentJob, body)

    async def wait_for_completion(
        self,
        job_id: str,
        *,
        poll_interval_ms: int | None = None,
        timeout_ms: int | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> DocumentJob:
        """Poll a job until it completes or fails.

        Intervals default to ``Settings.poll_interval_ms`` and
        ``Settings.poll_timeout_ms``. A ``failed`` job is returned, not
        raised; check ``job.status``.

        Raises:
            PollTimeoutError: The job did not finish within ``timeout_ms``.
            PollCancelledError: ``cancel_token`` was cancelled.
            TransportError: Fetching the job failed.
        """
        config = PollConfig.from_values(
            self._settings.poll_interval_ms if poll_interval_ms is None else poll_interval_ms,
            self._settings.poll_timeout_ms if timeout_ms is None else timeout_ms,
        )
        waiter = CompletionWaiter(config, clock=self._clock, async_sleep=self._async_sleep)
        return await waiter.wait_async(job_id, self.get_job, cancel_token)
