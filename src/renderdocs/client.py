"""RenderDocs API client.

Example:
    ```python
    from renderdocs import RenderDocs

    async with RenderDocs(api_key="rd_live_...") as client:
        result = await client.documents.generate(
            template_id="tmpl_invoice",
            format="pdf",
            variables={"invoiceNumber": "INV-001"},
        )
        job = await client.documents.wait_for_completion(result.job_id)
    ```
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from renderdocs.config import Settings
from renderdocs.exceptions import AuthenticationError, ConfigurationError, ValidationError
from renderdocs.http import HttpClient
from renderdocs.logging import configure_logging as _configure_logging
from renderdocs.models import User, WebhookEvent
from renderdocs.resources import DocumentsResource, TemplatesResource, WebhooksResource
from renderdocs.resources.base import unwrap_data
from renderdocs.webhooks import verify_webhook_signature

logger = logging.getLogger(__name__)


class RenderDocs:
    """Entry point to the RenderDocs API.

    Explicit arguments override values loaded from ``RENDERDOCS_*``
    environment variables.

    Args:
        api_key: API key. Falls back to ``Settings.api_key``.
        base_url: API root. Falls back to ``Settings.base_url``.
        timeout_ms: Request timeout. Falls back to ``Settings.timeout_ms``.
        headers: Extra headers sent with every request.
        settings: Preloaded settings; loaded from the environment if omitted.
        http_client: Existing ``httpx.AsyncClient`` to reuse.
        transport: Custom httpx transport, mainly for testing.
        configure_logging: Set up structlog from ``Settings.log_level`` and
            ``Settings.log_format``.

    Raises:
        ConfigurationError: If no API key is available.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        headers: dict[str, str] | None = None,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        configure_logging: bool = False,
    ) -> None:
        overrides = {
            key: value
            for key, value in (
                ("api_key", api_key),
                ("base_url", base_url.rstrip("/") if base_url else None),
                ("timeout_ms", timeout_ms),
            )
            if value is not None
        }
        base = settings or Settings()
        self.settings = base.model_copy(update=overrides) if overrides else base

        if configure_logging:
            _configure_logging(level=self.settings.log_level, format=self.settings.log_format)

        if timeout_ms is not None and timeout_ms <= 0:
            raise ValidationError("timeout_ms", "must be positive")

        if not self.settings.api_key:
            raise ConfigurationError(
                "No API key provided. Pass api_key or set RENDERDOCS_API_KEY."
            )

        self._http = HttpClient(
            api_key=self.settings.api_key,
            base_url=self.settings.base_url,
            timeout=self.settings.timeout_seconds,
            headers=headers,
            client=http_client,
            transport=transport,
        )
        self.documents = DocumentsResource(self._http, self.settings)
        self.templates = TemplatesResource(self._http)
        self.webhooks = WebhooksResource(self._http)
        logger.debug("RenderDocs client created for %s", self.settings.base_url)

    async def me(self) -> User:
        """Return the user that owns the API key."""
        body = await self._http.get("/api/v1/me")
        return User.model_validate(unwrap_data(body))

    async def verify_api_key(self) -> bool:
        """Check whether the API key is accepted.

        Returns:
            False if the API rejects the key; other failures propagate.
        """
        try:
            await self.me()
        except AuthenticationError:
            logger.info("API key rejected by %s", self.settings.base_url)
            return False
        return True

    def verify_webhook(
        self,
        payload: str | bytes,
        signature: str,
        secret: str,
        tolerance: float | None = None,
    ) -> WebhookEvent:
        """Verify a webhook delivery using the configured tolerance.

        See :func:`renderdocs.webhooks.verify_webhook_signature`.
        """
        if tolerance is None:
            tolerance = self.settings.webhook_tolerance_seconds
        return verify_webhook_signature(payload, signature, secret, tolerance)

    async def aclose(self) -> None:
        """Release the HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> RenderDocs:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def create_client(api_key: str | None = None, **kwargs: object) -> RenderDocs:
    """Create a RenderDocs client. Accepts the same arguments as :class:`RenderDocs`."""
    return RenderDocs(api_key, **kwargs)  # type: ignore[arg-type]
