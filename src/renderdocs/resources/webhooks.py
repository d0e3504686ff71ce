"""Webhook subscription resource.

Manages where the service delivers job events. Verifying the deliveries
themselves is done with :func:`renderdocs.webhooks.verify_webhook_signature`.
"""

from __future__ import annotations

from renderdocs.exceptions import ValidationError
from renderdocs.models import (
    CreateWebhookOptions,
    Page,
    UpdateWebhookOptions,
    WebhookEventType,
    WebhookSubscription,
)

from .base import BaseResource, build_options, path_segment


class WebhooksResource(BaseResource):
    """Webhook subscription operations.

    Example:
        ```python
        webhook = await client.webhooks.create(
            url="https://example.com/webhooks/renderdocs",
            events=["document.completed", "document.failed"],
        )
        store_secret(webhook.secret)  # returned only once
        ```
    """

    async def create(
        self,
        url: str,
        events: list[WebhookEventType],
        *,
        name: str | None = None,
    ) -> WebhookSubscription:
        """Register a new endpoint. The response carries the signing secret."""
        options = build_options(CreateWebhookOptions, url=url, events=events, name=name)
        body = await self._http.post("/api/v1/webhooks", options.to_wire())
        return self._one(WebhookSubscription, body)

    async def get(self, webhook_id: str) -> WebhookSubscription:
        body = await self._http.get(f"/api/v1/webhooks/{path_segment(webhook_id)}")
        return self._one(WebhookSubscription, body)

    async def list(self) -> Page[WebhookSubscription]:
        body = await self._http.get("/api/v1/webhooks")
        return self._page(WebhookSubscription, body)

    async def update(
        self,
        webhook_id: str,
        *,
        url: str | None = None,
        events: list[WebhookEventType] | None = None,
        name: str | None = None,
        active: bool | None = None,
    ) -> WebhookSubscription:
        """Change any subset of a subscription's fields."""
        options = build_options(
            UpdateWebhookOptions, url=url, events=events, name=name, active=active
        )
        payload = options.to_wire()
        if not payload:
            raise ValidationError("update", "at least one field must be provided")
        body = await self._http.put(f"/api/v1/webhooks/{path_segment(webhook_id)}", payload)
        return self._one(WebhookSubscription, body)

    async def delete(self, webhook_id: str) -> None:
        await self._http.delete(f"/api/v1/webhooks/{path_segment(webhook_id)}")
