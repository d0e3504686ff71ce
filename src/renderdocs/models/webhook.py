"""Webhook models for job completion callbacks.

Provides the verified event payload delivered to webhook endpoints, the
parsed signature header, and the subscription resources managed through
the API.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import ApiModel

# Event types the service delivers
WebhookEventType = Literal[
    "document.completed",
    "document.failed",
    "batch.completed",
]

# All available event types for subscription
ALL_EVENT_TYPES: list[WebhookEventType] = [
    "document.completed",
    "document.failed",
    "batch.completed",
]


class SignatureHeader(BaseModel):
    """Parsed ``t=<timestamp>,v1=<signature>`` header.

    Attributes:
        timestamp: Unix seconds at which the service signed the payload.
        signature: Hex-encoded HMAC-SHA256 digest.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: int = Field(ge=0, le=999_999_999_999, description="Unix seconds when signed")
    signature: str = Field(min_length=1, description="Hex-encoded digest")


class WebhookEvent(ApiModel):
    """Event payload received on a webhook endpoint.

    Only built from a payload whose signature has been verified.

    Attributes:
        id: Unique identifier for this event.
        type: Event type.
        timestamp: ISO-8601 time the event occurred.
        data: Event-specific payload data.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1, description="Event ID")
    type: WebhookEventType = Field(description="Event type")
    timestamp: str = Field(description="When the event occurred (ISO-8601)")
    data: dict[str, Any] = Field(description="Event-specific payload")


class WebhookSubscription(ApiModel):
    """A registered webhook endpoint.

    ``secret`` is only returned when the subscription is created. Store it;
    it is needed to verify every delivery.
    """

    id: str
    url: str
    events: list[WebhookEventType] = Field(default_factory=list)
    name: str | None = None
    active: bool = True
    secret: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def subscribes_to(self, event_type: WebhookEventType) -> bool:
        """Check if this subscription receives the given event type."""
        return self.active and event_type in self.events


class CreateWebhookOptions(ApiModel):
    """Request body for creating a webhook subscription."""

    url: str = Field(min_length=1)
    events: list[WebhookEventType] = Field(min_length=1)
    name: str | None = None


class UpdateWebhookOptions(ApiModel):
    """Partial update for a webhook subscription."""

    url: str | None = None
    events: list[WebhookEventType] | None = None
    name: str | None = None
    active: bool | None = None
