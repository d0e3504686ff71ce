"""Webhook signature verification with replay protection.

RenderDocs signs every webhook delivery with HMAC-SHA256 over
``"<timestamp>.<raw body>"`` and sends the result in the
``X-RenderDocs-Signature`` header as ``t=<timestamp>,v1=<hex digest>``.

Verification recomputes the digest, compares it in constant time and
rejects timestamps outside the tolerance window so a captured delivery
cannot be replayed later.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import math
import time
from collections.abc import Callable

from pydantic import ValidationError as PydanticValidationError

from renderdocs.exceptions import SignatureVerificationError, ValidationError
from renderdocs.models import SignatureHeader, WebhookEvent

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-RenderDocs-Signature"
DEFAULT_TOLERANCE_SECONDS = 300

_TIMESTAMP_KEY = "t"
_SIGNATURE_KEY = "v1"

# Unix seconds fit in 12 digits until the year 33658
MAX_TIMESTAMP = 999_999_999_999


def _malformed(detail: str) -> SignatureVerificationError:
    return SignatureVerificationError(f"Malformed signature header: {detail}")


def _to_bytes(payload: str | bytes) -> bytes:
    if isinstance(payload, bytes):
        return payload
    return payload.encode("utf-8")


def parse_signature_header(header: str) -> SignatureHeader:
    """Parse a ``t=<timestamp>,v1=<signature>`` header value.

    The two segments may appear in either order.

    Args:
        header: Raw header value.

    Returns:
        The parsed timestamp and signature.

    Raises:
        SignatureVerificationError: If a segment is missing, extra, empty,
            duplicated or unrecognized, or the timestamp is not a
            non-negative integer.
    """
    if not isinstance(header, str) or not header:
        raise _malformed("header is empty")

    segments = header.split(",")
    if len(segments) != 2:
        raise _malformed(f"expected 2 segments, got {len(segments)}")

    fields: dict[str, str] = {}
    for segment in segments:
        key, sep, value = segment.partition("=")
        if not sep or not value:
            raise _malformed(f"segment '{key}' is not a key=value pair")
        if key not in (_TIMESTAMP_KEY, _SIGNATURE_KEY):
            raise _malformed(f"unrecognized key '{key}'")
        if key in fields:
            raise _malformed(f"duplicate key '{key}'")
        fields[key] = value

    raw_timestamp = fields[_TIMESTAMP_KEY]
    # isdigit() alone accepts non-ASCII digits such as superscripts
    if not (raw_timestamp.isascii() and raw_timestamp.isdigit()):
        raise _malformed("timestamp is not a non-negative integer")
    if len(raw_timestamp) > len(str(MAX_TIMESTAMP)):
        raise _malformed("timestamp is out of range")

    return SignatureHeader(timestamp=int(raw_timestamp), signature=fields[_SIGNATURE_KEY])


def compute_signature(timestamp: int, payload: str | bytes, secret: str) -> str:
    """Compute the HMAC-SHA256 signature for a webhook payload.

    Args:
        timestamp: Unix seconds the signature is bound to.
        payload: Raw request body, exactly as received.
        secret: Shared webhook secret.

    Returns:
        Lowercase hex digest.
    """
    message = f"{timestamp}.".encode("ascii") + _to_bytes(payload)
    return hmac.new(
        key=secret.encode("utf-8"),
        msg=message,
        digestmod=hashlib.sha256,
    ).hexdigest()


def sign_payload(
    payload: str | bytes,
    secret: str,
    timestamp: int | None = None,
    *,
    clock: Callable[[], float] = time.time,
) -> str:
    """Build a complete signature header value for a payload.

    Args:
        payload: Raw body to sign.
        secret: Shared webhook secret.
        timestamp: Unix seconds to sign with. Defaults to now.
        clock: Source of the current time when ``timestamp`` is omitted.

    Returns:
        Header value in ``t=<timestamp>,v1=<signature>`` form.
    """
    if timestamp is None:
        timestamp = int(clock())
    if not 0 <= timestamp <= MAX_TIMESTAMP:
        raise ValidationError("timestamp", f"must be between 0 and {MAX_TIMESTAMP}")
    signature = compute_signature(timestamp, payload, secret)
    return f"{_TIMESTAMP_KEY}={timestamp},{_SIGNATURE_KEY}={signature}"


def verify_webhook_signature(
    payload: str | bytes,
    signature: str,
    secret: str,
    tolerance: float = DEFAULT_TOLERANCE_SECONDS,
    *,
    clock: Callable[[], float] = time.time,
) -> WebhookEvent:
    """Verify a webhook delivery and return its event.

    Args:
        payload: Raw request body, exactly as received.
        signature: Value of the ``X-RenderDocs-Signature`` header.
        secret: Shared webhook secret from the subscription.
        tolerance: Maximum accepted difference, in seconds, between now
            and the signed timestamp. Applied in both directions.
        clock: Source of the current Unix time.

    Returns:
        The verified event.

    Raises:
        SignatureVerificationError: If the header is malformed, the
            signature does not match, the timestamp is outside the
            tolerance window or the payload is not a valid event.
        ValidationError: If ``tolerance`` is negative or not finite.

    Example:
        ```python
        event = verify_webhook_signature(
            payload=request.body,
            signature=request.headers[SIGNATURE_HEADER],
            secret=settings.webhook_secret,
        )
        if event.type == "document.completed":
            ...
        ```
    """
    if not math.isfinite(tolerance) or tolerance < 0:
        raise ValidationError("tolerance", "must be a non-negative number of seconds")

    try:
        header = parse_signature_header(signature)
        expected = compute_signature(header.timestamp, payload, secret)

        if not hmac.compare_digest(expected.encode("ascii"), header.signature.encode("utf-8")):
            raise SignatureVerificationError("Signature mismatch")

        if abs(clock() - header.timestamp) > tolerance:
            raise SignatureVerificationError("Timestamp outside tolerance window")

        try:
            return WebhookEvent.model_validate_json(payload)
        except PydanticValidationError as e:
            raise SignatureVerificationError(
                f"Unparsable payload: {e.error_count()} validation error(s)"
            ) from e
    except SignatureVerificationError as e:
        logger.warning("Webhook signature verification failed: %s", e.message)
        raise
