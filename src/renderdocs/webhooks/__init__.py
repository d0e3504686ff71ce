"""Webhook verification for RenderDocs callbacks.

Example:
    ```python
    from renderdocs.webhooks import SIGNATURE_HEADER, verify_webhook_signature

    event = verify_webhook_signature(
        payload=raw_body,
        signature=headers[SIGNATURE_HEADER],
        secret=webhook_secret,
    )
    ```
"""

from .signature import (
    DEFAULT_TOLERANCE_SECONDS,
    MAX_TIMESTAMP,
    SIGNATURE_HEADER,
    compute_signature,
    parse_signature_header,
    sign_payload,
    verify_webhook_signature,
)

__all__ = [
    "DEFAULT_TOLERANCE_SECONDS",
    "MAX_TIMESTAMP",
    "SIGNATURE_HEADER",
    "compute_signature",
    "parse_signature_header",
    "sign_payload",
    "verify_webhook_signature",
]
