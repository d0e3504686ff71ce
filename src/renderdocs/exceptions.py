"""RenderDocs exception hierarchy.

Provides structured exceptions for error handling throughout the SDK.
All exceptions inherit from RenderDocsError for easy catching.
"""

from __future__ import annotations


class RenderDocsError(Exception):
    """Base exception for all RenderDocs errors.

    All custom exceptions in the SDK inherit from this class,
    allowing callers to catch all RenderDocs-related errors with
    a single except clause.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
    """

    code: str = "renderdocs_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class ValidationError(RenderDocsError):
    """Invalid input provided.

    Raised when caller-supplied arguments fail validation checks.

    Attributes:
        field: The field that failed validation.
        message: Description of the validation failure.
    """

    code: str = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "field": self.field,
                "message": self.message,
            }
        }


class ConfigurationError(RenderDocsError):
    """Configuration error.

    Raised when required configuration (such as the API key) is missing.
    """

    code: str = "configuration_error"


class SignatureVerificationError(RenderDocsError):
    """Webhook signature verification failed.

    A single error kind covers a malformed header, a signature mismatch,
    a timestamp outside the tolerance window and an unparsable payload.
    Only the message tells them apart.
    """

    code: str = "signature_verification_error"


class PollTimeoutError(RenderDocsError):
    """Job did not reach a terminal state before the timeout elapsed.

    Attributes:
        job_id: ID of the job being polled.
        elapsed_ms: Milliseconds elapsed when the timeout was detected.
    """

    code: str = "poll_timeout"

    def __init__(self, job_id: str, elapsed_ms: float) -> None:
        self.job_id = job_id
        self.elapsed_ms = elapsed_ms
        super().__init__(f"Timeout waiting for job {job_id} to complete after {elapsed_ms:.0f}ms")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "job_id": self.job_id,
                "elapsed_ms": self.elapsed_ms,
                "message": self.message,
            }
        }


class PollCancelledError(RenderDocsError):
    """Waiting for a job was cancelled by the caller.

    Attributes:
        job_id: ID of the job being polled.
    """

    code: str = "poll_cancelled"

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Cancelled while waiting for job {job_id}")


class TransportError(RenderDocsError):
    """Request to the RenderDocs API failed.

    Raised directly for network-level failures (connection refused,
    timeouts). HTTP status failures raise the APIError subclasses.
    """

    code: str = "transport_error"


class APIError(TransportError):
    """The API answered with a non-success status code.

    Attributes:
        status_code: HTTP status code of the response.
        error_code: Error identifier from the response body, if any.
    """

    code: str = "api_error"

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "status_code": self.status_code,
                "error_code": self.error_code,
                "message": self.message,
            }
        }


class AuthenticationError(APIError):
    """API key is missing, invalid or revoked (HTTP 401)."""

    code: str = "authentication_error"


class AuthorizationError(APIError):
    """API key lacks permission for the requested action (HTTP 403)."""

    code: str = "authorization_error"


class NotFoundError(APIError):
    """Requested resource does not exist (HTTP 404)."""

    code: str = "not_found"
