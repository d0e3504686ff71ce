"""Unit tests for webhook signature verification."""

from __future__ import annotations

import hashlib
import hmac
import json

import pytest

from renderdocs.exceptions import SignatureVerificationError, ValidationError
from renderdocs.models import SignatureHeader, WebhookEvent
from renderdocs.webhooks import (
    MAX_TIMESTAMP,
    SIGNATURE_HEADER,
    compute_signature,
    parse_signature_header,
    sign_payload,
    verify_webhook_signature,
)

SECRET = "whsec_test_secret"
SIGNED_AT = 1_700_000_000


@pytest.fixture
def payload() -> str:
    """A document.completed event body as the service sends it."""
    return json.dumps(
        {
            "id": "evt_123",
            "type": "document.completed",
            "timestamp": "2023-11-14T22:13:20Z",
            "data": {"jobId": "job_abc123", "downloadUrl": "https://cdn.test/doc.pdf"},
        }
    )


def _header(payload: str | bytes, timestamp: int = SIGNED_AT, secret: str = SECRET) -> str:
    return f"t={timestamp},v1={compute_signature(timestamp, payload, secret)}"


def _at(now: float):
    return lambda: now


class TestParseSignatureHeader:
    """Tests for parse_signature_header."""

    def test_parses_timestamp_and_signature(self):
        """Should split a well-formed header into its two fields."""
        header = parse_signature_header("t=1700000000,v1=abcd")
        assert header == SignatureHeader(timestamp=1700000000, signature="abcd")

    def test_accepts_either_order(self):
        """Segment order should not matter."""
        header = parse_signature_header("v1=abcd,t=1700000000")
        assert header.timestamp == 1700000000
        assert header.signature == "abcd"

    def test_accepts_zero_timestamp(self):
        """Zero is a valid non-negative timestamp."""
        assert parse_signature_header("t=0,v1=ff").timestamp == 0

    @pytest.mark.parametrize(
        "header",
        [
            "v1=abcd",
            "t=1700000000",
            "",
            "t=1700000000,v1=abcd,v0=ef",
            "t=1700000000,v2=abcd",
            "t=1700000000,t=1700000001",
            "t=1700000000,v1=",
            "t=,v1=abcd",
            "t=-5,v1=abcd",
            "t=+5,v1=abcd",
            "t=17e8,v1=abcd",
            "t=12.5,v1=abcd",
            "t=²,v1=abcd",
            "t 1700000000,v1=abcd",
            "t=1234567890123,v1=abcd",
            "t=" + "1" * 5000 + ",v1=abcd",
            "t=" + "0" * 5000 + "1,v1=abcd",
        ],
    )
    def test_rejects_malformed_headers(self, header: str):
        """Missing, extra, unknown or non-integer segments should fail."""
        with pytest.raises(SignatureVerificationError, match="Malformed signature header"):
            parse_signature_header(header)

    def test_signature_value_may_contain_equals(self):
        """Only the first '=' separates key from value."""
        assert parse_signature_header("t=1,v1=ab=cd").signature == "ab=cd"


class TestComputeSignature:
    """Tests for compute_signature."""

    def test_matches_hmac_sha256_over_timestamp_and_payload(self, payload: str):
        """Signature should be HMAC-SHA256 of '<t>.<payload>' keyed by the secret."""
        expected = hmac.new(
            SECRET.encode(), f"{SIGNED_AT}.{payload}".encode(), hashlib.sha256
        ).hexdigest()
        assert compute_signature(SIGNED_AT, payload, SECRET) == expected

    def test_lowercase_hex_digest(self, payload: str):
        """Output should be 64 lowercase hex characters."""
        sig = compute_signature(SIGNED_AT, payload, SECRET)
        assert len(sig) == 64
        assert sig == sig.lower()
        int(sig, 16)

    def test_deterministic(self, payload: str):
        """Same inputs should produce identical output."""
        assert compute_signature(SIGNED_AT, payload, SECRET) == compute_signature(
            SIGNED_AT, payload, SECRET
        )

    def test_bytes_and_str_payloads_agree(self, payload: str):
        """A str payload is signed as its UTF-8 bytes."""
        assert compute_signature(SIGNED_AT, payload, SECRET) == compute_signature(
            SIGNED_AT, payload.encode("utf-8"), SECRET
        )

    def test_every_input_changes_the_signature(self, payload: str):
        """Timestamp, payload and secret should all be bound into the digest."""
        base = compute_signature(SIGNED_AT, payload, SECRET)
        assert compute_signature(SIGNED_AT + 1, payload, SECRET) != base
        assert compute_signature(SIGNED_AT, payload + " ", SECRET) != base
        assert compute_signature(SIGNED_AT, payload, SECRET + "x") != base


class TestVerifyWebhookSignature:
    """Tests for verify_webhook_signature."""

    def test_valid_signature_returns_event(self, payload: str):
        """A fresh, correctly signed payload should yield the event."""
        event = verify_webhook_signature(payload, _header(payload), SECRET, clock=_at(SIGNED_AT))
        assert isinstance(event, WebhookEvent)
        assert event.id == "evt_123"
        assert event.type == "document.completed"
        assert event.data["jobId"] == "job_abc123"

    def test_accepts_bytes_payload(self, payload: str):
        """Raw bytes bodies should verify the same as strings."""
        raw = payload.encode("utf-8")
        event = verify_webhook_signature(raw, _header(raw), SECRET, clock=_at(SIGNED_AT))
        assert event.type == "document.completed"

    @pytest.mark.parametrize("offset", [-300, -1, 0, 1, 300])
    def test_tolerance_is_inclusive_and_symmetric(self, payload: str, offset: int):
        """Timestamps up to tolerance seconds ahead of or behind now are accepted."""
        event = verify_webhook_signature(
            payload, _header(payload), SECRET, clock=_at(SIGNED_AT + offset)
        )
        assert event.id == "evt_123"

    @pytest.mark.parametrize("offset", [-301, 301, 86_400])
    def test_rejects_timestamp_outside_tolerance(self, payload: str, offset: int):
        """A correct signature outside the window should still fail."""
        with pytest.raises(SignatureVerificationError, match="Timestamp outside tolerance"):
            verify_webhook_signature(
                payload, _header(payload), SECRET, clock=_at(SIGNED_AT + offset)
            )

    def test_custom_tolerance(self, payload: str):
        """The tolerance argument should widen or narrow the window."""
        verify_webhook_signature(
            payload, _header(payload), SECRET, tolerance=600, clock=_at(SIGNED_AT + 550)
        )
        with pytest.raises(SignatureVerificationError, match="tolerance"):
            verify_webhook_signature(
                payload, _header(payload), SECRET, tolerance=10, clock=_at(SIGNED_AT + 11)
            )

    def test_single_byte_tamper_is_a_mismatch(self, payload: str):
        """Changing any payload byte with the original signature should fail."""
        header = _header(payload)
        tampered = payload.replace("job_abc123", "job_abc124")
        with pytest.raises(SignatureVerificationError, match="Signature mismatch"):
            verify_webhook_signature(tampered, header, SECRET, clock=_at(SIGNED_AT))

    def test_wrong_secret_is_a_mismatch(self, payload: str):
        """A signature made with another secret should fail."""
        header = _header(payload, secret="other_secret")
        with pytest.raises(SignatureVerificationError, match="Signature mismatch"):
            verify_webhook_signature(payload, header, SECRET, clock=_at(SIGNED_AT))

    def test_resigned_timestamp_is_a_mismatch(self, payload: str):
        """Swapping in a fresh timestamp without the secret should fail."""
        stale_sig = compute_signature(SIGNED_AT, payload, SECRET)
        header = f"t={SIGNED_AT + 3600},v1={stale_sig}"
        with pytest.raises(SignatureVerificationError, match="Signature mismatch"):
            verify_webhook_signature(payload, header, SECRET, clock=_at(SIGNED_AT + 3600))

    def test_uppercase_signature_is_a_mismatch(self, payload: str):
        """The wire format is lowercase hex; other encodings are rejected."""
        header = f"t={SIGNED_AT},v1={compute_signature(SIGNED_AT, payload, SECRET).upper()}"
        with pytest.raises(SignatureVerificationError, match="Signature mismatch"):
            verify_webhook_signature(payload, header, SECRET, clock=_at(SIGNED_AT))

    def test_malformed_header_fails_verification(self, payload: str):
        """Header parse failures surface as verification errors."""
        with pytest.raises(SignatureVerificationError, match="Malformed signature header"):
            verify_webhook_signature(payload, "v1=abcd", SECRET, clock=_at(SIGNED_AT))

    def test_oversized_timestamp_fails_verification(self, payload: str):
        """A huge timestamp is a verification failure, not a crash."""
        header = "t=" + "9" * 5000 + ",v1=abcd"
        with pytest.raises(SignatureVerificationError, match="Malformed signature header"):
            verify_webhook_signature(payload, header, SECRET, clock=_at(SIGNED_AT))

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            json.dumps({"id": "evt_1", "type": "document.deleted", "timestamp": "x", "data": {}}),
            json.dumps({"id": "evt_1", "type": "document.completed", "timestamp": "x"}),
            json.dumps(["document.completed"]),
        ],
    )
    def test_unparsable_payload(self, body: str):
        """Correctly signed bodies that are not valid events should fail."""
        with pytest.raises(SignatureVerificationError, match="Unparsable payload"):
            verify_webhook_signature(body, _header(body), SECRET, clock=_at(SIGNED_AT))

    def test_extra_payload_fields_are_ignored(self):
        """Unknown top-level keys should not break verification."""
        body = json.dumps(
            {
                "id": "evt_9",
                "type": "batch.completed",
                "timestamp": "2023-11-14T22:13:20Z",
                "data": {"batchId": "batch_1"},
                "apiVersion": "2024-01",
            }
        )
        event = verify_webhook_signature(body, _header(body), SECRET, clock=_at(SIGNED_AT))
        assert event.type == "batch.completed"

    def test_mismatch_checked_before_timestamp(self, payload: str):
        """A tampered and stale delivery reports the mismatch."""
        header = _header(payload)
        with pytest.raises(SignatureVerificationError, match="Signature mismatch"):
            verify_webhook_signature(payload + "x", header, SECRET, clock=_at(SIGNED_AT + 9999))

    def test_all_failures_share_one_error_type(self, payload: str):
        """Callers can only tell failures apart by message, not by type."""
        failures = [
            (payload, "garbage"),
            (payload + "x", _header(payload)),
        ]
        for body, header in failures:
            with pytest.raises(SignatureVerificationError) as exc_info:
                verify_webhook_signature(body, header, SECRET, clock=_at(SIGNED_AT))
            assert type(exc_info.value) is SignatureVerificationError

    @pytest.mark.parametrize("tolerance", [-1, float("inf"), float("nan")])
    def test_rejects_invalid_tolerance(self, payload: str, tolerance: float):
        """Tolerance must be a finite, non-negative number."""
        with pytest.raises(ValidationError):
            verify_webhook_signature(
                payload, _header(payload), SECRET, tolerance=tolerance, clock=_at(SIGNED_AT)
            )

    def test_defaults_to_wall_clock(self, payload: str):
        """Without an injected clock, the current time is used."""
        header = sign_payload(payload, SECRET)
        assert verify_webhook_signature(payload, header, SECRET).id == "evt_123"


class TestSignPayload:
    """Tests for sign_payload."""

    def test_builds_verifiable_header(self, payload: str):
        """A header built by sign_payload should verify."""
        header = sign_payload(payload, SECRET, timestamp=SIGNED_AT)
        assert header == _header(payload)
        verify_webhook_signature(payload, header, SECRET, clock=_at(SIGNED_AT))

    def test_uses_clock_when_timestamp_omitted(self, payload: str):
        """The injected clock provides the timestamp, truncated to seconds."""
        header = sign_payload(payload, SECRET, clock=_at(SIGNED_AT + 0.9))
        assert parse_signature_header(header).timestamp == SIGNED_AT

    def test_rejects_negative_timestamp(self, payload: str):
        """Negative timestamps cannot be represented on the wire."""
        with pytest.raises(ValidationError):
            sign_payload(payload, SECRET, timestamp=-1)

    @pytest.mark.parametrize("timestamp", [MAX_TIMESTAMP + 1, 10**400])
    def test_rejects_oversized_timestamp(self, payload: str, timestamp: int):
        """Timestamps beyond the header's 12-digit range cannot be signed."""
        with pytest.raises(ValidationError):
            sign_payload(payload, SECRET, timestamp=timestamp)

    def test_largest_timestamp_round_trips(self, payload: str):
        """The top of the range still parses."""
        header = sign_payload(payload, SECRET, timestamp=MAX_TIMESTAMP)
        assert parse_signature_header(header).timestamp == MAX_TIMESTAMP

    def test_header_name(self):
        """The header constant should match the service's header."""
        assert SIGNATURE_HEADER == "X-RenderDocs-Signature"
