"""Test doubles shared across the test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx

from renderdocs.models import DocumentJob
from renderdocs.polling import CancellationToken


class FakeClock:
    """Deterministic clock whose sleep advances time instead of blocking.

    Records every sleep so tests can assert how many poll intervals passed.
    """

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float, token: CancellationToken) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    async def async_sleep(self, seconds: float, token: CancellationToken) -> None:
        self.sleep(seconds, token)


def make_job(status: str, job_id: str = "job_abc123", **fields: Any) -> DocumentJob:
    """Build a DocumentJob snapshot with the given status."""
    return DocumentJob(id=job_id, status=status, **fields)


def envelope(data: Any, meta: dict[str, Any] | None = None) -> dict[str, Any]:
    """Wrap data in the API success envelope."""
    body: dict[str, Any] = {"success": True, "data": data}
    if meta is not None:
        body["meta"] = meta
    return body


class RecordingHandler:
    """httpx.MockTransport handler that replays queued responses.

    Each call pops the next response; the last one repeats once the queue
    is drained. Every request is recorded for assertions.
    """

    def __init__(self, *responses: httpx.Response | Callable[[httpx.Request], httpx.Response]):
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if not isinstance(response, httpx.Response):
            return response(request)
        # fresh copy so a repeated response is never read twice
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)
