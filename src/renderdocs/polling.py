"""Waiting for document jobs to finish.

Document generation is asynchronous on the service side: a generate call
returns a job ID immediately and the job moves through
``queued -> processing -> completed | failed``. CompletionWaiter turns that
into a single call bounded by a timeout.

Each wait is a small state machine::

    POLLING --terminal status--> DONE
    POLLING --elapsed > timeout--> TIMED_OUT
    POLLING --token cancelled--> CANCELLED

Time and sleeping are injected so tests can drive the loop with a fake
clock, and the default sleep waits on the cancellation token so a cancel
from another thread or task interrupts it immediately.

Example:
    ```python
    token = CancellationToken()
    waiter = CompletionWaiter(PollConfig(poll_interval_ms=500, timeout_ms=60000))

    job = await waiter.wait_async(job_id, client.documents.get_job, token)
    print(job.download_url)
    ```
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Awaitable, Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from renderdocs.exceptions import PollCancelledError, PollTimeoutError, ValidationError
from renderdocs.models import DocumentJob

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
FetchJob = Callable[[str], DocumentJob]
AsyncFetchJob = Callable[[str], Awaitable[DocumentJob]]


class PollState(str, Enum):
    """Where a single wait currently stands."""

    POLLING = "polling"
    DONE = "done"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


class PollConfig(BaseModel):
    """Polling cadence and overall time budget.

    Attributes:
        poll_interval_ms: Delay between status fetches.
        timeout_ms: Elapsed time after which a non-terminal job fails the wait.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    poll_interval_ms: int = Field(default=1000, gt=0, description="Delay between polls")
    timeout_ms: int = Field(default=30000, gt=0, description="Maximum time to wait")

    @classmethod
    def from_values(
        cls,
        poll_interval_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> PollConfig:
        """Build a config from optional overrides.

        Raises:
            ValidationError: If a value is not a positive integer.
        """
        values: dict[str, int] = {}
        if poll_interval_ms is not None:
            values["poll_interval_ms"] = poll_interval_ms
        if timeout_ms is not None:
            values["timeout_ms"] = timeout_ms
        try:
            return cls(**values)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "poll_config"
            raise ValidationError(field, error["msg"]) from e

    @property
    def poll_interval_seconds(self) -> float:
        """Poll interval converted for sleep functions."""
        return self.poll_interval_ms / 1000


class CancellationToken:
    """Cooperative cancellation signal for a wait.

    ``cancel()`` may be called from any thread. Sleeping waiters, blocking
    or async, wake up as soon as it is called.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._waiters: set[asyncio.Future[None]] = set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Signal cancellation and wake every sleeping waiter."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            waiters = list(self._waiters)

        for future in waiters:
            future.get_loop().call_soon_threadsafe(_resolve, future)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or ``timeout`` seconds pass.

        Returns:
            True if the token was cancelled.
        """
        return self._event.wait(timeout)

    async def wait_async(self, timeout: float | None = None) -> bool:
        """Await until cancelled or ``timeout`` seconds pass.

        Returns:
            True if the token was cancelled.
        """
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        with self._lock:
            if self._event.is_set():
                return True
            self._waiters.add(future)

        try:
            await asyncio.wait_for(future, timeout)
        except TimeoutError:
            pass  # slept the full interval
        finally:
            with self._lock:
                self._waiters.discard(future)

        return self.cancelled


def _resolve(future: asyncio.Future[None]) -> None:
    if not future.done():
        future.set_result(None)


def _interruptible_sleep(seconds: float, token: CancellationToken) -> None:
    token.wait(seconds)


async def _interruptible_async_sleep(seconds: float, token: CancellationToken) -> None:
    await token.wait_async(seconds)


class _PollRun:
    """Bookkeeping for one wait, shared by the blocking and async loops."""

    def __init__(
        self,
        job_id: str,
        config: PollConfig,
        clock: Clock,
        token: CancellationToken,
    ) -> None:
        self.job_id = job_id
        self.config = config
        self.state = PollState.POLLING
        self.polls = 0
        self._clock = clock
        self._token = token
        self._started_at = clock()

    def elapsed_ms(self) -> float:
        return (self._clock() - self._started_at) * 1000

    def check_cancelled(self) -> None:
        if self._token.cancelled:
            self._leave_polling(PollState.CANCELLED)
            logger.info("Wait for job %s cancelled after %d poll(s)", self.job_id, self.polls)
            raise PollCancelledError(self.job_id)

    def _require_polling(self) -> None:
        if self.state is not PollState.POLLING:
            raise RuntimeError(f"wait for job {self.job_id} already ended as {self.state.value}")

    def _leave_polling(self, state: PollState) -> None:
        self._require_polling()
        self.state = state

    def observe(self, job: DocumentJob) -> PollState:
        """Record a fetched snapshot and advance the state.

        Returns:
            DONE when the job is terminal, otherwise POLLING.

        Raises:
            PollTimeoutError: If the job is still running past the time budget.
        """
        self._require_polling()
        self.polls += 1

        if job.is_terminal:
            self._leave_polling(PollState.DONE)
            logger.debug(
                "Job %s reached %s after %d poll(s)", self.job_id, job.status, self.polls
            )
            return self.state

        elapsed = self.elapsed_ms()
        if elapsed > self.config.timeout_ms:
            self._leave_polling(PollState.TIMED_OUT)
            logger.warning(
                "Timed out waiting for job %s: status %s after %.0fms and %d poll(s)",
                self.job_id,
                job.status,
                elapsed,
                self.polls,
            )
            raise PollTimeoutError(self.job_id, elapsed)

        logger.debug("Job %s still %s (poll %d)", self.job_id, job.status, self.polls)
        return self.state


class CompletionWaiter:
    """Polls a job until it completes, fails, times out or is cancelled.

    Stateless between calls: one waiter can serve many concurrent waits.

    Args:
        config: Polling cadence and time budget.
        clock: Monotonic time source in seconds.
        sleep: Blocking sleep ``(seconds, token)``. Must return early once
            the token is cancelled.
        async_sleep: Async counterpart of ``sleep``.
    """

    def __init__(
        self,
        config: PollConfig | None = None,
        *,
        clock: Clock = time.monotonic,
        sleep: Callable[[float, CancellationToken], None] | None = None,
        async_sleep: Callable[[float, CancellationToken], Awaitable[None]] | None = None,
    ) -> None:
        self.config = config or PollConfig()
        self._clock = clock
        self._sleep = sleep or _interruptible_sleep
        self._async_sleep = async_sleep or _interruptible_async_sleep

    def wait(
        self,
        job_id: str,
        fetch_job: FetchJob,
        cancel_token: CancellationToken | None = None,
    ) -> DocumentJob:
        """Block until the job reaches a terminal state.

        Errors raised by ``fetch_job`` propagate unchanged.

        Raises:
            PollTimeoutError: The job was still running after ``timeout_ms``.
            PollCancelledError: ``cancel_token`` was cancelled.
        """
        token = cancel_token or CancellationToken()
        run = _PollRun(job_id, self.config, self._clock, token)

        while True:
            run.check_cancelled()
            job = fetch_job(job_id)
            if run.observe(job) is PollState.DONE:
                return job
            self._sleep(self.config.poll_interval_seconds, token)

    async def wait_async(
        self,
        job_id: str,
        fetch_job: AsyncFetchJob,
        cancel_token: CancellationToken | None = None,
    ) -> DocumentJob:
        """Await until the job reaches a terminal state.

        Same semantics as :meth:`wait` with an async ``fetch_job``. Cancelling
        the surrounding task raises ``asyncio.CancelledError`` as usual.
        """
        token = cancel_token or CancellationToken()
        run = _PollRun(job_id, self.config, self._clock, token)

        while True:
            run.check_cancelled()
            job = await fetch_job(job_id)
            if run.observe(job) is PollState.DONE:
                return job
            await self._async_sleep(self.config.poll_interval_seconds, token)


def wait_for_completion(
    job_id: str,
    fetch_job: FetchJob,
    *,
    poll_interval_ms: int | None = None,
    timeout_ms: int | None = None,
    cancel_token: CancellationToken | None = None,
    clock: Clock = time.monotonic,
    sleep: Callable[[float, CancellationToken], None] | None = None,
) -> DocumentJob:
    """Block until ``job_id`` finishes. See :class:`CompletionWaiter`."""
    config = PollConfig.from_values(poll_interval_ms, timeout_ms)
    waiter = CompletionWaiter(config, clock=clock, sleep=sleep)
    return waiter.wait(job_id, fetch_job, cancel_token)


async def async_wait_for_completion(
    job_id: str,
    fetch_job: AsyncFetchJob,
    *,
    poll_interval_ms: int | None = None,
    timeout_ms: int | None = None,
    cancel_token: CancellationToken | None = None,
    clock: Clock = time.monotonic,
    async_sleep: Callable[[float, CancellationToken], Awaitable[None]] | None = None,
) -> DocumentJob:
    """Await until ``job_id`` finishes. See :class:`CompletionWaiter`."""
    config = PollConfig.from_values(poll_interval_ms, timeout_ms)
    waiter = CompletionWaiter(config, clock=clock, async_sleep=async_sleep)
    return await waiter.wait_async(job_id, fetch_job, cancel_token)
