"""Structured logging for the RenderDocs SDK.

SDK modules log through ``logging.getLogger(__name__)`` so they stay quiet
inside host applications that never opt in. :func:`configure_logging`
attaches one handler to the ``renderdocs`` logger whose
``structlog.stdlib.ProcessorFormatter`` renders those records, and anything
logged through :func:`get_logger`, as JSON or as colored console lines.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from structlog.typing import Processor

SDK_LOGGER = "renderdocs"

# Track if logging has been configured
_configured = False
_handler: logging.Handler | None = None


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(format: str) -> list[Processor]:
    if format.lower() == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=True)]


def configure_logging(
    level: str = "INFO",
    format: str = "json",
    stream: TextIO | None = None,
) -> None:
    """Route SDK log records through structlog.

    Calling it again replaces the previous handler, so the level and
    format can be changed at runtime.

    Args:
        level: Log level name. Unknown names fall back to INFO.
        format: "json" for one JSON object per line, "text" for console output.
        stream: Destination; defaults to the current ``sys.stdout``.

    Example:
        ```python
        configure_logging(level="DEBUG", format="text")
        job = await client.documents.wait_for_completion(job_id)
        ```
    """
    global _configured, _handler

    log_level = getattr(logging, level.upper(), logging.INFO)
    shared = _shared_processors()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderer(format),
        ],
    )
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    sdk_logger = logging.getLogger(SDK_LOGGER)
    if _handler is not None:
        sdk_logger.removeHandler(_handler)
    sdk_logger.addHandler(handler)
    sdk_logger.setLevel(log_level)
    # records are rendered here; the host's root handlers would print them twice
    sdk_logger.propagate = False
    _handler = handler

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger under the ``renderdocs`` namespace.

    Args:
        name: Child logger name, e.g. ``"webhooks"``. Names already starting
            with ``renderdocs`` are used as given.
    """
    if not _configured:
        configure_logging()

    if not name:
        full_name = SDK_LOGGER
    elif name == SDK_LOGGER or name.startswith(f"{SDK_LOGGER}."):
        full_name = name
    else:
        full_name = f"{SDK_LOGGER}.{name}"
    return structlog.get_logger(full_name)  # type: ignore[no-any-return]


def bind_context(**kwargs: object) -> None:
    """Bind values, such as a job ID or webhook delivery ID, to every later log line."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)
