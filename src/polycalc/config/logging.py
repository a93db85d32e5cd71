"""structlog configuration for polycalc.

Two output modes, both on stderr next to the ``ERROR <n> <message>``
diagnostics:
- Human (default): console renderer, colored on a TTY
- JSON (--log-json): structured JSON lines

While a stream is parsed, :func:`input_context` and :func:`line_context`
bind ``source`` and ``line_no`` as contextvars, so every record emitted
for a line (including the parser's stdlib ``logging`` calls) carries
where it came from.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

POLYCALC_LOGGER = "polycalc"


@contextmanager
def input_context(source: str) -> Iterator[None]:
    """Tag records emitted while reading *source* with ``source``."""
    with structlog.contextvars.bound_contextvars(source=source):
        yield


@contextmanager
def line_context(line_no: int) -> Iterator[None]:
    """Tag records emitted while parsing one line with ``line_no``."""
    with structlog.contextvars.bound_contextvars(line_no=line_no):
        yield


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and route stdlib logging through them.

    Args:
        verbose: Enable DEBUG-level output (per-line rejection reasons).
            When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(POLYCALC_LOGGER).setLevel(level)
