"""structlog setup shared by the CLI and library code.

Events from ``structlog.get_logger()`` and from stdlib loggers (httpx and
httpcore log through the latter) go through one ``ProcessorFormatter``.
Output goes to stderr; stdout carries command results.
"""

import logging
import sys

import structlog

# Per-request INFO lines from the HTTP stack; shown only at DEBUG.
_HTTP_LOGGERS = ("httpx", "httpcore")


def configure_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Install structlog processors and a single stderr handler.

    Args:
        json_output: JSON lines when ``True``, console rendering otherwise.
        log_level: Root level name, e.g. ``"DEBUG"``.
    """
    level = getattr(logging, log_level.upper())
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    http_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def bind_command(command: str, base_url: str) -> None:
    """Attach the running CLI command and API base URL to every later event."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command, api=base_url)
