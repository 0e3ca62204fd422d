"""structlog setup for the proxy and CLI.

Stdlib loggers (``logging.getLogger(__name__)``) are rendered through the same
structlog chain, so request context bound with :func:`bind_context` shows up on
every line emitted while a request is dispatched.
"""

import logging
import sys

import structlog

# httpx logs full request URLs at INFO; Gemini carries its API key in the query.
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str, *, app_env: str = "dev", json_output: bool | None = None
) -> None:
    """Route stdlib and structlog records to stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        app_env: Deployment environment; ``prod`` selects JSON lines.
        json_output: Force JSON (True) or console (False) rendering.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if json_output is None:
        json_output = app_env == "prod"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: structlog.types.Processor
    if json_output:
        # Prompts and plans are Japanese; keep them readable in log lines.
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def bind_context(**kwargs: object) -> None:
    """Attach fields (provider, model, ...) to log lines of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
