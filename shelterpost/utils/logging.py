"""Structured logging for the dashboard service, built on structlog.

Every event carries ``service`` and, while a dashboard session is mounted,
``dashboard_session`` (see :func:`bind_session_context`).  Output is
coloured console text in development and one JSON object per line in
production; ``APP_ENV=production`` or ``json_output=True`` selects JSON.

Standard-library loggers (httpx, uvicorn) are routed through the same
processor chain.  The per-request chatter of httpx/httpcore and
uvicorn's access log is held at WARNING unless the service runs at DEBUG,
since ``RequestLoggingMiddleware`` and the providers already log each call.
"""

import logging
import os
import sys

import structlog

SERVICE_NAME = "shelterpost"

_CHATTY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _add_service(
    _logger: object, _method: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        _add_service,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger for the service.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR.
        json_output: Force JSON lines; otherwise JSON only when
            ``APP_ENV`` is ``production``.

    Returns:
        A logger bound to the service name.
    """
    level_name = log_level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"
    shared = _shared_processors()
    renderer = _renderer(use_json)

    structlog.configure(
        processors=[*shared, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    quiet_level = level if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    return structlog.get_logger(logger_name=SERVICE_NAME)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger named after *name*, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)


def bind_session_context(session_id: str, **extra: str) -> None:
    """Attach the dashboard session id to every event logged from this context.

    The binding lives in structlog's contextvars, so it follows the current
    asyncio task and everything it awaits.
    """
    structlog.contextvars.bind_contextvars(dashboard_session=session_id, **extra)


def clear_session_context() -> None:
    """Drop everything bound by :func:`bind_session_context`."""
    structlog.contextvars.clear_contextvars()
