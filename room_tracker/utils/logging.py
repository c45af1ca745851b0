import logging
import sys

import structlog

from room_tracker.config.settings import get_settings


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Setup structured logging for the application.

    ``log_format`` is ``"json"`` (services, default) or ``"console"`` for
    human-readable output from the import command.
    """

    settings = get_settings()
    if log_level is None:
        log_level = settings.log_level
    if log_format is None:
        log_format = settings.log_format

    renderer = (
        structlog.dev.ConsoleRenderer(colors=False)
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )

    # Shared by structlog events and foreign stdlib records (uvicorn, supabase)
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    # Rendering happens once, in the handler, so reconfiguring swaps the output format
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Quiet noisy third-party loggers (HTTP/2 debug, client libraries)
    noisy_loggers: dict[str, str] = {
        "httpx": "WARNING",
        "httpcore": "WARNING",
        "hpack": "WARNING",
        "uvicorn": "INFO",
        "uvicorn.error": "INFO",
        "uvicorn.access": "WARNING",
    }
    for logger_name, level in noisy_loggers.items():
        lib_logger = logging.getLogger(logger_name)
        lib_logger.setLevel(getattr(logging, level, logging.WARNING))
        # Prevent double logging via root
        lib_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)
