"""Logging for the storefront API and CLI.

Records flow through the standard library: always to stdout, and outside the
test environment also to rotating files under ``LOG_DIR``. structlog renders
them as JSON in production and staging and as coloured console lines
elsewhere. Each HTTP request binds its method and path so every record emitted
while serving it carries them.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVIRONMENTS = ("production", "staging")
_MAX_LOG_BYTES = 10 * 1024 * 1024

# Transport loggers of the payment gateway, asset store and test clients
_QUIET_LOGGERS = ("urllib3", "requests", "cloudinary", "httpx", "asyncio")


def current_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def log_level(environment: str) -> str:
    return os.getenv("LOG_LEVEL", _LEVELS.get(environment, "INFO")).upper()


def _rotating(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=_MAX_LOG_BYTES, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    return handler


def build_handlers(environment: str, level: str, log_dir: str | None = None) -> list[logging.Handler]:
    """Console handler, plus general and error files unless running tests."""
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    if environment == "test":
        return [console]

    directory = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)
    return [
        console,
        _rotating(directory / "storefront.log", level),
        _rotating(directory / "storefront_error.log", logging.ERROR),
    ]


def build_processors(environment: str) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]

    if environment in _JSON_ENVIRONMENTS:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
            )
        )
    return processors


def configure_logging(log_dir: str | None = None) -> None:
    """Install handlers on the root logger and configure structlog."""
    environment = current_environment()
    level = log_level(environment)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = build_handlers(environment, level, log_dir)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(environment),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request(method: str, path: str) -> None:
    """Start a fresh log context for one HTTP request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=method, path=path)
