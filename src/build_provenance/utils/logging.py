"""Structured logging utilities."""

import logging
import sys
from typing import Any

ROOT_LOGGER = "build_provenance"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends `key=value` context fields to each message."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "extra_fields", None)
        if not fields:
            return message
        extra = " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
        return f"{message} {extra}"


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    structured: bool = False,
) -> None:
    """Configure logging for build-provenance.

    Build drivers usually only show stderr on failure, so everything goes
    to stderr.

    Args:
        level: Level name, case-insensitive
        format_string: Overrides the default line format
        structured: Append context fields as key=value pairs
    """
    if format_string is None:
        if structured:
            format_string = "%(asctime)s %(levelname)s %(name)s %(message)s"
        else:
            format_string = "build-provenance %(levelname)s: %(message)s"

    formatter_cls = StructuredFormatter if structured else logging.Formatter
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter_cls(format_string))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a build-provenance module.

    Args:
        name: Module name (will be prefixed with build_provenance)

    Returns:
        Logger
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches its context to every record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        # Per-call fields win over the adapter's context
        extra["extra_fields"] = {**self.extra, **extra.pop("extra_fields", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> LoggerAdapter:
    """Get a logger that tags messages with context fields.

    Example:
        log = get_logger_with_context("collectors.git", root="/src/app")
        log.debug("probing repository")

    Args:
        name: Module name
        **context: Context fields to include in all log messages

    Returns:
        LoggerAdapter with context
    """
    return LoggerAdapter(get_logger(name), context)
