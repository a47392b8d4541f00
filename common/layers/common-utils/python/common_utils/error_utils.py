"""Helpers for consistent error logging."""

from __future__ import annotations

import logging

__all__ = ["log_exception", "error_message"]


def log_exception(message: str, exc: Exception, logger: logging.Logger) -> None:
    """Log ``exc`` with ``message`` and its traceback using ``logger``."""

    logger.error("%s: %s", message, exc, exc_info=exc)


def error_message(exc: BaseException) -> str:
    """Return a readable message for ``exc``, falling back to its class name."""

    return str(exc) or exc.__class__.__name__
