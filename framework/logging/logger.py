import sys
from pathlib import Path
from contextvars import ContextVar
from typing import Optional
from loguru import logger
from fastapi import Request
from framework.config import settings

# Store current request in contextvars for async context
_current_request: ContextVar[Optional[Request]] = ContextVar("current_request", default=None)

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(parents=True, exist_ok=True)

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<magenta>Trace:{extra[trace_id]} Subject:{extra[subject]}</magenta> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | "
    "Trace:{extra[trace_id]} Subject:{extra[subject]} - {message}"
)


class LogConfig:
    """Global logging configuration using Loguru."""

    @classmethod
    def setup_logging(cls):
        logger.remove()
        logger.configure(extra={"trace_id": "system", "subject": "-"})

        logger.add(
            sys.stdout,
            enqueue=True,
            backtrace=True,
            diagnose=settings.DEBUG,
            format=CONSOLE_FORMAT,
            level=settings.LOG_LEVEL,
        )

        logger.add(
            LOG_DIR / "app_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention=settings.LOG_RETENTION,
            compression="zip",
            enqueue=True,
            format=FILE_FORMAT,
            level="DEBUG",
        )

        # Token and gate failures land here as warnings; server faults as errors
        logger.add(
            LOG_DIR / "error_{time:YYYY-MM-DD}.log",
            level="ERROR",
            rotation="100 MB",
            retention=settings.LOG_RETENTION,
            enqueue=True,
            format=FILE_FORMAT,
        )


def get_logger(name: str = None, request: Optional[Request] = None):
    """
    Get a logger bound to the current trace and, once authenticated, subject.

    Pass request explicitly outside the middleware; otherwise it is taken from
    the request context.
    """
    current_request = request or _current_request.get()

    # Module-level loggers bind nothing here so logger.contextualize() can fill it in
    extra = {}
    if current_request is not None:
        extra["trace_id"] = getattr(current_request.state, "trace_id", "unknown")
        identity = getattr(current_request.state, "identity", None)
        if identity is not None:
            extra["subject"] = identity.subject_id

    if name:
        extra["name"] = name
    return logger.bind(**extra)
