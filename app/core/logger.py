"""
app/core/logger.py

Centralised logging configuration for the verification service and the
caller-side client.  Every module should obtain its logger via:

    from app.core.logger import get_logger
    logger = get_logger(__name__)

File contents are never logged — only filenames, sizes and outcomes.
"""

import logging
import sys
from app.core.config import settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty at INFO (request lines, multipart parts).
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "python_multipart", "multipart")


def _level() -> int:
    return logging.DEBUG if settings.debug else logging.INFO


def _configure_root_logger() -> None:
    """Attach a single stdout handler to the root logger, once."""
    root = logging.getLogger()
    if root.handlers:
        # A test runner or ASGI server already configured logging.
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_level())
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))

    root.setLevel(_level())
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; the root configuration is already applied."""
    return logging.getLogger(name)
