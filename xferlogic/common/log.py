"""Centralized logging setup for the XferLogic backend."""

import logging
import sys

from xferlogic.core.conf import settings


def setup_logging() -> None:
    """Attach a single stdout handler to the root logger.

    Idempotent: calling it again (e.g. with reload enabled) does not stack
    handlers.
    """
    root_logger = logging.getLogger()
    if getattr(root_logger, '_xferlogic_logger_configured', False):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))

    root_logger.addHandler(handler)
    root_logger.setLevel(settings.LOG_STD_LEVEL)

    # Third-party clients are chatty at INFO
    for name in ('httpx', 'openai', 'anthropic', 'matplotlib'):
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger._xferlogic_logger_configured = True  # type: ignore[attr-defined]


__all__ = ['setup_logging']
