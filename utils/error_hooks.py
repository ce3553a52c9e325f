from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def _log_uncaught(exc_type, exc, tb) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    logger.error("Error in Global: %s", exc, exc_info=(exc_type, exc, tb))


def _log_loop_exception(
    loop: asyncio.AbstractEventLoop, context: Dict[str, Any]
) -> None:
    exc = context.get("exception")
    msg = context.get("message", "unhandled exception in event loop")
    if exc is not None:
        logger.error("Error in Promise: %s", exc, exc_info=exc)
    else:
        logger.error("Error in Promise: %s", msg)


def install_global_handlers(
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> None:
    """
    Log-only safety net for uncaught errors and failed, unobserved tasks.

    Never touches what is displayed. Calling it again is a no-op for
    hooks that are already in place.
    """
    if sys.excepthook is not _log_uncaught:
        sys.excepthook = _log_uncaught
    if loop is None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
    if loop.get_exception_handler() is not _log_loop_exception:
        loop.set_exception_handler(_log_loop_exception)
