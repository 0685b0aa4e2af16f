"""Exception sink shared by every module.

Infrastructure faults are recorded here with their traceback and any
context the caller binds, then replaced by a generic message before
anything reaches an API client.
"""

from __future__ import annotations

from typing import Any

import structlog

logger = structlog.get_logger("modules.faults")


def log_exception(exc: BaseException, **context: Any) -> None:
    """Record ``exc`` (with traceback) plus structured context."""
    logger.error(
        "exception_logged",
        error_type=type(exc).__name__,
        error=str(exc),
        exc_info=exc,
        **context,
    )
