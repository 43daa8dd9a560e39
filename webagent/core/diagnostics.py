"""Diagnostic sink used by the web user agent on failure paths."""

from __future__ import annotations

import logging
from typing import Callable

DiagnosticSink = Callable[[int, str], None]

logger = logging.getLogger(__name__)


def logging_sink(level: int, message: str) -> None:
    """Forward a diagnostic to the module logger."""

    logger.log(level, "%s", message)


__all__ = ["DiagnosticSink", "logging_sink"]
