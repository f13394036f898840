"""Utility functions for printquote."""

from printquote.utils.logging import (
    setup_logging,
    get_logger,
    log_performance,
    log_estimate_result,
    StructuredLogger,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_performance",
    "log_estimate_result",
    "StructuredLogger",
]
