"""Error handling utilities for grpcload."""

from grpcload.errors.mapper import (
    error_to_response,
    get_error_kind,
    get_recovery_strategy,
)

__all__ = [
    "error_to_response",
    "get_error_kind",
    "get_recovery_strategy",
]
