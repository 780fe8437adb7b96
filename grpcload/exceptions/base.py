"""Base exception classes for grpcload.

Every error carries a machine-readable ``code``, a human-readable ``message``
and an optional ``details`` dict, so callers (and the CLI error mapper) can
classify failures without parsing strings.
"""

from __future__ import annotations

from typing import Any


class GrpcLoadError(Exception):
    """Root of the grpcload exception hierarchy."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"


class ValidationError(GrpcLoadError):
    """Raised when an option or field value is invalid."""

    pass
