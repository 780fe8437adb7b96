"""Exceptions raised while assembling a run configuration.

These map one-to-one onto the failure kinds of configuration options and the
final cross-field checks of the assembler.
"""

from __future__ import annotations

from grpcload.exceptions.base import GrpcLoadError, ValidationError


class RequiredFieldError(ValidationError):
    """Raised when a required field (call, host, schema source) is missing or ambiguous."""

    pass


class ProtoFormatError(ValidationError):
    """Raised when a proto path does not carry the .proto extension."""

    pass


class OptionIOError(GrpcLoadError):
    """Raised when an option cannot read its file or stream."""

    pass


class SerializationError(GrpcLoadError):
    """Raised when a structured payload or metadata value cannot be encoded as JSON."""

    pass
