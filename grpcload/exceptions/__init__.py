"""Custom exceptions for grpcload.

All exceptions carry a code, a message and a details dict so that the CLI
can map them to recovery hints.
"""

from grpcload.exceptions.base import GrpcLoadError, ValidationError
from grpcload.exceptions.config import (
    OptionIOError,
    ProtoFormatError,
    RequiredFieldError,
    SerializationError,
)

__all__ = [
    # Base exceptions
    "GrpcLoadError",
    "ValidationError",
    # Configuration assembly
    "RequiredFieldError",
    "ProtoFormatError",
    "OptionIOError",
    "SerializationError",
]
