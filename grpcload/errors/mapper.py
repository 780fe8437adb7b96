"""Error response mapping for the command-line front end.

Converts structured GrpcLoadError exceptions into dicts with a machine-readable
error code, the error kind and a recovery hint.
"""

from typing import Any, Dict

from grpcload.exceptions import (
    GrpcLoadError,
    OptionIOError,
    ProtoFormatError,
    RequiredFieldError,
    SerializationError,
    ValidationError,
)
from grpcload.logger import session_logger as logger


# Recovery hints keyed by GrpcLoadError.code
RECOVERY_STRATEGIES: Dict[str, str] = {
    # Required fields
    "CALL_REQUIRED": "Pass the fully-qualified method to call, e.g. --call helloworld.Greeter/SayHello.",
    "HOST_REQUIRED": "Pass the target address, e.g. localhost:50051, or set GRPCLOAD_HOST.",
    "SOURCE_REQUIRED": "Provide a schema source with --proto <file.proto> or --protoset <file.protoset>.",
    "SOURCE_CONFLICT": "Use either --proto or --protoset, not both.",

    # Field values
    "INVALID_PROTO_EXTENSION": "The proto source must be a .proto file. Use --protoset for compiled descriptor sets.",
    "NEGATIVE_VALUE": "Counts (total requests, concurrency, qps) must be zero or greater.",
    "INVALID_VALUE": "Counts and cpus must be integers; metadata keys and values must be strings.",
    "INVALID_DURATION": "Durations are plain seconds or <number><unit> parts (ms|s|m|h), e.g. 2 or 1m30s.",

    # Payload and metadata sources
    "OPTION_IO_ERROR": "Check that the file exists and is readable by the current user.",
    "SERIALIZATION_ERROR": "Payload and metadata values must be JSON serializable (dicts, lists, strings, numbers).",
}


def get_error_kind(error: GrpcLoadError) -> str:
    """Derive the error kind from the exception class name.

    Converts class names like RequiredFieldError to REQUIRED_FIELD.
    """
    name = error.__class__.__name__
    if name.endswith("Error"):
        name = name[:-5]
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.upper())
    return "".join(result)


def get_recovery_strategy(error: GrpcLoadError) -> str:
    """Specific hint for the error code if known, otherwise one for its kind."""
    if error.code in RECOVERY_STRATEGIES:
        return RECOVERY_STRATEGIES[error.code]

    if isinstance(error, (RequiredFieldError, ProtoFormatError)):
        return "Check the call, host and schema source arguments."
    elif isinstance(error, ValidationError):
        return "Review the validation error details and correct the input."
    elif isinstance(error, OptionIOError):
        return RECOVERY_STRATEGIES["OPTION_IO_ERROR"]
    elif isinstance(error, SerializationError):
        return RECOVERY_STRATEGIES["SERIALIZATION_ERROR"]

    return "Review the error message and adjust the run options."


def error_to_response(error: GrpcLoadError) -> Dict[str, Any]:
    """Convert an error into a JSON-safe response dict."""
    response = {
        "success": False,
        "error_code": error.code,
        "error_kind": get_error_kind(error),
        "message": error.message,
        "details": dict(error.details),
        "recovery": get_recovery_strategy(error),
    }
    logger.debug("errors.mapped", error_code=error.code, error_kind=response["error_kind"])
    return response
