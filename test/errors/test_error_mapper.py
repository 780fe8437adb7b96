"""Tests for error mapper functionality.

These tests verify:
1. Error response structure is correct
2. Recovery strategies are included
3. Error kinds are derived from class names
"""

from grpcload.core import options
from grpcload.core.builder import build
from grpcload.errors.mapper import (
    RECOVERY_STRATEGIES,
    error_to_response,
    get_error_kind,
    get_recovery_strategy,
)
from grpcload.exceptions import (
    GrpcLoadError,
    OptionIOError,
    ProtoFormatError,
    RequiredFieldError,
    ValidationError,
)


class TestGetErrorKind:
    def test_simple_error_class(self):
        assert get_error_kind(ValidationError("TEST", "msg")) == "VALIDATION"

    def test_compound_error_class(self):
        assert get_error_kind(RequiredFieldError("TEST", "msg")) == "REQUIRED_FIELD"

    def test_option_io_error(self):
        # Consecutive capitals are split letter by letter.
        assert get_error_kind(OptionIOError("TEST", "msg")) == "OPTION_I_O"

    def test_base_error_class(self):
        assert get_error_kind(GrpcLoadError("TEST", "msg")) == "GRPC_LOAD"


class TestGetRecoveryStrategy:
    def test_known_code(self):
        error = RequiredFieldError("SOURCE_REQUIRED", "must provide proto or protoset")
        assert "--proto" in get_recovery_strategy(error)

    def test_every_known_code_has_text(self):
        for code, text in RECOVERY_STRATEGIES.items():
            assert text, code

    def test_unknown_validation_code_falls_back_to_kind(self):
        strategy = get_recovery_strategy(ValidationError("SOMETHING_ELSE", "bad"))
        assert "validation" in strategy.lower()

    def test_unknown_proto_code(self):
        strategy = get_recovery_strategy(ProtoFormatError("OTHER", "bad"))
        assert "schema source" in strategy

    def test_generic_fallback(self):
        strategy = get_recovery_strategy(GrpcLoadError("UNKNOWN", "odd"))
        assert strategy


class TestErrorToResponse:
    def test_structure(self):
        error = ProtoFormatError("INVALID_PROTO_EXTENSION", "proto: must have .proto extension", {"path": "x.txt"})
        response = error_to_response(error)

        assert response["success"] is False
        assert response["error_code"] == "INVALID_PROTO_EXTENSION"
        assert response["error_kind"] == "PROTO_FORMAT"
        assert response["message"] == "proto: must have .proto extension"
        assert response["details"] == {"path": "x.txt"}
        assert response["recovery"] == RECOVERY_STRATEGIES["INVALID_PROTO_EXTENSION"]

    def test_from_real_build_failure(self, tmp_path):
        try:
            build("call", "host", options.json_data_from_file(tmp_path / "missing.json"))
        except GrpcLoadError as exc:
            response = error_to_response(exc)
        else:
            raise AssertionError("build should have failed")

        assert response["error_code"] == "OPTION_IO_ERROR"
        assert response["details"]["option"] == "json_data_from_file"
