"""Pytest configuration and fixtures

Provides shared fixtures for all tests: deterministic run-name and CPU
defaults, sample schema/payload files and structlog isolation.
"""

import sys
from pathlib import Path

import pytest
import structlog

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from grpcload.core.builder import build  # noqa: E402 - needs sys.path above


# ============================================================================
# DETERMINISTIC DEFAULTS
# ============================================================================

TEST_RUN_NAME = "test-run-0001"
TEST_CPUS = 4
TEST_CALL = "helloworld.Greeter/SayHello"
TEST_HOST = "localhost:50051"


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog.configure() a test performed (e.g. via the CLI)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def build_fixed():
    """build() with a fixed run name and CPU count."""

    def _build(call=TEST_CALL, host=TEST_HOST, *options, **kwargs):
        kwargs.setdefault("name_generator", lambda: TEST_RUN_NAME)
        kwargs.setdefault("cpu_count", TEST_CPUS)
        return build(call, host, *options, **kwargs)

    return _build


# ============================================================================
# SAMPLE FILES
# ============================================================================


@pytest.fixture
def proto_path(tmp_path: Path) -> Path:
    """A minimal .proto file inside a sub directory."""
    proto_dir = tmp_path / "protos"
    proto_dir.mkdir()
    path = proto_dir / "greeter.proto"
    path.write_text(
        'syntax = "proto3";\n'
        "package helloworld;\n"
        "service Greeter { rpc SayHello (HelloRequest) returns (HelloReply) {} }\n"
        "message HelloRequest { string name = 1; }\n"
        "message HelloReply { string message = 1; }\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def json_payload_file(tmp_path: Path) -> Path:
    path = tmp_path / "payload.json"
    path.write_text('{"name":"bob"}', encoding="utf-8")
    return path


@pytest.fixture
def binary_payload_file(tmp_path: Path) -> Path:
    path = tmp_path / "payload.bin"
    path.write_bytes(b"\x0a\x03bob")
    return path


@pytest.fixture
def metadata_file(tmp_path: Path) -> Path:
    path = tmp_path / "metadata.json"
    path.write_text('{"request-id":"abc"}', encoding="utf-8")
    return path
