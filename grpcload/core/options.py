"""Composable configuration options.

Each constructor returns an :class:`Option`: a named, reusable mutator that
the assembler applies to a :class:`RunConfigBuilder`. Options run in the order
given; when two touch the same field the later one wins.

Usage::

    from grpcload.core import options

    opts = [
        options.proto_file("protos/greeter.proto", ["vendor"]),
        options.json_data({"name": "bob"}),
        options.total_requests(1000),
        options.timeout("5s"),
    ]
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Callable, Iterable, Mapping

from grpcload.core.models import PROTO_EXTENSION, RunConfigBuilder
from grpcload.core.timeparse import Duration, to_seconds
from grpcload.exceptions import (
    OptionIOError,
    ProtoFormatError,
    SerializationError,
    ValidationError,
)


@dataclass(frozen=True)
class Option:
    """A single configuration change, applied during construction only."""

    name: str
    apply: Callable[[RunConfigBuilder], None]

    def __call__(self, builder: RunConfigBuilder) -> None:
        self.apply(builder)


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _integer(option: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            "INVALID_VALUE",
            f"{option} must be an integer",
            {"option": option, "value": repr(value)},
        )
    return value


def _non_negative(option: str, value: int) -> int:
    value = _integer(option, value)
    if value < 0:
        raise ValidationError(
            "NEGATIVE_VALUE",
            f"{option} must be >= 0, got {value}",
            {"option": option, "value": value},
        )
    return value


def _seconds(option: str, value: Duration) -> float:
    try:
        return to_seconds(value)
    except ValueError as exc:
        raise ValidationError(
            "INVALID_DURATION",
            f"{option}: {exc}",
            {"option": option, "value": repr(value)},
        ) from exc


def _read_file(option: str, path: str | os.PathLike[str]) -> bytes:
    try:
        return Path(path).read_bytes()
    # ValueError covers paths the OS refuses outright, e.g. an embedded NUL.
    except (OSError, ValueError) as exc:
        raise OptionIOError(
            "OPTION_IO_ERROR",
            f"{option}: cannot read {os.fspath(path)!r}: {getattr(exc, 'strerror', None) or exc}",
            {"option": option, "path": os.fspath(path)},
        ) from exc


def _to_json(option: str, value: Any) -> bytes:
    try:
        encoded = json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            "SERIALIZATION_ERROR",
            f"{option}: value is not JSON serializable: {exc}",
            {"option": option, "type": type(value).__name__},
        ) from exc
    return encoded.encode("utf-8")


def _set_payload(builder: RunConfigBuilder, data: bytes, *, binary: bool) -> None:
    builder.data = data
    builder.binary = binary


# ---------------------------------------------------------------------------
# security
# ---------------------------------------------------------------------------


def certificate(path: str, cname: str = "") -> Option:
    """TLS certificate file and server name override. The file is not checked here."""
    path = path.strip()

    def _apply(builder: RunConfigBuilder) -> None:
        builder.cert = path
        builder.cname = cname

    return Option("certificate", _apply)


def insecure(enabled: bool = True) -> Option:
    """Plaintext connection; the engine ignores any certificate when set."""

    def _apply(builder: RunConfigBuilder) -> None:
        builder.insecure = bool(enabled)

    return Option("insecure", _apply)


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


def total_requests(n: int) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        builder.total_requests = _non_negative("total_requests", n)

    return Option("total_requests", _apply)


def concurrency(c: int) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        builder.concurrency = _non_negative("concurrency", c)

    return Option("concurrency", _apply)


def qps(limit: int) -> Option:
    """Rate cap in queries per second; 0 means unlimited."""

    def _apply(builder: RunConfigBuilder) -> None:
        builder.qps = _non_negative("qps", limit)

    return Option("qps", _apply)


def duration(span: Duration) -> Option:
    """Total run duration; 0 leaves the run bounded by total_requests."""

    def _apply(builder: RunConfigBuilder) -> None:
        builder.duration_seconds = _seconds("duration", span)

    return Option("duration", _apply)


# ---------------------------------------------------------------------------
# timeouts
# ---------------------------------------------------------------------------


def timeout(span: Duration) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        builder.timeout_seconds = _seconds("timeout", span)

    return Option("timeout", _apply)


def dial_timeout(span: Duration) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        builder.dial_timeout_seconds = _seconds("dial_timeout", span)

    return Option("dial_timeout", _apply)


def keepalive(span: Duration) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        builder.keepalive_seconds = _seconds("keepalive", span)

    return Option("keepalive", _apply)


# ---------------------------------------------------------------------------
# payload
# ---------------------------------------------------------------------------


def binary_data(data: bytes) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        _set_payload(builder, bytes(data), binary=True)

    return Option("binary_data", _apply)


def binary_data_from_file(path: str | os.PathLike[str]) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        _set_payload(builder, _read_file("binary_data_from_file", path), binary=True)

    return Option("binary_data_from_file", _apply)


def json_data_from_string(data: str) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        _set_payload(builder, data.encode("utf-8"), binary=False)

    return Option("json_data_from_string", _apply)


def json_data(value: Any) -> Option:
    """Structured payload, encoded to JSON when the option is applied."""

    def _apply(builder: RunConfigBuilder) -> None:
        _set_payload(builder, _to_json("json_data", value), binary=False)

    return Option("json_data", _apply)


def json_data_from_reader(stream: IO[bytes] | IO[str]) -> Option:
    """Read the whole stream as the JSON payload. Text streams are UTF-8 encoded."""

    def _apply(builder: RunConfigBuilder) -> None:
        try:
            raw = stream.read()
        # UnicodeDecodeError from a text stream is a ValueError.
        except (OSError, ValueError) as exc:
            raise OptionIOError(
                "OPTION_IO_ERROR",
                f"json_data_from_reader: cannot read stream: {exc}",
                {"option": "json_data_from_reader"},
            ) from exc
        data = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)
        _set_payload(builder, data, binary=False)

    return Option("json_data_from_reader", _apply)


def json_data_from_file(path: str | os.PathLike[str]) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        _set_payload(builder, _read_file("json_data_from_file", path), binary=False)

    return Option("json_data_from_file", _apply)


# ---------------------------------------------------------------------------
# metadata
# ---------------------------------------------------------------------------


def metadata_from_json(md: str) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        builder.metadata = md.encode("utf-8")

    return Option("metadata_from_json", _apply)


def metadata(md: Mapping[str, str] | None) -> Option:
    """Metadata as a mapping; ``None`` encodes as JSON ``null``."""

    def _apply(builder: RunConfigBuilder) -> None:
        if md is None:
            builder.metadata = _to_json("metadata", None)
            return

        for key, val in md.items():
            if not isinstance(key, str) or not isinstance(val, str):
                raise ValidationError(
                    "INVALID_VALUE",
                    "metadata keys and values must be strings",
                    {"option": "metadata", "key": repr(key), "value": repr(val)},
                )
        builder.metadata = _to_json("metadata", dict(md))

    return Option("metadata", _apply)


def metadata_from_file(path: str | os.PathLike[str]) -> Option:
    def _apply(builder: RunConfigBuilder) -> None:
        builder.metadata = _read_file("metadata_from_file", path)

    return Option("metadata_from_file", _apply)


# ---------------------------------------------------------------------------
# run identity
# ---------------------------------------------------------------------------


def name(value: str) -> Option:
    """Run name; blank input keeps the generated default."""
    value = value.strip()

    def _apply(builder: RunConfigBuilder) -> None:
        if value:
            builder.name = value

    return Option("name", _apply)


def cpus(n: int) -> Option:
    """CPU hint; non-positive input keeps the detected default."""

    def _apply(builder: RunConfigBuilder) -> None:
        if _integer("cpus", n) > 0:
            builder.cpus = n

    return Option("cpus", _apply)


# ---------------------------------------------------------------------------
# schema source
# ---------------------------------------------------------------------------


def proto_file(path: str, import_paths: Iterable[str] | None = None) -> Option:
    """Proto source file plus import paths.

    The file's directory (unless it is the current directory) and ``.`` are
    appended ahead of any explicit import paths. Nothing is de-duplicated.
    """
    path = path.strip()
    extra = list(import_paths or [])

    def _apply(builder: RunConfigBuilder) -> None:
        if not path:
            return

        if not path.endswith(PROTO_EXTENSION):
            raise ProtoFormatError(
                "INVALID_PROTO_EXTENSION",
                f"proto: must have {PROTO_EXTENSION} extension",
                {"option": "proto_file", "path": path},
            )

        builder.proto = path

        directory = os.path.normpath(os.path.dirname(path))
        if directory != ".":
            builder.import_paths.append(directory)
        builder.import_paths.append(".")
        builder.import_paths.extend(extra)

    return Option("proto_file", _apply)


def protoset_file(path: str) -> Option:
    """Precompiled descriptor set. The file is opaque and not checked here."""
    path = path.strip()

    def _apply(builder: RunConfigBuilder) -> None:
        builder.protoset = path

    return Option("protoset_file", _apply)
