from __future__ import annotations

from typing import Any

from grpcload.core.models import RunConfig


def build_config_report(config: RunConfig) -> dict[str, Any]:
    """Summarize a run configuration for printing or writing to disk."""
    return {
        "run": {
            "name": config.name,
            "cpus": config.cpus,
        },
        "target": {
            "call": config.call,
            "host": config.host,
            "insecure": config.insecure,
            "cert": config.cert or None,
            "cname": config.cname or None,
        },
        "source": {
            "kind": "protoset" if config.uses_protoset else "proto",
            "proto": config.proto or None,
            "import_paths": list(config.import_paths),
            "protoset": config.protoset or None,
        },
        "load": {
            "total_requests": config.total_requests,
            "concurrency": config.concurrency,
            "qps": config.qps,
            "duration_seconds": config.duration_seconds,
        },
        "timeouts": {
            "timeout_seconds": config.timeout_seconds,
            "dial_timeout_seconds": config.dial_timeout_seconds,
            "keepalive_seconds": config.keepalive_seconds,
        },
        "payload": {
            "binary": config.binary,
            "size_bytes": config.payload_size,
            "metadata_size_bytes": config.metadata_size,
        },
    }
