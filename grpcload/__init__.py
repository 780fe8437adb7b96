"""Run configuration for gRPC load tests.

Usage::

    from grpcload import build
    from grpcload.core import options

    config = build(
        "helloworld.Greeter/SayHello",
        "localhost:50051",
        options.proto_file("protos/helloworld.proto"),
        options.json_data({"name": "bob"}),
        options.concurrency(10),
    )
"""

from __future__ import annotations

from grpcload.core.builder import build
from grpcload.core.models import RunConfig

__all__ = ["build", "RunConfig"]
