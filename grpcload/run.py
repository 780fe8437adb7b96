from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from grpcload.api.report import build_config_report
from grpcload.core import options
from grpcload.core.builder import build
from grpcload.core.options import Option
from grpcload.errors import error_to_response
from grpcload.exceptions import GrpcLoadError
from grpcload.logger import configure_logging, session_logger as logger

HOST_ENV = "GRPCLOAD_HOST"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build and validate a gRPC load-test run configuration",
    )
    parser.add_argument(
        "host",
        nargs="?",
        default=os.environ.get(HOST_ENV, ""),
        help=f"Target address, e.g. localhost:50051 (default: ${HOST_ENV})",
    )
    parser.add_argument("--call", type=str, default="", help="Fully-qualified method, e.g. pkg.Service/Method")

    source = parser.add_argument_group("schema source")
    source.add_argument("--proto", type=str, default="", help="Path to the .proto source file")
    source.add_argument(
        "-i",
        "--import-paths",
        type=str,
        default="",
        help="Comma-separated extra import paths for --proto",
    )
    source.add_argument("--protoset", type=str, default="", help="Path to a compiled descriptor set")

    security = parser.add_argument_group("security")
    security.add_argument("--cert", type=str, default="", help="TLS certificate file")
    security.add_argument("--cname", type=str, default="", help="Server name override for the certificate")
    security.add_argument("--insecure", action="store_true", help="Use a plaintext connection")

    load = parser.add_argument_group("load")
    load.add_argument("-n", "--total", type=int, default=None, help="Total requests (default 200)")
    load.add_argument("-c", "--concurrency", type=int, default=None, help="Concurrent workers (default 50)")
    load.add_argument("-q", "--qps", type=int, default=None, help="Rate limit in queries per second (0 = unlimited)")
    load.add_argument("-z", "--duration", type=str, default=None, help="Run duration, e.g. 30s, 1m30s or 0 (unbounded)")

    timeouts = parser.add_argument_group("timeouts")
    timeouts.add_argument(
        "-t", "--timeout", type=str, default=None, help="Per-call timeout, e.g. 500ms or 2 (default 20s)"
    )
    timeouts.add_argument("--dial-timeout", type=str, default=None, help="Connection dial timeout (default 10s)")
    timeouts.add_argument("--keepalive", type=str, default=None, help="Keepalive interval (0 = disabled)")

    data = parser.add_argument_group("payload and metadata")
    data.add_argument("-d", "--data", type=str, default=None, help="JSON payload; '@' reads it from stdin")
    data.add_argument("-D", "--data-file", type=str, default=None, help="File holding the payload")
    data.add_argument(
        "-b",
        "--binary",
        action="store_true",
        help="Treat --data-file as an opaque binary message instead of JSON",
    )
    data.add_argument("-m", "--metadata", type=str, default=None, help="JSON object of call metadata")
    data.add_argument("-M", "--metadata-file", type=str, default=None, help="File holding JSON metadata")

    run = parser.add_argument_group("run")
    run.add_argument("--name", type=str, default="", help="Run name (default: random readable name)")
    run.add_argument("--cpus", type=int, default=0, help="CPU hint (default: available processors)")
    run.add_argument("--output", type=str, default=None, help="Write the configuration report JSON to this path")
    run.add_argument("--log-level", type=str, default=None, help="Log level (default: $LOG_LEVEL or INFO)")
    run.add_argument(
        "--log-format",
        type=str,
        choices=["console", "json"],
        default=None,
        help="Log output format (default: $GRPCLOAD_LOG_FORMAT or console)",
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> list[Option]:
    """Translate parsed flags into options, in a fixed order."""
    opts: list[Option] = []

    if args.proto:
        extra = [p.strip() for p in args.import_paths.split(",") if p.strip()]
        opts.append(options.proto_file(args.proto, extra))
    if args.protoset:
        opts.append(options.protoset_file(args.protoset))

    if args.cert:
        opts.append(options.certificate(args.cert, args.cname))
    if args.insecure:
        opts.append(options.insecure(True))

    if args.total is not None:
        opts.append(options.total_requests(args.total))
    if args.concurrency is not None:
        opts.append(options.concurrency(args.concurrency))
    if args.qps is not None:
        opts.append(options.qps(args.qps))
    if args.duration is not None:
        opts.append(options.duration(args.duration))

    if args.timeout is not None:
        opts.append(options.timeout(args.timeout))
    if args.dial_timeout is not None:
        opts.append(options.dial_timeout(args.dial_timeout))
    if args.keepalive is not None:
        opts.append(options.keepalive(args.keepalive))

    if args.data_file is not None:
        if args.binary:
            opts.append(options.binary_data_from_file(args.data_file))
        else:
            opts.append(options.json_data_from_file(args.data_file))
    if args.data is not None:
        if args.data == "@":
            opts.append(options.json_data_from_reader(sys.stdin))
        else:
            opts.append(options.json_data_from_string(args.data))

    if args.metadata_file is not None:
        opts.append(options.metadata_from_file(args.metadata_file))
    if args.metadata is not None:
        opts.append(options.metadata_from_json(args.metadata))

    opts.append(options.name(args.name))
    opts.append(options.cpus(args.cpus))
    return opts


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, fmt=args.log_format)

    try:
        config = build(args.call, args.host, *_options_from_args(args))
    except GrpcLoadError as exc:
        logger.error("cli.config_error", **error_to_response(exc))
        return 2

    payload = build_config_report(config)
    rendered = json.dumps(payload, indent=2, sort_keys=True)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")

        logger.info("cli.report_written", path=str(output_path))
    else:
        print(rendered)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
