"""Run configuration assembler.

Seeds a draft with defaults, applies options in order (stopping at the first
failure), checks cross-field invariants and returns a frozen ``RunConfig``.
"""

from __future__ import annotations

from typing import Callable

from grpcload.core.models import RunConfig, RunConfigBuilder
from grpcload.core.naming import NameGenerator, available_cpus, random_name
from grpcload.core.options import Option
from grpcload.exceptions import GrpcLoadError, RequiredFieldError
from grpcload.logger import Logger, session_logger


def build(
    call: str,
    host: str,
    *options: Option | Callable[[RunConfigBuilder], None],
    name_generator: NameGenerator | None = None,
    cpu_count: int | None = None,
    logger: Logger | None = None,
) -> RunConfig:
    """Build a validated run configuration.

    Args:
        call: Fully-qualified method, e.g. ``helloworld.Greeter/SayHello``.
        host: Target address, e.g. ``localhost:50051``.
        options: Mutators applied in order; later ones override earlier ones.
        name_generator: Supplies the default run name (random readable name).
        cpu_count: Default CPU hint (host's available processors).
        logger: Structured logger; defaults to the shared session logger.

    Raises:
        GrpcLoadError: The first option failure, or a ``RequiredFieldError``
            from the final checks. No configuration is returned in that case.
    """
    log = logger or session_logger
    generate_name = name_generator or random_name

    builder = RunConfigBuilder(
        call=call.strip(),
        host=host.strip(),
        name=generate_name(),
        cpus=cpu_count if cpu_count is not None else available_cpus(),
    )

    log.debug("config.build_start", call=builder.call, host=builder.host, options=len(options))

    for index, option in enumerate(options):
        option_name = getattr(option, "name", getattr(option, "__name__", "option"))
        try:
            option(builder)
        except GrpcLoadError as exc:
            log.error(
                "config.option_failed",
                option=option_name,
                index=index,
                error_code=exc.code,
                error=exc.message,
            )
            raise
        log.debug("config.option_applied", option=option_name, index=index)

    _validate(builder, log)

    config = builder.freeze()
    log.info(
        "config.built",
        call=config.call,
        host=config.host,
        name=config.name,
        source="protoset" if config.uses_protoset else "proto",
        total_requests=config.total_requests,
        concurrency=config.concurrency,
    )
    return config


def _validate(builder: RunConfigBuilder, log: Logger) -> None:
    error: RequiredFieldError | None = None

    if not builder.call:
        error = RequiredFieldError("CALL_REQUIRED", "call required", {"field": "call"})
    elif not builder.host:
        error = RequiredFieldError("HOST_REQUIRED", "host required", {"field": "host"})
    elif not builder.proto and not builder.protoset:
        error = RequiredFieldError(
            "SOURCE_REQUIRED",
            "must provide proto or protoset",
            {"field": "source"},
        )
    elif builder.proto and builder.protoset:
        error = RequiredFieldError(
            "SOURCE_CONFLICT",
            "provide either proto or protoset, not both",
            {"field": "source", "proto": builder.proto, "protoset": builder.protoset},
        )

    if error is not None:
        log.error("config.validation_failed", error_code=error.code, error=error.message)
        raise error
