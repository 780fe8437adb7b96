from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_TOTAL_REQUESTS = 200
DEFAULT_CONCURRENCY = 50
DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_DIAL_TIMEOUT_SECONDS = 10.0

PROTO_EXTENSION = ".proto"


@dataclass(frozen=True)
class RunConfig:
    """Immutable configuration for one gRPC load-test run.

    Built by :func:`grpcload.core.builder.build`; the execution engine reads it
    from any number of workers and never writes to it.
    """

    # call
    call: str
    host: str
    proto: str
    import_paths: tuple[str, ...]
    protoset: str

    # security
    cert: str
    cname: str
    insecure: bool

    # load
    total_requests: int
    concurrency: int
    qps: int
    duration_seconds: float

    # timeouts
    timeout_seconds: float
    dial_timeout_seconds: float
    keepalive_seconds: float

    # payload
    data: bytes
    binary: bool
    metadata: bytes

    # run
    name: str
    cpus: int

    @property
    def uses_protoset(self) -> bool:
        return bool(self.protoset)

    @property
    def payload_size(self) -> int:
        return len(self.data)

    @property
    def metadata_size(self) -> int:
        return len(self.metadata)


@dataclass
class RunConfigBuilder:
    """Mutable draft of a :class:`RunConfig`.

    Options write to it in order; :meth:`freeze` produces the read-only value.
    """

    call: str
    host: str
    name: str
    cpus: int
    proto: str = ""
    import_paths: list[str] = field(default_factory=list)
    protoset: str = ""
    cert: str = ""
    cname: str = ""
    insecure: bool = False
    total_requests: int = DEFAULT_TOTAL_REQUESTS
    concurrency: int = DEFAULT_CONCURRENCY
    qps: int = 0
    duration_seconds: float = 0.0
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    dial_timeout_seconds: float = DEFAULT_DIAL_TIMEOUT_SECONDS
    keepalive_seconds: float = 0.0
    data: bytes = b""
    binary: bool = False
    metadata: bytes = b""

    def freeze(self) -> RunConfig:
        return RunConfig(
            call=self.call,
            host=self.host,
            proto=self.proto,
            import_paths=tuple(self.import_paths),
            protoset=self.protoset,
            cert=self.cert,
            cname=self.cname,
            insecure=self.insecure,
            total_requests=self.total_requests,
            concurrency=self.concurrency,
            qps=self.qps,
            duration_seconds=self.duration_seconds,
            timeout_seconds=self.timeout_seconds,
            dial_timeout_seconds=self.dial_timeout_seconds,
            keepalive_seconds=self.keepalive_seconds,
            data=bytes(self.data),
            binary=self.binary,
            metadata=bytes(self.metadata),
            name=self.name,
            cpus=self.cpus,
        )
