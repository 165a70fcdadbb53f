from __future__ import annotations

from dataclasses import dataclass, field

# Default block size used by the fixed-string source.
DEFAULT_BLOCK_SIZE = 2048

Payload = str | bytes


@dataclass(frozen=True, slots=True)
class StreamError:
    # Structured error signal attached to a failed chunk (never an exception).
    code: str
    message: str
    stage: str | None = None
    details: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Data:
    # Some data for this round; zero-length payloads are represented by Empty instead.
    payload: Payload

    def __post_init__(self) -> None:
        if not isinstance(self.payload, (str, bytes)):
            raise TypeError("Data.payload must be str or bytes")
        if len(self.payload) == 0:
            raise ValueError("Data.payload must be non-empty; use EMPTY")

    def __len__(self) -> int:
        return len(self.payload)


@dataclass(frozen=True, slots=True)
class Empty:
    # Produced nothing useful this round: not data, not EOF, not an error.
    pass


@dataclass(frozen=True, slots=True)
class EndOfStream:
    # No more data will ever be produced by this stage.
    pass


@dataclass(frozen=True, slots=True)
class Failed:
    # Terminal failure for the round; may still carry partial data.
    error: StreamError
    payload: Payload | None = None


Chunk = Data | Empty | EndOfStream | Failed

EMPTY = Empty()
EOF = EndOfStream()


def as_chunk(value: Chunk | Payload | None) -> Chunk:
    # Normalize raw payloads into the tagged representation.
    if isinstance(value, (Data, Empty, EndOfStream, Failed)):
        return value
    if value is None:
        return EOF
    if isinstance(value, (str, bytes)):
        return Data(value) if value else EMPTY
    raise TypeError(f"Cannot convert {type(value).__name__} to a chunk")


def is_terminal(chunk: Chunk) -> bool:
    # EOF and failure both end the round for every downstream stage.
    return isinstance(chunk, (EndOfStream, Failed))


def fail(
    code: str,
    message: str,
    *,
    stage: str | None = None,
    details: dict[str, object] | None = None,
    payload: Payload | None = None,
) -> Failed:
    return Failed(
        error=StreamError(
            code=code,
            message=message,
            stage=stage,
            details={} if details is None else details,
        ),
        payload=payload,
    )
