from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from chunkflow.kernel.chunk import (
    DEFAULT_BLOCK_SIZE,
    EOF,
    Chunk,
    Data,
    Empty,
    EndOfStream,
    Failed,
    Payload,
    StreamError,
    is_terminal,
)
from chunkflow.kernel.filter import Filter


class Source(Protocol):
    # Source contract is () -> Chunk; it must yield EOF once its data is exhausted.
    def __call__(self) -> Chunk:
        raise NotImplementedError("Source protocol has no implementation")


@dataclass(frozen=True, slots=True)
class EmptySource:
    # Yields EOF on every call.
    def __call__(self) -> Chunk:
        return EOF


@dataclass(frozen=True, slots=True)
class ErrorSource:
    # Yields the same failure on every call.
    error: StreamError

    def __call__(self) -> Chunk:
        return Failed(error=self.error)


@dataclass
class StringSource:
    # Emits fixed-size blocks of a constant payload, then EOF.
    content: Payload
    block_size: int = DEFAULT_BLOCK_SIZE
    _offset: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.content, (str, bytes)):
            raise TypeError("StringSource.content must be str or bytes")
        if self.block_size <= 0:
            raise ValueError("StringSource.block_size must be positive")

    @property
    def remaining(self) -> int:
        return len(self.content) - self._offset

    def __call__(self) -> Chunk:
        if self._offset >= len(self.content):
            return EOF
        # Slicing clamps at the end, so the last block holds exactly the remaining payload.
        block = self.content[self._offset : self._offset + self.block_size]
        self._offset += len(block)
        return Data(block)


@dataclass(frozen=True, slots=True)
class ChainedSource:
    # Pulls exactly one chunk per call and passes it through the filter once.
    source: Source
    filter: Filter

    def __call__(self) -> Chunk:
        chunk = self.source()
        # EOF, failures and empty rounds travel past the filter untouched.
        if is_terminal(chunk) or isinstance(chunk, Empty):
            return chunk
        return self.filter(chunk)


class ConcatSource:
    # Drains each source in order; EOF from an inner source advances to the next one.
    def __init__(self, *sources: Source) -> None:
        self.sources = tuple(sources)
        self._index = 0

    def __call__(self) -> Chunk:
        while self._index < len(self.sources):
            chunk = self.sources[self._index]()
            if not isinstance(chunk, EndOfStream):
                return chunk
            self._index += 1
        return EOF


@dataclass
class RewindSource:
    # Source with push-back: unget() chunks are returned (last in, first out) before pulling again.
    source: Source
    _pushed: list[Chunk] = field(default_factory=list, init=False, repr=False)

    def __call__(self) -> Chunk:
        if self._pushed:
            return self._pushed.pop()
        return self.source()

    def unget(self, chunk: Chunk) -> None:
        self._pushed.append(chunk)
