from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from chunkflow.kernel.chunk import Chunk, Data, Empty, Payload, StreamError, is_terminal
from chunkflow.kernel.filter import Filter


class Sink(Protocol):
    # Sink contract is (Chunk) -> bool; False means stop (refused or failed).
    def __call__(self, chunk: Chunk) -> bool:
        raise NotImplementedError("Sink protocol has no implementation")


@dataclass(frozen=True, slots=True)
class NullSink:
    # Discards everything and always asks to continue.
    def __call__(self, chunk: Chunk) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ErrorSink:
    # Refuses every chunk; the error explains why the pipeline stopped.
    error: StreamError

    def __call__(self, chunk: Chunk) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class FilteredSink:
    # Runs each chunk through the filter before handing it to the inner sink.
    filter: Filter
    sink: Sink

    def __call__(self, chunk: Chunk) -> bool:
        result = self.filter(chunk)
        if is_terminal(result):
            return False
        if isinstance(result, Empty):
            return True
        return self.sink(result)


@dataclass
class CollectorSink:
    # Appends payloads in arrival order. EOF and failures are refused (False), not treated as completion.
    chunks: list[Payload] = field(default_factory=list)

    def __call__(self, chunk: Chunk) -> bool:
        if isinstance(chunk, Data):
            self.chunks.append(chunk.payload)
            return True
        if isinstance(chunk, Empty):
            return True
        return False

    def concat(self, empty: Payload = "") -> Payload:
        # Join collected payloads using the type of the first one; `empty` is returned when nothing arrived.
        if not self.chunks:
            return empty
        return self.chunks[0][:0].join(self.chunks)
