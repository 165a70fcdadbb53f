from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from chunkflow.kernel.chunk import EMPTY, Chunk, Data, Empty, Payload, as_chunk, is_terminal

TCtx = TypeVar("TCtx")

# Step output may be a Chunk or a raw payload; zero-length payloads become EMPTY, None becomes EOF.
StepOutput = Chunk | Payload | None


class Filter(Protocol):
    # Filter contract is (Chunk) -> Chunk.
    def __call__(self, chunk: Chunk) -> Chunk:
        raise NotImplementedError("Filter protocol has no implementation")


@dataclass
class CycleFilter(Generic[TCtx]):
    """Stateful filter built from a pure step function.

    The step is called as ``step(context, payload, extra)`` and returns
    ``(output, new_context)``. The context is owned by this instance only;
    it is replaced after every step and is never handed to another filter.
    Empty, EOF and failed chunks are returned unchanged and leave the
    context untouched.
    """

    step: Callable[[TCtx, Payload, Any], tuple[StepOutput, TCtx]]
    context: TCtx
    extra: Any = None

    def __call__(self, chunk: Chunk) -> Chunk:
        if not isinstance(chunk, Data):
            return chunk
        output, self.context = self.step(self.context, chunk.payload, self.extra)
        return as_chunk(output)


@dataclass(frozen=True, slots=True)
class MapFilter:
    # Stateless payload transformation; non-data chunks pass through.
    fn: Callable[[Payload], StepOutput]

    def __call__(self, chunk: Chunk) -> Chunk:
        if not isinstance(chunk, Data):
            return chunk
        return as_chunk(self.fn(chunk.payload))


@dataclass(frozen=True, slots=True)
class ChainTwo:
    # Applies first then second; EOF or failure from first skips second.
    first: Filter
    second: Filter

    def __call__(self, chunk: Chunk) -> Chunk:
        result = self.first(chunk)
        if is_terminal(result):
            return result
        return self.second(result)


class ChainFilter:
    """Ordered chain of filters applied to one input chunk.

    After each filter the result is inspected: EOF or failure is returned
    immediately, an empty result stops the chain and returns ``EMPTY``,
    otherwise the result feeds the next filter.
    """

    def __init__(self, filters: Sequence[Filter]) -> None:
        if not filters:
            raise ValueError("ChainFilter requires at least one filter")
        self.filters: tuple[Filter, ...] = tuple(filters)

    def __call__(self, chunk: Chunk) -> Chunk:
        result = chunk
        for flt in self.filters:
            result = flt(result)
            if is_terminal(result):
                return result
            if isinstance(result, Empty):
                return EMPTY
        return result

    def __repr__(self) -> str:
        return f"ChainFilter({list(self.filters)!r})"
