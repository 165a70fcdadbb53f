from __future__ import annotations

from chunkflow.kernel.chunk import EOF, Payload
from chunkflow.kernel.filter import CycleFilter, MapFilter, StepOutput


def upper() -> MapFilter:
    return MapFilter(lambda payload: payload.upper())


def lower() -> MapFilter:
    return MapFilter(lambda payload: payload.lower())


def _skip_step(remaining: int, payload: Payload, extra: object) -> tuple[StepOutput, int]:
    # Zero-length output while still skipping becomes EMPTY.
    if remaining >= len(payload):
        return payload[:0], remaining - len(payload)
    return payload[remaining:], 0


def _take_step(remaining: int, payload: Payload, extra: object) -> tuple[StepOutput, int]:
    if remaining == 0:
        return EOF, 0
    if len(payload) <= remaining:
        return payload, remaining - len(payload)
    return payload[:remaining], 0


def skip(count: int) -> CycleFilter[int]:
    # Drops the first `count` characters of the stream, across chunk boundaries.
    return CycleFilter(step=_skip_step, context=_check_count("skip", count))


def take(count: int) -> CycleFilter[int]:
    # Passes the first `count` characters of the stream, then ends it with EOF.
    return CycleFilter(step=_take_step, context=_check_count("take", count))


def _check_count(name: str, count: object) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ValueError(f"{name}.count must be a non-negative integer")
    return count
