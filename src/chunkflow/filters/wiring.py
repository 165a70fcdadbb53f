from __future__ import annotations

from chunkflow.filters.text import lower, skip, take, upper
from chunkflow.kernel.filter_registry import FilterRegistry


def build_filter_registry() -> FilterRegistry:
    # Built-in filters; every factory call returns a new instance with its own context.
    registry = FilterRegistry()
    registry.register("upper", lambda cfg: upper())
    registry.register("lower", lambda cfg: lower())
    registry.register("skip", lambda cfg: skip(_require(cfg, "skip", "count")))
    registry.register("take", lambda cfg: take(_require(cfg, "take", "count")))
    return registry


def _require(config: dict[str, object], name: str, key: str) -> object:
    if key not in config:
        raise ValueError(f"{name}.{key} is required")
    return config[key]
