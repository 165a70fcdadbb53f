from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from chunkflow.kernel.filter import Filter


class UnknownFilterError(KeyError):
    pass


# Filter factories take the per-filter config mapping and return a fresh Filter instance.
FilterFactory = Callable[[dict[str, object]], Filter]


@dataclass
class FilterRegistry:
    # Maps filter names to factories; each build yields an instance with its own context.
    _factories: dict[str, FilterFactory] = field(default_factory=dict)

    def register(self, name: str, factory: FilterFactory) -> None:
        # Later registrations override earlier ones.
        self._factories[name] = factory

    def get(self, name: str) -> FilterFactory:
        if name not in self._factories:
            raise UnknownFilterError(name)
        return self._factories[name]

    def names(self) -> list[str]:
        return sorted(self._factories)
