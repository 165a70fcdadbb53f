from __future__ import annotations

from dataclasses import dataclass

from chunkflow.kernel.filter import Filter
from chunkflow.kernel.filter_registry import FilterRegistry
from chunkflow.kernel.pipeline import Pipeline
from chunkflow.kernel.sink import Sink
from chunkflow.kernel.source import Source


class InvalidPipelineConfigError(ValueError):
    pass


class FilterBuildError(RuntimeError):
    def __init__(self, filter_name: str, cause: Exception) -> None:
        super().__init__(f"Failed to build filter '{filter_name}': {cause}")
        self.filter_name = filter_name
        self.cause = cause


@dataclass(frozen=True, slots=True)
class PipelineBuilder:
    # Assembles a Pipeline from filter declarations resolved through the registry.
    registry: FilterRegistry

    def build(
        self,
        *,
        source: Source,
        filters: list[dict[str, object]],
        sink: Sink,
        name: str = "pipeline",
    ) -> Pipeline:
        built: list[Filter] = []
        for idx, decl in enumerate(filters):
            if not isinstance(decl, dict):
                raise InvalidPipelineConfigError(f"filters[{idx}] must be a mapping")
            filter_name = decl.get("name")
            if not isinstance(filter_name, str) or not filter_name:
                raise InvalidPipelineConfigError(f"filters[{idx}].name must be a non-empty string")
            factory = self.registry.get(filter_name)

            config = decl.get("config", {})
            if not isinstance(config, dict):
                raise InvalidPipelineConfigError(f"filters[{idx}].config must be a mapping")

            try:
                built.append(factory(config))
            except Exception as exc:  # noqa: BLE001 - wrap with explicit error
                raise FilterBuildError(filter_name, exc) from exc

        return Pipeline(source=source, filters=built, sink=sink, name=name)
