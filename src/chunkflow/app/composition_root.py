from __future__ import annotations

from dataclasses import dataclass

from chunkflow.config.models import AppConfig
from chunkflow.filters.wiring import build_filter_registry
from chunkflow.kernel.chunk import Payload
from chunkflow.kernel.filter_registry import FilterRegistry
from chunkflow.kernel.pipeline import Pipeline
from chunkflow.kernel.pipeline_builder import PipelineBuilder
from chunkflow.kernel.pump import PumpResult
from chunkflow.kernel.sink import CollectorSink
from chunkflow.kernel.source import StringSource
from chunkflow.observability.adapters.logging import LogSink, build_log_sink


@dataclass(frozen=True, slots=True)
class AppRuntime:
    # Everything one run needs: the assembled pipeline, its collector and the log sink.
    pipeline: Pipeline
    collector: CollectorSink
    log_sink: LogSink | None

    def run(self) -> PumpResult:
        return self.pipeline.run(log_sink=self.log_sink)

    def close(self) -> None:
        close = getattr(self.log_sink, "close", None)
        if callable(close):
            close()


def build_runtime(
    config: AppConfig,
    content: Payload,
    *,
    registry: FilterRegistry | None = None,
) -> AppRuntime:
    # Wires fixed-string source -> configured filters -> collector sink.
    collector = CollectorSink()
    pipeline = PipelineBuilder(registry or build_filter_registry()).build(
        source=StringSource(content, block_size=config.pipeline.block_size),
        filters=[decl.model_dump() for decl in config.pipeline.filters],
        sink=collector,
        name=config.pipeline.name,
    )
    log_sink = build_log_sink(config.logging.sink, config.logging.path)
    return AppRuntime(pipeline=pipeline, collector=collector, log_sink=log_sink)
