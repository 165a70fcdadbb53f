from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from chunkflow.kernel.filter import ChainFilter, Filter
from chunkflow.kernel.pump import Pump, PumpResult
from chunkflow.kernel.sink import Sink
from chunkflow.kernel.source import ChainedSource, Source
from chunkflow.observability.adapters.logging import LogSink


@dataclass
class Pipeline:
    # One source, zero or more filters, one sink; assembled once at construction.
    source: Source
    filters: Sequence[Filter]
    sink: Sink
    name: str = "pipeline"
    _assembled: Source = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.filters = tuple(self.filters)
        if not self.filters:
            self._assembled = self.source
        elif len(self.filters) == 1:
            self._assembled = ChainedSource(self.source, self.filters[0])
        else:
            self._assembled = ChainedSource(self.source, ChainFilter(self.filters))

    @property
    def assembled_source(self) -> Source:
        return self._assembled

    def pump(self, *, log_sink: LogSink | None = None) -> Pump:
        return Pump(source=self._assembled, sink=self.sink, log_sink=log_sink, name=self.name)

    def run(self, *, log_sink: LogSink | None = None) -> PumpResult:
        return self.pump(log_sink=log_sink).run()
