from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from chunkflow.kernel.chunk import Data, Empty, EndOfStream, Failed, StreamError
from chunkflow.kernel.sink import Sink
from chunkflow.kernel.source import Source
from chunkflow.observability.adapters.logging import LogSink
from chunkflow.observability.domain.logging import LogMessage


class PumpState(str, Enum):
    RUNNING = "running"
    DONE_OK = "done_ok"
    DONE_FAIL = "done_fail"


@dataclass(frozen=True, slots=True)
class PumpResult:
    # Outcome of one drain: terminal state plus what was forwarded before it.
    state: PumpState
    chunks: int = 0
    length: int = 0
    error: StreamError | None = None
    refused: bool = False

    @property
    def ok(self) -> bool:
        return self.state is PumpState.DONE_OK


def step(source: Source, sink: Sink) -> bool:
    # Pull exactly one chunk and forward it unmodified; the sink decides.
    return sink(source())


@dataclass
class Pump:
    """Drives one source/sink pair to completion.

    The pump starts RUNNING and ends in DONE_OK when the source yields EOF,
    or in DONE_FAIL when the source yields a failure or the sink refuses a
    chunk. Empty chunks are skipped without calling the sink, and EOF is
    never forwarded to the sink.
    """

    source: Source
    sink: Sink
    log_sink: LogSink | None = None
    name: str = "pump"
    state: PumpState = field(default=PumpState.RUNNING, init=False)

    def step(self) -> bool:
        return step(self.source, self.sink)

    def run(self) -> PumpResult:
        if self.state is not PumpState.RUNNING:
            raise RuntimeError(f"{self.name} already finished with state {self.state.value}")
        chunks = 0
        length = 0
        error: StreamError | None = None
        refused = False
        while self.state is PumpState.RUNNING:
            chunk = self.source()
            if isinstance(chunk, Failed):
                error = chunk.error
                self.state = PumpState.DONE_FAIL
            elif isinstance(chunk, EndOfStream):
                self.state = PumpState.DONE_OK
            elif isinstance(chunk, Empty):
                continue
            elif isinstance(chunk, Data):
                if not self.sink(chunk):
                    refused = True
                    error = _refusal_reason(self.sink)
                    self.state = PumpState.DONE_FAIL
                else:
                    chunks += 1
                    length += len(chunk)
            else:
                raise TypeError(f"Source returned {type(chunk).__name__}, expected a chunk")
        result = PumpResult(state=self.state, chunks=chunks, length=length, error=error, refused=refused)
        self._log(result)
        return result

    def _log(self, result: PumpResult) -> None:
        if self.log_sink is None:
            return
        fields: dict[str, object] = {
            "pump": self.name,
            "state": result.state.value,
            "chunks": result.chunks,
            "length": result.length,
        }
        if result.ok:
            self.log_sink.emit(LogMessage(level="info", message="pump finished", fields=fields))
            return
        if result.error is not None:
            fields["error_code"] = result.error.code
            fields["error_message"] = result.error.message
            if result.error.stage is not None:
                fields["error_stage"] = result.error.stage
        fields["refused"] = result.refused
        self.log_sink.emit(LogMessage(level="error", message="pump failed", fields=fields))


def _refusal_reason(sink: Sink) -> StreamError | None:
    # Sinks that refuse for a known reason (ErrorSink) expose it as `error`.
    reason = getattr(sink, "error", None)
    return reason if isinstance(reason, StreamError) else None


def drain(source: Source, sink: Sink, *, log_sink: LogSink | None = None) -> bool:
    # True only when the source reached EOF without error and the sink accepted every chunk.
    return Pump(source=source, sink=sink, log_sink=log_sink).run().ok
