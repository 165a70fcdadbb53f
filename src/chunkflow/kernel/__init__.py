from .chunk import (
    DEFAULT_BLOCK_SIZE,
    EMPTY,
    EOF,
    Chunk,
    Data,
    Empty,
    EndOfStream,
    Failed,
    Payload,
    StreamError,
    as_chunk,
    fail,
    is_terminal,
)
from .filter import ChainFilter, ChainTwo, CycleFilter, Filter, MapFilter
from .filter_registry import FilterRegistry, UnknownFilterError
from .pipeline import Pipeline
from .pipeline_builder import FilterBuildError, InvalidPipelineConfigError, PipelineBuilder
from .pump import Pump, PumpResult, PumpState, drain, step
from .sink import CollectorSink, ErrorSink, FilteredSink, NullSink, Sink
from .source import ChainedSource, ConcatSource, EmptySource, ErrorSource, RewindSource, Source, StringSource

# Kernel exports: chunk model, the three contracts, their combinators and the pump.
__all__ = [
    "DEFAULT_BLOCK_SIZE",
    "EMPTY",
    "EOF",
    "Chunk",
    "Data",
    "Empty",
    "EndOfStream",
    "Failed",
    "Payload",
    "StreamError",
    "as_chunk",
    "fail",
    "is_terminal",
    "Filter",
    "CycleFilter",
    "MapFilter",
    "ChainTwo",
    "ChainFilter",
    "FilterRegistry",
    "UnknownFilterError",
    "Pipeline",
    "PipelineBuilder",
    "InvalidPipelineConfigError",
    "FilterBuildError",
    "Pump",
    "PumpResult",
    "PumpState",
    "drain",
    "step",
    "Sink",
    "NullSink",
    "ErrorSink",
    "FilteredSink",
    "CollectorSink",
    "Source",
    "EmptySource",
    "ErrorSource",
    "StringSource",
    "ChainedSource",
    "ConcatSource",
    "RewindSource",
]
