from __future__ import annotations

import pytest

from chunkflow.kernel.chunk import EOF, Data
from chunkflow.kernel.filter import ChainFilter, MapFilter
from chunkflow.kernel.filter_registry import FilterRegistry, UnknownFilterError
from chunkflow.kernel.pipeline import Pipeline
from chunkflow.kernel.pipeline_builder import FilterBuildError, InvalidPipelineConfigError, PipelineBuilder
from chunkflow.kernel.pump import PumpState
from chunkflow.kernel.sink import CollectorSink
from chunkflow.kernel.source import ChainedSource, StringSource


def _suffix(text: str) -> MapFilter:
    return MapFilter(lambda p: p + text)


def _registry() -> FilterRegistry:
    registry = FilterRegistry()
    registry.register("upper", lambda cfg: MapFilter(str.upper))
    registry.register("suffix", lambda cfg: _suffix(str(cfg["text"])))
    return registry


def test_registry_resolves_known_name() -> None:
    registry = _registry()
    assert callable(registry.get("upper"))
    assert registry.names() == ["suffix", "upper"]


def test_registry_unknown_name_raises() -> None:
    with pytest.raises(UnknownFilterError):
        FilterRegistry().get("missing")


def test_pipeline_without_filters_uses_source_directly() -> None:
    source = StringSource("abc")
    pipeline = Pipeline(source=source, filters=[], sink=CollectorSink())
    assert pipeline.assembled_source is source


def test_pipeline_wraps_single_and_multiple_filters() -> None:
    one = Pipeline(source=StringSource("a"), filters=[MapFilter(str.upper)], sink=CollectorSink())
    assert isinstance(one.assembled_source, ChainedSource)
    many = Pipeline(
        source=StringSource("a"),
        filters=[MapFilter(str.upper), MapFilter(str.lower)],
        sink=CollectorSink(),
    )
    assert isinstance(many.assembled_source, ChainedSource)
    assert isinstance(many.assembled_source.filter, ChainFilter)


def test_pipeline_pump_steps_assembled_source() -> None:
    collector = CollectorSink()
    pipeline = Pipeline(source=StringSource("abcd", block_size=2), filters=[MapFilter(str.upper)], sink=collector)
    pump = pipeline.pump()
    assert pump.step()
    assert collector.chunks == ["AB"]


def test_builder_assembles_filters_in_order() -> None:
    collector = CollectorSink()
    pipeline = PipelineBuilder(_registry()).build(
        source=StringSource("ab", block_size=1),
        filters=[{"name": "suffix", "config": {"text": "!"}}, {"name": "upper"}],
        sink=collector,
        name="demo",
    )
    result = pipeline.run()
    assert result.state is PumpState.DONE_OK
    assert collector.chunks == ["A!", "B!"]
    assert pipeline.name == "demo"


def test_builder_builds_fresh_filter_instances() -> None:
    registry = FilterRegistry()
    registry.register("mark", lambda cfg: MapFilter(lambda p: p + "."))
    pipeline = PipelineBuilder(registry).build(
        source=StringSource("x"),
        filters=[{"name": "mark"}, {"name": "mark"}],
        sink=CollectorSink(),
    )
    first, second = pipeline.filters
    assert first is not second
    assert pipeline.assembled_source() == Data("x..")
    assert pipeline.assembled_source() is EOF


def test_builder_rejects_bad_declarations() -> None:
    builder = PipelineBuilder(_registry())
    with pytest.raises(InvalidPipelineConfigError):
        builder.build(source=StringSource("x"), filters=[{"config": {}}], sink=CollectorSink())
    with pytest.raises(InvalidPipelineConfigError):
        builder.build(source=StringSource("x"), filters=[{"name": "upper", "config": []}], sink=CollectorSink())
    with pytest.raises(InvalidPipelineConfigError):
        builder.build(source=StringSource("x"), filters=["upper"], sink=CollectorSink())  # type: ignore[list-item]


def test_builder_unknown_filter_raises() -> None:
    with pytest.raises(UnknownFilterError):
        PipelineBuilder(_registry()).build(source=StringSource("x"), filters=[{"name": "nope"}], sink=CollectorSink())


def test_builder_wraps_factory_errors() -> None:
    with pytest.raises(FilterBuildError) as exc_info:
        PipelineBuilder(_registry()).build(
            source=StringSource("x"),
            filters=[{"name": "suffix", "config": {}}],
            sink=CollectorSink(),
        )
    assert exc_info.value.filter_name == "suffix"
    assert isinstance(exc_info.value.cause, KeyError)
