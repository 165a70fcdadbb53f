from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from chunkflow.kernel.chunk import DEFAULT_BLOCK_SIZE

# Config models map YAML sections to typed structures.


class FilterDecl(BaseModel):
    # One entry of pipeline.filters; config is handed to the registered factory as-is.
    model_config = ConfigDict(extra="forbid")
    name: str = Field(min_length=1)
    config: dict[str, Any] = Field(default_factory=dict)


class PipelineConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "pipeline"
    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, gt=0)
    filters: list[FilterDecl] = Field(default_factory=list)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    sink: Literal["none", "stdout", "jsonl"] = "none"
    path: str | None = None

    @model_validator(mode="after")
    def _require_path_for_jsonl(self) -> "LoggingConfig":
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when logging.sink is jsonl")
        return self


class OutputConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str | None = None


class AppConfig(BaseModel):
    # Root config; unknown keys fail fast.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
