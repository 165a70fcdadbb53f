from .adapters import JsonlLogSink, LogSink, MemoryLogSink, StdoutLogSink, build_log_sink
from .domain import LogMessage

__all__ = ["LogMessage", "LogSink", "StdoutLogSink", "JsonlLogSink", "MemoryLogSink", "build_log_sink"]
