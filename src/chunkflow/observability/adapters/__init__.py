from .logging import JsonlLogSink, LogSink, MemoryLogSink, StdoutLogSink, build_log_sink

__all__ = ["LogSink", "StdoutLogSink", "JsonlLogSink", "MemoryLogSink", "build_log_sink"]
