from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol, runtime_checkable

from chunkflow.observability.domain.logging import LogMessage


# LogSink is the port pumps and pipelines write structured logs to.
@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        """Consume one LogMessage."""
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")


class StdoutLogSink:
    # One compact JSON object per line on stdout.
    def emit(self, message: LogMessage) -> None:
        print(json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str))


class JsonlLogSink:
    # File-backed structured log sink; appends one JSON object per line.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        payload = json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str)
        self._file.write(payload + "\n")
        self._file.flush()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


class MemoryLogSink:
    # Keeps messages in memory, in emission order.
    def __init__(self) -> None:
        self.messages: list[LogMessage] = []

    def emit(self, message: LogMessage) -> None:
        self.messages.append(message)


def build_log_sink(kind: str, path: str | None = None) -> LogSink | None:
    # Resolve a configured sink kind; "none" disables logging.
    if kind == "none":
        return None
    if kind == "stdout":
        return StdoutLogSink()
    if kind == "jsonl":
        if not isinstance(path, str) or not path:
            raise ValueError("logging.path must be a non-empty string for the jsonl sink")
        return JsonlLogSink(Path(path))
    raise ValueError(f"Unsupported log sink kind: {kind}")


def _log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }
