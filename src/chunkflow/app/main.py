from __future__ import annotations

from collections.abc import Sequence

from chunkflow.app.cli import run


def main(argv: Sequence[str] | None = None) -> int:
    return run(list(argv) if argv is not None else None)
