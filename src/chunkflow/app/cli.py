from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from chunkflow.app.composition_root import build_runtime
from chunkflow.config.loader import ConfigError, load_config
from chunkflow.config.models import AppConfig
from chunkflow.kernel.filter_registry import FilterRegistry

# Thin wrapper: parse flags, load config, delegate wiring to the composition root.


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chunkflow", description="Pump a file through a filter pipeline")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--input", required=True, help="Path to input text file")
    parser.add_argument("--output", help="Override output file path (stdout when unset)")
    parser.add_argument("--block-size", type=int, help="Override pipeline.block_size")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    # CLI flags win over config values.
    if args.output is not None:
        config.output.path = args.output
    if args.block_size is not None:
        if args.block_size <= 0:
            raise ValueError("--block-size must be positive")
        config.pipeline.block_size = args.block_size


def check_output_channels(config: AppConfig) -> None:
    # Stdout carries the collected data when no output path is set; log lines there would corrupt it.
    if config.logging.sink == "stdout" and config.output.path is None:
        raise ConfigError("logging.sink=stdout requires output.path or --output")


def run(argv: Sequence[str] | None = None, *, registry: FilterRegistry | None = None) -> int:
    args = parse_args(argv)
    config = load_config(Path(args.config))
    apply_overrides(config, args)
    check_output_channels(config)

    content = Path(args.input).read_text(encoding="utf-8")
    runtime = build_runtime(config, content, registry=registry)
    try:
        result = runtime.run()
    finally:
        runtime.close()

    output = runtime.collector.concat(content[:0])
    if config.output.path is not None:
        Path(config.output.path).write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)
    return 0 if result.ok else 1
