from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from chunkflow.app.cli import apply_overrides, parse_args, run
from chunkflow.app.composition_root import build_runtime
from chunkflow.app.main import main
from chunkflow.config.loader import ConfigError
from chunkflow.config.models import AppConfig
from chunkflow.kernel.chunk import fail
from chunkflow.kernel.filter import MapFilter
from chunkflow.kernel.filter_registry import FilterRegistry


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(body, encoding="utf-8")
    return path


def test_parse_args_reads_flags() -> None:
    args = parse_args(["--config", "cfg.yml", "--input", "in.txt", "--output", "out.txt", "--block-size", "8"])
    assert args.config == "cfg.yml"
    assert args.input == "in.txt"
    assert args.output == "out.txt"
    assert args.block_size == 8


def test_apply_overrides_updates_config() -> None:
    config = AppConfig()
    apply_overrides(config, SimpleNamespace(output="o.txt", block_size=4))
    assert config.output.path == "o.txt"
    assert config.pipeline.block_size == 4


def test_apply_overrides_rejects_bad_block_size() -> None:
    with pytest.raises(ValueError):
        apply_overrides(AppConfig(), SimpleNamespace(output=None, block_size=0))


def test_build_runtime_wires_configured_filters() -> None:
    config = AppConfig.model_validate({"pipeline": {"block_size": 2, "filters": [{"name": "upper"}]}})
    runtime = build_runtime(config, "abc")
    result = runtime.run()
    assert result.ok
    assert runtime.collector.chunks == ["AB", "C"]
    assert runtime.log_sink is None


def test_cli_run_writes_output_and_logs(tmp_path: Path) -> None:
    input_path = tmp_path / "input.txt"
    input_path.write_text("hello world\n", encoding="utf-8")
    output_path = tmp_path / "out.txt"
    log_path = tmp_path / "run.jsonl"
    config_path = _write_config(
        tmp_path,
        "\n".join(
            [
                "pipeline:",
                "  block_size: 4",
                "  filters:",
                "    - name: skip",
                "      config: {count: 6}",
                "    - name: upper",
                "logging:",
                "  sink: jsonl",
                f"  path: {log_path.as_posix()}",
            ]
        ),
    )
    code = run(["--config", str(config_path), "--input", str(input_path), "--output", str(output_path)])
    assert code == 0
    assert output_path.read_text(encoding="utf-8") == "WORLD\n"
    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert records[-1]["message"] == "pump finished"
    assert records[-1]["fields"]["state"] == "done_ok"


def test_cli_run_prints_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = tmp_path / "input.txt"
    input_path.write_text("abcdef", encoding="utf-8")
    config_path = _write_config(tmp_path, "pipeline:\n  filters:\n    - name: take\n      config: {count: 3}\n")
    assert main(["--config", str(config_path), "--input", str(input_path), "--block-size", "2"]) == 0
    assert capsys.readouterr().out == "abc"


def test_cli_run_missing_input_raises(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, "version: 1\n")
    with pytest.raises(FileNotFoundError):
        run(["--config", str(config_path), "--input", str(tmp_path / "missing.txt")])


def test_cli_rejects_stdout_logging_when_data_goes_to_stdout(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    # Log lines must never interleave with the collected data on stdout.
    input_path = tmp_path / "input.txt"
    input_path.write_text("abc", encoding="utf-8")
    config_path = _write_config(tmp_path, "logging:\n  sink: stdout\n")
    with pytest.raises(ConfigError):
        run(["--config", str(config_path), "--input", str(input_path)])
    assert capsys.readouterr().out == ""


def test_cli_stdout_logging_with_output_file_keeps_data_clean(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    input_path = tmp_path / "input.txt"
    input_path.write_text("abc", encoding="utf-8")
    output_path = tmp_path / "out.txt"
    config_path = _write_config(tmp_path, "logging:\n  sink: stdout\n")
    code = run(["--config", str(config_path), "--input", str(input_path), "--output", str(output_path)])
    assert code == 0
    assert output_path.read_text(encoding="utf-8") == "abc"
    record = json.loads(capsys.readouterr().out.strip())
    assert record["message"] == "pump finished"


def test_cli_returns_one_when_a_filter_fails(tmp_path: Path) -> None:
    # A failed chunk ends the pump in DONE_FAIL, which maps to exit code 1.
    registry = FilterRegistry()
    registry.register("reject", lambda cfg: MapFilter(lambda p: fail("rejected", "payload refused", stage="reject")))
    input_path = tmp_path / "input.txt"
    input_path.write_text("abcdef", encoding="utf-8")
    output_path = tmp_path / "out.txt"
    config_path = _write_config(tmp_path, "pipeline:\n  filters:\n    - name: reject\n")
    code = run(
        ["--config", str(config_path), "--input", str(input_path), "--output", str(output_path)],
        registry=registry,
    )
    assert code == 1
    assert output_path.read_text(encoding="utf-8") == ""
