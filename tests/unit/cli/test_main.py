"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path
import zlib

import pytest

from cli.main import main


def test_cli_transforms_lists_names(capsys: pytest.CaptureFixture[str]) -> None:
    """CLI transforms should print one name per line."""
    exit_code = main(["transforms"])
    output = capsys.readouterr().out.split()

    assert exit_code == 0 and "deflate" in output and "xor" in output


def test_cli_run_deflates_file_into_open_zlib_stream(tmp_path: Path) -> None:
    """CLI deflate output should decode with a streaming decompressor only."""
    source = tmp_path / "input.txt"
    target = tmp_path / "output.z"
    source.write_bytes(b"stream ahead " * 200)

    exit_code = main(
        [
            "--chunk-size",
            "64",
            "run",
            "--transform",
            "deflate",
            "--input",
            str(source),
            "--output",
            str(target),
        ]
    )

    assert exit_code == 0
    assert zlib.decompressobj().decompress(target.read_bytes()) == source.read_bytes()
    with pytest.raises(zlib.error):
        zlib.decompress(target.read_bytes())


def test_cli_run_reports_transform_failure(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """CLI run should exit 1 when the pipeline fails."""
    source = tmp_path / "garbage.z"
    source.write_bytes(b"not compressed at all")

    exit_code = main(
        [
            "run",
            "--transform",
            "inflate",
            "--input",
            str(source),
            "--output",
            str(tmp_path / "out.bin"),
        ]
    )

    assert exit_code == 1
    assert "pipeline_error=" in capsys.readouterr().err


def test_cli_run_reports_missing_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A missing input file should be reported as a pipeline error."""
    exit_code = main(
        [
            "run",
            "--transform",
            "identity",
            "--input",
            str(tmp_path / "missing.bin"),
            "--output",
            str(tmp_path / "out.bin"),
        ]
    )

    assert exit_code == 1
    assert "pipeline_error=" in capsys.readouterr().err


@pytest.mark.parametrize(
    "extra_args",
    [
        ["--transform", "xor"],
        ["--transform", "xor", "--key", "zz"],
        ["--transform", "identity", "--key", "01"],
    ],
)
def test_cli_run_rejects_bad_key_usage(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], extra_args: list[str]
) -> None:
    """Key problems should exit 2 with a config error."""
    source = tmp_path / "in.bin"
    source.write_bytes(b"x")

    exit_code = main(["run", *extra_args, "--input", str(source), "--output", str(tmp_path / "o")])

    assert exit_code == 2
    assert "config_error=" in capsys.readouterr().err


def test_cli_run_rejects_zero_chunk_size(tmp_path: Path) -> None:
    """Invalid chunk size should be rejected before running."""
    source = tmp_path / "in.bin"
    source.write_bytes(b"x")

    exit_code = main(
        ["--chunk-size", "0", "run", "--transform", "identity", "--input", str(source)]
    )

    assert exit_code == 2
