"""Bytepipe CLI entry points.
This module exposes commands that run a named transform over files.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace
import sys
from typing import Any, Sequence

from core.config import PipeConfig, validate_buffer_size
from core.constants import STDIO_PATH
from core.errors import PipeConfigError
from core.types import PipelineStats, TransformSpec
from streaming.file_io import open_sink, open_source
from streaming.pipeline import StreamPipeline
from transforms.registry import build_transform, supported_transforms


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="bytepipe", description="Bytepipe stream transform CLI")
    parser.add_argument(
        "--chunk-size", type=int, help="Override BYTEPIPE_CHUNK_SIZE for this command"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_run_command(subparsers)
    _add_transforms_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Bytepipe CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "transforms":
        return _run_transforms_command()
    if args.command == "run":
        return _run_run_command(args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(chunk_size: int | None) -> PipeConfig:
    """Build runtime config with optional chunk-size override.

    Args:
        chunk_size: Optional override in bytes.

    Returns:
        Configured runtime config.
    """
    config = PipeConfig.from_env()
    if chunk_size is not None:
        config = replace(config, chunk_size=validate_buffer_size("chunk_size", chunk_size))
    return config


def _run_transforms_command() -> int:
    """Handle transforms command.

    Returns:
        Exit code.
    """
    for name in supported_transforms():
        print(name)
    return 0


def _run_run_command(args: argparse.Namespace) -> int:
    """Handle run command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    try:
        config = _build_config(args.chunk_size)
        spec = build_transform(args.transform, _parse_key(args.key))
    except PipeConfigError as error:
        print(f"config_error={error}", file=sys.stderr)
        return 2
    try:
        stats = asyncio.run(_run_pipeline(spec, args.input, args.output, config))
    except OSError as error:
        print(f"pipeline_error={error}", file=sys.stderr)
        return 1
    print(
        f"chunks={stats.chunks_read}\tbytes_read={stats.bytes_read}\t"
        f"bytes_written={stats.bytes_written}",
        file=sys.stderr,
    )
    return 0


async def _run_pipeline(
    spec: TransformSpec[Any],
    input_path: str,
    output_path: str,
    config: PipeConfig,
) -> PipelineStats:
    """Run one file-to-file pipeline and return its stats."""
    async with open_source(input_path) as source, open_sink(output_path) as sink:
        pipeline = StreamPipeline(
            source, sink, spec.transform, spec.state_factory, config=config
        )
        return await pipeline.run()


def _parse_key(raw_key: str | None) -> bytes | None:
    """Decode a hex key argument.

    Args:
        raw_key: Hex string or None.

    Returns:
        Key bytes, or None when no key was given.

    Raises:
        PipeConfigError: If the value is not valid hex.
    """
    if raw_key is None:
        return None
    try:
        return bytes.fromhex(raw_key)
    except ValueError as error:
        raise PipeConfigError(
            f"Invalid --key value '{raw_key}': expected hex bytes, e.g. 'a1b2'."
        ) from error


def _add_run_command(subparsers: Any) -> None:
    """Register run command parser."""
    parser = subparsers.add_parser("run", help="Stream a file through a named transform")
    parser.add_argument(
        "--transform",
        required=True,
        choices=supported_transforms(),
        help=(
            "Transform to apply; deflate writes an unterminated sync-flushed zlib "
            "stream that only inflate or zlib.decompressobj can read"
        ),
    )
    parser.add_argument("--key", help="Hex key for keyed transforms such as xor")
    parser.add_argument("--input", default=STDIO_PATH, help="Input file path, or - for stdin")
    parser.add_argument("--output", default=STDIO_PATH, help="Output file path, or - for stdout")


def _add_transforms_command(subparsers: Any) -> None:
    """Register transforms command parser."""
    subparsers.add_parser("transforms", help="List available transform names")
