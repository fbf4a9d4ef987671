"""Incremental zlib compression transforms.

``deflate_chunk`` compresses each chunk and sync-flushes, so every output
chunk is decodable as soon as it is written. The stream is never
terminated: there is no final block and no Adler-32 trailer, so one-shot
decoders such as ``zlib.decompress`` reject it as truncated. Read it with
``inflate_chunk`` or a ``zlib.decompressobj``. ``inflate_chunk`` also
decodes complete zlib streams, chunk by chunk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Any
import zlib

from core.errors import IOErrorKind, PipeConfigError, PipeIOError

DEFAULT_COMPRESSION_LEVEL = 6


@dataclass
class DeflateState:
    """Compressor carried across chunks."""

    level: int = DEFAULT_COMPRESSION_LEVEL
    compressor: Any = field(init=False)

    def __post_init__(self) -> None:
        self.compressor = zlib.compressobj(self.level)


@dataclass
class InflateState:
    """Decompressor carried across chunks."""

    decompressor: Any = field(default_factory=zlib.decompressobj)


def deflate_state_factory(level: int = DEFAULT_COMPRESSION_LEVEL) -> partial[DeflateState]:
    """Build a state factory for a given compression level.

    Args:
        level: zlib compression level from 0 to 9.

    Returns:
        Zero-argument state factory.

    Raises:
        PipeConfigError: If the level is out of range.
    """
    if level not in range(10):
        raise PipeConfigError(
            f"Invalid compression level {level}: expected 0-9. "
            "Pass a zlib compression level between 0 and 9."
        )
    return partial(DeflateState, level)


def deflate_chunk(chunk: bytes, state: DeflateState) -> bytes:
    """Compress one chunk and flush it to a byte boundary.

    Args:
        chunk: Raw input chunk.
        state: Compressor state.

    Returns:
        Compressed bytes decodable up to this chunk by a streaming
        decompressor. The zlib stream is left open.
    """
    return state.compressor.compress(chunk) + state.compressor.flush(zlib.Z_SYNC_FLUSH)


def inflate_chunk(chunk: bytes, state: InflateState) -> bytes:
    """Decompress one chunk of a zlib stream.

    Args:
        chunk: Compressed input chunk.
        state: Decompressor state.

    Returns:
        Decompressed bytes available so far.

    Raises:
        PipeIOError: If the input is not valid zlib data.
    """
    decompressor = state.decompressor
    if decompressor.eof:
        raise PipeIOError(
            "Unexpected data after end of zlib stream.", IOErrorKind.INVALID_DATA
        )
    try:
        output = decompressor.decompress(chunk)
    except zlib.error as error:
        raise PipeIOError(f"Invalid zlib data: {error}", IOErrorKind.INVALID_DATA) from error
    if decompressor.unused_data:
        raise PipeIOError(
            "Unexpected data after end of zlib stream.", IOErrorKind.INVALID_DATA
        )
    return output
