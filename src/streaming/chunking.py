"""Adapters between byte sources and chunk streams.

This module turns a byte source into an async iterator of chunks and
turns an async iterator of chunks back into a byte source.
"""

from __future__ import annotations

from typing import AsyncIterable, AsyncIterator

from core.config import validate_buffer_size
from core.constants import DEFAULT_CHUNK_SIZE
from streaming.protocols import ByteSource


def iter_chunks(source: ByteSource, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Read a byte source lazily as a stream of chunks.

    Chunk boundaries follow whatever each ``read`` call returns and carry
    no meaning beyond buffering.

    Args:
        source: Byte source to read from.
        chunk_size: Maximum bytes requested per read.

    Returns:
        Async iterator of non-empty chunks, ending at end of stream.

    Raises:
        PipeConfigError: If chunk size is not positive.
    """
    validate_buffer_size("chunk_size", chunk_size)
    return _read_chunks(source, chunk_size)


async def _read_chunks(source: ByteSource, chunk_size: int) -> AsyncIterator[bytes]:
    while True:
        chunk = await source.read(chunk_size)
        if not chunk:
            return
        yield bytes(chunk)


class ChunkReader:
    """Byte source view over an async iterator of chunks.

    Empty chunks are skipped. Errors raised by the chunk iterator
    propagate from ``read`` unchanged.
    """

    def __init__(self, chunks: AsyncIterable[bytes]) -> None:
        self._chunks = chunks.__aiter__()
        self._current = b""
        self._offset = 0
        self._exhausted = False

    async def read(self, n: int = -1) -> bytes:
        """Return up to ``n`` buffered bytes, pulling one chunk if needed.

        Args:
            n: Maximum byte count; negative returns the rest of the current chunk.

        Returns:
            Bytes read, or ``b""`` at end of stream.
        """
        if n == 0:
            return b""
        if self._offset >= len(self._current) and not await self._fill():
            return b""
        end = len(self._current) if n < 0 else min(len(self._current), self._offset + n)
        data = self._current[self._offset : end]
        self._offset = end
        return data

    async def _fill(self) -> bool:
        while not self._exhausted:
            try:
                chunk = await self._chunks.__anext__()
            except StopAsyncIteration:
                self._exhausted = True
                break
            if chunk:
                self._current = chunk
                self._offset = 0
                return True
        return False
