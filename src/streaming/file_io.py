"""Async byte source and sink adapters over aiofiles handles.

Paths are opened with ``aiofiles.open``; the process stdin and stdout
buffers are wrapped with ``aiofiles.threadpool.wrap`` and left open.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import sys
from typing import Any, AsyncIterator

import aiofiles
from aiofiles.threadpool import wrap

from core.constants import STDIO_PATH


class FileSource:
    """Byte source reading from an aiofiles binary handle.

    Reads use ``read1`` so a pipe returns whatever is available instead
    of blocking until a full chunk arrives.
    """

    def __init__(self, file: Any) -> None:
        self._file = file

    async def read(self, n: int = -1) -> bytes:
        """Read up to ``n`` bytes; ``b""`` at end of file."""
        if n < 0:
            return await self._file.read()
        return await self._file.read1(n)


class FileSink:
    """Byte sink writing to an aiofiles binary handle.

    ``write`` only buffers; ``drain`` writes the buffered bytes and
    flushes the handle. Closing the handle stays with its owner.
    """

    def __init__(self, file: Any) -> None:
        self._file = file
        self._pending: list[bytes] = []

    def write(self, data: bytes) -> None:
        """Buffer bytes until the next drain."""
        if data:
            self._pending.append(bytes(data))

    async def drain(self) -> None:
        """Write buffered bytes and flush the handle."""
        payload = b"".join(self._pending)
        self._pending.clear()
        if payload:
            await self._file.write(payload)
        await self._file.flush()


@asynccontextmanager
async def open_source(path: str) -> AsyncIterator[FileSource]:
    """Open a file path, or ``-`` for stdin, as a byte source.

    Args:
        path: File path or ``-``.

    Yields:
        Byte source over the opened handle.

    Raises:
        OSError: If the file cannot be opened.
    """
    if path == STDIO_PATH:
        yield FileSource(wrap(sys.stdin.buffer))
        return
    async with aiofiles.open(path, "rb") as handle:
        yield FileSource(handle)


@asynccontextmanager
async def open_sink(path: str) -> AsyncIterator[FileSink]:
    """Open a file path, or ``-`` for stdout, as a byte sink.

    Args:
        path: File path or ``-``.

    Yields:
        Byte sink over the opened handle.

    Raises:
        OSError: If the file cannot be opened.
    """
    if path == STDIO_PATH:
        yield FileSink(wrap(sys.stdout.buffer))
        return
    async with aiofiles.open(path, "wb") as handle:
        yield FileSink(handle)
