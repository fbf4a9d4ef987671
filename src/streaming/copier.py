"""Byte copy loop from a readable view into a sink."""

from __future__ import annotations

from core.config import validate_buffer_size
from core.constants import DEFAULT_COPY_BUFFER_SIZE
from streaming.protocols import ByteSink, ByteSource


async def copy_stream(
    reader: ByteSource,
    sink: ByteSink,
    buffer_size: int = DEFAULT_COPY_BUFFER_SIZE,
) -> int:
    """Copy bytes from a reader into a sink until end of stream.

    Each write is drained before the next read, so a slow sink pauses
    reading. The sink is drained once more after end of stream.

    Args:
        reader: Byte source to pull from.
        sink: Byte sink to push into.
        buffer_size: Maximum bytes per read.

    Returns:
        Total bytes written to the sink.

    Raises:
        OSError: First error raised by the reader or the sink.
    """
    validate_buffer_size("copy_buffer_size", buffer_size)
    total = 0
    while True:
        data = await reader.read(buffer_size)
        if not data:
            break
        sink.write(data)
        await sink.drain()
        total += len(data)
    await sink.drain()
    return total
