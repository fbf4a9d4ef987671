"""Byte source and sink interfaces consumed by the pipeline.

``asyncio.StreamReader`` and ``asyncio.StreamWriter`` satisfy these
protocols, as do the file adapters in ``streaming.file_io``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    """Sequential, possibly partial byte reads.

    ``read`` returns up to ``n`` bytes, ``b""`` at end of stream, and
    raises ``OSError`` on failure.
    """

    async def read(self, n: int = -1) -> bytes:
        ...


@runtime_checkable
class ByteSink(Protocol):
    """Sequential byte writes with drain-based backpressure.

    ``write`` buffers bytes and ``drain`` waits until the sink accepted
    them. Both raise ``OSError`` on failure. Closing stays with the owner.
    """

    def write(self, data: bytes) -> None:
        ...

    async def drain(self) -> None:
        ...
