"""Stateful chunked transform stage.

This module maps an async stream of chunks through a transform function
that threads one mutable state object across successive chunks. The
stage pulls one upstream chunk per requested output chunk, so nothing
is buffered beyond the chunk in flight.
"""

from __future__ import annotations

from typing import AsyncIterable, Generic

from core.errors import IOErrorKind, PipeStateError, PipeTransformError
from core.types import ErrorMapper, State, StateFactory, TransformFn

ORIGIN_SOURCE = "source"
ORIGIN_TRANSFORM = "transform"


def to_io_error(error: Exception) -> OSError:
    """Convert a transform failure into the pipeline's I/O error kind.

    Args:
        error: Exception raised by a transform function.

    Returns:
        The error itself when it already is an ``OSError``, otherwise a
        ``PipeTransformError`` describing it.
    """
    if isinstance(error, OSError):
        return error
    return PipeTransformError(
        f"Transform failed with {type(error).__name__}: {error}",
        IOErrorKind.OTHER,
    )


class ChunkedTransformStage(Generic[State]):
    """Async iterator applying a stateful transform to each upstream chunk.

    The state object is built once from ``state_factory`` and passed to
    every transform call, including calls that fail. Upstream errors are
    re-raised unchanged without calling the transform. Transform errors
    are converted with ``error_mapper``. After end of stream or any error
    the stage is finished and keeps raising ``StopAsyncIteration``.

    Attributes:
        chunks_read: Chunks pulled from upstream.
        chunks_emitted: Transformed chunks handed downstream.
        bytes_read: Bytes pulled from upstream.
        failure_origin: ``"source"`` or ``"transform"`` once a failure happened.
    """

    def __init__(
        self,
        upstream: AsyncIterable[bytes],
        transform: TransformFn[State],
        state_factory: StateFactory[State],
        error_mapper: ErrorMapper = to_io_error,
    ) -> None:
        self._upstream = upstream.__aiter__()
        self._transform = transform
        self._error_mapper = error_mapper
        self._state = state_factory()
        self._finished = False
        self._polling = False
        self.chunks_read = 0
        self.chunks_emitted = 0
        self.bytes_read = 0
        self.failure_origin: str | None = None

    @property
    def finished(self) -> bool:
        """Return whether the stage will produce no more chunks."""
        return self._finished

    def __aiter__(self) -> "ChunkedTransformStage[State]":
        return self

    async def __anext__(self) -> bytes:
        if self._finished:
            raise StopAsyncIteration
        if self._polling:
            raise PipeStateError(
                "Chunked transform stage polled concurrently. "
                "Consume the stage from a single task."
            )
        self._polling = True
        try:
            chunk = await self._pull_upstream()
        finally:
            self._polling = False
        return self._apply(chunk)

    async def aclose(self) -> None:
        """Finish the stage and close the upstream iterator if it supports it."""
        self._finished = True
        close = getattr(self._upstream, "aclose", None)
        if close is not None:
            await close()

    async def _pull_upstream(self) -> bytes:
        try:
            chunk = await self._upstream.__anext__()
        except StopAsyncIteration:
            self._finished = True
            raise
        except Exception:
            self._finished = True
            self.failure_origin = ORIGIN_SOURCE
            raise
        self.chunks_read += 1
        self.bytes_read += len(chunk)
        return chunk

    def _apply(self, chunk: bytes) -> bytes:
        try:
            output = _as_chunk(self._transform(chunk, self._state))
        except Exception as error:
            self._finished = True
            self.failure_origin = ORIGIN_TRANSFORM
            mapped = self._error_mapper(error)
            if mapped is error:
                raise
            raise mapped from error
        self.chunks_emitted += 1
        return output


def with_transform(
    upstream: AsyncIterable[bytes],
    transform: TransformFn[State],
    state_factory: StateFactory[State],
    error_mapper: ErrorMapper = to_io_error,
) -> ChunkedTransformStage[State]:
    """Attach a stateful transform to a chunk stream.

    Args:
        upstream: Chunk stream to transform.
        transform: Function called as ``transform(chunk, state)`` per chunk.
        state_factory: Zero-argument constructor for the initial state.
        error_mapper: Conversion from transform errors to ``OSError``.

    Returns:
        Lazy stream of transformed chunks, one per upstream chunk.
    """
    return ChunkedTransformStage(upstream, transform, state_factory, error_mapper)


def _as_chunk(output: object) -> bytes:
    """Normalize transform output into an immutable chunk."""
    if isinstance(output, bytes):
        return output
    if isinstance(output, (bytearray, memoryview)):
        return bytes(output)
    raise PipeTransformError(
        f"Transform returned {type(output).__name__}, expected bytes. "
        "Return a bytes-like chunk from the transform function.",
        IOErrorKind.INVALID_DATA,
    )
