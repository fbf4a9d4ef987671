"""Pipeline driver from byte source through a transform to a byte sink.

This module wires the chunker, the stateful transform stage, the chunk
reader, and the copy loop for one pipeline invocation, and tracks the
invocation lifecycle.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Generic

from core.config import PipeConfig, validate_buffer_size
from core.errors import PipeStateError
from core.logging_config import get_logger
from core.types import (
    ErrorMapper,
    PipelineStats,
    PipelineStatus,
    State,
    StateFactory,
    TransformFn,
)
from streaming.chunk_stage import ChunkedTransformStage, to_io_error
from streaming.chunking import ChunkReader, iter_chunks
from streaming.copier import copy_stream
from streaming.protocols import ByteSink, ByteSource

_LOGGER = get_logger(__name__)
_ORIGIN_SINK = "sink"
_ORIGIN_SETUP = "setup"


class StreamPipeline(Generic[State]):
    """Single-use runner for one source-to-sink transform invocation."""

    def __init__(
        self,
        source: ByteSource,
        sink: ByteSink,
        transform: TransformFn[State],
        state_factory: StateFactory[State],
        *,
        config: PipeConfig | None = None,
        error_mapper: ErrorMapper = to_io_error,
    ) -> None:
        self._source = source
        self._sink = sink
        self._transform = transform
        self._state_factory = state_factory
        self._config = config or PipeConfig()
        self._error_mapper = error_mapper
        self._status = PipelineStatus.IDLE

    @property
    def status(self) -> PipelineStatus:
        """Return the current lifecycle status."""
        return self._status

    async def run(self) -> PipelineStats:
        """Execute the pipeline until the source is exhausted or an error occurs.

        Returns:
            Counters for the completed invocation.

        Raises:
            OSError: Source and sink errors unchanged, transform errors converted.
            PipeStateError: If the pipeline already ran.
        """
        if self._status is not PipelineStatus.IDLE:
            raise PipeStateError(
                f"Pipeline cannot run from status '{self._status.value}'. "
                "Create a new pipeline for each invocation."
            )
        self._status = PipelineStatus.RUNNING
        stage: ChunkedTransformStage[State] | None = None
        try:
            stage = ChunkedTransformStage(
                iter_chunks(self._source, self._config.chunk_size),
                self._transform,
                self._state_factory,
                self._error_mapper,
            )
            _LOGGER.info(
                "pipeline_started",
                transform=_transform_name(self._transform),
                chunk_size=self._config.chunk_size,
            )
            bytes_written = await copy_stream(
                ChunkReader(stage), self._sink, self._config.copy_buffer_size
            )
        except BaseException as error:
            self._status = PipelineStatus.FAILED
            _log_pipeline_failure(self._transform, stage, error)
            raise
        finally:
            if stage is not None:
                await stage.aclose()
        self._status = PipelineStatus.COMPLETED
        stats = PipelineStats(
            chunks_read=stage.chunks_read,
            chunks_emitted=stage.chunks_emitted,
            bytes_read=stage.bytes_read,
            bytes_written=bytes_written,
        )
        _LOGGER.info(
            "pipeline_completed",
            transform=_transform_name(self._transform),
            chunks_read=stats.chunks_read,
            chunks_emitted=stats.chunks_emitted,
            bytes_read=stats.bytes_read,
            bytes_written=stats.bytes_written,
        )
        return stats


async def process_stream(
    source: ByteSource,
    sink: ByteSink,
    transform: TransformFn[State],
    state_factory: StateFactory[State],
    *,
    chunk_size: int | None = None,
    config: PipeConfig | None = None,
    error_mapper: ErrorMapper = to_io_error,
) -> None:
    """Transform a byte source chunk by chunk into a byte sink.

    A fresh state from ``state_factory`` is threaded through every
    ``transform(chunk, state)`` call. Output reaches the sink in input
    order as it is produced. Bytes written before a failure stay written.

    Args:
        source: Byte source to read from.
        sink: Byte sink to write into; the caller keeps ownership.
        transform: Per-chunk transform function.
        state_factory: Zero-argument constructor for the initial state.
        chunk_size: Optional override of the configured chunk size.
        config: Runtime configuration; defaults apply when omitted.
        error_mapper: Conversion from transform errors to ``OSError``.

    Raises:
        OSError: Source and sink errors unchanged, transform errors converted.
        PipeConfigError: If the chunk size override is invalid.
    """
    resolved_config = config or PipeConfig()
    if chunk_size is not None:
        resolved_config = replace(
            resolved_config, chunk_size=validate_buffer_size("chunk_size", chunk_size)
        )
    pipeline = StreamPipeline(
        source,
        sink,
        transform,
        state_factory,
        config=resolved_config,
        error_mapper=error_mapper,
    )
    await pipeline.run()


def _transform_name(transform: TransformFn[State]) -> str:
    """Return a readable transform name for log events."""
    return getattr(transform, "__qualname__", type(transform).__name__)


def _log_pipeline_failure(
    transform: TransformFn[State],
    stage: ChunkedTransformStage[State] | None,
    error: BaseException,
) -> None:
    """Log a failed invocation with the stage where the error originated."""
    if stage is None:
        _LOGGER.error(
            "pipeline_failed",
            transform=_transform_name(transform),
            origin=_ORIGIN_SETUP,
            error_type=type(error).__name__,
            error=str(error),
        )
        return
    _LOGGER.error(
        "pipeline_failed",
        transform=_transform_name(transform),
        origin=stage.failure_origin or _ORIGIN_SINK,
        error_type=type(error).__name__,
        error=str(error),
        chunks_read=stage.chunks_read,
        chunks_emitted=stage.chunks_emitted,
    )
