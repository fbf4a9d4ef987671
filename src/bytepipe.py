"""Public SDK surface for Bytepipe.

This module provides a stable import path for library users.
It re-exports the pipeline entry points, adapters, and typed models.
"""

from __future__ import annotations

from core.config import PipeConfig
from core.errors import (
    IOErrorKind,
    PipeConfigError,
    PipeError,
    PipeIOError,
    PipeStateError,
    PipeTransformError,
)
from core.types import PipelineStats, PipelineStatus, TransformSpec
from streaming.chunk_stage import ChunkedTransformStage, to_io_error, with_transform
from streaming.chunking import ChunkReader, iter_chunks
from streaming.copier import copy_stream
from streaming.file_io import FileSink, FileSource, open_sink, open_source
from streaming.pipeline import StreamPipeline, process_stream
from streaming.protocols import ByteSink, ByteSource
from transforms.registry import build_transform, supported_transforms

__all__ = [
    "ByteSink",
    "ByteSource",
    "ChunkReader",
    "ChunkedTransformStage",
    "FileSink",
    "FileSource",
    "IOErrorKind",
    "PipeConfig",
    "PipeConfigError",
    "PipeError",
    "PipeIOError",
    "PipeStateError",
    "PipeTransformError",
    "PipelineStats",
    "PipelineStatus",
    "StreamPipeline",
    "TransformSpec",
    "build_transform",
    "copy_stream",
    "iter_chunks",
    "open_sink",
    "open_source",
    "process_stream",
    "supported_transforms",
    "to_io_error",
    "with_transform",
]
