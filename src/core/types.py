"""Shared typed models.

This module defines the callable aliases and immutable models used by
the streaming layer, transforms, and the CLI to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar

State = TypeVar("State")

TransformFn = Callable[[bytes, State], bytes]
StateFactory = Callable[[], State]
ErrorMapper = Callable[[Exception], OSError]


class PipelineStatus(str, Enum):
    """Lifecycle of one pipeline invocation."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineStats:
    """Counters for one completed pipeline invocation.

    Attributes:
        chunks_read: Chunks pulled from the source.
        chunks_emitted: Chunks produced by the transform.
        bytes_read: Bytes pulled from the source.
        bytes_written: Bytes accepted by the sink.
    """

    chunks_read: int
    chunks_emitted: int
    bytes_read: int
    bytes_written: int


@dataclass(frozen=True)
class TransformSpec(Generic[State]):
    """A transform function bundled with its state factory.

    Attributes:
        name: Registry name of the transform.
        transform: Per-chunk transform function.
        state_factory: Zero-argument constructor for the initial state.
    """

    name: str
    transform: TransformFn[State]
    state_factory: StateFactory[State]
