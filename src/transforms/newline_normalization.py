"""Newline normalization transform.

This module rewrites CRLF and lone CR line endings to LF. A CRLF pair
split across two chunks is handled by remembering a trailing CR.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NewlineState:
    """Carry-over between chunks.

    Attributes:
        pending_cr: Whether the previous chunk ended with a CR.
    """

    pending_cr: bool = False


def normalize_newlines(chunk: bytes, state: NewlineState) -> bytes:
    """Rewrite line endings in one chunk to LF.

    Args:
        chunk: Input chunk.
        state: Carry-over from the previous chunk.

    Returns:
        Chunk with CRLF and CR replaced by LF.
    """
    if not chunk:
        return chunk
    if state.pending_cr and chunk.startswith(b"\n"):
        chunk = chunk[1:]
    state.pending_cr = chunk.endswith(b"\r")
    return chunk.replace(b"\r\n", b"\n").replace(b"\r", b"\n")
