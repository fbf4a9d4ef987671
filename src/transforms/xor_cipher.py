"""Repeating-key XOR cipher transform.

The key position is carried across chunks, so output does not depend on
how the input is split. Applying the cipher twice restores the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from core.errors import PipeConfigError


@dataclass
class XorState:
    """Key and current key offset.

    Attributes:
        key: Non-empty cipher key.
        offset: Index into the key for the next input byte.
    """

    key: bytes
    offset: int = 0


def xor_state_factory(key: bytes) -> partial[XorState]:
    """Build a state factory for a cipher key.

    Args:
        key: Cipher key bytes.

    Returns:
        Zero-argument state factory.

    Raises:
        PipeConfigError: If the key is empty.
    """
    if not key:
        raise PipeConfigError("XOR cipher key is empty. Provide at least one key byte.")
    return partial(XorState, bytes(key))


def xor_chunk(chunk: bytes, state: XorState) -> bytes:
    """XOR one chunk with the key stream.

    Args:
        chunk: Input chunk.
        state: Key and offset, advanced by the chunk length.

    Returns:
        Ciphered chunk of the same length.
    """
    if not chunk:
        return chunk
    keystream = _keystream(state.key, state.offset, len(chunk))
    state.offset = (state.offset + len(chunk)) % len(state.key)
    mixed = int.from_bytes(chunk, "big") ^ int.from_bytes(keystream, "big")
    return mixed.to_bytes(len(chunk), "big")


def _keystream(key: bytes, offset: int, length: int) -> bytes:
    """Return ``length`` key bytes starting at ``offset``."""
    repeats = (offset + length) // len(key) + 1
    return (key * repeats)[offset : offset + length]
