"""Unit tests for XOR cipher transform."""

from __future__ import annotations

import pytest

from core.errors import PipeConfigError
from transforms.xor_cipher import XorState, xor_chunk, xor_state_factory


def test_xor_chunk_applies_key_and_advances_offset() -> None:
    """Key position should carry over to the next chunk."""
    state = XorState(key=b"\x01\x02")

    first = xor_chunk(b"\x00\x00\x00", state)
    second = xor_chunk(b"\x00", state)

    assert first == b"\x01\x02\x01"
    assert second == b"\x02"
    assert state.offset == 0


def test_xor_chunk_is_self_inverse() -> None:
    """Ciphering twice with fresh state should restore input."""
    factory = xor_state_factory(b"secret")
    payload = b"attack at dawn"

    ciphered = xor_chunk(payload, factory())

    assert ciphered != payload
    assert xor_chunk(ciphered, factory()) == payload


def test_xor_chunk_preserves_leading_zero_bytes() -> None:
    """Output length should match input even when output starts with zeros."""
    assert xor_chunk(b"\x07\x07", XorState(key=b"\x07")) == b"\x00\x00"


def test_xor_state_factory_rejects_empty_key() -> None:
    """An empty key should be rejected."""
    with pytest.raises(PipeConfigError):
        xor_state_factory(b"")
