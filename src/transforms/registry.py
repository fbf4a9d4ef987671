"""Named transform lookup.

This module maps transform names used by the CLI and SDK onto
``TransformSpec`` bundles of transform function and state factory.
"""

from __future__ import annotations

from typing import Any

from core.errors import PipeConfigError
from core.types import TransformSpec
from transforms.deflate_codec import (
    InflateState,
    deflate_chunk,
    deflate_state_factory,
    inflate_chunk,
)
from transforms.newline_normalization import NewlineState, normalize_newlines
from transforms.xor_cipher import xor_chunk, xor_state_factory

_KEYED_TRANSFORMS = ("xor",)


def supported_transforms() -> tuple[str, ...]:
    """Return the names accepted by ``build_transform``."""
    return ("identity", "newlines", "deflate", "inflate", "xor")


def build_transform(name: str, key: bytes | None = None) -> TransformSpec[Any]:
    """Resolve a transform name into a transform spec.

    Args:
        name: Transform name from ``supported_transforms``.
        key: Key bytes for keyed transforms.

    Returns:
        Transform function with its state factory.

    Raises:
        PipeConfigError: If the name is unknown or a key is missing or unexpected.
    """
    if name not in supported_transforms():
        raise PipeConfigError(
            f"Unsupported transform '{name}'. "
            f"Use one of: {', '.join(supported_transforms())}."
        )
    if name in _KEYED_TRANSFORMS:
        if key is None:
            raise PipeConfigError(f"Transform '{name}' requires a key. Pass --key as hex bytes.")
        return TransformSpec(name=name, transform=xor_chunk, state_factory=xor_state_factory(key))
    if key is not None:
        raise PipeConfigError(f"Transform '{name}' does not take a key. Remove --key.")
    if name == "newlines":
        return TransformSpec(name=name, transform=normalize_newlines, state_factory=NewlineState)
    if name == "deflate":
        return TransformSpec(
            name=name, transform=deflate_chunk, state_factory=deflate_state_factory()
        )
    if name == "inflate":
        return TransformSpec(name=name, transform=inflate_chunk, state_factory=InflateState)
    return TransformSpec(name=name, transform=_identity, state_factory=_no_state)


def _identity(chunk: bytes, state: None) -> bytes:
    return chunk


def _no_state() -> None:
    return None
