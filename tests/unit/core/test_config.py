"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import PipeConfig, validate_buffer_size
from core.constants import DEFAULT_CHUNK_SIZE, DEFAULT_COPY_BUFFER_SIZE
from core.errors import PipeConfigError


def test_from_env_uses_defaults_when_unset() -> None:
    """Config should fall back to default buffer sizes."""
    config = PipeConfig.from_env()

    assert config.chunk_size == DEFAULT_CHUNK_SIZE
    assert config.copy_buffer_size == DEFAULT_COPY_BUFFER_SIZE


def test_from_env_reads_chunk_size(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should read chunk size from environment."""
    monkeypatch.setenv("BYTEPIPE_CHUNK_SIZE", "512")
    monkeypatch.setenv("BYTEPIPE_COPY_BUFFER_SIZE", "1024")

    config = PipeConfig.from_env()

    assert (config.chunk_size, config.copy_buffer_size) == (512, 1024)


def test_from_env_raises_for_non_numeric_chunk_size(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a non-numeric chunk size."""
    monkeypatch.setenv("BYTEPIPE_CHUNK_SIZE", "big")

    with pytest.raises(PipeConfigError, match="BYTEPIPE_CHUNK_SIZE"):
        PipeConfig.from_env()

    assert os.getenv("BYTEPIPE_CHUNK_SIZE") == "big"


def test_from_env_raises_for_zero_buffer(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a non-positive copy buffer size."""
    monkeypatch.setenv("BYTEPIPE_COPY_BUFFER_SIZE", "0")

    with pytest.raises(PipeConfigError, match="greater than zero"):
        PipeConfig.from_env()


@pytest.mark.parametrize("value", [0, -4, True, 2.5])
def test_validate_buffer_size_rejects_invalid_values(value: object) -> None:
    """Buffer size overrides must be positive integers."""
    with pytest.raises(PipeConfigError):
        validate_buffer_size("chunk_size", value)  # type: ignore[arg-type]


@pytest.mark.parametrize("field_name", ["chunk_size", "copy_buffer_size"])
def test_config_rejects_non_positive_sizes_on_construction(field_name: str) -> None:
    """Directly built configs should be validated like env configs."""
    with pytest.raises(PipeConfigError, match=field_name):
        PipeConfig(**{field_name: 0})
