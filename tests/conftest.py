"""Pytest configuration for repository test runs."""

from __future__ import annotations

import pytest

from core.constants import CHUNK_SIZE_ENV_VAR, COPY_BUFFER_SIZE_ENV_VAR


@pytest.fixture(autouse=True)
def clean_pipe_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment overrides out of config-dependent tests."""
    monkeypatch.delenv(CHUNK_SIZE_ENV_VAR, raising=False)
    monkeypatch.delenv(COPY_BUFFER_SIZE_ENV_VAR, raising=False)
