"""Runtime configuration model for Bytepipe.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    CHUNK_SIZE_ENV_VAR,
    COPY_BUFFER_SIZE_ENV_VAR,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_COPY_BUFFER_SIZE,
)
from core.errors import PipeConfigError


@dataclass(frozen=True)
class PipeConfig:
    """Validated runtime configuration.

    Attributes:
        chunk_size: Maximum bytes requested from a source per chunk.
        copy_buffer_size: Maximum bytes moved into a sink per write.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    copy_buffer_size: int = DEFAULT_COPY_BUFFER_SIZE

    def __post_init__(self) -> None:
        validate_buffer_size("chunk_size", self.chunk_size)
        validate_buffer_size("copy_buffer_size", self.copy_buffer_size)

    @classmethod
    def from_env(cls) -> "PipeConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PipeConfigError: If environment values are invalid.
        """
        chunk_size = _parse_positive_int(
            CHUNK_SIZE_ENV_VAR, os.getenv(CHUNK_SIZE_ENV_VAR, str(DEFAULT_CHUNK_SIZE))
        )
        copy_buffer_size = _parse_positive_int(
            COPY_BUFFER_SIZE_ENV_VAR,
            os.getenv(COPY_BUFFER_SIZE_ENV_VAR, str(DEFAULT_COPY_BUFFER_SIZE)),
        )
        return cls(chunk_size=chunk_size, copy_buffer_size=copy_buffer_size)


def validate_buffer_size(name: str, value: int) -> int:
    """Validate an in-process buffer size override.

    Args:
        name: Setting name used in the error message.
        value: Candidate size in bytes.

    Returns:
        The validated size.

    Raises:
        PipeConfigError: If the size is not a positive integer.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise PipeConfigError(
            f"Invalid {name}: expected positive integer, got {value!r}. "
            f"Pass a byte count greater than zero."
        )
    return value


def _parse_positive_int(env_name: str, raw_value: str) -> int:
    """Parse a positive integer environment value.

    Args:
        env_name: Environment variable name for context.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        PipeConfigError: If value is not a positive integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise PipeConfigError(
            f"Invalid {env_name} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {env_name} to a numeric byte count."
        ) from error
    if value <= 0:
        raise PipeConfigError(
            f"Invalid {env_name} value: expected positive integer, got {value}. "
            f"Set {env_name} to a byte count greater than zero."
        )
    return value
