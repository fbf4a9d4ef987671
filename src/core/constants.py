"""Core constants used across Bytepipe modules.

This module centralizes defaults and environment variable names.
Keeping values here avoids magic literals in pipeline logic.
"""

from __future__ import annotations

DEFAULT_CHUNK_SIZE = 4096
DEFAULT_COPY_BUFFER_SIZE = 8192
CHUNK_SIZE_ENV_VAR = "BYTEPIPE_CHUNK_SIZE"
COPY_BUFFER_SIZE_ENV_VAR = "BYTEPIPE_COPY_BUFFER_SIZE"
STDIO_PATH = "-"
