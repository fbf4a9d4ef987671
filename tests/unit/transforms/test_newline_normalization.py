"""Unit tests for newline normalization transform."""

from __future__ import annotations

from transforms.newline_normalization import NewlineState, normalize_newlines


def _run(chunks: list[bytes]) -> bytes:
    state = NewlineState()
    return b"".join(normalize_newlines(chunk, state) for chunk in chunks)


def test_normalize_newlines_rewrites_crlf_and_cr() -> None:
    """CRLF and lone CR should both become LF."""
    assert _run([b"a\r\nb\rc\n"]) == b"a\nb\nc\n"


def test_normalize_newlines_handles_crlf_split_across_chunks() -> None:
    """A CR ending one chunk and LF starting the next should give one LF."""
    assert _run([b"line one\r", b"\nline two\r", b"\r\n"]) == b"line one\nline two\n\n"


def test_normalize_newlines_is_chunking_independent() -> None:
    """Byte-by-byte input should match whole-payload input."""
    payload = b"x\r\n\r\ny\r\rz\n\r"

    single = _run([payload])
    split = _run([payload[index : index + 1] for index in range(len(payload))])

    assert single == split == b"x\n\ny\n\nz\n\n"


def test_normalize_newlines_keeps_pending_cr_over_empty_chunk() -> None:
    """Empty chunks should not reset the carried CR."""
    assert _run([b"a\r", b"", b"\nb"]) == b"a\nb"
