"""
Shared test fixtures for building word2vec binary files.
"""

import struct

import pytest


def encode_model(
    entries: list[tuple[str, list[float]]],
    word_count: int | None = None,
    vector_size: int | None = None,
    header_separator: bytes = b"\n",
    record_terminator: bytes = b"\n",
) -> bytes:
    """Encode (token, floats) entries in the word2vec binary layout."""
    if vector_size is None:
        vector_size = len(entries[0][1]) if entries else 0
    if word_count is None:
        word_count = len(entries)

    parts = [f"{word_count} {vector_size}".encode("ascii") + header_separator]
    for token, values in entries:
        parts.append(token.encode("ascii") + b" ")
        parts.append(struct.pack(f"<{len(values)}f", *values))
        parts.append(record_terminator)
    return b"".join(parts)


@pytest.fixture
def model_bytes():
    """Factory that encodes entries into model file bytes"""
    return encode_model


@pytest.fixture
def write_model(tmp_path):
    """Factory that writes an encoded model into tmp_path and returns its path"""

    def _write(entries, name="vectors.bin", **kwargs):
        path = tmp_path / name
        path.write_bytes(encode_model(entries, **kwargs))
        return path

    return _write


@pytest.fixture
def animals_bytes():
    """The cat/dog/bird model with a space-separated header"""
    return (
        b"3 2 "
        + b"cat "
        + struct.pack("<2f", 3.0, 4.0)
        + b"\n"
        + b"dog "
        + struct.pack("<2f", 0.0, 5.0)
        + b"\n"
        + b"bird "
        + struct.pack("<2f", 1.0, 0.0)
        + b"\n"
    )
