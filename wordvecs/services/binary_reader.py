"""Reader for the word2vec binary model format"""

import logging
import mmap
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import numpy as np

from wordvecs.models.header import MAX_HEADER_VALUE, ModelHeader
from wordvecs.services.vector_math import VectorOps

logger = logging.getLogger(__name__)

# Vectors are stored as packed little-endian IEEE-754 singles
VECTOR_DTYPE = np.dtype("<f4")

# Accepted byte ranges for header digits and token characters
DIGIT_BYTES = range(48, 58)
TOKEN_BYTES = range(33, 127)


class ModelLoadError(Exception):
    """Raised when a model file cannot be loaded"""

    pass


class ModelIOError(ModelLoadError):
    """Raised when the model file cannot be opened or mapped"""

    pass


class ModelFormatError(ModelLoadError):
    """Raised when the file contents break the binary format"""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (at byte {offset})")
        self.offset = offset


class MalformedHeaderError(ModelFormatError):
    """Raised when a header field is empty, unterminated or out of range"""

    pass


class MalformedTokenError(ModelFormatError):
    """Raised when a token is empty or runs into the end of the stream"""

    pass


class TruncatedVectorError(ModelFormatError):
    """Raised when fewer bytes remain than the declared dimensionality needs"""

    pass


class TruncatedRecordError(ModelFormatError):
    """Raised when a record is missing its terminator byte"""

    pass


@contextmanager
def open_model_buffer(path: str | Path) -> Iterator[bytes | mmap.mmap]:
    """
    Memory-map a model file read-only for the duration of the block

    Args:
        path: Path to the word2vec binary file

    Yields:
        The mapped file contents (an empty bytes object for an empty file)

    Raises:
        ModelIOError: If the file cannot be opened or mapped
    """
    path = Path(path)
    try:
        handle = open(path, "rb")
    except OSError as e:
        raise ModelIOError(f"Cannot open model file {path}: {e}") from e

    with handle:
        try:
            size = os.fstat(handle.fileno()).st_size
            # mmap refuses zero-length files
            buffer = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ) if size else b""
        except (OSError, ValueError) as e:
            raise ModelIOError(f"Cannot map model file {path}: {e}") from e

        logger.debug(f"Mapped {size} bytes from {path}")
        try:
            yield buffer
        finally:
            if isinstance(buffer, mmap.mmap):
                buffer.close()


class BinaryModelReader:
    """
    Forward-only decoder for word2vec binary models

    The reader walks a byte buffer with a single cursor. Every byte is
    consumed once, in file order; nothing is re-read.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview | mmap.mmap):
        self._buffer = buffer
        self._size = len(buffer)
        self._position = 0
        self.header: ModelHeader | None = None
        self.zero_norm_count = 0

    @property
    def position(self) -> int:
        """Number of bytes consumed so far"""
        return self._position

    @property
    def remaining(self) -> int:
        return self._size - self._position

    def _scan(self, accepted: range) -> tuple[bytes, bool]:
        """
        Consume a run of accepted bytes plus the byte that ends it

        Returns:
            Tuple of (field, terminated)
            - field: The accepted bytes, sliced out in one piece
            - terminated: False if the stream ended before a terminator byte
        """
        start = end = self._position
        while end < self._size and self._buffer[end] in accepted:
            end += 1

        field = bytes(self._buffer[start:end])
        if end >= self._size:
            self._position = end
            return field, False

        self._position = end + 1
        return field, True

    def _read_header_field(self, name: str) -> int:
        start = self._position
        digits, terminated = self._scan(DIGIT_BYTES)

        if not digits:
            raise MalformedHeaderError(f"Header field '{name}' has no digits", start)
        if not terminated:
            raise MalformedHeaderError(f"Header field '{name}' is not terminated", start)

        # Leading zeros are insignificant; anything longer than the bound's
        # digit count is out of range before it reaches int()
        significant = digits.lstrip(b"0")
        if len(significant) > len(str(MAX_HEADER_VALUE)):
            raise MalformedHeaderError(
                f"Header field '{name}' has {len(significant)} digits, "
                f"value exceeds {MAX_HEADER_VALUE}",
                start,
            )

        value = int(significant or b"0")
        if value > MAX_HEADER_VALUE:
            raise MalformedHeaderError(
                f"Header field '{name}' value {value} exceeds {MAX_HEADER_VALUE}", start
            )
        return value

    def read_header(self) -> ModelHeader:
        """
        Read the word count and vector dimensionality

        Returns:
            ModelHeader with the declared counts

        Raises:
            MalformedHeaderError: If either field is empty, unterminated or too large
        """
        if self.header is not None:
            raise RuntimeError("Header has already been read")

        word_count = self._read_header_field("word_count")
        vector_size = self._read_header_field("vector_size")
        self.header = ModelHeader(word_count=word_count, vector_size=vector_size)
        return self.header

    def _read_token(self) -> str:
        start = self._position
        raw, terminated = self._scan(TOKEN_BYTES)

        if not terminated:
            raise MalformedTokenError("Token is not terminated before end of stream", start)
        if not raw:
            raise MalformedTokenError("Empty token", start)
        return raw.decode("ascii")

    def _read_vector(self, size: int) -> np.ndarray:
        start = self._position
        needed = size * VECTOR_DTYPE.itemsize
        if self._size - start < needed:
            raise TruncatedVectorError(
                f"Expected {needed} bytes for a {size}-dimensional vector, "
                f"got {self._size - start}",
                start,
            )

        self._position = start + needed
        if size == 0:
            return VectorOps.zeros(0)
        raw = np.frombuffer(self._buffer[start : start + needed], dtype=VECTOR_DTYPE)
        return raw.astype(VectorOps.DTYPE)

    def _skip_record_terminator(self) -> None:
        if self._position >= self._size:
            raise TruncatedRecordError("Missing record terminator", self._position)
        self._position += 1

    def iter_entries(self, limit: int) -> Iterator[tuple[str, np.ndarray]]:
        """
        Lazily decode (token, unit vector) records

        Reading stops once the buffer is exhausted, the declared word count
        is reached, or `limit` records have been produced. The header is read
        first if the caller has not done so.

        Args:
            limit: Maximum number of records to decode (0 reads nothing)

        Returns:
            Iterator of (token, normalized float32 vector)
        """
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        header = self.header if self.header is not None else self.read_header()
        return self._entries(header, limit)

    def _entries(self, header: ModelHeader, limit: int) -> Iterator[tuple[str, np.ndarray]]:
        count = 0
        while self.remaining > 0 and count < header.word_count and count < limit:
            token = self._read_token()
            raw = self._read_vector(header.vector_size)
            self._skip_record_terminator()

            if not raw.any():
                self.zero_norm_count += 1
                logger.debug(f"Token '{token}' has a zero vector, leaving it unnormalized")

            count += 1
            yield token, VectorOps.normalize(raw)
