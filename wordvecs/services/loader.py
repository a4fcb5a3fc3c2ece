"""Load a word2vec binary file into a Vocabulary"""

import logging
import time
from pathlib import Path
from typing import Protocol

from wordvecs.config import config
from wordvecs.models.header import ModelHeader
from wordvecs.models.load_summary import LoadSummary
from wordvecs.services.binary_reader import BinaryModelReader, open_model_buffer
from wordvecs.services.vocabulary import Vocabulary, VocabularyBuilder

logger = logging.getLogger(__name__)


class LoadObserver(Protocol):
    """Receives progress notifications during a load pass"""

    def on_header(self, header: ModelHeader) -> None: ...

    def on_progress(self, entries_read: int) -> None: ...

    def on_complete(self, summary: LoadSummary) -> None: ...


class LoggingLoadObserver:
    """Report load progress through the logging module"""

    def __init__(self, interval: int | None = None):
        self.interval = interval or config.progress_interval
        self.summary: LoadSummary | None = None

    def on_header(self, header: ModelHeader) -> None:
        logger.info(f"{header.word_count} words in vocab")
        logger.info(f"{header.vector_size} word vector size")

    def on_progress(self, entries_read: int) -> None:
        if entries_read % self.interval == 0:
            logger.info(f"Loaded {entries_read} words")

    def on_complete(self, summary: LoadSummary) -> None:
        self.summary = summary
        logger.info(
            f"Done, loaded {summary.vocabulary_size} words "
            f"in {summary.duration_seconds:.2f}s"
        )
        if summary.duplicate_tokens:
            logger.warning(f"{summary.duplicate_tokens} duplicate tokens were overwritten")
        if summary.zero_norm_vectors:
            logger.warning(f"{summary.zero_norm_vectors} zero vectors could not be normalized")


def load_vocabulary(
    path: str | Path, limit: int, observer: LoadObserver | None = None
) -> Vocabulary:
    """
    Load at most `limit` entries from a word2vec binary file

    Loading stops at whichever comes first: `limit`, the header's word
    count, or the end of the file. Any error discards the partial result.

    Args:
        path: Path to the binary model file
        limit: Maximum number of entries to read
        observer: Optional progress observer (defaults to LoggingLoadObserver)

    Returns:
        Vocabulary: The frozen vocabulary

    Raises:
        ModelIOError: If the file cannot be opened
        ModelFormatError: If the file contents are malformed
        ValueError: If limit is negative
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    if observer is None:
        observer = LoggingLoadObserver()
    start_time = time.perf_counter()

    with open_model_buffer(path) as buffer:
        reader = BinaryModelReader(buffer)
        header = reader.read_header()
        observer.on_header(header)

        builder = VocabularyBuilder(header)
        entries_read = 0
        for token, vector in reader.iter_entries(limit):
            builder.add(token, vector)
            entries_read += 1
            observer.on_progress(entries_read)

        vocabulary = builder.build()
        bytes_read = reader.position
        zero_norm_vectors = reader.zero_norm_count

    observer.on_complete(
        LoadSummary(
            path=str(path),
            word_count=header.word_count,
            vector_size=header.vector_size,
            entries_read=entries_read,
            vocabulary_size=len(vocabulary),
            duplicate_tokens=builder.duplicate_count,
            zero_norm_vectors=zero_norm_vectors,
            bytes_read=bytes_read,
            duration_seconds=time.perf_counter() - start_time,
        )
    )
    return vocabulary
