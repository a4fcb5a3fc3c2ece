"""Load word2vec binary models and run exact similarity queries"""

from wordvecs.services.binary_reader import (
    BinaryModelReader,
    MalformedHeaderError,
    MalformedTokenError,
    ModelFormatError,
    ModelIOError,
    ModelLoadError,
    TruncatedRecordError,
    TruncatedVectorError,
)
from wordvecs.services.loader import LoggingLoadObserver, load_vocabulary
from wordvecs.services.vocabulary import Vocabulary, VocabularyBuilder

__all__ = [
    "BinaryModelReader",
    "ModelLoadError",
    "ModelIOError",
    "ModelFormatError",
    "MalformedHeaderError",
    "MalformedTokenError",
    "TruncatedVectorError",
    "TruncatedRecordError",
    "LoggingLoadObserver",
    "load_vocabulary",
    "Vocabulary",
    "VocabularyBuilder",
]
