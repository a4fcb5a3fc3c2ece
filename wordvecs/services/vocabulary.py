"""In-memory word vector store with exact similarity search"""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

import numpy as np

from wordvecs.models.header import ModelHeader
from wordvecs.services.vector_math import VectorOps

logger = logging.getLogger(__name__)


class Vocabulary:
    """
    Read-only mapping from token to unit-normalized vector

    Instances are produced by VocabularyBuilder.build() and never change
    afterwards. Vectors live in one read-only float32 matrix, one row per
    token in insertion order; the per-token arrays are views into it.

    Every stored vector has unit length (except zero vectors from malformed
    input), so a dot product between two stored vectors is their cosine
    similarity. A dot product against an arbitrary external vector is only a
    cosine similarity if that vector is unit length too.
    """

    def __init__(self, header: ModelHeader, entries: Mapping[str, np.ndarray]):
        self.word_count = header.word_count
        self.vector_size = header.vector_size
        self._tokens = tuple(entries)
        self._index = {token: i for i, token in enumerate(self._tokens)}

        if entries:
            matrix = np.vstack([entries[token] for token in self._tokens]).astype(
                VectorOps.DTYPE, copy=False
            )
        else:
            matrix = np.empty((0, self.vector_size), dtype=VectorOps.DTYPE)
        matrix.flags.writeable = False
        self._matrix = matrix
        self._entries = MappingProxyType(
            {token: matrix[i] for i, token in enumerate(self._tokens)}
        )

    def __repr__(self) -> str:
        return f"Vocabulary with {len(self)} entries"

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._index

    @property
    def tokens(self) -> tuple[str, ...]:
        """Tokens in insertion order"""
        return self._tokens

    @property
    def entries(self) -> Mapping[str, np.ndarray]:
        return self._entries

    def lookup(self, token: str) -> np.ndarray:
        """
        Get the vector for a token

        Unknown tokens are not an error: they resolve to a zero vector of
        length vector_size, which scores 0.0 against everything.

        Args:
            token: Exact token to look up

        Returns:
            Stored (read-only) vector, or a new zero vector if absent
        """
        vector = self._entries.get(token)
        if vector is None:
            return VectorOps.zeros(self.vector_size)
        return vector

    def nearest_to_vector(
        self, vector: np.ndarray, count: int = 50, exclude: Iterable[str] = ()
    ) -> list[tuple[str, float]]:
        """
        Rank stored tokens by dot product with a query vector

        Args:
            vector: Query vector of length vector_size
            count: Maximum number of results to return
            exclude: Tokens to leave out of the results

        Returns:
            list of (token, score), highest score first; equal scores keep
            insertion order
        """
        query = np.asarray(vector, dtype=VectorOps.ACCUMULATOR)
        if query.shape != (self.vector_size,):
            raise ValueError(
                f"Query vector must have shape ({self.vector_size},), got {query.shape}"
            )
        if count <= 0 or not self._tokens:
            return []

        # float32 rows against a float64 query accumulate in float64
        scores = np.dot(self._matrix, query)

        keep = np.ones(len(self._tokens), dtype=bool)
        for token in exclude:
            index = self._index.get(token)
            if index is not None:
                keep[index] = False

        candidates = np.flatnonzero(keep)
        order = candidates[np.argsort(-scores[candidates], kind="stable")]
        return [(self._tokens[i], float(scores[i])) for i in order[:count]]

    def nearest_neighbors(self, token: str, count: int = 50) -> list[tuple[str, float]]:
        """
        Find the tokens most similar to a vocabulary token

        This is a full linear scan over the vocabulary. The query token itself
        is never returned. An unknown token queries with the zero vector, so
        every score is 0.0 and results come back in insertion order.

        Args:
            token: Query token
            count: Maximum number of results to return

        Returns:
            list of (token, score), highest score first
        """
        return self.nearest_to_vector(self.lookup(token), count, exclude=(token,))

    def analogy(
        self, positive: Iterable[str], negative: Iterable[str] = (), count: int = 10
    ) -> list[tuple[str, float]]:
        """Tokens closest to sum(positive) - sum(negative), inputs excluded"""
        positive = list(positive)
        negative = list(negative)

        query = VectorOps.zeros(self.vector_size)
        for token in positive:
            query = VectorOps.add(query, self.lookup(token))
        for token in negative:
            query = VectorOps.subtract(query, self.lookup(token))

        return self.nearest_to_vector(
            VectorOps.normalize(query), count, exclude=positive + negative
        )


class VocabularyBuilder:
    """
    Accumulates decoded entries during a load pass

    A later entry for an existing token replaces its vector but keeps the
    token's original position. build() hands the entries to an immutable
    Vocabulary and closes the builder.
    """

    def __init__(self, header: ModelHeader):
        self.header = header
        self.duplicate_count = 0
        self._entries: dict[str, np.ndarray] | None = {}

    def __len__(self) -> int:
        return len(self._entries) if self._entries is not None else 0

    def add(self, token: str, vector: np.ndarray) -> None:
        """
        Add one decoded entry

        Raises:
            RuntimeError: If build() has already been called
            ValueError: If the vector length does not match the header
        """
        if self._entries is None:
            raise RuntimeError("Vocabulary has already been built")
        if vector.shape != (self.header.vector_size,):
            raise ValueError(
                f"Vector for '{token}' has shape {vector.shape}, "
                f"expected ({self.header.vector_size},)"
            )

        if token in self._entries:
            self.duplicate_count += 1
            logger.debug(f"Duplicate token '{token}', keeping the later vector")
        self._entries[token] = vector

    def build(self) -> Vocabulary:
        """Freeze the accumulated entries into a Vocabulary"""
        if self._entries is None:
            raise RuntimeError("Vocabulary has already been built")

        entries, self._entries = self._entries, None
        return Vocabulary(self.header, entries)
