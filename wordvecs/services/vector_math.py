"""
Vector math operations for word embeddings.
"""

import numpy as np


class VectorOps:
    """Mathematical operations on float32 embedding vectors."""

    DTYPE = np.float32
    ACCUMULATOR = np.float64

    @staticmethod
    def _check_lengths(a: np.ndarray, b: np.ndarray) -> None:
        if a.shape != b.shape:
            raise ValueError(f"Vector shapes differ: {a.shape} vs {b.shape}")

    @staticmethod
    def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Elementwise sum of two vectors."""
        VectorOps._check_lengths(a, b)
        return np.add(a, b, dtype=VectorOps.DTYPE)

    @staticmethod
    def subtract(a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Elementwise difference of two vectors."""
        VectorOps._check_lengths(a, b)
        return np.subtract(a, b, dtype=VectorOps.DTYPE)

    @staticmethod
    def dot(a: np.ndarray, b: np.ndarray) -> float:
        """
        Dot product accumulated in float64.

        Args:
            a: First vector
            b: Second vector of the same length

        Returns:
            Python float with the full float64 result
        """
        VectorOps._check_lengths(a, b)
        return float(np.dot(a.astype(VectorOps.ACCUMULATOR), b.astype(VectorOps.ACCUMULATOR)))

    @staticmethod
    def norm(vector: np.ndarray) -> np.float32:
        """Euclidean norm, summed in float64 and cast back to float32."""
        wide = vector.astype(VectorOps.ACCUMULATOR)
        return VectorOps.DTYPE(np.sqrt(np.dot(wide, wide)))

    @staticmethod
    def normalize(vector: np.ndarray) -> np.ndarray:
        """
        Scale a vector to unit length.

        A zero-norm vector has no direction, so it is returned unchanged
        (as a float32 copy) instead of being divided by zero.
        """
        length = VectorOps.norm(vector)
        if length == 0:
            return vector.astype(VectorOps.DTYPE, copy=True)
        return (vector / length).astype(VectorOps.DTYPE, copy=False)

    @staticmethod
    def zeros(size: int) -> np.ndarray:
        """Zero vector of the given length."""
        return np.zeros(size, dtype=VectorOps.DTYPE)
