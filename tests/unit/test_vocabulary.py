"""Unit tests for the in-memory vocabulary store"""

import numpy as np
import pytest

from wordvecs.models.header import ModelHeader
from wordvecs.services.vector_math import VectorOps
from wordvecs.services.vocabulary import Vocabulary, VocabularyBuilder


def build_vocabulary(entries, vector_size=None):
    """Build a Vocabulary from (token, raw values) pairs, normalizing like the reader"""
    if vector_size is None:
        vector_size = len(entries[0][1])
    builder = VocabularyBuilder(ModelHeader(word_count=len(entries), vector_size=vector_size))
    for token, values in entries:
        builder.add(token, VectorOps.normalize(np.array(values, dtype=np.float32)))
    return builder.build()


@pytest.fixture
def animals():
    return build_vocabulary([("cat", [3.0, 4.0]), ("dog", [0.0, 5.0]), ("bird", [1.0, 0.0])])


class TestLookup:
    """Test vector lookup"""

    def test_known_token(self, animals):
        np.testing.assert_allclose(animals.lookup("cat"), [0.6, 0.8], rtol=1e-6)

    def test_unknown_token_returns_zero_vector(self, animals):
        vector = animals.lookup("fish")

        assert vector.shape == (animals.vector_size,)
        assert vector.dtype == np.float32
        assert not vector.any()

    def test_unknown_token_in_single_entry_vocabulary(self):
        vocab = build_vocabulary([("only", [1.0, 2.0, 3.0, 4.0, 5.0])])

        assert vocab.lookup("other").tolist() == [0.0] * 5

    def test_stored_vectors_are_read_only(self, animals):
        with pytest.raises(ValueError):
            animals.lookup("cat")[0] = 1.0

    def test_entries_mapping_is_read_only(self, animals):
        with pytest.raises(TypeError):
            animals.entries["fish"] = np.zeros(2, dtype=np.float32)

    def test_container_protocol(self, animals):
        assert len(animals) == 3
        assert "dog" in animals
        assert "fish" not in animals
        assert animals.tokens == ("cat", "dog", "bird")
        assert repr(animals) == "Vocabulary with 3 entries"


class TestBuilder:
    """Test the construction phase"""

    def test_duplicate_token_last_wins(self):
        header = ModelHeader(word_count=3, vector_size=2)
        builder = VocabularyBuilder(header)
        builder.add("a", np.array([1.0, 0.0], dtype=np.float32))
        builder.add("b", np.array([0.0, 1.0], dtype=np.float32))
        builder.add("a", np.array([0.0, -1.0], dtype=np.float32))

        vocab = builder.build()

        assert vocab.lookup("a").tolist() == [0.0, -1.0]
        assert vocab.tokens == ("a", "b")
        assert builder.duplicate_count == 1

    def test_add_after_build(self):
        builder = VocabularyBuilder(ModelHeader(word_count=1, vector_size=2))
        builder.build()

        with pytest.raises(RuntimeError):
            builder.add("a", np.zeros(2, dtype=np.float32))
        with pytest.raises(RuntimeError):
            builder.build()

    def test_wrong_vector_length(self):
        builder = VocabularyBuilder(ModelHeader(word_count=1, vector_size=3))

        with pytest.raises(ValueError, match="expected"):
            builder.add("a", np.zeros(2, dtype=np.float32))

    def test_header_values_are_kept(self):
        builder = VocabularyBuilder(ModelHeader(word_count=1000, vector_size=2))
        builder.add("a", np.array([1.0, 0.0], dtype=np.float32))

        vocab = builder.build()

        assert vocab.word_count == 1000
        assert vocab.vector_size == 2
        assert len(vocab) == 1


class TestNearestNeighbors:
    """Test exact similarity ranking"""

    def test_animals_scenario(self, animals):
        # cat . dog = 0.8, cat . bird = 0.6
        results = animals.nearest_neighbors("cat", 1)

        assert len(results) == 1
        assert results[0][0] == "dog"
        assert results[0][1] == pytest.approx(0.8, abs=1e-6)

    def test_full_ranking(self, animals):
        results = animals.nearest_neighbors("cat")

        assert [token for token, _ in results] == ["dog", "bird"]
        assert results[1][1] == pytest.approx(0.6, abs=1e-6)

    def test_excludes_query_token(self, animals):
        for token in animals.tokens:
            assert token not in [t for t, _ in animals.nearest_neighbors(token)]

    def test_sorted_descending_and_bounded(self):
        rng = np.random.default_rng(3)
        vocab = build_vocabulary([(f"w{i}", rng.normal(size=8).tolist()) for i in range(40)])

        results = vocab.nearest_neighbors("w0", count=10)

        scores = [score for _, score in results]
        assert len(results) == 10
        assert scores == sorted(scores, reverse=True)

    def test_count_larger_than_vocabulary(self, animals):
        assert len(animals.nearest_neighbors("cat", count=50)) == 2

    def test_count_zero(self, animals):
        assert animals.nearest_neighbors("cat", count=0) == []

    def test_identical_vectors_score_one(self):
        vocab = build_vocabulary([("a", [0.3, -1.2, 2.5]), ("b", [0.3, -1.2, 2.5])])

        (token, score), = vocab.nearest_neighbors("a", 1)

        assert token == "b"
        assert score == pytest.approx(1.0, abs=1e-6)

    def test_ties_keep_insertion_order(self):
        vocab = build_vocabulary(
            [("x", [1.0, 0.0]), ("p", [0.0, 1.0]), ("q", [0.0, 2.0]), ("r", [0.0, 3.0])]
        )

        results = vocab.nearest_neighbors("x")

        assert [token for token, _ in results] == ["p", "q", "r"]

    def test_unknown_token_scores_zero(self, animals):
        results = animals.nearest_neighbors("fish")

        assert [token for token, _ in results] == ["cat", "dog", "bird"]
        assert all(score == 0.0 for _, score in results)

    def test_empty_vocabulary(self):
        vocab = VocabularyBuilder(ModelHeader(word_count=0, vector_size=4)).build()

        assert len(vocab) == 0
        assert vocab.nearest_neighbors("anything") == []
        assert vocab.lookup("anything").tolist() == [0.0] * 4

    def test_scores_are_python_floats(self, animals):
        _, score = animals.nearest_neighbors("cat", 1)[0]

        assert isinstance(score, float)


class TestVectorQueries:
    """Test raw-vector and analogy queries"""

    def test_nearest_to_vector(self, animals):
        results = animals.nearest_to_vector(np.array([1.0, 0.0], dtype=np.float32), count=2)

        assert results[0] == ("bird", pytest.approx(1.0))
        assert results[1][0] == "cat"

    def test_nearest_to_vector_exclude(self, animals):
        results = animals.nearest_to_vector(
            np.array([1.0, 0.0], dtype=np.float32), exclude=["bird", "unknown"]
        )

        assert [token for token, _ in results] == ["cat", "dog"]

    def test_unnormalized_query_scales_scores(self, animals):
        results = animals.nearest_to_vector(np.array([2.0, 0.0], dtype=np.float32), count=1)

        assert results[0] == ("bird", pytest.approx(2.0))

    def test_nearest_to_vector_wrong_shape(self, animals):
        with pytest.raises(ValueError, match="shape"):
            animals.nearest_to_vector(np.zeros(3, dtype=np.float32))

    def test_analogy(self):
        vocab = build_vocabulary(
            [
                ("king", [1.0, 1.0, 0.0]),
                ("man", [1.0, 0.0, 0.0]),
                ("woman", [0.0, 0.0, 1.0]),
                ("queen", [0.0, 1.0, 1.0]),
                ("apple", [1.0, -1.0, 0.0]),
            ]
        )

        results = vocab.analogy(positive=["king", "woman"], negative=["man"], count=2)

        assert results[0][0] == "queen"
        assert results[0][1] > results[1][1]
        assert {token for token, _ in results}.isdisjoint({"king", "woman", "man"})

    def test_analogy_with_unknown_tokens(self, animals):
        results = animals.analogy(positive=["fish"], count=3)

        assert all(score == 0.0 for _, score in results)


def test_vocabulary_direct_construction():
    header = ModelHeader(word_count=2, vector_size=2)
    vocab = Vocabulary(
        header,
        {
            "a": np.array([1.0, 0.0], dtype=np.float32),
            "b": np.array([0.0, 1.0], dtype=np.float32),
        },
    )

    assert vocab.nearest_neighbors("a") == [("b", 0.0)]
