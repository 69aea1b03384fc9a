import pytest

from docbot.vector_store.errors import DimensionMismatchError
from docbot.vector_store.similarity import cosine_distance, similarity_from_distance


def test_identical_vectors_have_zero_distance():
    assert cosine_distance([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(0.0, abs=1e-12)


def test_orthogonal_and_opposite():
    assert cosine_distance([1, 0], [0, 1]) == pytest.approx(1.0)
    assert cosine_distance([1, 0], [-1, 0]) == pytest.approx(2.0)


def test_zero_vector_is_maximally_dissimilar():
    assert cosine_distance([0, 0], [1, 0]) == 1.0
    assert cosine_distance([1, 0], [0, 0]) == 1.0


def test_dimension_mismatch_raises():
    with pytest.raises(DimensionMismatchError) as exc_info:
        cosine_distance([1, 0], [1, 0, 0])
    assert exc_info.value.expected == 2
    assert exc_info.value.actual == 3
    assert isinstance(exc_info.value, ValueError)


def test_similarity_is_one_minus_distance():
    assert similarity_from_distance(0.25) == pytest.approx(0.75)
    assert similarity_from_distance(cosine_distance([1, 0], [1, 0])) == pytest.approx(1.0)
