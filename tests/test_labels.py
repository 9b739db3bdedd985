import numpy as np
import pytest

from mazegraph.errors import (
    InvalidLabelError,
    LabelCountError,
    QueryError,
    RepeatedLabelError,
    UnknownVertexError,
)
from mazegraph.labels import VertexLabels


def test_round_trip_for_every_label() -> None:
    labels = VertexLabels([70, 3, 1000, 12], 4)

    for label in labels:
        assert labels.to_external(labels.to_internal(label)) == label
    for index in range(4):
        assert labels.to_internal(labels.to_external(index)) == index


def test_position_is_internal_index() -> None:
    labels = VertexLabels([70, 3, 1000], 3)

    assert labels.to_internal(70) == 0
    assert labels.to_internal(1000) == 2
    assert labels.internal_to_external == (70, 3, 1000)
    assert len(labels) == 3
    assert 3 in labels
    assert 4 not in labels


def test_batch_translation_preserves_order() -> None:
    labels = VertexLabels([5, 6, 7, 8], 4)

    assert labels.to_internal_many([8, 5, 8, 6]) == [3, 0, 3, 1]
    assert labels.to_external_many(np.array([2, 2, 0])) == [7, 7, 5]
    assert labels.to_internal_many([]) == []


def test_numpy_integer_labels_accepted() -> None:
    labels = VertexLabels(np.array([4, 9], dtype=np.uint32), 2)

    assert labels.to_internal(9) == 1
    assert isinstance(labels.to_external(0), int)


def test_label_count_mismatch() -> None:
    with pytest.raises(LabelCountError) as exc:
        VertexLabels([1, 2, 3], 4)

    assert exc.value.context == {"expected": 4, "actual": 3}


def test_repeated_label() -> None:
    with pytest.raises(RepeatedLabelError) as exc:
        VertexLabels([1, 2, 1, 3, 2], 5)

    assert exc.value.context["repeated"] == [1, 2]


@pytest.mark.parametrize("bad", [-1, 2.5, "7", None, True])
def test_invalid_label(bad) -> None:
    with pytest.raises(InvalidLabelError):
        VertexLabels([0, bad], 2)


def test_unknown_label_is_query_error() -> None:
    labels = VertexLabels([10, 20], 2)

    with pytest.raises(UnknownVertexError) as exc:
        labels.to_internal(30)

    assert isinstance(exc.value, QueryError)
    assert isinstance(exc.value, KeyError)
    assert "30" in str(exc.value)


def test_unhashable_label_lookup_is_unknown() -> None:
    labels = VertexLabels([10, 20], 2)

    with pytest.raises(UnknownVertexError):
        labels.to_internal([10])


@pytest.mark.parametrize("index", [-1, 2, 99])
def test_out_of_range_index(index) -> None:
    labels = VertexLabels([10, 20], 2)

    with pytest.raises(UnknownVertexError):
        labels.to_external(index)
