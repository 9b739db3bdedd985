"""Distance matrix ingestion: shape inference, validation and canonicalization."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
import numbers
from typing import Any, List, Optional, Sequence

import numpy as np

from .errors import (
    InternalInvariantError,
    InvalidElementError,
    MatrixShapeError,
    MatrixTooLargeError,
    NotSquareMatrixError,
)

ABSENT = None
"""Marks a missing edge in caller-supplied matrices."""

MAX_ORDER = int(np.iinfo(np.int64).max)


class MatrixShape(Enum):
    SQUARE = "square"
    LOWER_TRIANGULAR = "lower_triangular"
    UPPER_TRIANGULAR = "upper_triangular"


@dataclass(frozen=True)
class ValidatedMatrix:
    """Canonical square form of a validated distance matrix.

    ``weights`` holds ``inf`` wherever ``adjacency`` is False off the diagonal;
    the adjacency matrix is the authority on whether an edge exists.
    """

    shape: MatrixShape
    weights: np.ndarray
    adjacency: np.ndarray

    @property
    def order(self) -> int:
        return int(self.weights.shape[0])

    def to_rows(self) -> List[List[Optional[float]]]:
        """Return the canonical matrix as nested lists with ABSENT for no edge."""

        rows: List[List[Optional[float]]] = []
        for i in range(self.order):
            row: List[Optional[float]] = []
            for j in range(self.order):
                value = self.weights[i, j]
                row.append(ABSENT if math.isinf(value) else float(value))
            rows.append(row)
        return rows


def _row_length(rows: Sequence[Any], index: int) -> int:
    try:
        return len(rows[index])
    except TypeError as exc:
        raise MatrixShapeError(
            f"Row {index} of the distance matrix is not a sequence.",
            context={"row": index},
        ) from exc


def infer_shape(rows: Sequence[Sequence[Any]]) -> MatrixShape:
    """Classify ``rows`` from the lengths of its first two rows."""

    order = len(rows)
    if order == 0:
        raise MatrixShapeError("Distance matrix has no rows.", context={"order": 0})

    first = _row_length(rows, 0)
    if order == 1:
        if first == 1:
            return MatrixShape.SQUARE
        raise NotSquareMatrixError(
            f"Row 0 has {first} entries; expected 1.",
            context={"row": 0, "length": first, "expected": 1},
        )

    second = _row_length(rows, 1)
    if first == order and second == order:
        return MatrixShape.SQUARE
    if first == order and second == order - 1:
        return MatrixShape.UPPER_TRIANGULAR
    if first == 1 and second == 2:
        return MatrixShape.LOWER_TRIANGULAR
    raise MatrixShapeError(
        f"Cannot infer matrix shape from row lengths {first}, {second} "
        f"for a matrix with {order} rows.",
        context={"order": order, "row_lengths": (first, second)},
    )


def expected_row_length(shape: MatrixShape, order: int, row: int) -> int:
    if shape is MatrixShape.SQUARE:
        return order
    if shape is MatrixShape.LOWER_TRIANGULAR:
        return row + 1
    if shape is MatrixShape.UPPER_TRIANGULAR:
        return order - row
    raise InternalInvariantError(f"Unhandled matrix shape {shape!r}.")


def _check_row_lengths(rows: Sequence[Sequence[Any]], shape: MatrixShape) -> None:
    order = len(rows)
    for i in range(order):
        length = _row_length(rows, i)
        expected = expected_row_length(shape, order, i)
        if length == expected:
            continue
        context = {"row": i, "length": length, "expected": expected, "order": order}
        if shape is MatrixShape.SQUARE:
            raise NotSquareMatrixError(
                f"Row {i} has {length} entries; a square matrix of order "
                f"{order} needs {expected}.",
                context=context,
            )
        raise MatrixShapeError(
            f"Row {i} has {length} entries; a {shape.value.replace('_', ' ')} "
            f"matrix of order {order} needs {expected}.",
            context=context,
        )


def _check_element(value: Any, row: int, column: int) -> Optional[float]:
    if value is ABSENT:
        return None
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise InvalidElementError(
            f"Entry ({row}, {column}) is not a number: {value!r}.",
            context={"row": row, "column": column, "value": value},
        )
    weight = float(value)
    if not math.isfinite(weight) or weight < 0.0:
        raise InvalidElementError(
            f"Entry ({row}, {column}) must be a finite non-negative weight "
            f"or ABSENT, got {weight!r}.",
            context={"row": row, "column": column, "value": weight},
        )
    return weight


def _column_of(shape: MatrixShape, row: int, position: int) -> int:
    if shape is MatrixShape.UPPER_TRIANGULAR:
        return row + position
    return position


def validate_distance_matrix(
    rows: Sequence[Sequence[Any]],
    *,
    max_order: int = MAX_ORDER,
) -> ValidatedMatrix:
    """Validate a jagged distance matrix and return its canonical square form.

    Accepted shapes:
      * square: every row has ``order`` entries, taken as-is (may be directed);
      * lower triangular: row ``i`` has ``i + 1`` entries, mirrored;
      * upper triangular: row ``i`` has ``order - i`` entries starting at
        column ``i``, mirrored.

    Entries are finite non-negative numbers or ``ABSENT``. Raises a
    :class:`~mazegraph.errors.GraphConstructionError` subclass on the first
    problem found; nothing is returned partially.
    """

    order = len(rows)
    if order > max_order:
        raise MatrixTooLargeError(
            f"Distance matrix order {order} exceeds the maximum of {max_order}.",
            context={"order": order, "limit": max_order},
        )

    shape = infer_shape(rows)
    _check_row_lengths(rows, shape)

    weights = np.full((order, order), np.inf, dtype=np.float64)
    adjacency = np.zeros((order, order), dtype=np.bool_)
    for i in range(order):
        for position, value in enumerate(rows[i]):
            weight = _check_element(value, i, position)
            if weight is None:
                continue
            j = _column_of(shape, i, position)
            weights[i, j] = weight
            if shape is not MatrixShape.SQUARE:
                weights[j, i] = weight

    adjacency[:, :] = np.isfinite(weights)
    np.fill_diagonal(adjacency, False)

    weights.setflags(write=False)
    adjacency.setflags(write=False)
    return ValidatedMatrix(shape=shape, weights=weights, adjacency=adjacency)


def is_symmetric(matrix: ValidatedMatrix) -> bool:
    """Return True when every edge has an equal-weight reverse edge."""

    if not np.array_equal(matrix.adjacency, matrix.adjacency.T):
        return False
    mask = matrix.adjacency
    return bool(np.array_equal(matrix.weights[mask], matrix.weights.T[mask]))


def transpose(matrix: ValidatedMatrix) -> ValidatedMatrix:
    """Return the matrix with every edge reversed."""

    weights = np.ascontiguousarray(matrix.weights.T)
    adjacency = np.ascontiguousarray(matrix.adjacency.T)
    weights.setflags(write=False)
    adjacency.setflags(write=False)
    return ValidatedMatrix(shape=matrix.shape, weights=weights, adjacency=adjacency)


__all__ = [
    "ABSENT",
    "MAX_ORDER",
    "MatrixShape",
    "ValidatedMatrix",
    "infer_shape",
    "expected_row_length",
    "validate_distance_matrix",
    "is_symmetric",
    "transpose",
]
