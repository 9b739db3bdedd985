"""Shortest-path queries over immutable, labelled maze graphs."""

from .errors import (
    GraphConstructionError,
    InternalInvariantError,
    InvalidElementError,
    InvalidLabelError,
    InvalidSourceError,
    LabelCountError,
    LabelError,
    MatrixShapeError,
    MatrixTooLargeError,
    MazeGraphError,
    NoRouteError,
    NotSquareMatrixError,
    QueryError,
    RepeatedLabelError,
    UnknownVertexError,
)
from .graph import Graph, ShortestRoute
from .labels import VertexLabels
from .matrix import ABSENT, MatrixShape, ValidatedMatrix, validate_distance_matrix

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ABSENT",
    "Graph",
    "ShortestRoute",
    "VertexLabels",
    "MatrixShape",
    "ValidatedMatrix",
    "validate_distance_matrix",
    "MazeGraphError",
    "GraphConstructionError",
    "MatrixTooLargeError",
    "MatrixShapeError",
    "NotSquareMatrixError",
    "InvalidElementError",
    "LabelError",
    "LabelCountError",
    "RepeatedLabelError",
    "InvalidLabelError",
    "QueryError",
    "UnknownVertexError",
    "InvalidSourceError",
    "NoRouteError",
    "InternalInvariantError",
]
