"""Error hierarchy for mazegraph."""

from __future__ import annotations

from typing import Any, Mapping, Optional


class MazeGraphError(Exception):
    """Base exception for mazegraph failures."""

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.user_message = message if user_message is None else user_message
        self.context = dict(context) if context else {}

    def log_message(self) -> str:
        if not self.context:
            return str(self)
        return f"{self}: {self.context}"


class GraphConstructionError(MazeGraphError):
    """The graph could not be built from the supplied matrix or labels."""


class MatrixTooLargeError(GraphConstructionError):
    """Matrix order does not fit in the vertex index range."""


class MatrixShapeError(GraphConstructionError):
    """Matrix is neither square nor lower/upper triangular."""


class NotSquareMatrixError(MatrixShapeError):
    """Matrix started out square but a later row has the wrong length."""


class InvalidElementError(GraphConstructionError):
    """Matrix entry is not a finite non-negative weight or ABSENT."""


class LabelError(GraphConstructionError):
    """Vertex labels are unusable."""


class LabelCountError(LabelError):
    """Number of labels differs from the matrix order."""


class RepeatedLabelError(LabelError):
    """The same label was given to more than one vertex."""


class InvalidLabelError(LabelError):
    """A label is not a non-negative integer."""


class QueryError(MazeGraphError):
    """A single query failed; the graph stays usable."""


class UnknownVertexError(QueryError, KeyError):
    """Label or internal index does not name a vertex of the graph."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return Exception.__str__(self)


class InvalidSourceError(QueryError):
    """Shortest-path run requested from an out-of-range vertex."""


class NoRouteError(QueryError):
    """Destination is unreachable from the source."""


class InternalInvariantError(MazeGraphError):
    """Code path that prior validation should have made unreachable."""


__all__ = [
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
