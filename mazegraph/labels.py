"""Bijection between caller-visible vertex labels and internal indices."""

from __future__ import annotations

from collections import Counter
import numbers
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from .errors import (
    InvalidLabelError,
    LabelCountError,
    RepeatedLabelError,
    UnknownVertexError,
)


class VertexLabels:
    """Maps external labels to the dense index range ``0..order-1`` and back.

    Position in ``labels`` is the internal index. Labels are non-negative
    integers and need not be contiguous or start at zero.
    """

    def __init__(self, labels: Sequence[int], order: int) -> None:
        labels = list(labels)
        if len(labels) != order:
            raise LabelCountError(
                f"Expected {order} vertex labels, got {len(labels)}.",
                context={"expected": order, "actual": len(labels)},
            )

        internal_to_external: List[int] = []
        for index, label in enumerate(labels):
            if isinstance(label, bool) or not isinstance(label, numbers.Integral) or label < 0:
                raise InvalidLabelError(
                    f"Vertex label at position {index} must be a non-negative "
                    f"integer, got {label!r}.",
                    context={"position": index, "label": label},
                )
            internal_to_external.append(int(label))

        external_to_internal = {label: index for index, label in enumerate(internal_to_external)}
        if len(external_to_internal) != order:
            repeated = sorted(
                label for label, count in Counter(internal_to_external).items() if count > 1
            )
            raise RepeatedLabelError(
                f"Vertex labels must be distinct; repeated: {repeated}.",
                context={"repeated": repeated},
            )

        self._internal_to_external: Tuple[int, ...] = tuple(internal_to_external)
        self._external_to_internal: Dict[int, int] = external_to_internal

    def __len__(self) -> int:
        return len(self._internal_to_external)

    def __iter__(self) -> Iterator[int]:
        return iter(self._internal_to_external)

    def __contains__(self, label: object) -> bool:
        return label in self._external_to_internal

    def __repr__(self) -> str:
        return f"VertexLabels({list(self._internal_to_external)!r})"

    @property
    def internal_to_external(self) -> Tuple[int, ...]:
        return self._internal_to_external

    def to_internal(self, label: int) -> int:
        try:
            return self._external_to_internal[label]
        except (KeyError, TypeError):
            raise UnknownVertexError(
                f"Unknown vertex label {label!r}.", context={"label": label}
            ) from None

    def to_external(self, index: int) -> int:
        if not 0 <= index < len(self._internal_to_external):
            raise UnknownVertexError(
                f"Internal vertex index {index} is out of range "
                f"0..{len(self._internal_to_external) - 1}.",
                context={"index": index},
            )
        return self._internal_to_external[index]

    def to_internal_many(self, labels: Iterable[int]) -> List[int]:
        return [self.to_internal(label) for label in labels]

    def to_external_many(self, indices: Iterable[int]) -> List[int]:
        return [self.to_external(int(index)) for index in indices]


__all__ = ["VertexLabels"]
