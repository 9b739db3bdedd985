from __future__ import annotations

import pytest

from mazegraph.matrix import ABSENT

_ = ABSENT


@pytest.fixture
def room_matrix() -> list:
    return [
        [_, 1, 4, _],
        [1, _, 2, 5],
        [4, 2, _, 1],
        [_, 5, 1, _],
    ]


@pytest.fixture
def room_labels() -> list:
    return [10, 20, 30, 40]
