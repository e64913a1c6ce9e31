"""Shared tables for glaze tests."""

import numpy as np
import pytest

from glaze.cube import identity_table, table_from_curves
from glaze.types import build_table, identity_data


CORNER_IDENTITY = [
    (0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0),
    (0, 0, 1), (1, 0, 1), (0, 1, 1), (1, 1, 1),
]


@pytest.fixture
def corner_identity():
    """Size-2 table holding the 8 cube corners (identity)."""
    return build_table(2, CORNER_IDENTITY, name="corners")


@pytest.fixture
def random_table():
    """Size-9 table of seeded random values in [0, 1]."""
    rng = np.random.default_rng(7)
    return build_table(9, rng.random((9 ** 3, 3)), name="random")


@pytest.fixture
def orange_boost():
    """Size-17 identity, except oranges (r>0.7, 0.3<g<0.7, b<0.3) are scaled up."""
    data = identity_data(17).copy()
    r, g, b = data[:, 0], data[:, 1], data[:, 2]
    orange = (r > 0.7) & (g > 0.3) & (g < 0.7) & (b < 0.3)
    data[orange, 0] = np.minimum(1.0, r[orange] * 1.2)
    data[orange, 1] = np.minimum(1.0, g[orange] * 1.3)
    return build_table(17, data, name="orange-boost")


@pytest.fixture
def warm():
    """Per-channel warm shift."""
    return table_from_curves(
        lambda x: np.minimum(1.0, x * 1.15 + 0.1),
        lambda x: np.minimum(1.0, x * 1.05 + 0.05),
        lambda x: np.maximum(0.0, x * 0.9 - 0.05),
        size=17,
        name="warm",
    )


@pytest.fixture
def rotate_channels():
    """Channel mixer: (r, g, b) -> (g, b, r)."""
    return build_table(17, identity_data(17)[:, [1, 2, 0]], name="rotate")


@pytest.fixture
def identity17():
    return identity_table(17)
