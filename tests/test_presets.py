"""Tests for the built-in looks."""

import numpy as np
import pytest

from glaze.presets import BUILTIN_LOOKS, get_look, list_looks


def test_list_looks():
    names = list_looks()
    assert names == list(BUILTIN_LOOKS)
    assert "Cinematic" in names
    assert "Cool Tone" in names


def test_get_unknown_look():
    assert get_look("Nope") is None


@pytest.mark.parametrize("name", list(BUILTIN_LOOKS))
def test_look_builds(name):
    table = get_look(name).build(size=9)
    assert table.size == 9
    assert table.name == name
    assert not table.is_identity()
    assert table.data.min() >= 0.0
    assert table.data.max() <= 1.0


def test_dramatic_is_symmetric_s_curve():
    table = get_look("Dramatic").build(size=17)
    mid = table.node(8, 8, 8)
    np.testing.assert_allclose(mid, [0.5, 0.5, 0.5])
    # Shadows pushed down, highlights pushed up
    assert table.node(4, 4, 4)[0] < 0.25
    assert table.node(12, 12, 12)[0] > 0.75
