"""Tests for BlendPolicy and blend()."""

import numpy as np
import pytest
import torch

from glaze.colorspace import (
    EDITOR_COMPAT,
    LINEAR,
    SRGB_LINEAR_LIGHT,
    BlendPolicy,
    blend,
    clamp_opacity,
    linear_to_srgb,
)


BASE = np.array([0.2, 0.5, 0.9])
OVER = np.array([0.8, 0.1, 0.4])
POLICIES = [LINEAR, EDITOR_COMPAT, SRGB_LINEAR_LIGHT]


class TestBlendPolicy:
    """Policy construction and validation."""

    def test_default_is_linear(self):
        assert BlendPolicy() == LINEAR
        assert LINEAR.opacity_scale == 1.0

    def test_editor_compat_constants(self):
        assert EDITOR_COMPAT.curve == 'power'
        assert EDITOR_COMPAT.gamma == 1.8
        assert EDITOR_COMPAT.opacity_scale == 0.7

    @pytest.mark.parametrize("kwargs", [
        {'curve': 'log'},
        {'curve': 'power', 'gamma': 0.0},
        {'opacity_scale': 0.0},
        {'opacity_scale': 1.5},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            BlendPolicy(**kwargs)


class TestClampOpacity:

    @pytest.mark.parametrize("value,expected", [
        (0.26, 0.26), (-0.5, 0.0), (1.7, 1.0), (float('nan'), 0.0), (float('inf'), 0.0),
    ])
    def test_clamp(self, value, expected):
        assert clamp_opacity(value) == expected


class TestBlend:
    """blend() laws."""

    @pytest.mark.parametrize("policy", POLICIES)
    def test_zero_opacity_returns_base(self, policy):
        assert blend(BASE, OVER, 0.0, policy) is BASE
        assert blend(BASE, OVER, float('nan'), policy) is BASE
        assert blend(BASE, OVER, -1.0, policy) is BASE

    def test_linear_full_opacity_is_transformed(self):
        np.testing.assert_array_equal(blend(BASE, OVER, 1.0), OVER)
        np.testing.assert_array_equal(blend(BASE, OVER, 3.0), OVER)

    def test_linear_half(self):
        np.testing.assert_allclose(blend(BASE, OVER, 0.5), (BASE + OVER) / 2)

    def test_editor_compat_full_opacity_stops_short(self):
        out = blend(BASE, OVER, 1.0, EDITOR_COMPAT)
        lo = np.minimum(BASE, OVER)
        hi = np.maximum(BASE, OVER)
        assert np.all(out > lo)
        assert np.all(out < hi)

    def test_editor_compat_known_value(self):
        out = blend(np.array([0.2]), np.array([0.8]), 1.0, EDITOR_COMPAT)
        expected = (0.3 * 0.2 ** 1.8 + 0.7 * 0.8 ** 1.8) ** (1 / 1.8)
        np.testing.assert_allclose(out, [expected], atol=1e-12)

    @pytest.mark.parametrize("policy", POLICIES)
    def test_equal_colors_unchanged(self, policy):
        np.testing.assert_allclose(blend(BASE, BASE, 0.6, policy), BASE, atol=1e-12)

    def test_srgb_mixes_in_linear_light(self):
        out = blend(np.zeros(3), np.ones(3), 0.5, SRGB_LINEAR_LIGHT)
        np.testing.assert_allclose(out, linear_to_srgb(np.full(3, 0.5)), atol=1e-12)

    @pytest.mark.parametrize("policy", POLICIES)
    def test_out_of_range_inputs_clamped(self, policy):
        out = blend(np.array([-0.2, 0.5, 1.3]), np.array([1.4, 0.5, -0.1]), 0.5, policy)
        assert out.min() >= 0.0
        assert out.max() <= 1.0

    @pytest.mark.parametrize("policy", POLICIES)
    def test_torch_matches_numpy(self, policy):
        expected = blend(BASE, OVER, 0.4, policy)
        result = blend(torch.tensor(BASE), torch.tensor(OVER), 0.4, policy)
        assert isinstance(result, torch.Tensor)
        np.testing.assert_allclose(result.numpy(), expected, atol=1e-12)
