"""Tests for the transfer curves."""

import numpy as np
import pytest
import torch

from glaze.colorspace import linear_to_srgb, power_decode, power_encode, srgb_to_linear


class TestSrgb:
    """sRGB encode/decode."""

    def test_endpoints(self):
        x = np.array([0.0, 1.0])
        np.testing.assert_allclose(srgb_to_linear(x), x, atol=1e-12)
        np.testing.assert_allclose(linear_to_srgb(x), x, atol=1e-12)

    def test_known_value(self):
        # Mid-gray in linear light is ~0.735 encoded
        assert linear_to_srgb(np.array(0.5)) == pytest.approx(0.7353569, abs=1e-6)

    def test_round_trip(self):
        x = np.linspace(0.0, 1.0, 1001)
        np.testing.assert_allclose(linear_to_srgb(srgb_to_linear(x)), x, atol=1e-9)

    def test_monotonic(self):
        x = np.linspace(0.0, 1.0, 1001)
        assert np.all(np.diff(srgb_to_linear(x)) > 0)
        assert np.all(np.diff(linear_to_srgb(x)) > 0)

    def test_torch_matches_numpy(self):
        x = np.linspace(0.0, 1.0, 257)
        expected = srgb_to_linear(x)
        result = srgb_to_linear(torch.tensor(x, dtype=torch.float32))
        assert isinstance(result, torch.Tensor)
        np.testing.assert_allclose(result.numpy(), expected, atol=1e-6)


class TestPower:
    """Pure power curves."""

    @pytest.mark.parametrize("gamma", [1.0, 1.8, 2.2])
    def test_round_trip(self, gamma):
        x = np.linspace(0.0, 1.0, 101)
        np.testing.assert_allclose(power_encode(power_decode(x, gamma), gamma), x, atol=1e-12)

    def test_decode_darkens(self):
        assert power_decode(np.array(0.5), 1.8) < 0.5
