"""Tests for the 8-bit texel store."""

import numpy as np

from glaze.colorspace import Enhancement
from glaze.sampler import sample
from glaze.texture import encode_table, quantize_table


def test_encode_table_layout(warm):
    texels = encode_table(warm)
    assert texels.dtype == np.uint8
    assert texels.shape == (17 ** 3, 3)
    # Node (r=16, g=0, b=0) is row 16
    np.testing.assert_array_equal(texels[16], np.round(warm.node(16, 0, 0) * 255))


def test_quantize_error_is_half_step(random_table):
    quantized = quantize_table(random_table)
    assert quantized.size == random_table.size
    assert quantized.name == random_table.name
    assert np.abs(quantized.data - random_table.data).max() <= 0.5 / 255 + 1e-12


def test_quantized_identity_stays_close(identity17):
    quantized = quantize_table(identity17)
    rng = np.random.default_rng(3)
    colors = rng.random((500, 3))
    diff = np.abs(sample(quantized, colors) - colors)
    assert diff.max() <= 0.5 / 255 + 1e-12


def test_enhancement_off_by_default(warm):
    np.testing.assert_array_equal(encode_table(warm), encode_table(warm, Enhancement()))


def test_enhancement_applied_when_requested(warm):
    plain = encode_table(warm).astype(int)
    brighter = encode_table(warm, Enhancement(brightness=0.1)).astype(int)
    assert np.all(brighter >= plain)
    assert np.any(brighter > plain)
