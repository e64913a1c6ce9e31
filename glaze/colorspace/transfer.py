"""Transfer curves between encoded (display) values and linear light.

All functions accept numpy arrays or torch tensors.
Inputs are expected in [0, 1]; callers clamp before calling.
"""

from . import _backend as B
from ._backend import Array


def linear_to_srgb(x: Array) -> Array:
    """Linear RGB -> sRGB gamma encoding (per channel)."""
    threshold = 0.0031308
    low = x * 12.92
    high = 1.055 * B.pow(B.maximum(x, B.full_like(x, 1e-10)), 1/2.4) - 0.055
    return B.where(x <= threshold, low, high)


def srgb_to_linear(x: Array) -> Array:
    """sRGB -> Linear RGB gamma decoding (per channel)."""
    threshold = 0.04045
    low = x / 12.92
    high = B.pow(B.maximum((x + 0.055) / 1.055, B.full_like(x, 0.0)), 2.4)
    return B.where(x <= threshold, low, high)


def power_decode(x: Array, gamma: float) -> Array:
    """Encoded -> linear using a pure power curve: x ** gamma."""
    return B.pow(x, gamma)


def power_encode(x: Array, gamma: float) -> Array:
    """Linear -> encoded using a pure power curve: x ** (1 / gamma)."""
    return B.pow(x, 1.0 / gamma)
