"""Opacity blending of a layer's transformed color over its base color.

A BlendPolicy fixes how the two colors are combined:
- linear: mix(base, transformed, opacity) directly on encoded values
- power: decode both with x ** gamma, mix, re-encode with x ** (1 / gamma)
- srgb: same as power but through the piecewise sRGB curve

One policy governs every layer of a composite call. The default is linear,
which makes opacity behave as plain alpha compositing. EDITOR_COMPAT
reproduces the gamma-1.8 adjustment-layer composite, whose opacity is
scaled to 70%, so even opacity 1.0 only moves 70% of the way (in decoded
space) towards the transformed color.
"""

import math
from dataclasses import dataclass
from typing import Literal

from glaze import defaults
from . import _backend as B
from ._backend import Array
from .transfer import srgb_to_linear, linear_to_srgb, power_decode, power_encode

Curve = Literal['linear', 'power', 'srgb']
_CURVES = ('linear', 'power', 'srgb')


@dataclass(frozen=True)
class BlendPolicy:
    """How base and transformed colors are merged at a given opacity.

    Attributes:
        curve: Space the mix happens in ('linear', 'power' or 'srgb')
        gamma: Exponent for the 'power' curve (ignored otherwise)
        opacity_scale: Constant factor applied to every layer opacity
    """
    curve: Curve = 'linear'
    gamma: float = defaults.COMPAT_GAMMA
    opacity_scale: float = 1.0

    def __post_init__(self):
        if self.curve not in _CURVES:
            raise ValueError(f"Unknown blend curve: {self.curve}")
        if not self.gamma > 0.0:
            raise ValueError("Blend gamma must be positive")
        if not 0.0 < self.opacity_scale <= 1.0:
            raise ValueError("Opacity scale must be in (0, 1]")

    def decode(self, x: Array) -> Array:
        """Encoded -> blend space."""
        if self.curve == 'power':
            return power_decode(x, self.gamma)
        if self.curve == 'srgb':
            return srgb_to_linear(x)
        return x

    def encode(self, x: Array) -> Array:
        """Blend space -> encoded."""
        if self.curve == 'power':
            return power_encode(x, self.gamma)
        if self.curve == 'srgb':
            return linear_to_srgb(x)
        return x


LINEAR = BlendPolicy()
EDITOR_COMPAT = BlendPolicy(
    curve='power',
    gamma=defaults.COMPAT_GAMMA,
    opacity_scale=defaults.COMPAT_OPACITY_SCALE,
)
SRGB_LINEAR_LIGHT = BlendPolicy(curve='srgb')


def clamp_opacity(opacity: float) -> float:
    """Clamp opacity to [0, 1]. Non-finite values count as 0."""
    opacity = float(opacity)
    if not math.isfinite(opacity):
        return 0.0
    return min(max(opacity, 0.0), 1.0)


def mix(a: Array, b: Array, t: float) -> Array:
    """Linear blend: a*(1-t) + b*t (exact at t=0 and t=1)."""
    return a * (1.0 - t) + b * t


def blend(
    base: Array,
    transformed: Array,
    opacity: float,
    policy: BlendPolicy = LINEAR,
) -> Array:
    """Blend transformed over base at the given opacity.

    Args:
        base: Pre-layer colors (..., 3)
        transformed: Layer output colors (..., 3)
        opacity: Layer opacity, clamped to [0, 1]
        policy: Blend policy

    Returns:
        Blended colors (..., 3) in [0, 1]. Returns base itself when opacity is 0.
    """
    opacity = clamp_opacity(opacity)
    if opacity == 0.0:
        return base

    t = opacity * policy.opacity_scale
    if policy.curve == 'linear':
        return B.clip(mix(base, transformed, t), 0.0, 1.0)

    base_dec = policy.decode(B.clip(base, 0.0, 1.0))
    over_dec = policy.decode(B.clip(transformed, 0.0, 1.0))
    result = B.clip(mix(base_dec, over_dec, t), 0.0, 1.0)
    return B.clip(policy.encode(result), 0.0, 1.0)
