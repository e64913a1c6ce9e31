"""Color-space policy: transfer curves, opacity blending and 8-bit quantization.

This module provides:
- sRGB and pure power transfer curves
- BlendPolicy and blend(): how a layer is merged over its base color
- encode/decode between [0, 1] floats and 8-bit channels
- Backend-agnostic: works with numpy arrays or torch tensors

Example:
    import numpy as np
    from glaze.colorspace import blend, EDITOR_COMPAT

    out = blend(base_rgb, graded_rgb, opacity=0.26)                 # plain alpha mix
    out = blend(base_rgb, graded_rgb, 0.26, policy=EDITOR_COMPAT)   # gamma 1.8 composite
"""

from .transfer import (
    linear_to_srgb,
    srgb_to_linear,
    power_decode,
    power_encode,
)

from .blend import (
    BlendPolicy,
    LINEAR,
    EDITOR_COMPAT,
    SRGB_LINEAR_LIGHT,
    blend,
    clamp_opacity,
    mix,
)

from .quantize import encode, decode, Enhancement

__all__ = [
    # Transfer curves
    'linear_to_srgb',
    'srgb_to_linear',
    'power_decode',
    'power_encode',
    # Blending
    'BlendPolicy',
    'LINEAR',
    'EDITOR_COMPAT',
    'SRGB_LINEAR_LIGHT',
    'blend',
    'clamp_opacity',
    'mix',
    # Quantization
    'encode',
    'decode',
    'Enhancement',
]
