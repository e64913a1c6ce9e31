"""Sequential layer cascade.

Each active layer samples the output of the previous layer (not the
original pixel) and is blended over it at the layer's opacity. With no
active layers the input is returned untouched.
"""

from typing import Iterable

import numpy as np

from glaze.colorspace import _backend as B
from glaze.colorspace._backend import Array
from glaze.colorspace.blend import BlendPolicy, LINEAR, blend
from glaze.sampler import sample
from glaze.types import Layer, LayerStack, as_stack


def composite(
    stack: LayerStack | Iterable[Layer] | None,
    color: Array,
    policy: BlendPolicy = LINEAR,
) -> Array:
    """Apply a layer stack to colors.

    Args:
        stack: Layers in application order
        color: RGB (..., 3) in [0, 1], numpy array or torch tensor
        policy: Blend policy shared by every layer

    Returns:
        Graded RGB (..., 3). The input object itself when no layer is active.
    """
    current = color
    for layer in as_stack(stack):
        if layer.is_noop:
            continue
        transformed = sample(layer.table, current)
        current = blend(B.to_float(current), transformed, layer.opacity, policy)
    return current


def composite_pixel(
    stack: LayerStack | Iterable[Layer] | None,
    rgb: tuple[float, float, float],
    policy: BlendPolicy = LINEAR,
) -> tuple[float, float, float]:
    """Single-pixel entry point.

    Args:
        stack: Layers in application order
        rgb: (r, g, b) floats in [0, 1]
        policy: Blend policy

    Returns:
        Graded (r, g, b). With no active layer, the input values unchanged.

    Raises:
        ValueError: If rgb does not hold exactly three values
    """
    if len(rgb) != 3:
        raise ValueError(f"Expected an (r, g, b) triple, got {len(rgb)} values")

    stack = as_stack(stack)
    if not stack.active:
        r, g, b = rgb
        return (r, g, b)

    result = composite(stack, np.asarray(rgb, dtype=np.float64), policy)
    return (float(result[0]), float(result[1]), float(result[2]))


__all__ = ['composite', 'composite_pixel']
