"""3D LUT color grading engine.

Applies up to three .cube color lookup tables to RGB images as a
sequential stack of adjustment layers, each at its own opacity.

Example:
    import numpy as np
    from glaze import LutLibrary, composite_image

    library = LutLibrary()
    stack = library.stack([("looks/k-ektar.cube", 0.26), ("looks/blue-sierra.cube", 0.5)])
    graded = composite_image(stack, rgba_uint8)   # (H, W, 4) uint8 -> same
"""

from glaze.errors import GlazeError, MalformedTable, CubeParseError
from glaze.types import LutTable, Layer, LayerStack, build_table
from glaze.sampler import sample, cell_corners
from glaze.compositor import composite, composite_pixel
from glaze.driver import composite_image, fit_within
from glaze.colorspace import (
    BlendPolicy,
    LINEAR,
    EDITOR_COMPAT,
    SRGB_LINEAR_LIGHT,
    blend,
    encode,
    decode,
    Enhancement,
)
from glaze.texture import encode_table, quantize_table
from glaze.cube import parse_cube, load_cube, format_cube, identity_table, table_from_curves
from glaze.library import LutLibrary
from glaze.presets import get_look, list_looks

__all__ = [
    # Errors
    'GlazeError',
    'MalformedTable',
    'CubeParseError',
    # Data model
    'LutTable',
    'Layer',
    'LayerStack',
    'build_table',
    # Core operations
    'sample',
    'cell_corners',
    'composite',
    'composite_pixel',
    'composite_image',
    'fit_within',
    # Color-space policy
    'BlendPolicy',
    'LINEAR',
    'EDITOR_COMPAT',
    'SRGB_LINEAR_LIGHT',
    'blend',
    'encode',
    'decode',
    'Enhancement',
    'encode_table',
    'quantize_table',
    # .cube collaborator and cache
    'parse_cube',
    'load_cube',
    'format_cube',
    'identity_table',
    'table_from_curves',
    'LutLibrary',
    'get_look',
    'list_looks',
]
