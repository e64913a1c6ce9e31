"""Trilinear sampling of a 3D LUT.

Colors are mapped onto the grid with coord = clamp(color, 0, 1) * (N - 1).
The enclosing cell spans floor(coord) and min(floor(coord) + 1, N - 1) on
each axis, so the top edge of the grid collapses to a copy of the last
node instead of reading past it.

Interpolation order is fixed: red first (4 lerps), then green (2 lerps),
then blue (1 lerp). Every lerp is a*(1-t) + b*t, and coordinates within
1e-9 of a grid node snap onto it, so a color on a grid vertex returns the
stored node value bit for bit.

All functions accept a single color (3,) or any batch (..., 3), as a
numpy array or torch tensor. Torch tensors are sampled on their own device.
"""

from glaze.colorspace import _backend as B
from glaze.colorspace._backend import Array
from glaze.colorspace.blend import mix
from glaze.types import LutTable

# i / (N - 1) * (N - 1) is not always exactly i in floating point
_NODE_SNAP = 1e-9


def _grid_cell(table: LutTable, color: Array) -> tuple[dict[str, Array], Array]:
    """Gather the 8 corners of the cell enclosing each color.

    Returns:
        (corners, frac): corners maps 'c{r}{g}{b}' (bits: 0 = low, 1 = high
        neighbour per axis) to (..., 3) values; frac is (..., 3) in [0, 1)
        except at the top edge where it is 0
    """
    n = table.size
    c = B.clip(B.nan_to_num(B.to_float(color)), 0.0, 1.0)

    coord = c * (n - 1)
    nearest = B.round(coord)
    coord = B.where(B.abs(coord - nearest) < _NODE_SNAP, nearest, coord)
    base = B.floor(coord)
    frac = coord - base

    lo = B.to_index(base)
    hi = B.clip(lo + 1, 0, n - 1)

    data = table.data if not B.is_torch(c) else B.from_numpy(table.data, c)

    r = (lo[..., 0], hi[..., 0])
    g = (lo[..., 1], hi[..., 1])
    b = (lo[..., 2], hi[..., 2])

    corners = {}
    for bi in (0, 1):
        for gi in (0, 1):
            for ri in (0, 1):
                corners[f'c{ri}{gi}{bi}'] = data[r[ri] + g[gi] * n + b[bi] * (n * n)]

    return corners, frac


def cell_corners(table: LutTable, color: Array) -> list[Array]:
    """The 8 stored values that a sample of color is interpolated from.

    Empty for a table of size <= 1, which sample() treats as identity.
    """
    if table.size <= 1:
        return []
    corners, _ = _grid_cell(table, color)
    return list(corners.values())


def sample(table: LutTable, color: Array) -> Array:
    """Look up color in the table with trilinear interpolation.

    Args:
        table: LUT to sample
        color: RGB (..., 3); clamped to [0, 1] before mapping

    Returns:
        Interpolated RGB (..., 3) in [0, 1]. A table of size <= 1 returns
        color unchanged.
    """
    if table.size <= 1:
        return color

    corners, frac = _grid_cell(table, color)
    fr = frac[..., 0:1]
    fg = frac[..., 1:2]
    fb = frac[..., 2:3]

    # Red axis
    c00 = mix(corners['c000'], corners['c100'], fr)
    c10 = mix(corners['c010'], corners['c110'], fr)
    c01 = mix(corners['c001'], corners['c101'], fr)
    c11 = mix(corners['c011'], corners['c111'], fr)

    # Green axis
    c0 = mix(c00, c10, fg)
    c1 = mix(c01, c11, fg)

    # Blue axis
    return B.clip(mix(c0, c1, fb), 0.0, 1.0)


__all__ = ['sample', 'cell_corners']
