"""8-bit texel store for LUT tables.

Models sampling from a table whose nodes were stored as 8-bit texels:
encode_table gives the texels, quantize_table turns them back into a
float table that the sampler can use directly.
"""

import numpy as np

from glaze.colorspace.quantize import Enhancement, encode, decode
from glaze.types import LutTable, build_table


def encode_table(table: LutTable, enhancement: Enhancement | None = None) -> np.ndarray:
    """Table nodes as (N**3, 3) uint8 texels in red-fastest order.

    Args:
        table: Source table
        enhancement: Optional tonal nudge applied before encoding (None = off)
    """
    values = table.data
    if enhancement is not None and not enhancement.is_identity:
        values = enhancement.apply(values)
    return encode(values)


def quantize_table(table: LutTable, enhancement: Enhancement | None = None) -> LutTable:
    """New table whose nodes went through the 8-bit encode/decode pair."""
    texels = encode_table(table, enhancement)
    return build_table(table.size, decode(texels), name=table.name)


__all__ = ['encode_table', 'quantize_table']
