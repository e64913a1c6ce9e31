"""Adobe .cube text format: parse, format, and generate tables.

Only 3D tables are supported. Data rows are three whitespace-separated
floats in red-fastest order (blue outer loop, green middle, red inner).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable

import numpy as np

from glaze import defaults
from glaze.errors import CubeParseError, MalformedTable
from glaze.types import LutTable, build_table, identity_data

logger = logging.getLogger(__name__)

Curve = Callable[[np.ndarray], np.ndarray]

_SIZE_RE = re.compile(r"LUT_3D_SIZE\s+(\d+)")
_METADATA_KEYS = ('TITLE', 'DOMAIN_MIN', 'DOMAIN_MAX')


def parse_cube(text: str, name: str = "") -> LutTable:
    """Parse .cube text into a LutTable.

    Comment lines ('#' or '//'), TITLE and DOMAIN_MIN/DOMAIN_MAX are
    ignored, as is any row that is not exactly three numbers. A missing
    LUT_3D_SIZE directive assumes the default cube size.

    Args:
        text: File contents
        name: Name recorded on the table

    Returns:
        Parsed table

    Raises:
        CubeParseError: On a 1D LUT, an out-of-range size, or a row count
            that does not match the size
    """
    size = defaults.DEFAULT_CUBE_SIZE
    values: list[float] = []
    skipped = 0

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or line.startswith('//'):
            continue

        if line.startswith('LUT_3D_SIZE'):
            match = _SIZE_RE.match(line)
            if match is None:
                raise CubeParseError(f"Invalid size directive: {line!r}")
            size = int(match.group(1))
            continue

        if line.startswith('LUT_1D_SIZE'):
            raise CubeParseError("1D LUTs are not supported")

        if any(key in line for key in _METADATA_KEYS):
            continue

        parts = line.split()
        if len(parts) != 3:
            skipped += 1
            continue
        try:
            r, g, b = (float(p) for p in parts)
        except ValueError:
            skipped += 1
            continue
        values.extend((r, g, b))

    if skipped:
        logger.debug("Skipped %d non-data line(s) in %s", skipped, name or "<cube>")

    if not defaults.MIN_CUBE_SIZE <= size <= defaults.MAX_CUBE_SIZE:
        raise CubeParseError(
            f"LUT_3D_SIZE {size} outside [{defaults.MIN_CUBE_SIZE}, {defaults.MAX_CUBE_SIZE}]"
        )

    try:
        return build_table(size, values, name=name)
    except MalformedTable as e:
        raise CubeParseError(str(e)) from e


def load_cube(path: str | Path) -> LutTable:
    """Read and parse a .cube file. The table is named after the path."""
    path = Path(path)
    text = path.read_text(encoding='utf-8', errors='replace')
    table = parse_cube(text, name=str(path))
    logger.debug("Loaded %s: %dx%dx%d", path.name, table.size, table.size, table.size)
    return table


def format_cube(table: LutTable, title: str | None = None) -> str:
    """Serialize a table as .cube text (6 decimal places)."""
    lines = []
    title = title if title is not None else (Path(table.name).stem if table.name else "")
    if title:
        lines.append(f'TITLE "{title}"')
    lines.append(f"LUT_3D_SIZE {table.size}")
    lines.append("")
    lines.extend(f"{r:.6f} {g:.6f} {b:.6f}" for r, g, b in table.data)
    return "\n".join(lines) + "\n"


def identity_table(size: int = defaults.DEFAULT_CUBE_SIZE) -> LutTable:
    """Table whose every node maps to its own coordinate."""
    return build_table(size, identity_data(size), name=f"identity-{size}")


def table_from_curves(
    red: Curve,
    green: Curve,
    blue: Curve,
    size: int = defaults.DEFAULT_CUBE_SIZE,
    name: str = "",
) -> LutTable:
    """Build a table from independent per-channel curves.

    Each curve receives the normalized node coordinates of its channel as a
    numpy array and returns output values, which are clamped to [0, 1].
    """
    coords = identity_data(size)
    channels = []
    for axis, curve in enumerate((red, green, blue)):
        x = coords[:, axis]
        y = np.broadcast_to(np.asarray(curve(x), dtype=np.float64), x.shape)
        channels.append(np.clip(y, 0.0, 1.0))
    out = np.stack(channels, axis=-1)
    return build_table(size, out, name=name)


__all__ = ['parse_cube', 'load_cube', 'format_cube', 'identity_table', 'table_from_curves']
