"""Core data types for glaze - framework-agnostic."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

import numpy as np

from glaze import defaults
from glaze.colorspace.blend import clamp_opacity
from glaze.errors import MalformedTable


@dataclass(frozen=True, eq=False)
class LutTable:
    """Immutable 3D color lookup table.

    Attributes:
        size: Grid resolution N per axis
        data: Read-only float64 array of shape (N**3, 3). Row index is
              r + g*N + b*N**2 (red fastest), the .cube file order.
        name: Source name or path the table was built from
    """
    size: int
    data: np.ndarray
    name: str = ""

    @property
    def lattice(self) -> np.ndarray:
        """Read-only (N, N, N, 3) view indexed [b, g, r]."""
        n = self.size
        return self.data.reshape(n, n, n, 3)

    def node(self, r: int, g: int, b: int) -> np.ndarray:
        """Stored output color at grid vertex (r, g, b)."""
        n = self.size
        return self.data[r + g * n + b * n * n]

    def is_identity(self, tolerance: float = 1e-6) -> bool:
        """True if every node maps to its own input coordinate."""
        ident = identity_data(self.size)
        return bool(np.all(np.abs(self.data - ident) <= tolerance))

    def __repr__(self) -> str:
        return f"LutTable(name={self.name!r}, size={self.size})"


def identity_data(size: int) -> np.ndarray:
    """(N**3, 3) node coordinates in red-fastest order."""
    if size <= 1:
        return np.zeros((max(size, 0) ** 3, 3), dtype=np.float64)
    axis = np.arange(size, dtype=np.float64) / (size - 1)
    b, g, r = np.meshgrid(axis, axis, axis, indexing='ij')
    return np.stack([r.ravel(), g.ravel(), b.ravel()], axis=-1)


def build_table(size: int, triplets, name: str = "") -> LutTable:
    """Construct and validate a LutTable.

    Args:
        size: Grid resolution N (>= 1; N == 1 is the degenerate identity table)
        triplets: N**3 RGB triplets in red-fastest order, flat or nested
        name: Optional source name

    Returns:
        Frozen LutTable owning a private read-only copy of the data

    Raises:
        MalformedTable: If the value count is not N**3 * 3, size < 1,
            or any value is not a finite number
    """
    try:
        size = int(size)
    except (TypeError, ValueError) as e:
        raise MalformedTable(f"Invalid LUT size: {size!r}") from e
    if size < 1:
        raise MalformedTable(f"LUT size must be positive, got {size}")

    try:
        values = np.array(triplets, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as e:
        raise MalformedTable(f"LUT data is not numeric: {e}") from e

    expected = size ** 3 * 3
    if values.size != expected:
        raise MalformedTable(
            f"Invalid LUT data: expected {expected} values, got {values.size}"
        )
    if not np.all(np.isfinite(values)):
        raise MalformedTable("LUT data contains non-finite values")

    data = values.reshape(-1, 3)
    data.setflags(write=False)
    return LutTable(size=size, data=data, name=name)


@dataclass(frozen=True)
class Layer:
    """One color-grade pass.

    Opacity is clamped to [0, 1] on construction. A layer with no table,
    zero opacity, or enabled=False is a no-op.
    """
    table: LutTable | None = None
    opacity: float = defaults.DEFAULT_OPACITY
    enabled: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'opacity', clamp_opacity(self.opacity))

    @property
    def is_noop(self) -> bool:
        return (
            not self.enabled
            or self.opacity == 0.0
            or self.table is None
            or self.table.size <= 1
        )


@dataclass(frozen=True)
class LayerStack:
    """Ordered layers; layer i+1 grades the output of layer i."""
    layers: tuple[Layer, ...] = field(default_factory=tuple)

    def __post_init__(self):
        layers = tuple(self.layers)
        if len(layers) > defaults.MAX_LAYERS:
            raise ValueError(
                f"A layer stack holds at most {defaults.MAX_LAYERS} layers, got {len(layers)}"
            )
        object.__setattr__(self, 'layers', layers)

    @classmethod
    def of(cls, *layers: Layer) -> LayerStack:
        return cls(layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self.layers)

    def __len__(self) -> int:
        return len(self.layers)

    @property
    def active(self) -> list[Layer]:
        """Layers that will actually be applied, in order."""
        return [layer for layer in self.layers if not layer.is_noop]

    def replace(self, index: int, layer: Layer) -> LayerStack:
        """Return a new stack with the layer at index swapped out."""
        layers = list(self.layers)
        layers[index] = layer
        return LayerStack(tuple(layers))


def as_stack(layers: LayerStack | Iterable[Layer] | None) -> LayerStack:
    """Accept a LayerStack, any iterable of layers, or None (empty stack)."""
    if layers is None:
        return LayerStack()
    if isinstance(layers, LayerStack):
        return layers
    return LayerStack(tuple(layers))
