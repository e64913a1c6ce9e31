"""Backend dispatch for numpy/torch compatibility.

Provides unified math operations that work with both numpy arrays and torch tensors.
Torch is imported lazily on first use to avoid loading it when not needed.
"""

import numpy as np
from typing import Any

Array = Any  # numpy.ndarray or torch.Tensor

# Lazy torch reference - only imported when needed
_torch = None


def _get_torch():
    """Get torch module, importing it on first use."""
    global _torch
    if _torch is None:
        import torch
        _torch = torch
    return _torch


def is_torch(x: Array) -> bool:
    """Check if x is a torch tensor."""
    return type(x).__module__.startswith('torch')


# === Dispatched operations ===

def pow(x: Array, exp: float) -> Array:
    if is_torch(x):
        return _get_torch().pow(x, exp)
    return np.power(x, exp)


def clip(x: Array, lo: float, hi: float) -> Array:
    if is_torch(x):
        return _get_torch().clamp(x, lo, hi)
    return np.clip(x, lo, hi)


def floor(x: Array) -> Array:
    if is_torch(x):
        return _get_torch().floor(x)
    return np.floor(x)


def where(cond: Array, true_val: Array, false_val: Array) -> Array:
    if is_torch(cond):
        return _get_torch().where(cond, true_val, false_val)
    return np.where(cond, true_val, false_val)


def maximum(x: Array, y: Array) -> Array:
    if is_torch(x):
        return _get_torch().maximum(x, y)
    return np.maximum(x, y)


def full_like(x: Array, value: float) -> Array:
    if is_torch(x):
        return _get_torch().full_like(x, value)
    return np.full_like(x, value)


def to_index(x: Array) -> Array:
    """Cast integral-valued floats to an integer index array."""
    if is_torch(x):
        return x.long()
    return x.astype(np.intp)


def to_float(x: Array) -> Array:
    """Cast to floating point (float32 for tensors, float64 for numpy)."""
    if is_torch(x):
        torch = _get_torch()
        return x if x.is_floating_point() else x.to(torch.float32)
    return np.asarray(x, dtype=np.float64)


def to_uint8(x: Array) -> Array:
    if is_torch(x):
        return x.to(_get_torch().uint8)
    return x.astype(np.uint8)


def copy(x: Array) -> Array:
    if is_torch(x):
        return x.clone()
    return np.array(x, copy=True)


def concat(arrays: list[Array], axis: int = -1) -> Array:
    """Concatenate arrays along an existing axis."""
    if is_torch(arrays[0]):
        return _get_torch().cat(arrays, dim=axis)
    return np.concatenate(arrays, axis=axis)


def from_numpy(arr: np.ndarray, reference: Array) -> Array:
    """Convert numpy array to same type/device as reference."""
    if is_torch(reference):
        dtype = reference.dtype if reference.is_floating_point() else _get_torch().float32
        return _get_torch().tensor(arr, dtype=dtype, device=reference.device)
    return arr


def nan_to_num(x: Array) -> Array:
    """Replace NaN with 0 (infinities are left for clip to handle)."""
    if is_torch(x):
        return _get_torch().nan_to_num(x, nan=0.0, posinf=float('inf'), neginf=float('-inf'))
    return np.nan_to_num(x, nan=0.0, posinf=np.inf, neginf=-np.inf)


def round(x: Array) -> Array:
    if is_torch(x):
        return _get_torch().round(x)
    return np.round(x)


def abs(x: Array) -> Array:
    if is_torch(x):
        return _get_torch().abs(x)
    return np.abs(x)
