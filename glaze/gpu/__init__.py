"""GPU acceleration using PyTorch (CUDA or MPS backend)."""

import numpy as np
import torch
from typing import Optional


class GPUContext:
    """Global GPU context for accelerated compositing (CUDA or MPS)."""

    _device: Optional[torch.device] = None
    _available: Optional[bool] = None
    _backend: Optional[str] = None  # 'cuda', 'mps', or None

    @classmethod
    def device(cls) -> torch.device:
        """Get GPU device (lazy initialization).

        Returns CUDA if available, then MPS (Apple Silicon), otherwise CPU.
        PyTorch operations work on all devices, so CPU is a valid fallback.
        """
        if cls._device is None:
            if torch.cuda.is_available():
                cls._device = torch.device('cuda')
                cls._backend = 'cuda'
            elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                cls._device = torch.device('mps')
                cls._backend = 'mps'
            else:
                cls._device = torch.device('cpu')
                cls._backend = None
        return cls._device

    @classmethod
    def is_available(cls) -> bool:
        """Check if GPU acceleration is available (CUDA or MPS)."""
        if cls._available is None:
            cuda_ok = torch.cuda.is_available()
            mps_ok = hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()
            cls._available = cuda_ok or mps_ok
        return cls._available

    @classmethod
    def to_gpu(cls, arr: np.ndarray) -> torch.Tensor:
        """Upload NumPy array to the GPU device, keeping its dtype."""
        tensor = torch.from_numpy(np.ascontiguousarray(arr))
        return tensor.to(cls.device())

    @classmethod
    def to_cpu(cls, tensor: torch.Tensor) -> np.ndarray:
        """Download GPU tensor to NumPy array."""
        return tensor.cpu().numpy()

    @classmethod
    def synchronize(cls) -> None:
        """Wait for queued GPU work to finish (platform-specific)."""
        if cls._backend == 'cuda':
            torch.cuda.synchronize()
        elif cls._backend == 'mps' and hasattr(torch.mps, 'synchronize'):
            torch.mps.synchronize()

    @classmethod
    def empty_cache(cls) -> None:
        """Release cached GPU memory back to system.

        Call this after freeing large tensors to ensure VRAM is released.
        """
        if cls._backend == 'cuda':
            torch.cuda.empty_cache()
        elif cls._backend == 'mps' and hasattr(torch.mps, 'empty_cache'):
            torch.mps.empty_cache()


__all__ = ['GPUContext']
