"""Batch pixel driver: composite a layer stack over whole 8-bit images.

Every pixel is decoded to [0, 1], composited, and re-encoded to uint8.
An alpha channel, when present, is copied through untouched. Pixels are
independent, so numpy buffers are split into row bands and processed on a
thread pool; tables and stacks are immutable and shared by every band.

The driver never resizes. Callers bring images down to fit_within() first.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

import numpy as np
from PIL import Image

from glaze import defaults
from glaze.colorspace import _backend as B
from glaze.colorspace._backend import Array
from glaze.colorspace.blend import BlendPolicy, LINEAR
from glaze.colorspace.quantize import encode, decode
from glaze.compositor import composite
from glaze.gpu import GPUContext
from glaze.types import Layer, LayerStack, as_stack

logger = logging.getLogger(__name__)


def fit_within(
    width: int,
    height: int,
    max_dimension: int = defaults.MAX_IMAGE_DIMENSION,
) -> tuple[int, int, bool]:
    """Size a caller should downscale to before compositing.

    Returns:
        (width, height, needs_scaling), aspect ratio preserved
    """
    if width <= max_dimension and height <= max_dimension:
        return width, height, False

    scale = min(max_dimension / width, max_dimension / height)
    return max(1, round(width * scale)), max(1, round(height * scale)), True


def _as_pixels(buffer: Array, width: int | None, height: int | None) -> Array:
    """View buffer as (H, W, C) with C in {3, 4}."""
    if not str(buffer.dtype).endswith('uint8'):
        raise ValueError(f"Expected a uint8 buffer, got {buffer.dtype}")

    if buffer.ndim == 3:
        h, w, c = buffer.shape
        if (width is not None and width != w) or (height is not None and height != h):
            raise ValueError(
                f"Buffer shape {tuple(buffer.shape)} does not match {width}x{height}"
            )
        pixels = buffer
    elif buffer.ndim == 1:
        if width is None or height is None:
            raise ValueError("width and height are required for a flat buffer")
        count = width * height
        if count <= 0 or buffer.shape[0] % count != 0:
            raise ValueError(
                f"Flat buffer of {buffer.shape[0]} values does not match {width}x{height}"
            )
        c = buffer.shape[0] // count
        pixels = buffer.reshape(height, width, c)
    else:
        raise ValueError(f"Expected a flat or (H, W, C) buffer, got {buffer.ndim} dims")

    if pixels.shape[-1] not in (3, 4):
        raise ValueError(f"Expected 3 or 4 channels, got {pixels.shape[-1]}")
    return pixels


def _composite_pixels(stack: LayerStack, pixels: Array, policy: BlendPolicy) -> Array:
    """decode -> composite -> encode for an (H, W, C) uint8 block."""
    rgb = decode(pixels[..., :3])
    graded = encode(composite(stack, rgb, policy))
    if pixels.shape[-1] == 4:
        graded = B.concat([graded, pixels[..., 3:]], axis=-1)
    return graded


def _composite_bands(
    stack: LayerStack,
    pixels: np.ndarray,
    policy: BlendPolicy,
    num_threads: int | None,
    tile_rows: int,
) -> np.ndarray:
    rows = pixels.shape[0]
    tile_rows = max(1, int(tile_rows))
    bands = [(start, min(start + tile_rows, rows)) for start in range(0, rows, tile_rows)]
    workers = num_threads or os.cpu_count() or 1

    out = np.empty_like(pixels)
    if len(bands) <= 1 or workers == 1:
        for start, stop in bands:
            out[start:stop] = _composite_pixels(stack, pixels[start:stop], policy)
        return out

    def run(band: tuple[int, int]) -> None:
        start, stop = band
        out[start:stop] = _composite_pixels(stack, pixels[start:stop], policy)

    with ThreadPoolExecutor(max_workers=min(workers, len(bands))) as executor:
        for future in [executor.submit(run, band) for band in bands]:
            future.result()
    return out


def composite_image(
    stack: LayerStack | Iterable[Layer] | None,
    buffer,
    width: int | None = None,
    height: int | None = None,
    policy: BlendPolicy = LINEAR,
    num_threads: int | None = defaults.DEFAULT_NUM_THREADS,
    tile_rows: int = defaults.DEFAULT_TILE_ROWS,
    use_gpu: bool = False,
):
    """Apply a layer stack to every pixel of an 8-bit RGB(A) image.

    Args:
        stack: Layers in application order
        buffer: uint8 pixels as an (H, W, 3|4) or flat numpy array, a torch
                tensor of the same layout, or a PIL image (modes with
                transparency come back as RGBA)
        width: Image width (required for flat buffers)
        height: Image height (required for flat buffers)
        policy: Blend policy shared by every layer
        num_threads: Worker threads for numpy buffers (None = CPU count)
        tile_rows: Rows per worker band
        use_gpu: Process numpy buffers on the GPU when one is available

    Returns:
        New buffer of the same type and layout as the input

    Raises:
        ValueError: If the buffer is not uint8 or its shape does not fit
    """
    if isinstance(buffer, Image.Image):
        if buffer.mode in ('RGB', 'RGBA'):
            image = buffer
        elif 'A' in buffer.mode or 'transparency' in buffer.info:
            image = buffer.convert('RGBA')
        else:
            image = buffer.convert('RGB')
        result = composite_image(
            stack, np.asarray(image), policy=policy,
            num_threads=num_threads, tile_rows=tile_rows, use_gpu=use_gpu,
        )
        return Image.fromarray(result)

    stack = as_stack(stack)
    pixels = _as_pixels(buffer, width, height)
    h, w = pixels.shape[0], pixels.shape[1]

    if max(h, w) > defaults.MAX_IMAGE_DIMENSION:
        logger.warning(
            "Compositing %dx%d image above the %dpx processing limit; callers should downscale first",
            w, h, defaults.MAX_IMAGE_DIMENSION,
        )

    if not stack.active:
        return B.copy(buffer)

    start = time.perf_counter()
    if B.is_torch(pixels):
        out = _composite_pixels(stack, pixels, policy)
    elif use_gpu and GPUContext.is_available():
        out_gpu = _composite_pixels(stack, GPUContext.to_gpu(pixels), policy)
        GPUContext.synchronize()
        out = GPUContext.to_cpu(out_gpu)
        del out_gpu
        GPUContext.empty_cache()
    else:
        out = _composite_bands(stack, pixels, policy, num_threads, tile_rows)

    logger.debug(
        "Composited %dx%d image with %d layer(s) in %.1fms",
        w, h, len(stack.active), (time.perf_counter() - start) * 1000,
    )
    return out.reshape(buffer.shape)


__all__ = ['composite_image', 'fit_within']
