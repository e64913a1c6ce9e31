"""Central place for Glaze default settings."""

# Layer stack
MAX_LAYERS: int = 3
DEFAULT_OPACITY: float = 0.35

# Cube tables
DEFAULT_CUBE_SIZE: int = 17  # Assumed when a .cube file omits LUT_3D_SIZE
MIN_CUBE_SIZE: int = 2
MAX_CUBE_SIZE: int = 256

# Quantization (8-bit texel store and 8-bit image channels)
QUANT_LEVELS: int = 255

# Editor-compatible blend: gamma 1.8 composite with opacity scaled to 70%
COMPAT_GAMMA: float = 1.8
COMPAT_OPACITY_SCALE: float = 0.7

# Batch driver
MAX_IMAGE_DIMENSION: int = 4096  # Callers downscale to this before compositing
DEFAULT_TILE_ROWS: int = 256  # Rows per worker band
DEFAULT_NUM_THREADS: int | None = None  # None = auto-detect from CPU count
