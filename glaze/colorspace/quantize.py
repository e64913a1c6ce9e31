"""8-bit quantization of [0, 1] color values.

encode/decode are an exact pair through the integer domain:
decode(encode(v)) is within 1/255 of v, and encode(decode(u)) == u.
Any tonal enhancement is a separate, explicitly applied transform.
"""

from dataclasses import dataclass

from glaze import defaults
from . import _backend as B
from ._backend import Array


def encode(value: Array) -> Array:
    """Float [0, 1] -> uint8 via round(clamp(value, 0, 1) * 255).

    Rounds half up. NaN encodes as 0.
    """
    x = B.nan_to_num(B.to_float(value))
    x = B.clip(x, 0.0, 1.0) * defaults.QUANT_LEVELS
    return B.to_uint8(B.floor(x + 0.5))


def decode(value: Array) -> Array:
    """uint8 -> float [0, 1] via value / 255."""
    return B.to_float(value) / defaults.QUANT_LEVELS


@dataclass(frozen=True)
class Enhancement:
    """Optional tonal nudge applied to table values before 8-bit encoding.

    Off by default: the default instance is the identity.

    Attributes:
        contrast: Contrast multiplier around 0.5 (1.0 = no change)
        brightness: Additive brightness (0.0 = no change)
        gamma: Gamma exponent (1.0 = no change)
    """
    contrast: float = 1.0
    brightness: float = 0.0
    gamma: float = 1.0

    def __post_init__(self):
        if not self.gamma > 0.0:
            raise ValueError("Enhancement gamma must be positive")

    @property
    def is_identity(self) -> bool:
        return self.contrast == 1.0 and self.brightness == 0.0 and self.gamma == 1.0

    def apply(self, x: Array) -> Array:
        """Apply contrast, then brightness, then gamma; result in [0, 1]."""
        result = B.clip(x, 0.0, 1.0)

        # Contrast adjustment: (val - 0.5) * contrast + 0.5
        if self.contrast != 1.0:
            result = B.clip((result - 0.5) * self.contrast + 0.5, 0.0, 1.0)

        if self.brightness != 0.0:
            result = B.clip(result + self.brightness, 0.0, 1.0)

        if self.gamma != 1.0:
            result = B.clip(B.pow(result, self.gamma), 0.0, 1.0)

        return result
