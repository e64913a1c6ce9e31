"""Built-in sample looks generated from per-channel curves.

Looks are named curve triples that callers can turn into tables and use
as starting points when no .cube files are at hand.
"""

from dataclasses import dataclass

import numpy as np

from glaze import defaults
from glaze.cube import Curve, table_from_curves
from glaze.types import LutTable


@dataclass(frozen=True)
class LookPreset:
    """A named look defined by red, green and blue curves."""
    name: str
    red: Curve
    green: Curve
    blue: Curve
    description: str = ""

    def build(self, size: int = defaults.DEFAULT_CUBE_SIZE) -> LutTable:
        return table_from_curves(self.red, self.green, self.blue, size=size, name=self.name)


def _s_curve(power: float) -> Curve:
    """Contrast S-curve symmetric around 0.5."""
    def curve(x: np.ndarray) -> np.ndarray:
        low = np.power(np.clip(x * 2, 0.0, 1.0), power) / 2
        high = 1 - np.power(np.clip((1 - x) * 2, 0.0, 1.0), power) / 2
        return np.where(x < 0.5, low, high)
    return curve


BUILTIN_LOOKS: dict[str, LookPreset] = {
    "Cinematic": LookPreset(
        name="Cinematic",
        red=lambda x: np.power(x, 1.1) * 0.95 + 0.02,
        green=lambda x: np.power(x, 1.05) * 0.9 + 0.05,
        blue=lambda x: np.power(x, 0.95) * 1.1,
        description="Lifted blacks with cool highlights",
    ),
    "Vintage": LookPreset(
        name="Vintage",
        red=lambda x: np.power(x, 0.9) * 1.1 + 0.1,
        green=lambda x: x * 0.95 + 0.05,
        blue=lambda x: np.power(x, 1.2) * 0.8 + 0.1,
        description="Warm faded print",
    ),
    "Dramatic": LookPreset(
        name="Dramatic",
        red=_s_curve(1.5),
        green=_s_curve(1.3),
        blue=_s_curve(1.7),
        description="Strong per-channel contrast",
    ),
    "Warm Tone": LookPreset(
        name="Warm Tone",
        red=lambda x: np.minimum(1.0, x * 1.15 + 0.1),
        green=lambda x: np.minimum(1.0, x * 1.05 + 0.05),
        blue=lambda x: np.maximum(0.0, x * 0.9 - 0.05),
        description="Orange shift",
    ),
    "Cool Tone": LookPreset(
        name="Cool Tone",
        red=lambda x: np.maximum(0.0, x * 0.9 - 0.05),
        green=lambda x: np.minimum(1.0, x * 1.05 + 0.02),
        blue=lambda x: np.minimum(1.0, x * 1.15 + 0.1),
        description="Blue shift",
    ),
}


def get_look(name: str) -> LookPreset | None:
    """Get a look by name."""
    return BUILTIN_LOOKS.get(name)


def list_looks() -> list[str]:
    """List all available look names."""
    return list(BUILTIN_LOOKS.keys())
