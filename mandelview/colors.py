from __future__ import annotations

import math
import re
import threading
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from mandelview.util.logging_setup import get_logger

RGB = Tuple[int, int, int]

BLACK: RGB = (0, 0, 0)
WHITE: RGB = (0xFF, 0xFF, 0xFF)

RAINBOW_BAND = 32
RAINBOW_PERIOD = 6 * RAINBOW_BAND

# sinh(32) * 128 is far past 255, larger arguments only risk overflow.
_SINH_LIMIT = 32.0


def _byte(value: float) -> int:
    return max(0, min(0xFF, int(math.floor(value))))


def _boundary(n: int, max_iterations: int) -> Optional[RGB]:
    if n >= max_iterations:
        return BLACK
    if n <= 0:
        return WHITE
    return None


def default_color(n: int, max_iterations: int) -> RGB:
    edge = _boundary(n, max_iterations)
    if edge is not None:
        return edge
    first_half = n < max_iterations / 2
    r = (n % 0x80) * 2 if first_half else 0x80
    g = (n % 0x40) * 4
    b = 0x80 if first_half else 0xFF - (n % 2) * 0x80
    return (r, g, b)


def linear_greyscale(n: int, max_iterations: int) -> RGB:
    grey = _byte((max_iterations - n) / max_iterations * 0xFF)
    return (grey, grey, grey)


def gradiated_greyscale(n: int, max_iterations: int) -> RGB:
    edge = _boundary(n, max_iterations)
    if edge is not None:
        return edge
    grey = (n % 0x40) * 4
    return (grey, grey, grey)


def prime_glow(n: int, max_iterations: int) -> RGB:
    edge = _boundary(n, max_iterations)
    if edge is not None:
        return edge
    r = _byte((math.sin(n / 37) + 1) * 128)
    g = _byte((math.cos(n / 7) + 1) * 128)
    b = _byte((math.sinh(min(n / 29, _SINH_LIMIT)) + 1) * 128)
    return (r, g, b)


def rainbow(n: int, max_iterations: int) -> RGB:
    edge = _boundary(n, max_iterations)
    if edge is not None:
        return edge
    band, step = divmod(n % RAINBOW_PERIOD, RAINBOW_BAND)
    up = step * 8
    down = 0xFF - up
    if band == 0:
        return (0xFF, up, 0)
    if band == 1:
        return (down, 0xFF, 0)
    if band == 2:
        return (0, 0xFF, up)
    if band == 3:
        return (0, down, 0xFF)
    if band == 4:
        return (up, 0, 0xFF)
    return (0xFF, 0, down)


class RandomColorTable:
    """Random colour per iteration count, fixed after its first use.

    The table is shared by every caller, so lookups and inserts hold a lock.
    """

    def __init__(self, seed: Optional[int] = None):
        self._lock = threading.Lock()
        self._colors: Dict[int, RGB] = {}
        self._rng = np.random.default_rng(seed)

    def __call__(self, n: int, max_iterations: int) -> RGB:
        edge = _boundary(n, max_iterations)
        if edge is not None:
            return edge
        with self._lock:
            color = self._colors.get(n)
            if color is None:
                r, g, b = self._rng.integers(0, 0x100, size=3)
                color = (int(r), int(g), int(b))
                self._colors[n] = color
            return color

    def __len__(self) -> int:
        with self._lock:
            return len(self._colors)

    def reset(self, seed: Optional[int] = None) -> None:
        with self._lock:
            self._colors.clear()
            self._rng = np.random.default_rng(seed)


random_colors = RandomColorTable()


class ColorMapping(Enum):
    DEFAULT = "default"
    LINEAR_GREYSCALE = "linear_greyscale"
    GRADIATED_GREYSCALE = "gradiated_greyscale"
    PRIME_GLOW = "prime_glow"
    RAINBOW = "rainbow"
    RANDOM = "random"

    def __call__(self, n: int, max_iterations: int) -> RGB:
        return _FUNCTIONS[self](n, max_iterations)

    @classmethod
    def from_name(cls, name: Optional[str]) -> ColorMapping:
        """Look a mapping up by name, falling back to ``DEFAULT`` for unknown names.

        Accepts the canonical names as well as ``primeGlow``, ``prime-glow``,
        ``randomColor`` and similar spellings.
        """
        if isinstance(name, cls):
            return name
        key = _normalise_name(name or "")
        for mapping in cls:
            if mapping.value == key:
                return mapping
        get_logger().warning("Unknown color mapping %r, using %s", name, cls.DEFAULT.value)
        return cls.DEFAULT


def _normalise_name(name: str) -> str:
    key = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name.strip())
    key = key.replace("-", "_").replace(" ", "_").lower()
    if key.endswith("_color") and key != "_color":
        key = key[: -len("_color")]
    return key


_FUNCTIONS: Dict[ColorMapping, Callable[[int, int], RGB]] = {
    ColorMapping.DEFAULT: default_color,
    ColorMapping.LINEAR_GREYSCALE: linear_greyscale,
    ColorMapping.GRADIATED_GREYSCALE: gradiated_greyscale,
    ColorMapping.PRIME_GLOW: prime_glow,
    ColorMapping.RAINBOW: rainbow,
    ColorMapping.RANDOM: random_colors,
}


def palette(mapping: ColorMapping, max_iterations: int) -> np.ndarray:
    table = np.empty((max_iterations + 1, 3), dtype=np.uint8)
    for n in range(max_iterations + 1):
        table[n] = mapping(n, max_iterations)
    return table
