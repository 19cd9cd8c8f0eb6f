"""View window and session state with the zoom/recenter transitions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Integral
from typing import Optional, Tuple

from mandelview.colors import ColorMapping, random_colors
from mandelview.complex_number import ORIGIN, Complex
from mandelview.errors import ConfigurationError
from mandelview.escape import Bounds, escape_time
from mandelview.pixels import check_resolution
from mandelview.util.logging_setup import get_logger

DEFAULT_SCALE = 1.0
ZOOM_STEP = 0.5
FIDELITY_LEVELS = (0x100, 0x200, 0x400, 0x800, 0x1000)
DEFAULT_MAX_ITERATIONS = FIDELITY_LEVELS[0]


def check_iteration_cap(value: int) -> int:
    if not isinstance(value, Integral) or isinstance(value, bool) or value <= 0:
        raise ConfigurationError(f"iteration cap must be a positive integer, got {value!r}")
    return int(value)


@dataclass
class ViewState:
    """Centre, scale and iteration cap of the visible window.

    The window always spans ``4 * scale`` on both axes, so bounds are derived
    on access instead of being stored.
    """

    center: Complex = ORIGIN
    scale: float = DEFAULT_SCALE
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self):
        if not self.scale > 0:
            raise ConfigurationError(f"scale must be > 0, got {self.scale!r}")
        self.max_iterations = check_iteration_cap(self.max_iterations)

    @property
    def bounds(self) -> Bounds:
        return Bounds.around(self.center, self.scale)

    @property
    def zoom_depth(self) -> float:
        return -math.log2(self.scale)

    def recenter(self, point: Complex) -> None:
        scale = self.scale * ZOOM_STEP
        self.center = point
        if scale <= 0:
            # Smallest subnormal reached; further zooms only move the centre.
            get_logger().warning("Zoom depth 2^%s is the float64 limit, scale kept", self.zoom_depth)
            return
        self.scale = scale
        width = self.bounds.pixel_step(1)
        spacing = max(math.ulp(point.real), math.ulp(point.imag))
        if width <= spacing * 1024:
            get_logger().debug(
                "Zoom depth 2^%s is near float64 precision at %s; expect blocky output",
                self.zoom_depth, point,
            )

    def reset(self) -> None:
        self.center = ORIGIN
        self.scale = DEFAULT_SCALE

    def set_iteration_cap(self, value: int) -> None:
        self.max_iterations = check_iteration_cap(value)


@dataclass
class Session:
    view: ViewState = field(default_factory=ViewState)
    color_mapping: ColorMapping = ColorMapping.DEFAULT

    def __post_init__(self):
        self.color_mapping = ColorMapping.from_name(self.color_mapping)

    @property
    def bounds(self) -> Bounds:
        return self.view.bounds

    @property
    def max_iterations(self) -> int:
        return self.view.max_iterations

    def point_at(self, x: float, y: float, resolution: int) -> Complex:
        return self.view.bounds.point_at(x, y, check_resolution(resolution))

    def recenter(self, point: Complex) -> None:
        self.view.recenter(point)
        get_logger().info("Recentered on %s, zoom 2^%s", point, self.view.zoom_depth)

    def recenter_at_pixel(self, x: float, y: float, resolution: int) -> Complex:
        """Zoom in on the plane point under pixel ``(x, y)``, as a click would."""
        point = self.point_at(x, y, resolution)
        self.recenter(point)
        return point

    def reset(self, *, reseed: bool = False, seed: Optional[int] = None) -> None:
        """Return to the initial window; the iteration cap and colour mapping are kept.

        With ``reseed`` the random colour table is cleared as well.
        """
        self.view.reset()
        if reseed:
            random_colors.reset(seed)
        get_logger().info("View reset")

    def set_iteration_cap(self, value: int) -> None:
        self.view.set_iteration_cap(value)

    def set_fidelity(self, level: int) -> None:
        if not 0 <= level < len(FIDELITY_LEVELS):
            raise ConfigurationError(
                f"fidelity level must be in [0, {len(FIDELITY_LEVELS) - 1}], got {level!r}"
            )
        self.view.set_iteration_cap(FIDELITY_LEVELS[level])

    def set_color_mapping(self, name) -> ColorMapping:
        self.color_mapping = ColorMapping.from_name(name)
        return self.color_mapping

    def inspect(self, x: float, y: float, resolution: int) -> Tuple[int, str]:
        point = self.point_at(x, y, resolution)
        return escape_time(point, self.view.max_iterations), str(point)

    def hover_text(self, x: float, y: float, resolution: int) -> str:
        steps, text = self.inspect(x, y, resolution)
        return f"hovered at: ({steps} steps) {text}"

    def describe(self) -> dict:
        return {
            "center": str(self.view.center),
            "scale": f"2^{self.view.zoom_depth:g}",
            "max_iterations": self.view.max_iterations,
            "color_mapping": self.color_mapping.value,
        }
