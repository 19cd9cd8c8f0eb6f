from __future__ import annotations

from dataclasses import dataclass

from mandelview.complex_number import ORIGIN, Complex

BAILOUT = 2.0
HALF_WIDTH = 2.0


def escape_time(c: Complex, max_iterations: int) -> int:
    # A constant already outside the bailout radius never iterates.
    c_outside = c.magnitude() >= BAILOUT
    n = 0
    z = ORIGIN
    while n < max_iterations and z.magnitude() < BAILOUT and not c_outside:
        n += 1
        z = z.square() + c
    return n


def map_pixel(p: float, lo: float, hi: float, resolution: int) -> float:
    return lo + p * (hi - lo) / resolution


@dataclass(frozen=True)
class Bounds:
    real_min: float
    real_max: float
    imag_min: float
    imag_max: float

    @classmethod
    def around(cls, center: Complex, scale: float) -> Bounds:
        half = HALF_WIDTH * scale
        return cls(
            real_min=center.real - half,
            real_max=center.real + half,
            imag_min=center.imag - half,
            imag_max=center.imag + half,
        )

    def point_at(self, x: float, y: float, resolution: int) -> Complex:
        return Complex(
            map_pixel(x, self.real_min, self.real_max, resolution),
            map_pixel(y, self.imag_min, self.imag_max, resolution),
        )

    def pixel_step(self, resolution: int) -> float:
        return (self.real_max - self.real_min) / resolution
