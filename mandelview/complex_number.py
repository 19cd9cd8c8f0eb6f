"""Immutable complex value used by the escape-time engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Union

Operand = Union["Complex", float, int]


@dataclass(frozen=True)
class Complex:
    """A point of the complex plane. Arithmetic always returns a new instance."""

    real: float
    imag: float

    def __add__(self, other: Operand) -> Complex:
        if isinstance(other, Complex):
            return Complex(self.real + other.real, self.imag + other.imag)
        if isinstance(other, Real):
            return Complex(self.real + other, self.imag)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Operand) -> Complex:
        if isinstance(other, Complex):
            return Complex(self.real - other.real, self.imag - other.imag)
        if isinstance(other, Real):
            return Complex(self.real - other, self.imag)
        return NotImplemented

    def __rsub__(self, other: Operand) -> Complex:
        if isinstance(other, Real):
            return Complex(other - self.real, -self.imag)
        return NotImplemented

    def __mul__(self, other: Operand) -> Complex:
        if isinstance(other, Complex):
            return Complex(
                self.real * other.real - self.imag * other.imag,
                self.real * other.imag + self.imag * other.real,
            )
        if isinstance(other, Real):
            return Complex(self.real * other, self.imag * other)
        return NotImplemented

    __rmul__ = __mul__

    add = __add__
    subtract = __sub__
    multiply = __mul__

    def square(self) -> Complex:
        return self * self

    def magnitude(self) -> float:
        """Distance from the origin."""
        return math.sqrt(self.real ** 2 + self.imag ** 2)

    __abs__ = magnitude

    def __str__(self) -> str:
        sign = "-" if self.imag < 0 else "+"
        return f"{self.real} {sign} {abs(self.imag)}i"

    @classmethod
    def from_pair(cls, pair) -> Complex:
        re, im = pair
        return cls(float(re), float(im))


ORIGIN = Complex(0.0, 0.0)
