import math

import pytest

from mandelview.complex_number import ORIGIN, Complex


def test_add_complex_and_scalar():
    a = Complex(1.0, 2.0)
    assert a + Complex(0.5, -3.0) == Complex(1.5, -1.0)
    assert a + 2 == Complex(3.0, 2.0)
    assert 2 + a == Complex(3.0, 2.0)
    assert a.add(1.0) == Complex(2.0, 2.0)


def test_subtract_complex_and_scalar():
    a = Complex(1.0, 2.0)
    assert a - Complex(1.0, 1.0) == Complex(0.0, 1.0)
    assert a.subtract(0.5) == Complex(0.5, 2.0)
    assert 3 - a == Complex(2.0, -2.0)


def test_multiply_is_complex_product():
    a = Complex(1.0, 2.0)
    b = Complex(3.0, -1.0)
    # (1 + 2i)(3 - i) = 3 - i + 6i + 2 = 5 + 5i
    assert a * b == Complex(5.0, 5.0)
    assert a.multiply(2) == Complex(2.0, 4.0)
    assert 0.5 * a == Complex(0.5, 1.0)
    assert Complex(0.0, 1.0).square() == Complex(-1.0, 0.0)


def test_operations_do_not_mutate():
    a = Complex(1.0, 1.0)
    a + a
    a * 3
    a - 1
    assert a == Complex(1.0, 1.0)
    with pytest.raises(AttributeError):
        a.real = 5.0


def test_magnitude():
    assert Complex(3.0, 4.0).magnitude() == 5.0
    assert abs(Complex(-3.0, -4.0)) == 5.0
    assert ORIGIN.magnitude() == 0.0


def test_unsupported_operand():
    with pytest.raises(TypeError):
        Complex(1.0, 1.0) + "1"


def test_text_form():
    assert str(Complex(0.25, -0.5)) == "0.25 - 0.5i"
    assert str(Complex(-2.0, 2.0)) == "-2.0 + 2.0i"
    assert str(ORIGIN) == "0.0 + 0.0i"


def test_nan_propagates():
    assert math.isnan(Complex(float("nan"), 0.0).magnitude())
