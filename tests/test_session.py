import pytest

from mandelview.colors import ColorMapping
from mandelview.complex_number import ORIGIN, Complex
from mandelview.errors import ConfigurationError
from mandelview.session import FIDELITY_LEVELS, Session, ViewState


def test_initial_state():
    view = ViewState()
    assert view.center == ORIGIN
    assert view.scale == 1.0
    assert view.max_iterations == 256
    b = view.bounds
    assert (b.real_min, b.real_max, b.imag_min, b.imag_max) == (-2.0, 2.0, -2.0, 2.0)


def test_recenter_halves_scale_and_moves_bounds():
    view = ViewState()
    p = Complex(-0.75, 0.25)
    view.recenter(p)
    assert view.center == p
    assert view.scale == 0.5
    assert view.bounds.real_min == p.real - 2 * 0.5
    assert view.bounds.real_max == p.real + 2 * 0.5
    assert view.bounds.imag_min == p.imag - 1.0
    view.recenter(p)
    assert view.scale == 0.25
    assert view.zoom_depth == 2


def test_recenter_then_reset():
    session = Session()
    session.recenter(Complex(0.0, 0.0))
    assert session.view.scale == 0.5
    session.set_iteration_cap(1024)
    session.set_color_mapping("rainbow")
    session.reset()
    assert session.view.scale == 1.0
    assert session.view.center == ORIGIN
    assert session.max_iterations == 1024
    assert session.color_mapping is ColorMapping.RAINBOW


def test_deep_zoom_is_not_an_error():
    view = ViewState()
    for _ in range(80):
        view.recenter(Complex(-0.743643887037151, 0.13182590420533))
    assert view.scale == 0.5 ** 80
    assert view.scale > 0


@pytest.mark.parametrize("value", [0, -1, 2.5, True, "256"])
def test_iteration_cap_must_be_positive_int(value):
    with pytest.raises(ConfigurationError):
        Session().set_iteration_cap(value)


def test_invalid_scale_rejected():
    with pytest.raises(ConfigurationError):
        ViewState(scale=0.0)


def test_fidelity_levels():
    session = Session()
    for level, cap in enumerate(FIDELITY_LEVELS):
        session.set_fidelity(level)
        assert session.max_iterations == cap
    with pytest.raises(ConfigurationError):
        session.set_fidelity(len(FIDELITY_LEVELS))


def test_unknown_mapping_falls_back():
    session = Session(color_mapping="primeGlow")
    assert session.color_mapping is ColorMapping.PRIME_GLOW
    assert session.set_color_mapping("nope") is ColorMapping.DEFAULT


def test_inspect_corner_pixel():
    session = Session()
    steps, text = session.inspect(0, 0, 4)
    assert steps == 0
    assert text == "-2.0 - 2.0i"
    assert session.hover_text(2, 2, 4) == "hovered at: (256 steps) 0.0 + 0.0i"


def test_inspect_does_not_change_state():
    session = Session()
    session.inspect(1, 3, 8)
    assert session.view.scale == 1.0
    assert session.view.center == ORIGIN


def test_recenter_at_pixel():
    session = Session()
    point = session.recenter_at_pixel(3, 1, 4)
    assert point == Complex(1.0, -1.0)
    assert session.view.center == point
    assert session.bounds.real_min == 0.0


def test_inspect_rejects_bad_resolution():
    with pytest.raises(ConfigurationError):
        Session().inspect(0, 0, 0)


def test_describe():
    session = Session()
    session.recenter(Complex(0.5, -0.5))
    assert session.describe() == {
        "center": "0.5 - 0.5i",
        "scale": "2^1",
        "max_iterations": 256,
        "color_mapping": "default",
    }


def test_zoom_past_float_range_keeps_positive_scale():
    session = Session()
    point = Complex(-0.75, 0.1)
    for _ in range(1200):
        session.recenter(point)
    assert session.view.scale > 0
    assert session.view.scale == 5e-324
    assert session.view.center == point
    assert session.view.zoom_depth == 1074
    assert session.describe()["scale"] == "2^1074"


def test_zoom_from_smallest_scale():
    view = ViewState(scale=5e-324)
    view.recenter(Complex(0.25, 0.0))
    assert view.scale == 5e-324
    assert view.center == Complex(0.25, 0.0)
