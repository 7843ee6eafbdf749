import pytest

from fuzzykit.fuzzy.core import norms
from fuzzykit.fuzzy.core.mfs import (
    Triangle, Trapezoid, Rectangle, Singleton, LeftLinear, RightLinear,
    SShape, ZShape, PiShape, Gaussian, build_shape,
)
from fuzzykit.fuzzy.core.types import ConfigError, XValuesOutOfOrderError


# ---------- shapes ----------

def test_triangle():
    fs = Triangle(0, 5, 10).to_set()
    assert fs.get_membership(2.5) == pytest.approx(0.5)
    assert Triangle.centered(5, 10) == Triangle(0, 5, 10)


def test_trapezoid_and_rectangle():
    trap = Trapezoid(0, 2, 8, 10)
    assert trap.mu(5) == pytest.approx(1.0)
    assert trap.mu(1) == pytest.approx(0.5)
    assert Rectangle(2, 4).mu(3) == pytest.approx(1.0)
    assert Rectangle(2, 4).mu(5) == pytest.approx(0.0)


def test_singleton_is_a_spike():
    fs = Singleton(3).to_set()
    assert fs.num_points == 3
    assert fs.get_membership(3) == pytest.approx(1.0)
    assert fs.get_membership(3.1) == pytest.approx(0.0)


def test_linear_edges():
    assert LeftLinear(0, 10).mu(20) == pytest.approx(1.0)
    assert RightLinear(0, 10).mu(-5) == pytest.approx(1.0)
    assert RightLinear(0, 10).mu(5) == pytest.approx(0.5)


def test_s_and_z_curves():
    s = SShape(0, 10)
    assert s.mu(5) == pytest.approx(0.5)
    assert s.mu(2.5) == pytest.approx(0.125)
    assert ZShape(0, 10).mu(2.5) == pytest.approx(0.875)


def test_pi_and_gaussian_peak_at_center():
    assert PiShape(5, 5).mu(5) == pytest.approx(1.0)
    assert PiShape(5, 5).mu(0) == pytest.approx(0.0)
    g = Gaussian(0, 1)
    assert g.mu(0) == pytest.approx(1.0)
    assert g.support() == (-4.0, 4.0)


def test_bad_parameter_order():
    with pytest.raises(XValuesOutOfOrderError):
        Triangle(5, 0, 10).to_set()


def test_build_shape_registry():
    assert build_shape("TRI", [0, 1, 2]).num_points == 3
    with pytest.raises(KeyError):
        build_shape("hexagon", [1])
    with pytest.raises(ValueError):
        build_shape("tri", [1, 2])


# ---------- combine operators ----------

def test_empty_lists_give_zero():
    assert norms.minimum([]) == 0.0
    assert norms.product([]) == 0.0


def test_minimum_and_product():
    assert norms.minimum([0.7, 0.3, 0.9]) == pytest.approx(0.3)
    assert norms.product([0.5, 0.4]) == pytest.approx(0.2)


def test_compensatory_and():
    g = norms.COMPENSATORY_GAMMA
    expected = (0.25 ** (1 - g)) * (0.75 ** g)
    assert norms.compensatory_and([0.5, 0.5]) == pytest.approx(expected)
    # gamma is clamped to [0, 1]
    assert norms.compensatory_and([0.5, 0.5], gamma=-3) == pytest.approx(0.25)


def test_single_value_passes_through():
    assert norms.combine("product", [0.7]) == 0.7
    assert norms.combine("minimum", [0.7, 0.2]) == pytest.approx(0.2)


def test_unknown_operator():
    with pytest.raises(ConfigError):
        norms.combine("average", [0.1, 0.2])
