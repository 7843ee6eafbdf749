import pytest

from fuzzykit.fuzzy.core.fuzzyset import FuzzySet
from fuzzykit.fuzzy.core.point import Interval, IntervalVector
from fuzzykit.fuzzy.core.types import WEAK, STRONG, InvalidDefuzzifyError, XValuesOutOfOrderError


# ---------- defuzzification ----------

def test_moment_of_symmetric_triangle():
    fs = FuzzySet([1, 2, 3], [0, 1, 0])
    assert fs.moment_defuzzify(1, 3) == pytest.approx(2.0)


def test_center_of_area_in_zero_gap(two_triangles):
    assert two_triangles.center_of_area_defuzzify(5, 17) == pytest.approx(11.0)


def test_center_of_area_of_triangle(triangle):
    assert triangle.center_of_area_defuzzify(0, 10) == pytest.approx(5.0)


def test_weighted_average(triangle):
    assert triangle.weighted_average_defuzzify(0, 10) == pytest.approx(5.0)


def test_maximum_of_trapezoid():
    fs = FuzzySet([0, 2, 8, 10], [0, 1, 1, 0])
    assert fs.maximum_defuzzify(0, 10) == pytest.approx(5.0)


@pytest.mark.parametrize("method", ["moment", "center_of_area"])
@pytest.mark.parametrize("points", [
    [(0, 0), (2, 1), (3, 0.4), (9, 0.4), (10, 0)],
    [(1, 0.5), (4, 1), (6, 0)],
    [(2, 0), (3, 1)],
])
def test_defuzzified_value_within_bounds(method, points):
    fs = FuzzySet.from_points(points)
    x = getattr(fs, f"{method}_defuzzify")(0, 10)
    assert 0.0 <= x <= 10.0


def test_open_flat_end_counts_up_to_bound():
    # y = 1 from x = 5 on
    fs = FuzzySet([4, 5], [0, 1])
    assert fs.area(0, 10) == pytest.approx(0.5 + 5.0)


def test_single_point_set_defuzzifies_to_midpoint():
    fs = FuzzySet.from_points([(3, 0.6)])
    assert fs.moment_defuzzify(0, 10) == pytest.approx(5.0)
    assert fs.center_of_area_defuzzify(0, 10) == pytest.approx(5.0)


def test_zero_area_set_cannot_be_defuzzified():
    fs = FuzzySet([0, 10], [0, 0])
    with pytest.raises(InvalidDefuzzifyError):
        fs.moment_defuzzify(0, 10)
    with pytest.raises(InvalidDefuzzifyError):
        FuzzySet().center_of_area_defuzzify(0, 10)


def test_bad_bounds(triangle):
    with pytest.raises(XValuesOutOfOrderError):
        triangle.moment_defuzzify(10, 0)


# ---------- alpha cuts ----------

def test_weak_alpha_cut(triangle):
    cut = triangle.alpha_cut(WEAK, 0.5, 0, 10)
    assert str(cut) == "[2.5, 7.5]"


def test_strong_alpha_cut_is_open(triangle):
    cut = triangle.alpha_cut(STRONG, 0.5, 0, 10)
    assert str(cut) == "(2.5, 7.5)"
    assert not cut.contains(2.5)
    assert cut.contains(5)


def test_alpha_cut_of_two_peaks(two_triangles):
    cut = two_triangles.alpha_cut(WEAK, 0.5, 5, 17)
    assert len(cut) == 2
    assert cut[1].low == pytest.approx(15.5)


@pytest.mark.parametrize("lo, hi", [(0.0, 0.5), (0.2, 0.8), (0.5, 1.0)])
def test_strong_cut_inside_weak_cut(triangle, lo, hi):
    strong = triangle.alpha_cut(STRONG, hi, 0, 10)
    weak = triangle.alpha_cut(WEAK, lo, 0, 10)
    assert strong.is_subset_of(weak)


def test_support(triangle):
    assert str(triangle.support(0, 10)) == "(0, 10)"
    spike = FuzzySet.from_points([(5, 0), (5, 1), (5, 0)])
    assert str(spike.support(0, 10)) == "[5, 5]"


def test_alpha_cut_above_peak_is_empty(triangle):
    assert triangle.alpha_cut(STRONG, 1.0, 0, 10).is_empty()


def test_alpha_cut_clipped_to_bounds():
    ramp = FuzzySet([0, 50], [0, 1])
    assert ramp.alpha_cut(WEAK, 0.5, 0, 10).is_empty()
    assert str(ramp.alpha_cut(WEAK, 0.1, 0, 10)) == "[5, 10]"
    assert str(ramp.alpha_cut(STRONG, 0.5, 30, 60)) == "[30, 60]"
    wide = FuzzySet([-10, 0, 10], [0, 1, 0])
    assert str(wide.alpha_cut(WEAK, 0.5, -2, 20)) == "[-2, 5]"


def test_interval_vector_copies_in():
    iv = Interval(0, False, 1, True)
    vec = IntervalVector([iv])
    iv.high = 5
    assert vec[0].high == 1
    assert vec.contains(0) and not vec.contains(1)
