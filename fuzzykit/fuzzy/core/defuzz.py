"""
Alpha cuts and defuzzification of piecewise-linear fuzzy sets.

All reductions work on a copy confined to [x_min, x_max]; a flat open end
inside the bounds contributes a rectangle reaching the bound.
"""

from __future__ import annotations
import math
from typing import List, Tuple
from .types import (
    Float, FUZZY_TOLERANCE, WEAK, STRONG,
    XValuesOutOfOrderError, InvalidDefuzzifyError,
)
from .point import Interval, IntervalVector


def _confined(fs, x_min: Float, x_max: Float):
    if x_min >= x_max:
        raise XValuesOutOfOrderError(x_min, x_max)
    if x_min > fs.x(0) or x_max < fs.x(-1):
        out = fs.copy()
        out.confine_to_x_bounds(x_min, x_max)
        return out
    return fs


def _coords(fs) -> List[Tuple[Float, Float]]:
    return [(p.x, p.y) for p in fs._pts]


# ---------- per-shape closed forms ----------

def _moment_and_area(x1: Float, y1: Float, x2: Float, y2: Float) -> Tuple[Float, Float]:
    if (y1 == 0.0 and y2 == 0.0) or x1 == x2:
        return 0.0, 0.0
    dx = x2 - x1
    if y1 == y2:                       # rectangle
        return 0.5 * (x1 + x2), dx * y1
    if y1 == 0.0:                      # rising triangle
        return x1 + (2.0 / 3.0) * dx, 0.5 * dx * y2
    if y2 == 0.0:                      # falling triangle
        return x1 + (1.0 / 3.0) * dx, 0.5 * dx * y1
    # trapezoid
    return ((2.0 / 3.0) * dx * (y2 + 0.5 * y1)) / (y1 + y2) + x1, 0.5 * dx * (y1 + y2)


def _polygon_area(x1: Float, y1: Float, x2: Float, y2: Float) -> Float:
    if y1 == y2:
        return (x2 - x1) * y1
    return 0.5 * (x2 - x1) * (y1 + y2)


def _x_at_area(area: Float, x1: Float, y1: Float, x2: Float, y2: Float) -> Float:
    """x inside the shape [x1, x2] where the area from x1 reaches `area`."""
    if y1 == y2:
        return x1 if y1 == 0.0 else x1 + area / y1
    dx = x2 - x1
    if y1 == 0.0:
        return x1 + math.sqrt(2.0 * area * dx / y2)
    if y2 == 0.0:
        return x2 - math.sqrt(max(0.0, dx * dx - 2.0 * area * dx / y1))
    m = (y2 - y1) / dx
    return x1 - (y1 - math.sqrt(max(0.0, y1 * y1 + 2.0 * m * area))) / m


def _shapes(pts: List[Tuple[Float, Float]], x_min: Float, x_max: Float) -> List[Tuple[Float, Float, Float, Float]]:
    """Segments between consecutive points plus the open-end rectangles."""
    out = []
    x0, y0 = pts[0]
    if y0 != 0.0 and x0 != x_min:
        out.append((x_min, y0, x0, y0))
    for (xa, ya), (xb, yb) in zip(pts, pts[1:]):
        out.append((xa, ya, xb, yb))
    xn, yn = pts[-1]
    if yn != 0.0 and xn < x_max:
        out.append((xn, yn, x_max, yn))
    return out


# ---------- partial sums (also used to aggregate several values) ----------

def moment_sums(fs, x_min: Float, x_max: Float) -> Tuple[Float, Float]:
    """(sum of moment*area, sum of area)."""
    if x_min >= x_max:
        raise XValuesOutOfOrderError(x_min, x_max)
    if fs.is_empty():
        return 0.0, 0.0
    fs = _confined(fs, x_min, x_max)
    pts = _coords(fs)
    if len(pts) == 1:
        y = pts[0][1]
        if y == 0.0:
            raise InvalidDefuzzifyError("the area of the fuzzy set is 0")
        area = (x_max - x_min) * y
        return 0.5 * (x_max + x_min) * area, area
    top = bottom = 0.0
    for shape in _shapes(pts, x_min, x_max):
        m, a = _moment_and_area(*shape)
        top += m * a
        bottom += a
    return top, bottom


def max_sums(fs, x_min: Float, x_max: Float) -> Tuple[Float, Float, int]:
    """(max y, sum of x at the maxima, number of those x)."""
    if x_min >= x_max:
        raise XValuesOutOfOrderError(x_min, x_max)
    if fs.is_empty():
        return 0.0, 0.0, 0
    fs = _confined(fs, x_min, x_max)
    pts = _coords(fs)
    top = max(0.0, max(y for _, y in pts))
    if top == 0.0 or len(pts) == 1:
        return top, x_max + x_min, 2
    total, count = 0.0, 0
    if pts[0][1] == top:
        total += x_min
        count += 1
        if pts[0][0] != x_min and pts[1][1] != top:
            total += pts[0][0]
            count += 1
    for i in range(1, len(pts) - 1):
        if pts[i][1] == top and (pts[i - 1][1] != top or pts[i + 1][1] != top):
            total += pts[i][0]
            count += 1
    if pts[-1][1] == top:
        if pts[-1][0] != x_max and pts[-2][1] != top:
            total += pts[-1][0]
            count += 1
        total += x_max
        count += 1
    return top, total, count


def weight_sums(fs, x_min: Float, x_max: Float) -> Tuple[Float, Float]:
    """(sum of y*x, sum of y) over points with positive membership."""
    if x_min >= x_max:
        raise XValuesOutOfOrderError(x_min, x_max)
    if fs.is_empty():
        raise InvalidDefuzzifyError("the fuzzy set has no points")
    fs = _confined(fs, x_min, x_max)
    wx = w = 0.0
    for x, y in _coords(fs):
        if y > 0.0:
            w += y
            wx += y * x
    return wx, w


# ---------- defuzzifiers ----------

def moment(fs, x_min: Float, x_max: Float) -> Float:
    """Centre of gravity."""
    if fs.is_empty():
        raise InvalidDefuzzifyError("the fuzzy set has no points")
    top, bottom = moment_sums(fs, x_min, x_max)
    if bottom == 0.0:
        raise InvalidDefuzzifyError("the area of the fuzzy set is 0")
    return top / bottom


def weighted_average(fs, x_min: Float, x_max: Float) -> Float:
    wx, w = weight_sums(fs, x_min, x_max)
    if w == 0.0:
        raise InvalidDefuzzifyError("the fuzzy set has no points with membership > 0")
    return wx / w


def mean_of_maxima(fs, x_min: Float, x_max: Float) -> Float:
    _, total, count = max_sums(fs, x_min, x_max)
    if count == 0:
        raise InvalidDefuzzifyError("the fuzzy set has no points")
    return total / count


def area(fs, x_min: Float, x_max: Float) -> Float:
    if fs.is_empty():
        return 0.0
    fs = _confined(fs, x_min, x_max)
    pts = _coords(fs)
    if len(pts) == 1:
        return (x_max - x_min) * pts[0][1]
    return sum(_polygon_area(*s) for s in _shapes(pts, x_min, x_max))


def center_of_area(fs, x_min: Float, x_max: Float) -> Float:
    """x splitting the area in two equal halves."""
    if fs.is_empty():
        raise InvalidDefuzzifyError("the fuzzy set has no points")
    fs = _confined(fs, x_min, x_max)
    pts = _coords(fs)
    if len(pts) == 1:
        if pts[0][1] == 0.0:
            raise InvalidDefuzzifyError("the area of the fuzzy set is 0")
        return 0.5 * (x_min + x_max)

    shapes = _shapes(pts, x_min, x_max)
    areas = [_polygon_area(*s) for s in shapes]
    total = sum(areas)
    if total == 0.0:
        raise InvalidDefuzzifyError("the area of the fuzzy set is 0")
    half = 0.5 * total
    tol = FUZZY_TOLERANCE * max(1.0, total)

    acc = 0.0
    for i, (shape, a) in enumerate(zip(shapes, areas)):
        before = acc
        acc += a
        if abs(acc - half) <= tol:
            # half falls exactly at the end of this shape; skip any zero-area gap
            start = shape[2]
            for nxt, na in zip(shapes[i + 1:], areas[i + 1:]):
                if na != 0.0:
                    return 0.5 * (start + nxt[0])
            return start
        if acc > half:
            return _x_at_area(half - before, *shape)
    raise InvalidDefuzzifyError("could not locate the centre of area")


# ---------- alpha cuts ----------

def alpha_cut(fs, cut_type: bool, level: Float, min_x: Float, max_x: Float) -> IntervalVector:
    """x-ranges with membership >= level (WEAK) or > level (STRONG)."""
    result = IntervalVector()
    if fs.is_empty():
        return result
    if cut_type not in (WEAK, STRONG):
        cut_type = WEAK
    if min_x > max_x:
        min_x, max_x = max_x, min_x
    fs.simplify()
    pts = _coords(fs)
    weak = cut_type == WEAK

    def above(y: Float) -> bool:
        return y >= level if weak else y > level

    if weak and level == 0.0:
        result.add(Interval(min_x, False, max_x, False))
        return result
    if len(pts) == 1:
        if above(pts[0][1]):
            result.add(Interval(min_x, False, max_x, False))
        return result

    cuts: List[Tuple[Float, bool]] = []   # (x, open)
    if above(pts[0][1]):
        cuts.append((min_x, False))
    for (x1, y1), (x2, y2) in zip(pts, pts[1:]):
        if not ((y1 <= level <= y2) or (y1 >= level >= y2)):
            continue
        sloped = x1 != x2
        if not weak:
            if y1 > level == y2:
                cuts.append((x2, sloped))
            if y1 == level < y2:
                cuts.append((x1, sloped))
        else:
            if y1 == level > y2:
                cuts.append((x1, False))
            if y1 < level == y2:
                cuts.append((x2, False))
        if (y1 < level < y2) or (y1 > level > y2):
            x = x1 + ((level - y1) * (x2 - x1)) / (y2 - y1)
            cuts.append((x, sloped and not weak))
    if above(pts[-1][1]):
        cuts.append((max_x, False))

    # pair up, merging intervals that touch at a closed point, then clip
    z = 0
    while z + 1 < len(cuts):
        beg = z
        while (z + 2 < len(cuts) and cuts[z + 1][0] == cuts[z + 2][0]
               and not cuts[z + 1][1] and not cuts[z + 2][1]):
            z += 2
        end = z + 1
        z += 2
        (lo, lo_open), (hi, hi_open) = cuts[beg], cuts[end]
        if lo > max_x or hi < min_x:
            continue
        if lo < min_x:
            lo, lo_open = min_x, False
        if hi > max_x:
            hi, hi_open = max_x, False
        if lo > hi or (lo == hi and (lo_open or hi_open)):
            continue
        result.add(Interval(lo, lo_open, hi, hi_open))
    return result
