"""
Piecewise-linear fuzzy set.

Points are kept in non-decreasing x order. Membership left of the first point
is the first y, right of the last point the last y, linear in between; on a
vertical run (several points with one x) the highest y wins.
"""

from __future__ import annotations
import math
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .types import (
    Float, FUZZY_TOLERANCE, STRONG, DELTA_X, NUMBER_OF_POINTS, ExpandControl,
    XValuesOutOfOrderError, YValueOutOfRangeError, EmptyFuzzySetError,
    NoXValueForMembershipError,
)
from .point import SetPoint, IntervalVector
from . import sweep, defuzz

PointLike = Union[SetPoint, Tuple[Float, Float]]


class FuzzySet:
    def __init__(self, xs: Union[FuzzySet, Sequence[Float], None] = None,
                 ys: Optional[Sequence[Float]] = None) -> None:
        self._pts: List[SetPoint] = []
        self.simplified = True
        if isinstance(xs, FuzzySet):
            self._pts = [p.copy() for p in xs._pts]
            self.simplified = xs.simplified
            self.simplify()
        elif xs is not None:
            if ys is None or len(xs) != len(ys):
                raise ValueError("x and y sequences must have the same length")
            self._load([SetPoint(float(x), float(y)) for x, y in zip(xs, ys)])

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> FuzzySet:
        fs = cls()
        pts = []
        for p in points:
            if isinstance(p, SetPoint):
                pts.append(p.copy())
            else:
                x, y = p
                pts.append(SetPoint(float(x), float(y)))
        fs._load(pts)
        return fs

    def _load(self, pts: List[SetPoint]) -> None:
        for i in range(len(pts) - 1):
            if pts[i].x > pts[i + 1].x:
                raise XValuesOutOfOrderError(pts[i].x, pts[i + 1].x)
        for p in pts:
            if p.y < 0.0 or p.y > 1.0 + FUZZY_TOLERANCE:
                raise YValueOutOfRangeError(p.y)
        self._pts = pts
        self.simplified = False
        self.simplify()

    # ---------- access ----------

    @property
    def num_points(self) -> int:
        return len(self._pts)

    def __len__(self) -> int:
        return len(self._pts)

    def is_empty(self) -> bool:
        return not self._pts

    def x(self, i: int) -> Float:
        return self._pts[i].x

    def y(self, i: int) -> Float:
        return self._pts[i].y

    def point(self, i: int) -> SetPoint:
        return self._pts[i].copy()

    def points(self) -> List[SetPoint]:
        return [p.copy() for p in self._pts]

    def __iter__(self) -> Iterator[SetPoint]:
        return iter(self.points())

    def copy(self) -> FuzzySet:
        return FuzzySet(self)

    def __eq__(self, other: object) -> bool:
        # both sides are expected to be simplified
        if not isinstance(other, FuzzySet):
            return NotImplemented
        if len(self._pts) != len(other._pts):
            return False
        return all(a == b for a, b in zip(self._pts, other._pts))

    __hash__ = None

    def __str__(self) -> str:
        body = " ".join(f"{p.y:.4f}".rstrip("0").rstrip(".") + "/" +
                        f"{p.x:.4f}".rstrip("0").rstrip(".") for p in self._pts)
        return "{ " + body + (" }" if body else "}")

    def __repr__(self) -> str:
        return f"FuzzySet({[(p.x, p.y) for p in self._pts]!r})"

    # ---------- mutation ----------

    def insert_point(self, x: Float, y: Float) -> None:
        """Insert after every point whose x is <= the new x."""
        y = max(0.0, y)
        i = 0
        while i < len(self._pts) and self._pts[i].x <= x:
            i += 1
        self._pts.insert(i, SetPoint(x, y))
        self.simplified = False

    def append_point(self, x: Float, y: Float) -> None:
        y = max(0.0, y)
        if not self._pts or self._pts[-1].x <= x:
            self._pts.append(SetPoint(x, y))
        else:
            i = len(self._pts) - 2
            while i >= 0 and self._pts[i].x > x:
                i -= 1
            self._pts.insert(i + 1, SetPoint(x, y))
        self.simplified = False

    def remove_point(self, x: Float, y: Float) -> bool:
        target = SetPoint(x, y)
        for i, p in enumerate(self._pts):
            if p == target:
                del self._pts[i]
                self.simplified = False
                return True
        return False

    def simplify(self) -> None:
        if self.simplified:
            return
        pts = self._pts
        # duplicates
        i = 0
        while i < len(pts) - 1:
            if pts[i] == pts[i + 1]:
                del pts[i + 1]
            else:
                i += 1
        # middle of three vertical points going one way
        i = 0
        while i < len(pts) - 2:
            a, b, c = pts[i], pts[i + 1], pts[i + 2]
            if (a.in_vertical_alignment(b) and b.in_vertical_alignment(c) and
                    ((a.y < b.y < c.y) or (a.y > b.y > c.y))):
                del pts[i + 1]
            else:
                i += 1
        # middle of three horizontal points
        i = 0
        while i < len(pts) - 2:
            if pts[i].in_horizontal_alignment(pts[i + 1]) and pts[i + 1].in_horizontal_alignment(pts[i + 2]):
                del pts[i + 1]
            else:
                i += 1
        # flat open ends
        while len(pts) > 1 and pts[0].in_horizontal_alignment(pts[1]):
            del pts[0]
        while len(pts) > 1 and pts[-1].in_horizontal_alignment(pts[-2]):
            del pts[-1]
        self.simplified = True

    # ---------- queries ----------

    def get_membership(self, x: Float) -> Float:
        pts = self._pts
        if not pts:
            raise EmptyFuzzySetError("membership of an empty fuzzy set")
        if pts[0].x > x:
            return pts[0].y
        if pts[-1].x < x:
            return pts[-1].y
        i = 0
        while pts[i].x < x:
            i += 1
        if pts[i].x == x:
            best = pts[i].y
            i += 1
            while i < len(pts) and pts[i].x == x:
                best = max(best, pts[i].y)
                i += 1
            return best
        lo, hi = pts[i - 1], pts[i]
        return lo.y + (x - lo.x) * ((hi.y - lo.y) / (hi.x - lo.x))

    def get_x_for_membership(self, m: Float) -> Float:
        self.simplify()
        pts = self._pts
        if len(pts) == 1:
            if pts[0].y == m:
                return pts[0].x
            raise NoXValueForMembershipError(f"no x with membership {m}")
        i = 1
        while i < len(pts):
            if pts[i - 1].y == m:
                return pts[i - 1].x
            if pts[i].y == m:
                return pts[i].x
            if (pts[i - 1].y < m < pts[i].y) or (pts[i - 1].y > m > pts[i].y):
                break
            i += 1
        if i >= len(pts):
            raise NoXValueForMembershipError(f"no x with membership {m}")
        lo, hi = pts[i - 1], pts[i]
        return lo.x + (m - lo.y) * ((hi.x - lo.x) / (hi.y - lo.y))

    def max_y(self) -> Float:
        return max([0.0] + [p.y for p in self._pts])

    def min_y(self) -> Float:
        return min(p.y for p in self._pts) if self._pts else 0.0

    def is_normal(self) -> bool:
        found = False
        for p in self._pts:
            if p.y > 1.0:
                return False
            if p.y == 1.0:
                found = True
        return found

    def is_convex(self) -> bool:
        """No rise after a fall (flat steps ignored)."""
        if not self._pts:
            return True
        falling = False
        prev_y = self._pts[0].y
        prev_diff = 0.0
        for p in self._pts:
            diff = p.y - prev_y
            same_sign = (prev_diff >= 0.0 and diff >= 0.0) or (prev_diff <= 0.0 and diff <= 0.0)
            if not same_sign and falling:
                return False
            if diff != 0:
                prev_diff = diff
            prev_y = p.y
            if prev_diff < 0:
                falling = True
        return True

    # ---------- unary ops ----------

    def _mapped(self, fn) -> FuzzySet:
        out = FuzzySet()
        out._pts = [SetPoint(p.x, fn(p.y)) for p in self._pts]
        out.simplified = False
        out.simplify()
        return out

    def complement(self) -> FuzzySet:
        return self._mapped(lambda y: 1.0 - min(1.0, max(0.0, y)))

    def normalize(self) -> FuzzySet:
        top = self.max_y()
        if top <= 0.0:
            return self.copy()
        return self._mapped(lambda y: y / top)

    def scale(self, target: Float) -> FuzzySet:
        """Shrink so the highest membership equals target; never scales up."""
        if not self._pts:
            return FuzzySet()
        target = min(target, 1.0)
        if target <= 0.0:
            out = FuzzySet()
            out._pts = [SetPoint(self._pts[0].x, 0.0)]
            return out
        top = self.max_y()
        if top <= target:
            return self.copy()
        k = target / top
        return self._mapped(lambda y: k * y)

    def confine_to_x_bounds(self, lo: Float, hi: Float) -> None:
        """Restrict this set (in place) to exactly [lo, hi]."""
        if lo > hi:
            raise XValuesOutOfOrderError(lo, hi)
        pts = self._pts
        if not pts:
            return
        if pts[0].x >= lo and pts[-1].x <= hi:
            return
        first, last = pts[0], pts[-1]
        if last.x < lo or first.x > hi:
            # entirely outside: flat rectangle at the nearest end's height
            self._pts = []
            self.insert_point(lo, 0.0)
            y = first.y if first.x > hi else last.y
            if y > 0.0:
                self.append_point(lo, y)
                self.append_point(hi, y)
                self.append_point(hi, 0.0)
            self.simplified = True
            return

        low_y = self.get_membership(lo)
        while self._pts[0].x < lo:
            del self._pts[0]
        if self._pts[0].y != 0.0:
            if self._pts[0].x != lo:
                if low_y != 0.0:
                    self.insert_point(lo, 0.0)
                self.insert_point(lo, low_y)
            else:
                self._pts.insert(0, SetPoint(lo, 0.0))

        high_y = self.get_membership(hi)
        while self._pts[-1].x > hi:
            del self._pts[-1]
        tail = self._pts[-1]
        if tail.y != 0.0:
            if tail.x != hi:
                self.append_point(hi, high_y)
                if high_y > 0.0:
                    self.append_point(hi, 0.0)
            else:
                self.append_point(hi, 0.0)
        self.simplified = False
        self.simplify()

    def _horizontal(self, y: Float, op: str) -> FuzzySet:
        y = max(0.0, y)
        if op == sweep.UNION and y == 0.0:
            return self.copy()
        out = FuzzySet()
        if not self._pts:
            return out
        prev = cur = self._pts[0]
        for p in self._pts:
            prev, cur = cur, p
            if (prev.y < y < cur.y) or (prev.y > y > cur.y):
                x = prev.x + ((cur.x - prev.x) * (y - prev.y)) / (cur.y - prev.y)
                out.append_point(x, y)
            if (op == sweep.INTERSECTION and cur.y <= y) or (op == sweep.UNION and cur.y >= y):
                out.append_point(cur.x, cur.y)
        if not out._pts:
            out.insert_point(self._pts[0].x, y)
        out.simplify()
        return out

    def horizontal_intersection(self, y: Float) -> FuzzySet:
        """Clip membership at y."""
        return self._horizontal(y, sweep.INTERSECTION)

    def horizontal_union(self, y: Float) -> FuzzySet:
        return self._horizontal(y, sweep.UNION)

    # ---------- binary ops ----------

    def union(self, other: FuzzySet) -> FuzzySet:
        return sweep.combine(self, other, sweep.UNION)

    def intersection(self, other: FuzzySet) -> FuzzySet:
        return sweep.combine(self, other, sweep.INTERSECTION)

    def sum(self, other: FuzzySet) -> FuzzySet:
        return sweep.combine(self, other, sweep.SUM)

    def maximum_of_intersection(self, other: FuzzySet) -> Float:
        return sweep.combine(self, other, sweep.MAXMIN)

    def no_intersection_test(self, other: FuzzySet) -> bool:
        return sweep.no_intersection_test(self, other)

    def non_intersection_test(self, other: FuzzySet) -> bool:
        """True when the supports of both sets do not overlap."""
        a = self.support(-math.inf, math.inf)
        b = other.support(-math.inf, math.inf)
        for ia in a:
            for ib in b:
                if ia.low > ib.high or ia.high < ib.low:
                    continue
                if ia.low == ib.high:
                    if not ia.low_open and not ib.high_open:
                        return False
                elif ia.high == ib.low:
                    if not ia.high_open and not ib.low_open:
                        return False
                else:
                    return False
        return True

    # ---------- alpha cuts / defuzzification ----------

    def alpha_cut(self, cut_type: bool, level: Float, min_x: Float, max_x: Float) -> IntervalVector:
        return defuzz.alpha_cut(self, cut_type, level, min_x, max_x)

    def support(self, min_x: Float, max_x: Float) -> IntervalVector:
        return defuzz.alpha_cut(self, STRONG, 0.0, min_x, max_x)

    def moment_defuzzify(self, x_min: Float, x_max: Float) -> Float:
        return defuzz.moment(self, x_min, x_max)

    def center_of_area_defuzzify(self, x_min: Float, x_max: Float) -> Float:
        return defuzz.center_of_area(self, x_min, x_max)

    def weighted_average_defuzzify(self, x_min: Float, x_max: Float) -> Float:
        return defuzz.weighted_average(self, x_min, x_max)

    def maximum_defuzzify(self, x_min: Float, x_max: Float) -> Float:
        return defuzz.mean_of_maxima(self, x_min, x_max)

    def area(self, x_min: Optional[Float] = None, x_max: Optional[Float] = None) -> Float:
        if not self._pts:
            return 0.0
        if x_min is None:
            x_min = self._pts[0].x
        if x_max is None:
            x_max = self._pts[-1].x
        if x_min == x_max:
            return 0.0
        return defuzz.area(self, x_min, x_max)

    # ---------- hedge primitives ----------

    def expand_set(self, control: Optional[ExpandControl] = None) -> FuzzySet:
        """Subdivide sloped segments so a pointwise y transform keeps its shape."""
        ctl = control or ExpandControl()
        pts = self._pts
        out = FuzzySet()
        if len(pts) <= 1:
            out._pts = [p.copy() for p in pts]
            return out
        width = pts[-1].x - pts[0].x
        for a, b in zip(pts, pts[1:]):
            divs = 0.0
            if a.x != b.x and a.y != b.y:
                if ctl.mode == DELTA_X:
                    divs = abs((b.x - a.x) / ctl.delta_x)
                elif ctl.mode == NUMBER_OF_POINTS:
                    divs = ((b.x - a.x) * ctl.num_points) / width
                else:
                    divs = abs((b.y - a.y) / ctl.delta_y)
                divs = math.ceil(divs - FUZZY_TOLERANCE)
            out.append_point(a.x, a.y)
            if divs > 1:
                dx = (b.x - a.x) / divs
                dy = (b.y - a.y) / divs
                for k in range(1, int(divs)):
                    out.append_point(a.x + k * dx, a.y + k * dy)
        out.append_point(pts[-1].x, pts[-1].y)
        out.simplify()
        return out

    def concentrate_dilute(self, power: Float, control: Optional[ExpandControl] = None) -> FuzzySet:
        return self.expand_set(control)._mapped(lambda y: y ** power)
