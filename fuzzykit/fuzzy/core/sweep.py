"""
Union / intersection / sum / max-of-intersection of two fuzzy sets.

One left-to-right sweep over both point sequences. Each operand gets a fresh
cursor (previous and current point of its active segment) per call, so the
sets themselves carry no sweep state. At every step the two active segments
fall into one of six cases:

  1. same start, same end x
  2. same start, different end x
  3. different start, same end point
  4. different start and end, the segments cross
  5. no crossing, same end x (collinear vertical overlap handled here)
  6. no crossing, different end x: the segment that ends first advances

and each case emits at most one point for the requested operation.
"""

from __future__ import annotations
import logging
import math
from typing import Optional, Tuple

from .types import Float, EmptyFuzzySetError
from .point import SetPoint

log = logging.getLogger(__name__)

UNION = "union"
INTERSECTION = "intersection"
SUM = "sum"
MAXMIN = "maxmin"

OPERATIONS = (UNION, INTERSECTION, SUM, MAXMIN)

_DET_EPS = 1e-12


class _Cursor:
    __slots__ = ("pts", "prev", "cur", "max_x", "index")

    def __init__(self, fs, other) -> None:
        pts = fs._pts
        first, last = other._pts[0], other._pts[-1]
        self.pts = pts
        # both cursors start at the same x
        if pts[0].x <= first.x:
            self.prev = SetPoint(pts[0].x, pts[0].y)
            self.index = 1
        else:
            self.prev = SetPoint(first.x, pts[0].y)
            self.index = 0
        self.cur = pts[self.index].copy()
        self.max_x = max(pts[-1].x, last.x)

    def at_end(self) -> bool:
        return self.index >= len(self.pts)

    def advance(self) -> None:
        self.index += 1
        self.prev = self.cur
        if self.index < len(self.pts):
            self.cur = self.pts[self.index]
        else:
            # past the last point: open-ended flat segment
            self.cur = SetPoint(self.max_x, self.cur.y)

    def slope(self) -> Float:
        if self.prev.x == self.cur.x:
            return math.inf if self.cur.y > self.prev.y else -math.inf
        return (self.cur.y - self.prev.y) / (self.cur.x - self.prev.x)


def _line_y(slope: Float, base: SetPoint, x: Float) -> Float:
    if math.isinf(slope):
        return base.y
    return slope * (x - base.x) + base.y


def _ratio(dy: Float, dx: Float) -> Float:
    if dx != 0.0:
        return dy / dx
    if dy > 0.0:
        return math.inf
    if dy < 0.0:
        return -math.inf
    return math.nan


def _pick(a: SetPoint, b: SetPoint, op: str) -> SetPoint:
    """Higher of two points for union, lower otherwise (ties go to a for the lower)."""
    if b.y > a.y:
        return b if op == UNION else a
    return a if op == UNION else b


def _segment_intersection(a: _Cursor, b: _Cursor) -> Tuple[Optional[SetPoint], bool]:
    """Crossing point of the two active segments, plus a collinear flag when there is none."""
    a_rise = a.cur.y - a.prev.y
    a_run = a.cur.x - a.prev.x
    b_rise = b.cur.y - b.prev.y
    b_run = b.cur.x - b.prev.x
    ab_rise = a.prev.y - b.prev.y
    ab_run = a.prev.x - b.prev.x

    den = a_run * b_rise - a_rise * b_run
    num1 = ab_rise * b_run - ab_run * b_rise
    if abs(den) < _DET_EPS:
        return None, abs(num1) < _DET_EPS
    r = num1 / den
    if r < 0.0 or r > 1.0:
        return None, False
    num2 = ab_rise * a_run - ab_run * a_rise
    s = num2 / den
    if s < 0.0 or s > 1.0:
        return None, False

    if a_run == 0.0:
        x = a.prev.x
    elif b_run == 0.0:
        x = b.prev.x
    else:
        x = a.prev.x + r * a_run
    if b.prev.y == b.cur.y:
        y = b.prev.y
    elif a.cur.y == a.prev.y:
        y = a.prev.y
    else:
        y = a.prev.y + r * a_rise
    return SetPoint(x, y), False


def _max_y_overlap(a: SetPoint, b: SetPoint, c: SetPoint, d: SetPoint) -> Float:
    """Top of the y-overlap of two opposite vertical segments, or -1."""
    if (a.y < b.y and c.y < d.y) or (a.y > b.y and c.y > d.y):
        return -1.0
    max_ab, min_ab = max(a.y, b.y), min(a.y, b.y)
    max_cd, min_cd = max(c.y, d.y), min(c.y, d.y)
    if max_ab < min_cd or max_cd < min_ab:
        return -1.0
    return min(max_ab, max_cd)


# ---------- the six cases ----------

def _type1(a: _Cursor, b: _Cursor, op: str) -> SetPoint:
    if op == SUM:
        p = SetPoint(a.cur.x, a.cur.y + b.cur.y)
    else:
        p = _pick(a.cur, b.cur, op)
    if not a.at_end():
        a.advance()
    if not b.at_end():
        b.advance()
    return p


def _type2(a: _Cursor, b: _Cursor, op: str) -> Optional[SetPoint]:
    sa, sb = a.slope(), b.slope()
    lower = op in (INTERSECTION, MAXMIN)
    if a.cur.x < b.cur.x:
        first, other, s_first, s_other = a, b, sa, sb
    else:
        first, other, s_first, s_other = b, a, sb, sa

    if op == SUM:
        p = SetPoint(first.cur.x, first.cur.y + _line_y(s_other, a.prev, first.cur.x))
    elif (s_first <= s_other and lower) or (s_first >= s_other and op == UNION):
        p = first.cur
    else:
        p = None
    if sa == sb:
        other.prev = first.cur
    first.advance()
    return p


def _type3(a: _Cursor, b: _Cursor, op: str) -> SetPoint:
    p = SetPoint(a.cur.x, 2.0 * a.cur.y) if op == SUM else a.cur
    a.advance()
    b.advance()
    return p


def _type4(a: _Cursor, b: _Cursor, ip: SetPoint, op: str) -> SetPoint:
    a.prev = ip
    b.prev = ip
    p = SetPoint(ip.x, 2.0 * ip.y) if op == SUM else ip
    if a.cur.x == ip.x and a.cur.y == ip.y:
        a.advance()
    if b.cur.x == ip.x and b.cur.y == ip.y:
        b.advance()
    return p


def _type5(a: _Cursor, b: _Cursor, op: str) -> SetPoint:
    if op == SUM:
        p = SetPoint(a.cur.x, a.cur.y + b.cur.y)
    elif a.cur.y > b.cur.y:
        p = a.cur if op == UNION else b.cur
    else:
        p = b.cur if op == UNION else a.cur
    a.advance()
    b.advance()
    return p


def _type6(a: _Cursor, b: _Cursor, op: str) -> Optional[SetPoint]:
    """Segment of a ends before the one of b."""
    sb = b.slope()
    if op == SUM:
        p = SetPoint(a.cur.x, a.cur.y + _line_y(sb, b.prev, a.cur.x))
    else:
        s_ab = _ratio(a.cur.y - b.prev.y, a.cur.x - b.prev.x)
        if (s_ab <= sb and op in (INTERSECTION, MAXMIN)) or (s_ab >= sb and op == UNION):
            p = a.cur
        else:
            p = None
        if s_ab == sb:
            b.prev = a.cur
    a.advance()
    return p


# ---------- helpers on whole sets ----------

def _ends_below(a, b) -> bool:
    pa, pb = a._pts, b._pts
    return pa[-1].x < pb[0].x and pa[-1].y == 0 and pb[0].y == 0


def no_intersection_test(a, b) -> bool:
    """Cheap conservative test; True means the sets surely do not overlap."""
    if len(a) > 1 and len(b) > 1 and (_ends_below(a, b) or _ends_below(b, a)):
        return True
    if all(p.y <= 0 for p in a._pts):
        return True
    return all(p.y <= 0 for p in b._pts)


def concat(a, b):
    out = type(a)()
    first, second = (a, b) if a._pts[0].x < b._pts[0].x else (b, a)
    for p in first._pts + second._pts:
        out.append_point(p.x, p.y)
    out.simplify()
    return out


def _single(cls, x: Float, y: Float):
    out = cls()
    out.append_point(x, y)
    out.simplified = True
    return out


def combine(sa, sb, op: str):
    """Apply op to two fuzzy sets; MAXMIN returns a float, the rest a new set."""
    if op not in OPERATIONS:
        raise ValueError(f"unknown set operation: {op}")
    cls = type(sa)
    if sa.is_empty() or sb.is_empty():
        raise EmptyFuzzySetError(f"{op} of an empty fuzzy set")

    if sa is sb:
        log.debug("%s: identical operands", op)
        if op == MAXMIN:
            return sa.max_y()
        if op == SUM:
            out = cls()
            for p in sa._pts:
                out.append_point(p.x, 2.0 * p.y)
            out.simplify()
            return out
        return sa.copy()

    pa, pb = sa._pts, sb._pts
    if len(pa) == 1 and len(pb) == 1:
        log.debug("%s: two flat sets", op)
        if op == MAXMIN:
            return min(pa[0].y, pb[0].y)
        if op == SUM:
            return _single(cls, pa[0].x, pa[0].y + pb[0].y)
        if pa[0].y < pb[0].y:
            return sb.copy() if op == UNION else sa.copy()
        return sa.copy() if op == UNION else sb.copy()

    if len(pa) == 1 or len(pb) == 1:
        flat, multi = (sa, sb) if len(pa) == 1 else (sb, sa)
        level = flat._pts[0].y
        log.debug("%s: one flat set at y=%s", op, level)
        if op == MAXMIN:
            return min(multi.max_y(), level)
        if op == SUM:
            out = cls()
            for p in multi._pts:
                out.append_point(p.x, p.y + level)
            out.simplify()
            return out
        if op == UNION:
            return multi.horizontal_union(level)
        return multi.horizontal_intersection(level)

    if no_intersection_test(sa, sb):
        log.debug("%s: operands do not overlap", op)
        if op == MAXMIN:
            return 0.0
        if op in (UNION, SUM):
            return concat(sa, sb)
        return _single(cls, pa[0].x, 0.0)

    result = cls()
    best = 0.0
    a = _Cursor(sa, sb)
    b = _Cursor(sb, sa)

    if op == MAXMIN:
        best = min(a.prev.y, b.prev.y)
    elif op == SUM:
        result.insert_point(a.prev.x, a.prev.y + b.prev.y)
    else:
        p = _pick(a.prev, b.prev, op)
        result.insert_point(p.x, p.y)

    def emit(p: Optional[SetPoint], insert: bool = False) -> None:
        nonlocal best
        if p is None:
            return
        if op == MAXMIN:
            best = max(best, p.y)
        elif insert:
            result.insert_point(p.x, p.y)
        else:
            result.append_point(p.x, p.y)

    while not (a.at_end() and b.at_end()):
        if a.prev == b.prev:
            if a.cur.x == b.cur.x:
                emit(_type1(a, b, op))
            else:
                emit(_type2(a, b, op))
        elif a.cur == b.cur:
            emit(_type3(a, b, op))
        else:
            ip, collinear = _segment_intersection(a, b)
            if ip is not None:
                emit(_type4(a, b, ip, op))
            elif a.cur.x == b.cur.x:
                if collinear and op != UNION:
                    overlap = _max_y_overlap(a.prev, a.cur, b.prev, b.cur)
                    if overlap > 0.0:
                        if op == MAXMIN:
                            best = max(best, overlap)
                        elif op == INTERSECTION:
                            result.append_point(a.cur.x, overlap)
                        else:
                            result.append_point(a.cur.x, max(a.cur.y, a.prev.y) + max(b.cur.y, b.prev.y))
                emit(_type5(a, b, op), insert=True)
            elif a.cur.x < b.cur.x:
                emit(_type6(a, b, op))
            else:
                emit(_type6(b, a, op))

    if op == MAXMIN:
        return best

    if op == SUM:
        result.append_point(max(a.cur.x, b.cur.x), a.cur.y + b.cur.y)
    else:
        # open-ended tails: compare the last y of both operands
        if a.cur.y < b.cur.y:
            p = b.cur if op == UNION else a.cur
        else:
            p = a.cur if op == UNION else b.cur
        result.append_point(p.x, p.y)
    result.simplify()
    return result
