from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple
from .types import Float, XValuesOutOfOrderError
from .fuzzyset import FuzzySet


def _ordered(*xs: Float) -> None:
    for a, b in zip(xs, xs[1:]):
        if a > b:
            raise XValuesOutOfOrderError(a, b, f"shape parameters must be ascending: {xs}")


def _sampled(left: Float, right: Float, n: int, f: Callable[[Float], Float]) -> List[Tuple[Float, Float]]:
    """n points of f over [left, right], u = 0..1."""
    n = max(2, int(n))
    if left == right:
        return [(left, f(0.0)), (right, f(1.0))]
    step = (right - left) / (n - 1)
    return [(left + i * step, f(i / (n - 1))) for i in range(n)]


def _s_curve(u: Float) -> Float:
    if u <= 0.5:
        return 2.0 * u * u
    return 1.0 - 2.0 * (1.0 - u) ** 2


class MembershipFunction:
    def points(self) -> List[Tuple[Float, Float]]:
        raise NotImplementedError

    def to_set(self) -> FuzzySet:
        return FuzzySet.from_points(self.points())

    def mu(self, x: Float) -> Float:
        return self.to_set().get_membership(x)

    def support(self) -> tuple[Float, Float]:
        pts = self.points()
        return (pts[0][0], pts[-1][0])


@dataclass(frozen=True)
class Trapezoid(MembershipFunction):
    a: Float; b: Float; c: Float; d: Float
    def points(self):
        _ordered(self.a, self.b, self.c, self.d)
        return [(self.a, 0.0), (self.b, 1.0), (self.c, 1.0), (self.d, 0.0)]


@dataclass(frozen=True)
class Triangle(MembershipFunction):
    a: Float; b: Float; c: Float
    def points(self):
        return Trapezoid(self.a, self.b, self.b, self.c).points()

    @classmethod
    def centered(cls, middle: Float, base_width: Float) -> Triangle:
        return cls(middle - base_width / 2, middle, middle + base_width / 2)


@dataclass(frozen=True)
class Rectangle(MembershipFunction):
    left: Float; right: Float
    def points(self):
        return Trapezoid(self.left, self.left, self.right, self.right).points()


@dataclass(frozen=True)
class Singleton(MembershipFunction):
    x: Float
    def points(self):
        return Trapezoid(self.x, self.x, self.x, self.x).points()


@dataclass(frozen=True)
class LeftLinear(MembershipFunction):
    """0 at left rising to 1 at right."""
    left: Float; right: Float
    def points(self):
        _ordered(self.left, self.right)
        return [(self.left, 0.0), (self.right, 1.0)]


@dataclass(frozen=True)
class RightLinear(MembershipFunction):
    """1 at left falling to 0 at right."""
    left: Float; right: Float
    def points(self):
        _ordered(self.left, self.right)
        return [(self.left, 1.0), (self.right, 0.0)]


@dataclass(frozen=True)
class SShape(MembershipFunction):
    left: Float; right: Float; n: int = 5
    def points(self):
        _ordered(self.left, self.right)
        return _sampled(self.left, self.right, self.n, _s_curve)


@dataclass(frozen=True)
class ZShape(MembershipFunction):
    left: Float; right: Float; n: int = 5
    def points(self):
        _ordered(self.left, self.right)
        return _sampled(self.left, self.right, self.n, lambda u: 1.0 - _s_curve(u))


@dataclass(frozen=True)
class PiShape(MembershipFunction):
    center: Float; width: Float; n: int = 5
    def points(self):
        return (SShape(self.center - self.width, self.center, self.n).points() +
                ZShape(self.center, self.center + self.width, self.n).points())


@dataclass(frozen=True)
class Gaussian(MembershipFunction):
    """Sampled over center +- 4 sigma, ends pinned to 0."""
    mu0: Float; sigma: Float; n: int = 9
    def points(self):
        if self.sigma <= 0:
            raise XValuesOutOfOrderError(0.0, self.sigma, "gaussian: sigma must be > 0")
        left = self.mu0 - 4.0 * self.sigma
        right = self.mu0 + 4.0 * self.sigma

        def g(x: Float) -> Float:
            z = (x - self.mu0) / self.sigma
            return math.exp(-0.5 * z * z)

        rising = _sampled(left, self.mu0, self.n, lambda u: g(left + u * (self.mu0 - left)))
        falling = _sampled(self.mu0, right, self.n, lambda u: g(self.mu0 + u * (right - self.mu0)))
        pts = rising + falling
        pts[0] = (left, 0.0)
        pts[-1] = (right, 0.0)
        return pts


# shape name -> constructor (positional params)
SHAPES: Dict[str, Callable[..., MembershipFunction]] = {
    "tri": Triangle,
    "triangle": Triangle,
    "trap": Trapezoid,
    "trapezoid": Trapezoid,
    "rect": Rectangle,
    "rectangle": Rectangle,
    "singleton": Singleton,
    "left": LeftLinear,
    "right": RightLinear,
    "s": SShape,
    "z": ZShape,
    "pi": PiShape,
    "gauss": Gaussian,
}


def build_shape(name: str, params: Sequence[Float]) -> FuzzySet:
    """SHAPES lookup plus parameter count check; returns the fuzzy set."""
    ctor = SHAPES.get(name.lower())
    if ctor is None:
        raise KeyError(f"unknown shape: {name}")
    try:
        shape = ctor(*params)
    except TypeError as e:
        raise ValueError(f"shape '{name}': bad parameters {list(params)}") from e
    return shape.to_set()
