from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Sequence, Union

from ..core.fuzzyset import FuzzySet
from ..core.point import IntervalVector
from ..core.types import (
    Float, WEAK, STRONG, ConfigError, XValueOutsideUODError, IncompatibleFuzzyValuesError,
)
from ..io.expr_parser import parse_expression
from .config import EngineConfig, DEFUZZIFY_METHODS
from . import similarity as _similarity

if TYPE_CHECKING:
    from .variable import FuzzyVariable

DEFAULT_EXPRESSION = "???"

Definition = Union[FuzzySet, str, Sequence]


def _binary_expr(a: str, op: str, b: str) -> str:
    if a == DEFAULT_EXPRESSION or b == DEFAULT_EXPRESSION:
        return DEFAULT_EXPRESSION
    return f"({a}) {op} ({b})"


class FuzzyValue:
    """
    A fuzzy set bound to a variable. The definition may be a FuzzySet, x/y
    sequences, a list of (x, y) points or a linguistic expression over the
    variable's terms.
    """

    def __init__(self, variable: FuzzyVariable, definition: Definition = None,
                 ys: Optional[Sequence[Float]] = None, *,
                 config: Optional[EngineConfig] = None) -> None:
        self.variable = variable
        self.config = config or variable.config
        self.linguistic_expression = DEFAULT_EXPRESSION
        if isinstance(definition, str):
            parsed = parse_expression(variable, definition)
            fs = parsed.fuzzy_set
            self.linguistic_expression = definition
        elif isinstance(definition, FuzzySet):
            fs = definition.copy()
        elif definition is None:
            fs = FuzzySet()
        elif ys is not None:
            fs = FuzzySet(definition, ys)
        else:
            fs = FuzzySet.from_points(definition)
        self._set = self._within_uod(fs)

    def _within_uod(self, fs: FuzzySet) -> FuzzySet:
        if fs.is_empty():
            return fs
        lo, hi = self.variable.min_uod, self.variable.max_uod
        if fs.x(0) >= lo and fs.x(-1) <= hi:
            return fs
        if not self.config.confine_to_uod:
            raise XValueOutsideUODError(
                f"set spans [{fs.x(0)}, {fs.x(-1)}], outside {self.variable.name} UOD [{lo}, {hi}]")
        fs.confine_to_x_bounds(lo, hi)
        return fs

    def derived(self, fs: FuzzySet, expression: str = DEFAULT_EXPRESSION) -> FuzzyValue:
        """Value of the same variable holding `fs` (taken over, not copied)."""
        out = FuzzyValue.__new__(FuzzyValue)
        out.variable = self.variable
        out.config = self.config
        out.linguistic_expression = expression
        out._set = out._within_uod(fs)
        return out

    # ---------- access ----------

    @property
    def fuzzy_set(self) -> FuzzySet:
        return self._set.copy()

    @property
    def min_uod(self) -> Float:
        return self.variable.min_uod

    @property
    def max_uod(self) -> Float:
        return self.variable.max_uod

    def copy(self) -> FuzzyValue:
        return self.derived(self._set.copy(), self.linguistic_expression)

    def num_points(self) -> int:
        return self._set.num_points

    def max_y(self) -> Float:
        return self._set.max_y()

    def is_normal(self) -> bool:
        return self._set.is_normal()

    def is_convex(self) -> bool:
        return self._set.is_convex()

    def get_membership(self, x: Float) -> Float:
        if x < self.min_uod or x > self.max_uod:
            raise XValueOutsideUODError(f"{x} outside {self.variable.name} UOD "
                                        f"[{self.min_uod}, {self.max_uod}]")
        return self._set.get_membership(x)

    def get_x_for_membership(self, m: Float) -> Float:
        return self._set.get_x_for_membership(m)

    def __str__(self) -> str:
        return str(self._set)

    def __repr__(self) -> str:
        return f"FuzzyValue({self.variable.name!r}, {self.linguistic_expression!r}, {self._set!r})"

    # ---------- unary ----------

    def complement(self) -> FuzzyValue:
        return self.derived(self._set.complement(), f"not ({self.linguistic_expression})")

    def normalize(self) -> FuzzyValue:
        return self.derived(self._set.normalize(), f"norm ({self.linguistic_expression})")

    def scale(self, target: Float) -> FuzzyValue:
        return self.derived(self._set.scale(target))

    def horizontal_intersection(self, y: Float) -> FuzzyValue:
        return self.derived(self._set.horizontal_intersection(y))

    def horizontal_union(self, y: Float) -> FuzzyValue:
        return self.derived(self._set.horizontal_union(y))

    # ---------- binary ----------

    def _compatible(self, other: FuzzyValue) -> None:
        if other.variable is not self.variable:
            raise IncompatibleFuzzyValuesError(
                f"values of different variables: {self.variable.name} / {other.variable.name}")

    def union(self, other: FuzzyValue) -> FuzzyValue:
        self._compatible(other)
        return self.derived(self._set.union(other._set),
                            _binary_expr(self.linguistic_expression, "or", other.linguistic_expression))

    def intersection(self, other: FuzzyValue) -> FuzzyValue:
        self._compatible(other)
        return self.derived(self._set.intersection(other._set),
                            _binary_expr(self.linguistic_expression, "and", other.linguistic_expression))

    def sum(self, other: FuzzyValue) -> FuzzyValue:
        self._compatible(other)
        return self.derived(self._set.sum(other._set),
                            _binary_expr(self.linguistic_expression, "+", other.linguistic_expression))

    def maximum_of_intersection(self, other: FuzzyValue) -> Float:
        self._compatible(other)
        return self._set.maximum_of_intersection(other._set)

    def fuzzy_match(self, other: FuzzyValue, threshold: Optional[Float] = None) -> bool:
        """True when the sets overlap with height >= threshold (> 0 for threshold 0)."""
        self._compatible(other)
        t = self.config.match_threshold if threshold is None else threshold
        t = min(1.0, max(0.0, t))
        if t == 0.0:
            if self._set.no_intersection_test(other._set):
                return False
            return self._set.maximum_of_intersection(other._set) > 0.0
        return self._set.maximum_of_intersection(other._set) >= t

    def similarity(self, other: FuzzyValue, operator: str = "possibility") -> Float:
        self._compatible(other)
        return _similarity.similarity(self, other, operator)

    def equals(self, other: FuzzyValue, strong: Optional[bool] = None) -> bool:
        strong = self.config.strong_equals if strong is None else strong
        if other.variable is not self.variable:
            return False
        return not strong or self._set == other._set

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FuzzyValue):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    # ---------- cuts / defuzzification over the UOD ----------

    def alpha_cut(self, cut_type: bool, level: Float) -> IntervalVector:
        return self._set.alpha_cut(cut_type, level, self.min_uod, self.max_uod)

    def weak_alpha_cut(self, level: Float) -> IntervalVector:
        return self.alpha_cut(WEAK, level)

    def strong_alpha_cut(self, level: Float) -> IntervalVector:
        return self.alpha_cut(STRONG, level)

    def support(self) -> IntervalVector:
        return self._set.support(self.min_uod, self.max_uod)

    def moment_defuzzify(self) -> Float:
        return self._set.moment_defuzzify(self.min_uod, self.max_uod)

    def center_of_area_defuzzify(self) -> Float:
        return self._set.center_of_area_defuzzify(self.min_uod, self.max_uod)

    def weighted_average_defuzzify(self) -> Float:
        return self._set.weighted_average_defuzzify(self.min_uod, self.max_uod)

    def maximum_defuzzify(self) -> Float:
        return self._set.maximum_defuzzify(self.min_uod, self.max_uod)

    def defuzzify(self, method: str) -> Float:
        key = method.lower()
        if key not in DEFUZZIFY_METHODS:
            raise ConfigError(f"unknown defuzzify method: {method}")
        return getattr(self, f"{key}_defuzzify")()

    def area(self) -> Float:
        return self._set.area(self.min_uod, self.max_uod)
