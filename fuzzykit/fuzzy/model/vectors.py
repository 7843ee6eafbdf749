from __future__ import annotations
from typing import Iterable, Iterator, List, Optional

from ..core import defuzz
from ..core.types import Float, InvalidDefuzzifyError, IncompatibleFuzzyValuesError
from .value import FuzzyValue


class FuzzyValueVector:
    """Ordered list of FuzzyValues; values are copied in."""

    def __init__(self, values: Iterable[FuzzyValue] = ()) -> None:
        self._items: List[FuzzyValue] = [v.copy() for v in values]

    # ---------- list ops ----------

    def add(self, value: FuzzyValue) -> None:
        self._items.append(value.copy())

    def add_all(self, values: Iterable[FuzzyValue]) -> None:
        for v in values:
            self.add(v)

    def insert(self, index: int, value: FuzzyValue) -> None:
        self._items.insert(index, value.copy())

    def remove(self, index: int) -> FuzzyValue:
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def is_empty(self) -> bool:
        return not self._items

    def copy(self) -> FuzzyValueVector:
        return FuzzyValueVector(self._items)

    def __getitem__(self, i: int) -> FuzzyValue:
        return self._items[i]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[FuzzyValue]:
        return iter(self._items)

    def __str__(self) -> str:
        return "\n".join(f"{v.variable.name}: {v}" for v in self._items)

    # ---------- aggregation ----------

    def _fold(self, op: str) -> Optional[FuzzyValue]:
        if not self._items:
            return None
        acc = self._items[0]
        for v in self._items[1:]:
            acc = getattr(acc, op)(v)
        return acc.copy() if acc is self._items[0] else acc

    def fuzzy_union(self) -> Optional[FuzzyValue]:
        return self._fold("union")

    def fuzzy_intersection(self) -> Optional[FuzzyValue]:
        return self._fold("intersection")

    def fuzzy_sum(self) -> Optional[FuzzyValue]:
        return self._fold("sum")

    def _shared_variable(self):
        if not self._items:
            raise InvalidDefuzzifyError("cannot defuzzify an empty vector")
        var = self._items[0].variable
        for v in self._items[1:]:
            if v.variable is not var:
                raise IncompatibleFuzzyValuesError(
                    f"vector mixes variables {var.name} and {v.variable.name}")
        return var

    def moment_defuzzify(self) -> Float:
        var = self._shared_variable()
        top = bottom = 0.0
        for v in self._items:
            t, b = defuzz.moment_sums(v.fuzzy_set, var.min_uod, var.max_uod)
            top += t
            bottom += b
        if bottom == 0.0:
            raise InvalidDefuzzifyError("the combined area is 0")
        return top / bottom

    def weighted_average_defuzzify(self) -> Float:
        var = self._shared_variable()
        wx = w = 0.0
        for v in self._items:
            a, b = defuzz.weight_sums(v.fuzzy_set, var.min_uod, var.max_uod)
            wx += a
            w += b
        if w == 0.0:
            raise InvalidDefuzzifyError("no points with membership > 0")
        return wx / w

    def maximum_defuzzify(self) -> Float:
        """Mean of the maxima of the values with the highest peak."""
        var = self._shared_variable()
        best, total, count = -1.0, 0.0, 0
        for v in self._items:
            top, s, n = defuzz.max_sums(v.fuzzy_set, var.min_uod, var.max_uod)
            if n == 0:
                continue
            if top > best:
                best, total, count = top, s, n
            elif top == best:
                total += s
                count += n
        if count == 0:
            raise InvalidDefuzzifyError("no values to defuzzify")
        return total / count

    def center_of_area_defuzzify(self) -> Float:
        self._shared_variable()
        return self.fuzzy_sum().center_of_area_defuzzify()
