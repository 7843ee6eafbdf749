from __future__ import annotations
from typing import Callable, Dict
from ..core.types import Float, ConfigError


def possibility(a, b) -> Float:
    """Possibility/necessity similarity; identical values give 1.0."""
    if a.equals(b, strong=True):
        return 1.0
    poss = a.maximum_of_intersection(b)
    nec = 1.0 - a.complement().maximum_of_intersection(b)
    if nec > 0.5:
        return poss
    return (nec + 0.5) * poss


def area_ratio(a, b) -> Float:
    """area(a and b) / area(a or b) over the variable's UOD."""
    union = a.union(b).area()
    if union == 0.0:
        return 0.0
    return a.intersection(b).area() / union


SIMILARITY_OPERATORS: Dict[str, Callable] = {
    "possibility": possibility,
    "area": area_ratio,
}


def similarity(a, b, operator: str = "possibility") -> Float:
    fn = SIMILARITY_OPERATORS.get(operator.lower())
    if fn is None:
        raise ConfigError(f"unknown similarity operator: {operator}")
    return fn(a, b)
