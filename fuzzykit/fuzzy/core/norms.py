from typing import Callable, Dict, Sequence
from .types import Float, ConfigError

COMPENSATORY_GAMMA: Float = 0.562

# --- Helpers (fold) ---
def _fold(vals: Sequence[Float], init: Float, op) -> Float:
    acc = init
    for v in vals:
        acc = op(acc, float(v))
    return acc

# --- antecedent combine operators ---
def minimum(vals: Sequence[Float]) -> Float:
    if not vals:
        return 0.0
    return _fold(vals[1:], float(vals[0]), min)

def product(vals: Sequence[Float]) -> Float:
    if not vals:
        return 0.0
    return _fold(vals, 1.0, lambda a, b: a * b)

def compensatory_and(vals: Sequence[Float], gamma: Float = COMPENSATORY_GAMMA) -> Float:
    """prod(v)^(1-g) * (1 - prod(1-v))^g, g clamped to [0, 1]."""
    if not vals:
        return 0.0
    g = min(1.0, max(0.0, gamma))
    p = _fold(vals, 1.0, lambda a, b: a * b)
    q = _fold(vals, 1.0, lambda a, b: a * (1.0 - b))
    return (p ** (1.0 - g)) * ((1.0 - q) ** g)

COMBINE_OPERATORS: Dict[str, Callable[[Sequence[Float]], Float]] = {
    "minimum": minimum,
    "product": product,
    "compensatory_and": compensatory_and,
}

DEFAULT_COMBINE = "minimum"


def resolve(name: str) -> Callable[[Sequence[Float]], Float]:
    try:
        return COMBINE_OPERATORS[name.lower()]
    except KeyError:
        raise ConfigError(f"unknown combine operator: {name} "
                          f"(known: {', '.join(sorted(COMBINE_OPERATORS))})") from None


def combine(name: str, vals: Sequence[Float]) -> Float:
    """Degree of fulfilment from per-antecedent matches; a single value is returned as is."""
    vals = list(vals)
    if len(vals) == 1:
        return float(vals[0])
    return resolve(name)(vals)
