"""
Linguistic hedges. Each modifier maps a FuzzySet (plus the expansion control
used before pointwise transforms) to a new FuzzySet.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional

from ..core.fuzzyset import FuzzySet
from ..core.point import SetPoint
from ..core.types import ConfigError, ExpandControl

Modifier = Callable[[FuzzySet, ExpandControl], FuzzySet]


# ---------- helpers ----------

def _power(p: float) -> Modifier:
    def hedge(fs: FuzzySet, ctl: ExpandControl) -> FuzzySet:
        return fs.concentrate_dilute(p, ctl)
    return hedge


def _rebuilt(pts: List[SetPoint]) -> FuzzySet:
    return FuzzySet.from_points(pts)


def _peak_index(fs: FuzzySet) -> int:
    best, pos = -1.0, 0
    for i, p in enumerate(fs.points()):
        if p.y > best:
            best, pos = p.y, i
    return pos


# ---------- hedges ----------

def not_(fs: FuzzySet, ctl: ExpandControl) -> FuzzySet:
    return fs.complement()


def norm(fs: FuzzySet, ctl: ExpandControl) -> FuzzySet:
    return fs.normalize()


def intensify(fs: FuzzySet, ctl: ExpandControl) -> FuzzySet:
    """Contrast intensification: 2y^2 below 0.5, 1 - 2(1-y)^2 above."""
    pts = []
    for p in fs.expand_set(ctl).points():
        y = 2.0 * p.y * p.y if p.y <= 0.5 else 1.0 - 2.0 * (1.0 - p.y) ** 2
        pts.append(SetPoint(p.x, y))
    return _rebuilt(pts)


def slightly(fs: FuzzySet, ctl: ExpandControl) -> FuzzySet:
    """intensify(norm(plus A and not very A))"""
    core = MODIFIERS["plus"](fs, ctl).intersection(not_(MODIFIERS["very"](fs, ctl), ctl))
    return intensify(norm(core, ctl), ctl)


def above(fs: FuzzySet, ctl: ExpandControl) -> FuzzySet:
    """1 - y right of the first peak, 0 up to it."""
    peak = _peak_index(fs)
    pts = [SetPoint(p.x, 1.0 - p.y if i > peak else 0.0) for i, p in enumerate(fs.points())]
    return _rebuilt(pts)


def below(fs: FuzzySet, ctl: ExpandControl) -> FuzzySet:
    """1 - y left of the first peak, 0 from it on."""
    peak = _peak_index(fs)
    pts = [SetPoint(p.x, 1.0 - p.y if i < peak else 0.0) for i, p in enumerate(fs.points())]
    return _rebuilt(pts)


MODIFIERS: Dict[str, Modifier] = {
    "not": not_,
    "very": _power(2.0),
    "extremely": _power(3.0),
    "somewhat": _power(0.5),
    "more_or_less": _power(1.0 / 3.0),
    "plus": _power(1.25),
    "norm": norm,
    "slightly": slightly,
    "intensify": intensify,
    "above": above,
    "below": below,
}


# ---------- API ----------

def is_modifier(name: str) -> bool:
    return name.lower() in MODIFIERS


def register(name: str, fn: Modifier) -> None:
    """Add or replace a hedge; names are case-insensitive."""
    MODIFIERS[name.lower()] = fn


def modify(name: str, fs: FuzzySet, ctl: Optional[ExpandControl] = None) -> FuzzySet:
    fn = MODIFIERS.get(name.lower())
    if fn is None:
        raise ConfigError(f"unknown modifier: {name}")
    return fn(fs, ctl or ExpandControl())


def apply(name: str, value):
    """New FuzzyValue `name (expr)` of the same variable."""
    key = name.lower()
    fs = modify(key, value.fuzzy_set, value.config.expand)
    return value.derived(fs, f"{key} ({value.linguistic_expression})")
