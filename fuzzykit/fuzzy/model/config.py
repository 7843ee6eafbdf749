from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping

from ..core import norms
from ..core.types import (
    Float, ConfigError, ExpandControl, DELTA_X, DELTA_Y, NUMBER_OF_POINTS,
)

MAMDANI = "mamdani"
LARSEN = "larsen"
EXECUTOR_NAMES = (MAMDANI, LARSEN)

DEFUZZIFY_METHODS = ("moment", "center_of_area", "weighted_average", "maximum")
AGGREGATE_METHODS = ("union", "sum")

_EXPAND_MODES = {"delta_x": DELTA_X, "delta_y": DELTA_Y, "number_of_points": NUMBER_OF_POINTS}


@dataclass(frozen=True)
class EngineConfig:
    """
    Defaults read when values and rules are created:
      - executor: rule executor name ('mamdani' | 'larsen')
      - combine:  antecedent combine operator ('minimum' | 'product' | 'compensatory_and')
      - match_threshold: used by fuzzy_match / test_rule_matching when none is given
      - confine_to_uod: clip sets to the variable range instead of raising
      - strong_equals: value equality compares sets (True) or only variables (False)
      - defuzzify: method used by KnowledgeBase.fire
      - aggregate: how fired conclusions of one output combine ('union' | 'sum')
      - expand: hedge resolution control
    """
    executor: str = MAMDANI
    combine: str = norms.DEFAULT_COMBINE
    match_threshold: Float = 0.0
    confine_to_uod: bool = False
    strong_equals: bool = True
    defuzzify: str = "moment"
    aggregate: str = "union"
    expand: ExpandControl = field(default_factory=ExpandControl)

    def __post_init__(self) -> None:
        if self.executor not in EXECUTOR_NAMES:
            raise ConfigError(f"unknown executor: {self.executor}")
        norms.resolve(self.combine)
        if self.defuzzify not in DEFUZZIFY_METHODS:
            raise ConfigError(f"unknown defuzzify method: {self.defuzzify}")
        if self.aggregate not in AGGREGATE_METHODS:
            raise ConfigError(f"unknown aggregate method: {self.aggregate}")
        if not 0.0 <= self.match_threshold <= 1.0:
            raise ConfigError(f"match_threshold must be within [0, 1]: {self.match_threshold}")

    def with_(self, **changes: Any) -> EngineConfig:
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> EngineConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ConfigError(f"unknown engine keys: {', '.join(sorted(unknown))}")
        kw: Dict[str, Any] = {}
        for k, v in d.items():
            if k == "expand":
                kw[k] = _expand_from_dict(v or {})
            elif k in ("executor", "combine", "defuzzify", "aggregate"):
                kw[k] = str(v).lower()
            elif k == "match_threshold":
                kw[k] = _as_float(k, v)
            else:
                if not isinstance(v, bool):
                    raise ConfigError(f"'{k}' must be true/false, got {v!r}")
                kw[k] = v
        return cls(**kw)


def _as_float(key: str, v: Any) -> Float:
    try:
        return float(v)
    except (TypeError, ValueError):
        raise ConfigError(f"'{key}' must be a number, got {v!r}") from None


def _expand_from_dict(d: Mapping[str, Any]) -> ExpandControl:
    if not isinstance(d, Mapping):
        raise ConfigError("'expand' must be a mapping")
    kw: Dict[str, Any] = {}
    for k, v in d.items():
        if k == "mode":
            mode = _EXPAND_MODES.get(str(v).lower())
            if mode is None:
                raise ConfigError(f"unknown expand mode: {v} (known: {', '.join(_EXPAND_MODES)})")
            kw["mode"] = mode
        elif k in ("delta_x", "delta_y"):
            kw[k] = _as_float(k, v)
            if kw[k] <= 0.0:
                raise ConfigError(f"'{k}' must be > 0")
        elif k == "num_points":
            kw[k] = int(_as_float(k, v))
            if kw[k] < 1:
                raise ConfigError("'num_points' must be >= 1")
        else:
            raise ConfigError(f"unknown expand key: {k}")
    return ExpandControl(**kw)
