from __future__ import annotations
from dataclasses import dataclass

Float = float
Index = int

# point comparison tolerance (both x and y)
FUZZY_TOLERANCE: Float = 1e-8

# alpha-cut kinds
WEAK = True      # membership >= level
STRONG = False   # membership >  level


class FuzzyError(Exception):
    """Domain error for fuzzy framework."""


# --- construction / shape ---

class XValuesOutOfOrderError(FuzzyError):
    def __init__(self, prev_x: Float, cur_x: Float, msg: str = ""):
        self.prev_x = prev_x
        self.cur_x = cur_x
        super().__init__(msg or f"x values out of order: {prev_x} > {cur_x}")


class YValueOutOfRangeError(FuzzyError):
    def __init__(self, y: Float, msg: str = ""):
        self.y = y
        super().__init__(msg or f"membership value {y} outside [0, 1]")


class EmptyFuzzySetError(FuzzyError):
    """Operation needs at least one point."""


# --- no solution ---

class InvalidDefuzzifyError(FuzzyError):
    pass


class NoXValueForMembershipError(FuzzyError):
    pass


# --- range / compatibility ---

class XValueOutsideUODError(FuzzyError):
    pass


class IncompatibleFuzzyValuesError(FuzzyError):
    pass


class IncompatibleRuleInputsError(FuzzyError):
    pass


class FuzzyVariableError(FuzzyError):
    """Bad variable name or universe of discourse."""


class InvalidTermNameError(FuzzyError):
    pass


class InvalidLinguisticExpressionError(FuzzyError):
    def __init__(self, msg: str, text: str = "", pos: int = -1):
        self.text = text
        self.pos = pos
        if text:
            where = f" at {pos}" if pos >= 0 else ""
            msg = f"{msg}{where}\n  >> {text}"
        super().__init__(msg)


# --- configuration ---

class ConfigError(FuzzyError):
    pass


class KnowledgeFileError(FuzzyError):
    def __init__(self, msg: str, path: str = "", where: str = ""):
        loc = ":".join(p for p in (path, where) if p)
        super().__init__(f"[{loc}] {msg}" if loc else msg)


# --- hedge resolution control ---

DELTA_X = 1
DELTA_Y = 2
NUMBER_OF_POINTS = 3


@dataclass(frozen=True)
class ExpandControl:
    """How finely sloped segments get subdivided before a pointwise y transform."""
    mode: int = DELTA_Y
    delta_x: Float = 0.1
    delta_y: Float = 0.1
    num_points: int = 20
