# FuzzyVariable: name, universe of discourse, named terms

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.types import Float, FuzzyVariableError, InvalidTermNameError
from .config import EngineConfig
from .modifiers import is_modifier
from .value import FuzzyValue, Definition

_RESERVED = ("and", "or")
_FORBIDDEN_CHARS = " \t()"


class FuzzyVariable:
    def __init__(self, name: str, min_uod: Float, max_uod: Float, units: str = "",
                 config: Optional[EngineConfig] = None) -> None:
        if not name or not name.strip():
            raise FuzzyVariableError("variable name must not be empty")
        if min_uod >= max_uod:
            raise FuzzyVariableError(f"{name}: min_uod ({min_uod}) must be below max_uod ({max_uod})")
        self.name = name
        self.min_uod = float(min_uod)
        self.max_uod = float(max_uod)
        self.units = units
        self.config = config or EngineConfig()
        self._terms: Dict[str, FuzzyValue] = {}

    # ---------- helpers ----------

    @staticmethod
    def _check_term_name(name: str) -> str:
        key = name.lower()
        if not key:
            raise InvalidTermNameError("term name must not be empty")
        if key in _RESERVED or is_modifier(key):
            raise InvalidTermNameError(f"'{name}' is reserved (operator or modifier)")
        if any(c in _FORBIDDEN_CHARS for c in key):
            raise InvalidTermNameError(f"'{name}' must not contain spaces or parentheses")
        return key

    # ---------- API ----------

    def add_term(self, name: str, definition: Definition, ys: Optional[Sequence[Float]] = None) -> FuzzyValue:
        """Define (or redefine) a term; a string definition is parsed over the existing terms."""
        key = self._check_term_name(name)
        value = FuzzyValue(self, definition, ys)
        value.linguistic_expression = key
        self._terms[key] = value
        return value

    def find_term(self, name: str) -> Optional[FuzzyValue]:
        return self._terms.get(name.lower())

    def remove_term(self, name: str) -> bool:
        return self._terms.pop(name.lower(), None) is not None

    def remove_terms(self, names: Optional[Iterable[str]] = None) -> None:
        """Drop the given terms, or all of them."""
        if names is None:
            self._terms.clear()
            return
        for n in names:
            self.remove_term(n)

    def term_names(self) -> List[str]:
        return list(self._terms)

    def terms(self) -> List[FuzzyValue]:
        return list(self._terms.values())

    def value(self, definition: Definition, ys: Optional[Sequence[Float]] = None) -> FuzzyValue:
        return FuzzyValue(self, definition, ys)

    def __str__(self) -> str:
        units = f" {self.units}" if self.units else ""
        return f"{self.name} [{self.min_uod:g}, {self.max_uod:g}]{units}"

    def __repr__(self) -> str:
        return f"FuzzyVariable({self.name!r}, {self.min_uod!r}, {self.max_uod!r})"
