"""
Linguistic expressions over a variable's terms.

Grammar (case-insensitive):
  expr   := term ('or' term)*
  term   := factor ('and' factor)*
  factor := modifier factor | TERM | '(' expr ')'

'or' is union, 'and' is intersection, modifiers are the registered hedges
(not, very, somewhat, ...).
"""

from __future__ import annotations
import logging
import re
from typing import List, Tuple

from ..core.types import InvalidLinguisticExpressionError
from ..model import modifiers

log = logging.getLogger(__name__)

_TOKEN = re.compile(r"\(|\)|[^\s()]+")

Token = Tuple[str, int]   # (lower-cased text, position)


def _lex(text: str) -> List[Token]:
    return [(m.group(0).lower(), m.start()) for m in _TOKEN.finditer(text)]


class _Parser:
    def __init__(self, variable, text: str) -> None:
        self.variable = variable
        self.text = text
        self.tokens = _lex(text)
        self.i = 0

    # ---------- helpers ----------

    def _peek(self) -> str:
        return self.tokens[self.i][0] if self.i < len(self.tokens) else ""

    def _pos(self) -> int:
        return self.tokens[self.i][1] if self.i < len(self.tokens) else len(self.text)

    def _error(self, msg: str) -> InvalidLinguisticExpressionError:
        return InvalidLinguisticExpressionError(msg, self.text, self._pos())

    # ---------- grammar ----------

    def parse(self):
        if not self.tokens:
            raise self._error("empty linguistic expression")
        value = self._expr()
        if self.i < len(self.tokens):
            raise self._error(f"unexpected '{self._peek()}'")
        return value

    def _expr(self):
        value = self._term()
        while self._peek() == "or":
            self.i += 1
            value = value.union(self._term())
        return value

    def _term(self):
        value = self._factor()
        while self._peek() == "and":
            self.i += 1
            value = value.intersection(self._factor())
        return value

    def _factor(self):
        tok = self._peek()
        if not tok:
            raise self._error("expression ends unexpectedly")
        if tok == "(":
            self.i += 1
            value = self._expr()
            if self._peek() != ")":
                raise self._error("missing ')'")
            self.i += 1
            return value
        if tok in (")", "and", "or"):
            raise self._error(f"unexpected '{tok}'")
        if modifiers.is_modifier(tok):
            self.i += 1
            return modifiers.apply(tok, self._factor())
        term = self.variable.find_term(tok)
        if term is None:
            raise self._error(f"unknown term '{tok}' for variable {self.variable.name}")
        self.i += 1
        return term.copy()


# ---------- API ----------

def parse_expression(variable, text: str):
    """FuzzyValue of `variable` described by `text`."""
    value = _Parser(variable, text).parse()
    value.linguistic_expression = " ".join(text.split())
    log.debug("parsed %r for %s: %s", text, variable.name, value)
    return value
