from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from ..core.fuzzyset import FuzzySet
from ..core.rule import FuzzyRule
from ..core.types import Float, ConfigError, FuzzyVariableError
from .config import EngineConfig, DEFUZZIFY_METHODS
from .engine import make_executor
from .value import FuzzyValue
from .variable import FuzzyVariable
from .vectors import FuzzyValueVector

log = logging.getLogger(__name__)


def singleton(variable: FuzzyVariable, x: Float) -> FuzzyValue:
    """Crisp x as a fuzzy value: a vertical spike at x."""
    return FuzzyValue(variable, FuzzySet.from_points([(x, 0.0), (x, 1.0), (x, 0.0)]))


@dataclass
class RuleFiring:
    """Outcome of one rule for a set of crisp inputs."""
    rule: FuzzyRule
    dof: Float
    conclusions: FuzzyValueVector


@dataclass
class KnowledgeBase:
    # --- variables and rules ---
    variables: Dict[str, FuzzyVariable] = field(default_factory=dict)
    rules: List[FuzzyRule] = field(default_factory=list)

    # --- engine settings ---
    config: EngineConfig = field(default_factory=EngineConfig)

    # ---------- building ----------
    def add_variable(self, var: FuzzyVariable) -> None:
        if var.name in self.variables:
            raise FuzzyVariableError(f"duplicate variable: {var.name}")
        self.variables[var.name] = var

    def variable(self, name: str) -> FuzzyVariable:
        try:
            return self.variables[name]
        except KeyError:
            raise FuzzyVariableError(f"unknown variable: {name}") from None

    def add_rule(self, rule: FuzzyRule) -> None:
        self.rules.append(rule)

    def rule(self, name: str) -> FuzzyRule:
        for r in self.rules:
            if r.name == name:
                return r
        raise KeyError(name)

    def override(self, executor: Optional[str] = None, combine: Optional[str] = None) -> None:
        """Switch every rule to another executor and/or combine operator."""
        changes = {k: v.lower() for k, v in (("executor", executor), ("combine", combine)) if v}
        if not changes:
            return
        self.config = self.config.with_(**changes)
        for r in self.rules:
            if executor:
                r.set_executor(make_executor(executor))
            if combine:
                r.set_combine_operator(combine)

    def input_variables(self) -> List[str]:
        names = {a.variable.name for r in self.rules for a in r.antecedents}
        return [n for n in self.variables if n in names]

    def output_variables(self) -> List[str]:
        names = {c.variable.name for r in self.rules for c in r.conclusions}
        return [n for n in self.variables if n in names]

    # ---------- inference ----------
    def fuzzify(self, inputs: Mapping[str, Float]) -> Dict[str, FuzzyValue]:
        out = {}
        for name, x in inputs.items():
            var = self.variable(name)
            out[name] = singleton(var, float(x))
        return out

    def fire_rules(self, inputs: Mapping[str, Float]) -> List[RuleFiring]:
        """Fire every rule whose antecedent variables are all supplied."""
        fuzzy_in = self.fuzzify(inputs)
        firings: List[RuleFiring] = []
        for r in self.rules:
            names = [a.variable.name for a in r.antecedents]
            if any(n not in fuzzy_in for n in names):
                log.debug("rule %s skipped: missing inputs", r.name)
                continue
            r.set_inputs([fuzzy_in[n] for n in names])
            out = r.execute()
            firings.append(RuleFiring(r, r.dof, out))
        return firings

    def aggregate(self, firings: List[RuleFiring]) -> Dict[str, FuzzyValue]:
        """Fired conclusions per output variable, combined by union or sum."""
        use_sum = self.config.aggregate == "sum"
        merged: Dict[str, FuzzyValue] = {}
        for f in firings:
            for c in f.conclusions:
                name = c.variable.name
                if name not in merged:
                    merged[name] = c
                else:
                    merged[name] = merged[name].sum(c) if use_sum else merged[name].union(c)
        return merged

    def fire(self, inputs: Mapping[str, Float],
             method: Optional[str] = None) -> Dict[str, Float]:
        """Crisp inputs -> crisp outputs (defuzzified with `method` or the configured one)."""
        method = (method or self.config.defuzzify).lower()
        if method not in DEFUZZIFY_METHODS:
            raise ConfigError(f"unknown defuzzify method: {method}")
        merged = self.aggregate(self.fire_rules(inputs))
        result = {name: value.defuzzify(method) for name, value in merged.items()}
        log.debug("fire %s -> %s", dict(inputs), result)
        return result
