from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from typing import ClassVar, Dict, List, Optional, Type

from ..core import norms
from ..core.types import Float, ConfigError, IncompatibleRuleInputsError
from .config import MAMDANI, LARSEN
from .value import FuzzyValue
from .vectors import FuzzyValueVector

log = logging.getLogger(__name__)


def check_inputs(antecedents: FuzzyValueVector, inputs: FuzzyValueVector) -> None:
    """Same count and pairwise the same variable."""
    if len(antecedents) != len(inputs):
        raise IncompatibleRuleInputsError(
            f"{len(inputs)} inputs for {len(antecedents)} antecedents")
    for i, (a, x) in enumerate(zip(antecedents, inputs)):
        if a.variable is not x.variable:
            raise IncompatibleRuleInputsError(
                f"input {i}: variable {x.variable.name}, antecedent expects {a.variable.name}")


@dataclass
class RuleExecutor:
    """
    Computes a rule's degree of fulfilment (DOF) and the conclusions it
    implies. Each rule owns its executor so `dof` can be cached per rule.
    """
    name: ClassVar[str] = ""
    dof: Float = 0.0

    # ---------- helpers ----------

    def _compute_dof(self, antecedents: FuzzyValueVector, inputs: FuzzyValueVector,
                     combine: str) -> None:
        raise NotImplementedError

    def _conclude(self, conclusion: FuzzyValue) -> FuzzyValue:
        raise NotImplementedError

    def _outputs(self, conclusions: FuzzyValueVector) -> FuzzyValueVector:
        out = FuzzyValueVector()
        for c in conclusions:
            out.add(self._conclude(c))
        return out

    # ---------- API ----------

    def copy(self) -> RuleExecutor:
        return replace(self)

    def execute(self, antecedents: FuzzyValueVector, conclusions: FuzzyValueVector,
                inputs: FuzzyValueVector, combine: Optional[str] = None) -> FuzzyValueVector:
        """Fire raw vectors; the DOF is always recomputed."""
        check_inputs(antecedents, inputs)
        self._compute_dof(antecedents, inputs, combine or norms.DEFAULT_COMBINE)
        return self._outputs(conclusions)

    def execute_rule(self, rule) -> FuzzyValueVector:
        """
        Fire a rule, reusing the cached DOF when its matching side is unchanged.
        The DOF is kept current even for a rule without conclusions.
        """
        if rule.antecedents_changed or rule.inputs_changed or rule.combine_changed:
            check_inputs(rule.antecedents, rule.inputs)
            self._compute_dof(rule.antecedents, rule.inputs, rule.combine)
            log.debug("%s: dof recomputed = %.4f", self.name, self.dof)
        else:
            log.debug("%s: cached dof = %.4f", self.name, self.dof)
        return self._outputs(rule.conclusions)


@dataclass
class LarsenExecutor(RuleExecutor):
    """Product composition: conclusions scaled down to the DOF."""
    name: ClassVar[str] = LARSEN

    def _compute_dof(self, antecedents, inputs, combine):
        if len(antecedents) == 0:
            self.dof = 1.0
            return
        matches = [a.maximum_of_intersection(x) for a, x in zip(antecedents, inputs)]
        self.dof = norms.combine(combine, matches)

    def _conclude(self, conclusion):
        return conclusion.scale(self.dof)


@dataclass
class MamdaniExecutor(RuleExecutor):
    """Min composition: conclusions clipped at the DOF."""
    name: ClassVar[str] = MAMDANI
    intersections: List[FuzzyValue] = field(default_factory=list)

    def copy(self) -> MamdaniExecutor:
        return replace(self, intersections=list(self.intersections))

    def _compute_dof(self, antecedents, inputs, combine):
        self.intersections = [a.intersection(x) for a, x in zip(antecedents, inputs)]
        if not self.intersections:
            self.dof = 1.0
            return
        self.dof = norms.combine(combine, [v.max_y() for v in self.intersections])

    def _conclude(self, conclusion):
        return conclusion.horizontal_intersection(self.dof)


EXECUTORS: Dict[str, Type[RuleExecutor]] = {
    MAMDANI: MamdaniExecutor,
    LARSEN: LarsenExecutor,
}


def make_executor(name: str) -> RuleExecutor:
    cls = EXECUTORS.get(name.lower())
    if cls is None:
        raise ConfigError(f"unknown executor: {name} (known: {', '.join(EXECUTORS)})")
    return cls()
