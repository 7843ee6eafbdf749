from __future__ import annotations
import logging
from typing import Iterable, Optional

from . import norms
from .types import Float, IncompatibleFuzzyValuesError, IncompatibleRuleInputsError
from ..model.config import EngineConfig
from ..model.engine import RuleExecutor, check_inputs, make_executor
from ..model.value import FuzzyValue
from ..model.vectors import FuzzyValueVector

log = logging.getLogger(__name__)


class FuzzyRule:
    """
    IF antecedents THEN conclusions, fired against a vector of inputs (one per
    antecedent, same variables). Four change flags track what was touched
    since the last firing so the executor can reuse its cached DOF.
    """

    def __init__(self, name: str = "", config: Optional[EngineConfig] = None,
                 antecedents: Iterable[FuzzyValue] = (), conclusions: Iterable[FuzzyValue] = (),
                 inputs: Iterable[FuzzyValue] = ()) -> None:
        self.name = name
        self.config = config or EngineConfig()
        self.antecedents = FuzzyValueVector(antecedents)
        self.conclusions = FuzzyValueVector(conclusions)
        self.inputs = FuzzyValueVector(inputs)
        self.combine = self.config.combine
        self.executor: RuleExecutor = make_executor(self.config.executor)
        self._touch_all()

    # ---------- change flags ----------

    def _touch_all(self) -> None:
        self.antecedents_changed = True
        self.conclusions_changed = True
        self.inputs_changed = True
        self.combine_changed = True

    def _clear(self) -> None:
        self.antecedents_changed = False
        self.conclusions_changed = False
        self.inputs_changed = False
        self.combine_changed = False

    @property
    def is_fired_clean(self) -> bool:
        """Fired and untouched since; the executor's DOF is valid."""
        return not (self.antecedents_changed or self.conclusions_changed or
                    self.inputs_changed or self.combine_changed)

    # ---------- antecedents ----------

    def add_antecedent(self, value: FuzzyValue) -> None:
        self.antecedents.add(value)
        self.antecedents_changed = True

    def insert_antecedent(self, index: int, value: FuzzyValue) -> None:
        self.antecedents.insert(index, value)
        self.antecedents_changed = True

    def remove_antecedent(self, index: int) -> FuzzyValue:
        self.antecedents_changed = True
        return self.antecedents.remove(index)

    def remove_all_antecedents(self) -> None:
        self.antecedents.clear()
        self.antecedents_changed = True

    # ---------- conclusions ----------

    def add_conclusion(self, value: FuzzyValue) -> None:
        self.conclusions.add(value)
        self.conclusions_changed = True

    def insert_conclusion(self, index: int, value: FuzzyValue) -> None:
        self.conclusions.insert(index, value)
        self.conclusions_changed = True

    def remove_conclusion(self, index: int) -> FuzzyValue:
        self.conclusions_changed = True
        return self.conclusions.remove(index)

    def remove_all_conclusions(self) -> None:
        self.conclusions.clear()
        self.conclusions_changed = True

    # ---------- inputs ----------

    def add_input(self, value: FuzzyValue) -> None:
        self.inputs.add(value)
        self.inputs_changed = True

    def insert_input(self, index: int, value: FuzzyValue) -> None:
        self.inputs.insert(index, value)
        self.inputs_changed = True

    def remove_input(self, index: int) -> FuzzyValue:
        self.inputs_changed = True
        return self.inputs.remove(index)

    def remove_all_inputs(self) -> None:
        self.inputs.clear()
        self.inputs_changed = True

    def set_inputs(self, inputs: Iterable[FuzzyValue]) -> None:
        self.inputs = FuzzyValueVector(inputs)
        self.inputs_changed = True

    # ---------- strategies ----------

    def set_executor(self, executor: RuleExecutor) -> None:
        self.executor = executor.copy()
        self._touch_all()

    def set_combine_operator(self, name: str) -> None:
        norms.resolve(name)
        self.combine = name.lower()
        self._touch_all()

    # ---------- firing ----------

    def check_antecedents_and_inputs(self, inputs: Optional[FuzzyValueVector] = None) -> None:
        check_inputs(self.antecedents, self.inputs if inputs is None else inputs)

    def execute(self, executor: Optional[RuleExecutor] = None,
                inputs: Optional[Iterable[FuzzyValue]] = None) -> FuzzyValueVector:
        """
        Fire the rule. With a substitute executor and/or inputs the DOF is
        recomputed on a private executor and the rule's state is untouched.
        """
        if executor is None and inputs is None:
            out = self.executor.execute_rule(self)
            self._clear()
            log.debug("rule %s fired: dof=%.4f", self.name or "<anon>", self.executor.dof)
            return out
        runner = (executor or self.executor).copy()
        vec = self.inputs if inputs is None else FuzzyValueVector(inputs)
        return runner.execute(self.antecedents, self.conclusions, vec, self.combine)

    @property
    def dof(self) -> Float:
        return self.executor.dof

    def test_rule_matching(self, threshold: Optional[Float] = None,
                           inputs: Optional[Iterable[FuzzyValue]] = None) -> bool:
        """Every antecedent fuzzy-matches its input."""
        vec = self.inputs if inputs is None else FuzzyValueVector(inputs)
        check_inputs(self.antecedents, vec)
        t = self.config.match_threshold if threshold is None else threshold
        try:
            return all(a.fuzzy_match(x, t) for a, x in zip(self.antecedents, vec))
        except IncompatibleFuzzyValuesError as e:
            raise IncompatibleRuleInputsError(str(e)) from e

    def __str__(self) -> str:
        ifs = " and ".join(f"{a.variable.name} is {a.linguistic_expression}" for a in self.antecedents)
        thens = " and ".join(f"{c.variable.name} is {c.linguistic_expression}" for c in self.conclusions)
        head = f"{self.name}: " if self.name else ""
        return f"{head}if {ifs or 'true'} then {thens}"
