import pytest

from fuzzykit.fuzzy.core.fuzzyset import FuzzySet
from fuzzykit.fuzzy.core.rule import FuzzyRule
from fuzzykit.fuzzy.core.types import ConfigError, IncompatibleRuleInputsError
from fuzzykit.fuzzy.model.config import EngineConfig
from fuzzykit.fuzzy.model.engine import LarsenExecutor, MamdaniExecutor, make_executor
from fuzzykit.fuzzy.model.value import FuzzyValue
from fuzzykit.fuzzy.model.variable import FuzzyVariable
from fuzzykit.fuzzy.model.vectors import FuzzyValueVector


@pytest.fixture
def x_var():
    return FuzzyVariable("x", 0, 10)


@pytest.fixture
def y_var():
    return FuzzyVariable("y", 0, 10)


@pytest.fixture
def antecedent(x_var):
    return FuzzyValue(x_var, [0, 5, 10], [0, 1, 0])


@pytest.fixture
def conclusion(y_var):
    return FuzzyValue(y_var, [2, 6, 10], [0, 1, 0])


def flat_input(var, height):
    return FuzzyValue(var, [(5, height)])


@pytest.fixture
def rule(antecedent, conclusion, x_var):
    return FuzzyRule("r", antecedents=[antecedent], conclusions=[conclusion],
                     inputs=[flat_input(x_var, 0.3)])


# ---------- executors ----------

def test_mamdani_clips_conclusion(rule):
    out = rule.execute()
    assert rule.dof == pytest.approx(0.3)
    assert out[0].fuzzy_set == FuzzySet.from_points([(2, 0), (3.2, 0.3), (8.8, 0.3), (10, 0)])


def test_larsen_scales_conclusion(rule, conclusion):
    rule.set_executor(LarsenExecutor())
    out = rule.execute()
    assert rule.dof == pytest.approx(0.3)
    assert out[0].fuzzy_set == conclusion.fuzzy_set.scale(0.3)


def test_executor_from_config(antecedent, conclusion):
    r = FuzzyRule(config=EngineConfig(executor="larsen"), antecedents=[antecedent],
                  conclusions=[conclusion])
    assert isinstance(r.executor, LarsenExecutor)
    assert isinstance(make_executor("MAMDANI"), MamdaniExecutor)
    with pytest.raises(ConfigError):
        make_executor("sugeno")


def test_rule_without_antecedents_fires_fully(conclusion):
    r = FuzzyRule(conclusions=[conclusion])
    out = r.execute()
    assert r.dof == 1.0
    assert out[0] == conclusion


def test_rule_without_conclusions_gives_empty_vector(antecedent, x_var):
    r = FuzzyRule(antecedents=[antecedent], inputs=[flat_input(x_var, 0.3)])
    assert r.execute().is_empty()
    assert r.dof == pytest.approx(0.3)


def test_conclusion_added_after_firing_uses_current_dof(antecedent, conclusion, x_var):
    r = FuzzyRule(antecedents=[antecedent], inputs=[flat_input(x_var, 0.3)])
    r.execute()
    r.add_conclusion(conclusion)
    out = r.execute()
    assert r.dof == pytest.approx(0.3)
    assert out[0].max_y() == pytest.approx(0.3)


def test_combine_operator_over_two_antecedents(antecedent, conclusion, x_var):
    r = FuzzyRule(antecedents=[antecedent, antecedent], conclusions=[conclusion],
                  inputs=[flat_input(x_var, 0.5), flat_input(x_var, 0.4)])
    r.execute()
    assert r.dof == pytest.approx(0.4)
    r.set_combine_operator("Product")
    r.execute()
    assert r.dof == pytest.approx(0.2)
    with pytest.raises(ConfigError):
        r.set_combine_operator("average")


# ---------- change tracking ----------

def test_flags_cleared_after_firing(rule):
    assert not rule.is_fired_clean
    rule.execute()
    assert rule.is_fired_clean
    rule.set_combine_operator("minimum")
    assert rule.combine_changed and rule.antecedents_changed


def test_cached_dof_reused_until_inputs_touched(rule, x_var):
    rule.execute()
    # swapping the vector behind the rule's back leaves the flags clean
    rule.inputs = FuzzyValueVector([flat_input(x_var, 0.8)])
    rule.execute()
    assert rule.dof == pytest.approx(0.3)
    rule.set_inputs([flat_input(x_var, 0.8)])
    assert rule.inputs_changed
    rule.execute()
    assert rule.dof == pytest.approx(0.8)


def test_conclusion_change_keeps_dof(rule, y_var):
    rule.execute()
    rule.add_conclusion(FuzzyValue(y_var, [0, 1, 2], [0, 1, 0]))
    out = rule.execute()
    assert len(out) == 2
    assert rule.dof == pytest.approx(0.3)


def test_substitute_executor_leaves_rule_untouched(rule, conclusion, x_var):
    rule.execute()
    out = rule.execute(executor=LarsenExecutor(), inputs=[flat_input(x_var, 0.6)])
    assert out[0].fuzzy_set == conclusion.fuzzy_set.scale(0.6)
    assert isinstance(rule.executor, MamdaniExecutor)
    assert rule.dof == pytest.approx(0.3)
    assert rule.is_fired_clean


# ---------- inputs ----------

def test_input_count_mismatch(rule, x_var):
    rule.add_input(flat_input(x_var, 0.1))
    with pytest.raises(IncompatibleRuleInputsError):
        rule.execute()


def test_mismatch_reported_without_conclusions(antecedent, x_var):
    with pytest.raises(IncompatibleRuleInputsError):
        MamdaniExecutor().execute(FuzzyValueVector([antecedent]), FuzzyValueVector(),
                                  FuzzyValueVector())
    r = FuzzyRule(antecedents=[antecedent], inputs=[flat_input(x_var, 0.3)] * 2)
    with pytest.raises(IncompatibleRuleInputsError):
        r.execute()


def test_input_variable_mismatch(rule, y_var):
    rule.set_inputs([flat_input(y_var, 0.5)])
    with pytest.raises(IncompatibleRuleInputsError):
        rule.check_antecedents_and_inputs()


@pytest.mark.parametrize("threshold, expected", [(0.2, True), (0.5, False)])
def test_rule_matching(rule, threshold, expected):
    assert rule.test_rule_matching(threshold) is expected


def test_str(rule):
    assert str(rule) == "r: if x is ??? then y is ???"
