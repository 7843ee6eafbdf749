import pytest

from fuzzykit.fuzzy.core.types import ConfigError, InvalidLinguisticExpressionError
from fuzzykit.fuzzy.io.expr_parser import parse_expression
from fuzzykit.fuzzy.model import modifiers


# ---------- parser ----------

def test_single_term(temp):
    v = parse_expression(temp, "warm")
    assert v == temp.find_term("warm")
    assert v.linguistic_expression == "warm"


def test_not_is_complement(temp):
    v = parse_expression(temp, "NOT Cold")
    assert v.get_membership(15) == pytest.approx(0.5)
    assert v.get_membership(5) == pytest.approx(0.0)


@pytest.mark.parametrize("x, mu", [(5, 1.0), (25, 0.0), (50, 1.0)])
def test_or_is_union(temp, x, mu):
    assert parse_expression(temp, "cold or hot").get_membership(x) == pytest.approx(mu)


def test_and_binds_tighter_than_or(temp):
    # cold or (warm and hot)
    v = parse_expression(temp, "cold or warm and hot")
    assert v.get_membership(25) == pytest.approx(0.0)
    assert v.get_membership(32.5) == pytest.approx(0.25)


def test_parentheses_and_modifiers(temp):
    v = parse_expression(temp, "very (warm)")
    assert v.get_membership(20) == pytest.approx(0.25)
    assert v.get_membership(25) == pytest.approx(1.0)


@pytest.mark.parametrize("text", ["", "cold and", "freezing", "(cold", "cold warm", "cold )", "and cold"])
def test_invalid_expressions(temp, text):
    with pytest.raises(InvalidLinguisticExpressionError):
        parse_expression(temp, text)


def test_error_carries_position(temp):
    with pytest.raises(InvalidLinguisticExpressionError) as exc:
        parse_expression(temp, "cold or freezing")
    assert exc.value.pos == 8
    assert "cold or freezing" in str(exc.value)


# ---------- modifiers ----------

def test_very_squares_membership(triangle):
    v = modifiers.modify("very", triangle)
    assert v.get_membership(2.5) == pytest.approx(0.25)
    assert v.get_membership(5) == pytest.approx(1.0)


def test_somewhat_takes_square_root(triangle):
    v = modifiers.modify("somewhat", triangle)
    assert v.get_membership(2.5) == pytest.approx(0.5 ** 0.5)


def test_norm(triangle):
    assert modifiers.modify("norm", triangle.scale(0.5)) == triangle


def test_intensify(triangle):
    v = modifiers.modify("intensify", triangle)
    assert v.get_membership(1) == pytest.approx(2 * 0.2 ** 2)
    assert v.get_membership(4) == pytest.approx(1 - 2 * 0.2 ** 2)


def test_above_and_below(triangle):
    above = modifiers.modify("above", triangle)
    assert above.get_membership(2) == pytest.approx(0.0)
    assert above.get_membership(7.5) == pytest.approx(0.5)
    below = modifiers.modify("below", triangle)
    assert below.get_membership(2.5) == pytest.approx(0.5)
    assert below.get_membership(8) == pytest.approx(0.0)


def test_slightly_is_a_valid_set(triangle):
    v = modifiers.modify("slightly", triangle)
    assert 0.0 <= v.max_y() <= 1.0


def test_apply_builds_expression(temp):
    v = modifiers.apply("VERY", temp.find_term("warm"))
    assert v.linguistic_expression == "very (warm)"


def test_register_custom_modifier(triangle):
    modifiers.register("Half", lambda fs, ctl: fs.scale(0.5))
    try:
        assert modifiers.is_modifier("half")
        assert modifiers.modify("half", triangle).max_y() == pytest.approx(0.5)
    finally:
        del modifiers.MODIFIERS["half"]


def test_unknown_modifier(triangle):
    with pytest.raises(ConfigError):
        modifiers.modify("kinda", triangle)
