import pytest

from fuzzykit.fuzzy.core.fuzzyset import FuzzySet
from fuzzykit.fuzzy.model.variable import FuzzyVariable

KB_YAML = """
engine:
  executor: mamdani
  combine: minimum
  defuzzify: moment
variables:
  - name: temperature
    range: [0, 40]
    units: C
    terms:
      cold: {shape: trap, params: [0, 0, 10, 20]}
      hot:  {shape: trap, params: [20, 30, 40, 40]}
  - name: fan
    range: [0, 100]
    terms:
      low:  {shape: tri, params: [0, 25, 50]}
      high: {points: [[50, 0], [75, 1], [100, 0]]}
rules:
  - name: r1
    if: {temperature: cold}
    then: {fan: low}
  - name: r2
    if: {temperature: hot}
    then: {fan: high}
"""


@pytest.fixture
def triangle():
    return FuzzySet([0, 5, 10], [0, 1, 0])


@pytest.fixture
def two_triangles():
    return FuzzySet([5, 6, 7, 15, 16, 17], [0, 1, 0, 0, 1, 0])


@pytest.fixture
def temp():
    var = FuzzyVariable("temp", 0, 100, "C")
    var.add_term("cold", [(0, 1), (10, 1), (20, 0)])
    var.add_term("warm", [(15, 0), (25, 1), (35, 0)])
    var.add_term("hot", [(30, 0), (40, 1)])
    return var


@pytest.fixture
def kb_file(tmp_path):
    p = tmp_path / "fan.yaml"
    p.write_text(KB_YAML, encoding="utf-8")
    return p


@pytest.fixture
def kb_source():
    return KB_YAML
