"""
Knowledge files (YAML, or JSON by extension):

  engine:                      # optional, EngineConfig keys
    executor: mamdani
    combine: minimum
    defuzzify: moment
    aggregate: union         # or sum
  variables:                   # list of {name, range, units, terms} or a name -> spec mapping
    - name: temperature
      range: [0, 100]
      units: C
      terms:
        cold: {shape: trap, params: [0, 0, 10, 20]}
        warm: {points: [[15, 0], [25, 1], [35, 0]]}
        mild: {expr: "not cold and not hot"}   # a plain string means the same
  rules:
    - name: r1                 # optional
      if:   {temperature: cold}
      then: {fan: very high}
      executor: larsen         # optional, per-rule override
      combine: product         # optional

Terms are built in file order, so `expr` terms may refer to earlier ones.
"""

from __future__ import annotations
import json
import logging
import os
from typing import Any, Mapping, Optional

import yaml

from ..core.mfs import build_shape
from ..core.rule import FuzzyRule
from ..core.types import FuzzyError, KnowledgeFileError
from ..model.config import EngineConfig
from ..model.knowledge import KnowledgeBase
from ..model.value import FuzzyValue
from ..model.variable import FuzzyVariable

log = logging.getLogger(__name__)

_RULE_KEYS = {"name", "if", "then", "executor", "combine"}


# ---------- helpers ----------

class _Ctx:
    def __init__(self, path: str) -> None:
        self.path = path

    def error(self, msg: str, where: str = "") -> KnowledgeFileError:
        return KnowledgeFileError(msg, self.path, where)


def _read(path: str) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            if path.lower().endswith(".json"):
                return json.load(f)
            return yaml.safe_load(f)
    except OSError as e:
        raise KnowledgeFileError(f"cannot read file: {e.strerror}", path) from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise KnowledgeFileError(f"syntax error: {e}", path) from e


def _variable_specs(ctx: _Ctx, raw: Any):
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        out = []
        for name, spec in raw.items():
            if not isinstance(spec, Mapping):
                raise ctx.error("variable spec must be a mapping", f"variables.{name}")
            out.append(dict(spec, name=name))
        return out
    if isinstance(raw, list):
        return raw
    raise ctx.error("'variables' must be a list or a mapping")


def _term(ctx: _Ctx, var: FuzzyVariable, name: str, spec: Any, where: str) -> None:
    if isinstance(spec, str):
        var.add_term(name, spec)
    elif isinstance(spec, Mapping):
        kinds = [k for k in ("shape", "points", "expr") if k in spec]
        if len(kinds) != 1:
            raise ctx.error("term needs exactly one of shape/points/expr", where)
        if "shape" in spec:
            try:
                fs = build_shape(str(spec["shape"]), [float(p) for p in spec.get("params", [])])
            except (KeyError, ValueError, TypeError) as e:
                raise ctx.error(str(e).strip("'\""), where) from e
            var.add_term(name, fs)
        elif "points" in spec:
            try:
                pts = [(float(x), float(y)) for x, y in spec["points"]]
            except (TypeError, ValueError) as e:
                raise ctx.error("points must be [x, y] pairs", where) from e
            var.add_term(name, pts)
        else:
            var.add_term(name, str(spec["expr"]))
    else:
        raise ctx.error("term must be a mapping or an expression string", where)


def _variable(ctx: _Ctx, kb: KnowledgeBase, spec: Any, idx: int) -> None:
    if not isinstance(spec, Mapping):
        raise ctx.error("variable spec must be a mapping", f"variables[{idx}]")
    name = str(spec.get("name", ""))
    where = f"variables.{name or idx}"
    rng = spec.get("range")
    if not isinstance(rng, (list, tuple)) or len(rng) != 2:
        raise ctx.error("'range' must be [min, max]", where)
    try:
        lo, hi = float(rng[0]), float(rng[1])
    except (TypeError, ValueError) as e:
        raise ctx.error("'range' values must be numbers", where) from e
    try:
        var = FuzzyVariable(name, lo, hi, str(spec.get("units", "") or ""), config=kb.config)
        kb.add_variable(var)
    except FuzzyError as e:
        raise ctx.error(str(e), where) from e
    terms = spec.get("terms") or {}
    if not isinstance(terms, Mapping):
        raise ctx.error("'terms' must be a mapping", where)
    for tname, tspec in terms.items():
        twhere = f"{where}.terms.{tname}"
        try:
            _term(ctx, var, str(tname), tspec, twhere)
        except KnowledgeFileError:
            raise
        except FuzzyError as e:
            raise ctx.error(str(e), twhere) from e


def _clauses(ctx: _Ctx, kb: KnowledgeBase, raw: Any, where: str):
    if raw is None:
        return []
    if not isinstance(raw, Mapping):
        raise ctx.error("clauses must be a var: expression mapping", where)
    out = []
    for vname, expr in raw.items():
        if str(vname) not in kb.variables:
            raise ctx.error(f"unknown variable: {vname}", where)
        try:
            out.append(FuzzyValue(kb.variables[str(vname)], str(expr)))
        except FuzzyError as e:
            raise ctx.error(str(e), f"{where}.{vname}") from e
    return out


def _rule(ctx: _Ctx, kb: KnowledgeBase, spec: Any, idx: int) -> None:
    where = f"rules[{idx}]"
    if not isinstance(spec, Mapping):
        raise ctx.error("rule must be a mapping", where)
    extra = set(spec) - _RULE_KEYS
    if extra:
        raise ctx.error(f"unknown rule keys: {', '.join(sorted(map(str, extra)))}", where)
    if not spec.get("then"):
        raise ctx.error("rule has no 'then' clause", where)
    overrides = {k: str(spec[k]).lower() for k in ("executor", "combine") if k in spec}
    try:
        cfg = kb.config.with_(**overrides) if overrides else kb.config
    except FuzzyError as e:
        raise ctx.error(str(e), where) from e
    rule = FuzzyRule(
        name=str(spec.get("name") or f"r{idx + 1}"),
        config=cfg,
        antecedents=_clauses(ctx, kb, spec.get("if"), f"{where}.if"),
        conclusions=_clauses(ctx, kb, spec.get("then"), f"{where}.then"),
    )
    kb.add_rule(rule)


# ---------- API ----------

def build_knowledge(data: Any, path: str = "") -> KnowledgeBase:
    """KnowledgeBase from already-parsed YAML/JSON data."""
    ctx = _Ctx(path)
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ctx.error("top level must be a mapping")
    unknown = set(data) - {"engine", "variables", "rules"}
    if unknown:
        raise ctx.error(f"unknown sections: {', '.join(sorted(map(str, unknown)))}")
    try:
        config = EngineConfig.from_dict(data.get("engine") or {})
    except FuzzyError as e:
        raise ctx.error(str(e), "engine") from e

    kb = KnowledgeBase(config=config)
    for i, spec in enumerate(_variable_specs(ctx, data.get("variables"))):
        _variable(ctx, kb, spec, i)
    rules = data.get("rules") or []
    if not isinstance(rules, list):
        raise ctx.error("'rules' must be a list")
    for i, spec in enumerate(rules):
        _rule(ctx, kb, spec, i)
    log.info("loaded knowledge base %s: %d variables, %d rules",
             path or "<string>", len(kb.variables), len(kb.rules))
    return kb


def load_knowledge(path) -> KnowledgeBase:
    path = os.fspath(path)
    return build_knowledge(_read(path), path)


def load_knowledge_string(source: str, path: Optional[str] = None) -> KnowledgeBase:
    """YAML text (JSON is a subset) -> KnowledgeBase."""
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise KnowledgeFileError(f"syntax error: {e}", path or "<string>") from e
    return build_knowledge(data, path or "")
