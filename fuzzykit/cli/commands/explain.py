import json

from ...fuzzy.io.kb_loader import load_knowledge
from ..argtypes import keyvals_to_dict


def _explain(kb, data, threshold: float):
    res = []
    for f in kb.fire_rules(data):
        if f.dof < threshold:
            continue
        res.append({
            "rule": f.rule.name,
            "executor": f.rule.executor.name,
            "combine": f.rule.combine,
            "antecedent": [
                {"var": a.variable.name, "expr": a.linguistic_expression,
                 "match": a.maximum_of_intersection(x)}
                for a, x in zip(f.rule.antecedents, f.rule.inputs)
            ],
            "dof": f.dof,
            "conclusions": [
                {"var": c.variable.name, "set": str(c)} for c in f.conclusions
            ],
        })
    return res


def cmd_explain(args):
    kb = load_knowledge(args.model)
    kb.override(args.executor, args.combine)
    data = keyvals_to_dict(args.kv)
    res = _explain(kb, data, args.threshold)
    if args.json:
        print(json.dumps(res, indent=2))
        return
    for r in res:
        ants = " AND ".join(f"{a['var']} is {a['expr']} (match={a['match']:.3f})" for a in r["antecedent"])
        print(f"{r['rule']}: IF {ants or 'true'}  dof={r['dof']:.4f} [{r['executor']}/{r['combine']}]")
        for c in r["conclusions"]:
            print(f"    THEN {c['var']} -> {c['set']}")
