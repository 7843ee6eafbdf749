import json

from ...fuzzy.io.kb_loader import load_knowledge
from ..argtypes import keyvals_to_dict


def cmd_fire(args):
    kb = load_knowledge(args.model)
    kb.override(args.executor, args.combine)
    data = keyvals_to_dict(args.kv)
    out = kb.fire(data, method=args.method)
    if args.json:
        print(json.dumps(out, indent=2))
        return
    for oname, val in out.items():
        print(f"{oname}: {val:.6g}")
