import json

from ...fuzzy.core.fuzzyset import FuzzySet
from ...fuzzy.core.types import WEAK, STRONG
from ...fuzzy.model import modifiers


def cmd_set(args):
    fs = FuzzySet.from_points(args.points)
    for name in args.hedge or []:
        fs = modifiers.modify(name, fs)
    lo, hi = args.range if args.range else (fs.x(0), fs.x(-1))

    if args.alpha is not None:
        cut = fs.alpha_cut(STRONG if args.strong else WEAK, args.alpha, lo, hi)
        result = {"set": str(fs), "alpha": args.alpha, "strong": bool(args.strong),
                  "intervals": [str(iv) for iv in cut]}
    else:
        method = getattr(fs, f"{args.defuzz}_defuzzify")
        result = {"set": str(fs), "method": args.defuzz, "value": method(lo, hi)}

    if args.json:
        print(json.dumps(result, indent=2))
        return
    print(f"set: {result['set']}")
    if "intervals" in result:
        print(f"alpha-cut: {' '.join(result['intervals']) or '(empty)'}")
    else:
        print(f"{args.defuzz}: {result['value']:.6g}")
