import argparse
from ..argtypes import (
    parse_keyval, parse_points,
    DEFUZZ_CHOICES, EXECUTOR_CHOICES, COMBINE_CHOICES, LOG_LEVELS,
)
from ...fuzzy.model.modifiers import MODIFIERS
# command imports:
from .show import cmd_show
from .fire import cmd_fire
from .explain import cmd_explain
from .setops import cmd_set
from .run import cmd_run


def _engine_overrides(sp):
    sp.add_argument("--executor", choices=EXECUTOR_CHOICES, help="override every rule's executor")
    sp.add_argument("--combine", choices=COMBINE_CHOICES, help="override every rule's combine operator")


def build_parser():
    fmt = argparse.ArgumentDefaultsHelpFormatter
    ap = argparse.ArgumentParser(
        prog="fuzzykit",
        description="Fuzzy set algebra and rule inference (show / fire / explain / set / run)",
        formatter_class=fmt,
        epilog=(
            "Examples:\n"
            "  fuzzykit show --model fan.yaml --at temperature=22\n"
            "  fuzzykit fire --model fan.yaml temperature=22 humidity=60\n"
            "  fuzzykit fire --model fan.yaml temperature=22 humidity=60 --method center_of_area --json\n"
            "  fuzzykit explain --model fan.yaml temperature=22 humidity=60\n"
            "  fuzzykit set --points '0,0 5,1 10,0' --defuzz moment --range 0 10\n"
            "  fuzzykit set --points '0,0 5,1 10,0' --alpha 0.5 --strong\n"
            "  fuzzykit run --config steps.yaml\n"
        )
    )
    ap.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING")

    sub = ap.add_subparsers(dest="cmd", required=True)

    # show
    sp_s = sub.add_parser("show", help="Show variables, terms and rules; memberships at given points",
                          formatter_class=fmt)
    sp_s.add_argument("--model", required=True)
    sp_s.add_argument("--at", nargs="*", type=parse_keyval, default=[], help="var=value pairs")
    sp_s.set_defaults(func=cmd_show)

    # fire
    sp_f = sub.add_parser("fire", help="Fire the rule base for crisp inputs", formatter_class=fmt)
    sp_f.add_argument("--model", required=True)
    sp_f.add_argument("kv", nargs="+", type=parse_keyval, help="var=value pairs")
    sp_f.add_argument("--method", choices=DEFUZZ_CHOICES,
                      help="defuzzification; when missing, uses the model's engine setting")
    sp_f.add_argument("--json", action="store_true")
    _engine_overrides(sp_f)
    sp_f.set_defaults(func=cmd_fire)

    # explain
    sp_e = sub.add_parser("explain", help="DOF and conclusions per rule", formatter_class=fmt)
    sp_e.add_argument("--model", required=True)
    sp_e.add_argument("kv", nargs="+", type=parse_keyval, help="var=value pairs")
    sp_e.add_argument("--json", action="store_true")
    sp_e.add_argument("--threshold", type=float, default=0.0, help="hide rules with a lower DOF")
    _engine_overrides(sp_e)
    sp_e.set_defaults(func=cmd_explain)

    # set
    sp_set = sub.add_parser("set", help="Operations on a single fuzzy set", formatter_class=fmt)
    sp_set.add_argument("--points", required=True, type=parse_points, help="'x,y x,y ...'")
    sp_set.add_argument("--hedge", action="append", choices=sorted(MODIFIERS),
                        help="apply a hedge first (repeatable, applied in order)")
    g_op = sp_set.add_mutually_exclusive_group(required=True)
    g_op.add_argument("--defuzz", choices=DEFUZZ_CHOICES)
    g_op.add_argument("--alpha", type=float, help="alpha-cut level")
    sp_set.add_argument("--strong", action="store_true", help="strong alpha-cut (> level)")
    sp_set.add_argument("--range", nargs=2, type=float, metavar=("LO", "HI"),
                        help="x bounds; default: first and last point")
    sp_set.add_argument("--json", action="store_true")
    sp_set.set_defaults(func=cmd_set)

    # run
    sp_run = sub.add_parser("run", help="Run a sequence of commands from a YAML/JSON file")
    sp_run.add_argument("--config", required=True, help="path to steps.yaml / steps.json")
    sp_run.set_defaults(func=cmd_run)

    return ap
