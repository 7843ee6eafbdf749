import sys
from typing import Dict

from ...fuzzy.io.kb_loader import load_knowledge
from ..argtypes import keyvals_to_dict


# ========= utils: ANSI / pretty =========

_RESET = "\x1b[0m"

def _use_ansi() -> bool:
    return sys.stdout.isatty()

def _ansi_color(mu: float) -> str:
    """
    Colour by membership:
      >= 0.50 green
      >= 0.20 yellow
      <  0.20 grey
    """
    if not _use_ansi():
        return ""
    if mu >= 0.50:
        return "\x1b[32m"
    if mu >= 0.20:
        return "\x1b[33m"
    return "\x1b[90m"

def _fmt_mu(mu: float) -> str:
    color = _ansi_color(mu)
    return f"{color}{mu:.3f}{_RESET if color else ''}"


# ========= command =========

def cmd_show(args):
    kb = load_knowledge(args.model)
    at: Dict[str, float] = keyvals_to_dict(args.at or [])
    cfg = kb.config

    print(f"Engine: executor={cfg.executor} combine={cfg.combine} defuzzify={cfg.defuzzify}")
    print("Variables:")
    for var in kb.variables.values():
        print(f"  {var}")
        x = at.get(var.name)
        for term in var.terms():
            line = f"    {term.linguistic_expression:<16} {term}"
            if x is not None:
                line += f"   mu({x:g})={_fmt_mu(term.get_membership(x))}"
            print(line)

    print("Rules:")
    for rule in kb.rules:
        print(f"  {rule}   [{rule.executor.name}/{rule.combine}]")
