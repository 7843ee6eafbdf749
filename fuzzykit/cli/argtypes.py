import argparse
from typing import Dict, Iterable, List, Tuple

from ..fuzzy.core.norms import COMBINE_OPERATORS
from ..fuzzy.model.config import DEFUZZIFY_METHODS, EXECUTOR_NAMES

DEFUZZ_CHOICES = list(DEFUZZIFY_METHODS)
EXECUTOR_CHOICES = list(EXECUTOR_NAMES)
COMBINE_CHOICES = sorted(COMBINE_OPERATORS)
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def parse_keyval(s: str) -> Tuple[str, float]:
    """'temperature=21.5' -> ('temperature', 21.5)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"bad item: '{s}' (expected 'var=value')")
    k, v = (t.strip() for t in s.split("=", 1))
    if not k:
        raise argparse.ArgumentTypeError(f"empty variable name in: '{s}'")
    try:
        return k, float(v)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: '{v}' in '{s}'") from None


def keyvals_to_dict(items: Iterable[Tuple[str, float]]) -> Dict[str, float]:
    out: Dict[str, float] = {}
    for k, v in items:
        out[k] = v
    return out


def parse_points(s: str) -> List[Tuple[float, float]]:
    """'0,0 5,1 10,0' -> [(0, 0), (5, 1), (10, 0)]; ';' also separates points."""
    pts = []
    for tok in s.replace(";", " ").split():
        if "," not in tok:
            raise argparse.ArgumentTypeError(f"bad point: '{tok}' (expected 'x,y')")
        x, y = tok.split(",", 1)
        try:
            pts.append((float(x), float(y)))
        except ValueError:
            raise argparse.ArgumentTypeError(f"bad point: '{tok}'") from None
    if not pts:
        raise argparse.ArgumentTypeError("no points given")
    return pts
