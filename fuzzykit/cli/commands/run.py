import json
from argparse import Namespace

import yaml

from ...fuzzy.core.types import ConfigError
from .show import cmd_show
from .fire import cmd_fire
from .explain import cmd_explain
from .setops import cmd_set

# section -> (command, defaults for options not given in the file)
_STEPS = {
    "show": (cmd_show, {"at": []}),
    "fire": (cmd_fire, {"method": None, "json": False, "executor": None, "combine": None}),
    "explain": (cmd_explain, {"threshold": 0.0, "json": False, "executor": None, "combine": None}),
    "set": (cmd_set, {"hedge": [], "range": None, "alpha": None, "strong": False,
                      "defuzz": "moment", "json": False}),
}


def _load_cfg(path: str):
    try:
        with open(path, encoding="utf-8") as f:
            if path.lower().endswith((".yml", ".yaml")):
                return yaml.safe_load(f)
            return json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e.strerror}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"{path}: {e}") from e


def _kv_pairs(d):
    """{'a': 1} -> [('a', 1.0)] (the shape argparse produces for var=value)."""
    return [(str(k), float(v)) for k, v in (d or {}).items()]


def _ns(section: str, d: dict) -> Namespace:
    _, defaults = _STEPS[section]
    ns = Namespace(**{**defaults, **d})
    if section in ("fire", "explain"):
        ns.kv = _kv_pairs(d.get("inputs"))
    elif section == "show":
        ns.at = _kv_pairs(d.get("at"))
    elif section == "set":
        ns.points = [tuple(map(float, p)) for p in d.get("points", [])]
    return ns


def cmd_run(args):
    cfg = _load_cfg(args.config) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"{args.config}: top level must be a mapping")
    for section, body in cfg.items():
        if section not in _STEPS:
            raise ConfigError(f"{args.config}: unknown section '{section}' "
                              f"(known: {', '.join(_STEPS)})")
        for step in body if isinstance(body, list) else [body]:
            print(f"[run] {section}")
            _STEPS[section][0](_ns(section, step or {}))
