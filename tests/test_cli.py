import argparse
import json

import pytest

from fuzzykit.cli.argtypes import parse_keyval, parse_points
from fuzzykit.cli.main import main


# ---------- argument types ----------

def test_parse_keyval():
    assert parse_keyval(" temperature = 21.5 ") == ("temperature", 21.5)
    for bad in ("temperature", "=3", "t=warm"):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_keyval(bad)


def test_parse_points():
    assert parse_points("0,0 5,1;10,0") == [(0, 0), (5, 1), (10, 0)]
    for bad in ("", "1;2", "a,1"):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_points(bad)


# ---------- commands ----------

def test_fire(kb_file, capsys):
    assert main(["fire", "--model", str(kb_file), "temperature=5"]) == 0
    assert capsys.readouterr().out.strip() == "fan: 25"


def test_fire_json(kb_file, capsys):
    main(["fire", "--model", str(kb_file), "temperature=35", "--json"])
    assert json.loads(capsys.readouterr().out)["fan"] == pytest.approx(75.0)


def test_fire_with_executor_override(kb_file, capsys):
    main(["fire", "--model", str(kb_file), "temperature=5", "--executor", "larsen",
          "--method", "maximum"])
    assert capsys.readouterr().out.strip() == "fan: 25"


def test_fire_error_exit_code(kb_file, capsys):
    assert main(["fire", "--model", str(kb_file), "humidity=5"]) == 2
    assert capsys.readouterr().err.startswith("error:")


def test_missing_model(tmp_path, capsys):
    assert main(["fire", "--model", str(tmp_path / "nope.yaml"), "t=1"]) == 2
    assert "cannot read file" in capsys.readouterr().err


def test_show(kb_file, capsys):
    main(["show", "--model", str(kb_file), "--at", "temperature=15"])
    out = capsys.readouterr().out
    assert "Engine: executor=mamdani combine=minimum defuzzify=moment" in out
    assert "temperature [0, 40] C" in out
    assert "mu(15)=0.500" in out
    assert "r2: if temperature is hot then fan is high" in out


def test_explain(kb_file, capsys):
    main(["explain", "--model", str(kb_file), "temperature=5", "--json"])
    res = json.loads(capsys.readouterr().out)
    assert [r["rule"] for r in res] == ["r1", "r2"]
    assert res[0]["dof"] == pytest.approx(1.0)
    assert res[0]["antecedent"][0]["expr"] == "cold"


def test_explain_threshold_hides_idle_rules(kb_file, capsys):
    main(["explain", "--model", str(kb_file), "temperature=5", "--threshold", "0.5"])
    out = capsys.readouterr().out
    assert out.startswith("r1: IF temperature is cold (match=1.000)")
    assert "r2" not in out


def test_set_defuzz(capsys):
    main(["set", "--points", "1,0 2,1 3,0", "--defuzz", "moment"])
    assert capsys.readouterr().out.splitlines()[-1] == "moment: 2"


def test_set_alpha_cut(capsys):
    main(["set", "--points", "0,0 5,1 10,0", "--alpha", "0.5"])
    assert capsys.readouterr().out.splitlines()[-1] == "alpha-cut: [2.5, 7.5]"


def test_set_strong_cut_with_hedge_json(capsys):
    main(["set", "--points", "0,0 5,1 10,0", "--hedge", "very", "--alpha", "0.25",
          "--strong", "--json"])
    res = json.loads(capsys.readouterr().out)
    assert res["strong"] is True
    assert len(res["intervals"]) == 1
    assert res["intervals"][0].startswith("(2.5")


def test_set_needs_an_operation():
    with pytest.raises(SystemExit):
        main(["set", "--points", "0,0 5,1"])


def test_run(kb_file, tmp_path, capsys):
    steps = tmp_path / "steps.yaml"
    steps.write_text(
        f"fire:\n"
        f"  model: {kb_file}\n"
        f"  inputs: {{temperature: 5}}\n"
        f"set:\n"
        f"  - points: [[0, 0], [5, 1], [10, 0]]\n"
        f"    alpha: 0.5\n"
        f"  - points: [[1, 0], [2, 1], [3, 0]]\n",
        encoding="utf-8",
    )
    assert main(["run", "--config", str(steps)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "[run] fire"
    assert "fan: 25" in lines
    assert lines.count("[run] set") == 2
    assert "alpha-cut: [2.5, 7.5]" in lines
    assert lines[-1] == "moment: 2"


def test_run_unknown_section(tmp_path, capsys):
    steps = tmp_path / "steps.json"
    steps.write_text('{"predict": {}}', encoding="utf-8")
    assert main(["run", "--config", str(steps)]) == 2
    assert "unknown section 'predict'" in capsys.readouterr().err


def test_run_unknown_hedge(tmp_path, capsys):
    steps = tmp_path / "steps.yaml"
    steps.write_text("set: {points: [[0, 0], [5, 1]], hedge: [kinda]}\n", encoding="utf-8")
    assert main(["run", "--config", str(steps)]) == 2
    assert "unknown modifier: kinda" in capsys.readouterr().err
