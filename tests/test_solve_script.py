import json

import pytest

from becker_irr.core import becker_irr
from scripts.solve_becker_irr import main

SCENARIO = "50,-200,20,40,200,100,-70,-100,20,100"


def test_script_newton(capsys):
    code = main(["--flows", SCENARIO, "--external-rate", "0.07", "--guess", "0.1", "--decimals", "6"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["method"] == "newton"
    assert payload["rate"] == becker_irr([float(x) for x in SCENARIO.split(",")], 0.07, 0.1, 6)


def test_script_balance_from_csv(tmp_path, capsys):
    path = tmp_path / "flows.csv"
    path.write_text("flow\n-100\n110\n", encoding="utf-8")
    code = main(["--csv", str(path), "--external-rate", "0.05", "--guess", "0.0", "--method", "balance"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["rate"] == pytest.approx(0.1)


def test_script_reports_error_kind(capsys):
    code = main(["--flows", "5,10", "--external-rate", "0.07"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload["error"] == "DegenerateSeries"


def test_script_accepts_leading_negative_flow(capsys):
    code = main(["--flows=-100,50,60", "--external-rate", "0.05", "--guess", "0.2"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["rate"] == pytest.approx(0.005)


def test_script_rejects_zero_iteration_bound(capsys):
    code = main(["--flows", SCENARIO, "--external-rate", "0.07", "--max-iterations", "0"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload["error"] == "ValueError"


def test_script_reports_unparseable_flows(capsys):
    code = main(["--flows", "50,abc", "--external-rate", "0.07"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload["error"] == "ValueError"
