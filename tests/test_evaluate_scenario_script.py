import json

from scripts import evaluate_scenario
from tests.scenario_inputs import sample_form_payload


def test_prints_summary_and_sweep(tmp_path, capsys):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps(sample_form_payload()), encoding="utf-8")

    assert evaluate_scenario.main([str(path), "--exit-price", "15000", "--ledger"]) == 0

    out = capsys.readouterr().out
    assert "Stage 1: Basic Property Cost" in out
    assert "₹1,00,00,000" in out
    assert "15,000" in out
    assert "*     12,000" in out


def test_json_output(tmp_path, capsys, scenario_payload):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps(scenario_payload), encoding="utf-8")

    assert evaluate_scenario.main([str(path), "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["detailed_breakdown"]["total_cost"] == 10_000_000


def test_unreadable_file_returns_error(tmp_path):
    assert evaluate_scenario.main([str(tmp_path / "missing.json")]) == 2
