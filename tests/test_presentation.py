import pytest

from propanalyzer.services.presentation import format_currency
from propanalyzer.services.scenario import evaluate


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "₹0"),
        (999, "₹999"),
        (1000, "₹1,000"),
        (123456, "₹1,23,456"),
        (10_000_000, "₹1,00,00,000"),
        (1234.5, "₹1,235"),
        (0.4, "₹0"),
        (-123456, "₹-1,23,456"),
        (None, "₹0"),
        (float("nan"), "₹0"),
        ("12", "₹0"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_stage_groupings(scenario_payload):
    stages = evaluate(scenario_payload)["stage_calculations"]
    assert list(stages) == ["stage1", "stage2", "stage3", "stage4"]

    stage1 = {i["label"]: i["value"] for i in stages["stage1"]["items"]}
    assert stage1["Property Size"] == "1000 sq.ft"
    assert stage1["Purchase Price"] == "₹10,000/sq.ft"
    assert stage1["Total Property Cost"] == "₹1,00,00,000"

    stage2 = {i["label"]: i["value"] for i in stages["stage2"]["items"]}
    assert stage2 == {
        "Down Payment": "₹0",
        "Home Loan": "₹80,00,000",
        "PL1": "₹20,00,000",
        "PL2": "₹0",
    }

    stage4 = {i["label"]: i["value"] for i in stages["stage4"]["items"]}
    assert stage4["Duration"] == "3 years"
    assert stage4["Exit Price"] == "₹12,000/sq.ft"
    assert stage4["Sale Value"] == "₹1,20,00,000"
    assert stages["stage3"]["title"] == "Stage 3: Monthly"
