from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from propanalyzer.services.inputs import ScenarioInput

CURRENCY_GLYPH = "₹"


def _group_indian(digits: str) -> str:
    # 1,00,00,000: last three digits, then groups of two
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: List[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return f"{CURRENCY_GLYPH}0"
    if not math.isfinite(value):
        return f"{CURRENCY_GLYPH}0"
    rounded = math.floor(value + 0.5)
    sign = "-" if rounded < 0 else ""
    return f"{CURRENCY_GLYPH}{sign}{_group_indian(str(abs(rounded)))}"


def _plain_number(x: float) -> str:
    x = float(x)
    if x.is_integer():
        return str(int(x))
    return f"{round(x, 2)}"


def _item(label: str, value: str) -> Dict[str, str]:
    return {"label": label, "value": value}


def build_stages(scenario: ScenarioInput, detail: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Label/value groupings the form renders as four cards."""
    return {
        "stage1": {
            "title": "Stage 1: Basic Property Cost",
            "items": [
                _item("Property Size", f"{_plain_number(detail['property_size'])} sq.ft"),
                _item("Purchase Price", f"{format_currency(scenario.purchase_price)}/sq.ft"),
                _item("Other Charges", format_currency(scenario.other_charges)),
                _item("Stamp Duty", format_currency(detail["stamp_duty_cost"])),
                _item("GST charges", format_currency(detail["gst_cost"])),
                _item("Total Property Cost", format_currency(detail["total_cost"])),
            ],
        },
        "stage2": {
            "title": "Stage 2: Funding",
            "items": [
                _item("Down Payment", format_currency(detail["down_payment_amount"])),
                _item("Home Loan", format_currency(detail["home_loan_amount"])),
                _item("PL1", format_currency(detail["personal_loan1_amount"])),
                _item("PL2", format_currency(detail["personal_loan2_amount"])),
            ],
        },
        "stage3": {
            "title": "Stage 3: Monthly",
            "items": [
                _item("Home Loan EMI", format_currency(detail["home_loan_emi"])),
                _item("PL1 EMI", format_currency(detail["personal_loan1_emi"])),
                _item("PL2 EMI", format_currency(detail["personal_loan2_emi"])),
                _item("Total Monthly", format_currency(detail["post_possession_emi"])),
            ],
        },
        "stage4": {
            "title": "Stage 4: Exit",
            "items": [
                _item("Duration", f"{_plain_number(detail['years'])} years"),
                _item("Exit Price", f"{format_currency(detail['exit_price'])}/sq.ft"),
                _item("Sale Value", format_currency(detail["sale_value"])),
            ],
        },
    }
