import math

import pytest

from propanalyzer.services.inputs import (
    Assumptions,
    PaymentPlan,
    PropertyInput,
    ScenarioInput,
    funding_end_month,
    holding_months,
    home_loan_start_month,
    resolve_shares,
    safe_month,
    safe_value,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("abc", 0.0),
        ("12.5", 12.5),
        (7, 7.0),
        (float("nan"), 0.0),
        ("Infinity", 0.0),
        ([1, 2], 0.0),
        ({"v": 1}, 0.0),
    ],
)
def test_safe_value(raw, expected):
    assert safe_value(raw) == expected


def test_safe_month_truncates():
    assert safe_month("24.9") == 24
    assert safe_month(None) == 0


def test_payment_plan_parse_falls_back_to_custom():
    assert PaymentPlan.parse("20-80") is PaymentPlan.PLAN_20_80
    assert PaymentPlan.parse(" CLP ") is PaymentPlan.CLP
    assert PaymentPlan.parse("flexi") is PaymentPlan.CUSTOM
    assert PaymentPlan.parse(None) is PaymentPlan.CUSTOM


def test_preset_and_custom_shares():
    a = Assumptions.from_dict(
        {"home_loan_share": 70, "personal_loan1_share": 10, "personal_loan2_share": "5", "down_payment_share": 15}
    )
    assert resolve_shares(PaymentPlan.CLP, a) == (80.0, 10.0, 10.0, 0.0)
    assert resolve_shares(PaymentPlan.PLAN_40_60, a) == (60.0, 40.0, 0.0, 0.0)
    assert resolve_shares(PaymentPlan.RTM, a) == (80.0, 20.0, 0.0, 0.0)
    assert resolve_shares(PaymentPlan.CUSTOM, a) == (70.0, 10.0, 5.0, 15.0)


def test_assumption_defaults_for_disbursement():
    a = Assumptions.from_dict({"bank_disbursement_start_month": "", "bank_disbursement_interval": -2})
    assert a.bank_disbursement_start_month == 1
    assert a.bank_disbursement_interval == 3
    assert a.home_loan_start_mode == "default"
    assert a.holding_period_unit == "years"


@pytest.mark.parametrize("raw", [-2, "-1", 0, None])
def test_non_positive_disbursement_start_uses_default(raw):
    assert Assumptions.from_dict({"bank_disbursement_start_month": raw}).bank_disbursement_start_month == 1


def test_loan_start_months_never_before_month_zero():
    a = Assumptions.from_dict({"personal_loan1_start_month": -5, "personal_loan2_start_month": "-3"})
    assert a.personal_loan1_start_month == 0
    assert a.personal_loan2_start_month == 0
    manual = Assumptions.from_dict({"home_loan_start_month": -40, "home_loan_start_mode": "manual"})
    assert home_loan_start_month(manual, 24) == 0
    assert home_loan_start_month(Assumptions.from_dict({"home_loan_start_month": -100}), 24) == 0


def test_holding_months_by_unit():
    assert holding_months(Assumptions.from_dict({"investment_period": 3})) == 36
    assert holding_months(Assumptions.from_dict({"investment_period": 30, "holding_period_unit": "months"})) == 30


def test_funding_end_priority():
    possession = 36
    assert funding_end_month(Assumptions.from_dict({}), possession) == 36
    assert funding_end_month(Assumptions.from_dict({"clp_duration_years": 2}), possession) == 24
    explicit = Assumptions.from_dict({"clp_duration_years": 2, "last_bank_disbursement_month": 18})
    assert funding_end_month(explicit, possession) == 18


def test_home_loan_start_month_modes():
    default = Assumptions.from_dict({"home_loan_start_month": 2})
    manual = Assumptions.from_dict({"home_loan_start_month": 2, "home_loan_start_mode": "manual"})
    assert home_loan_start_month(default, 24) == 27
    assert home_loan_start_month(manual, 24) == 2


def test_scenario_from_dict_normalizes_everything():
    s = ScenarioInput.from_dict(
        {
            "purchase_price": "9500",
            "stamp_duty": None,
            "payment_plan": "rtm",
            "selected_property": {"size": "1,000", "possession_months": -4},
            "selected_exit_price": "n/a",
            "scenario_exit_prices": ["11000", "", None],
            "assumptions": "not a mapping",
        }
    )
    assert s.purchase_price == 9500.0
    assert s.stamp_duty == 0.0
    assert s.payment_plan is PaymentPlan.RTM
    assert s.selected_property == PropertyInput(size=0.0, possession_months=0)
    assert s.selected_exit_price == 0.0
    assert s.scenario_exit_prices == (11000.0, 0.0, 0.0)
    assert s.assumptions == Assumptions()
    assert not any(math.isnan(x) for x in s.scenario_exit_prices)
