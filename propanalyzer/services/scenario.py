from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Mapping

from propanalyzer.services.amortization import emi, outstanding_after_payments, total_interest_paid
from propanalyzer.services.disbursement import build_slabs
from propanalyzer.services.idc import annotate_slabs, build_idc_report
from propanalyzer.services.inputs import (
    ScenarioInput,
    coerce_scenario,
    funding_end_month,
    holding_months,
    home_loan_start_month,
    resolve_shares,
)
from propanalyzer.services.ledger import simulate_ledger
from propanalyzer.services.presentation import build_stages

logger = logging.getLogger(__name__)


def _loan(amount: float, rate: float, term: float, payments: float) -> Dict[str, float]:
    if amount <= 0:
        return {"emi": 0.0, "outstanding": 0.0, "interest": 0.0}
    return {
        "emi": emi(amount, rate, term),
        "outstanding": outstanding_after_payments(amount, rate, term, payments),
        "interest": total_interest_paid(amount, rate, term, payments),
    }


def evaluate_for_price(scenario: ScenarioInput, exit_price: float) -> Dict[str, Any]:
    """Full single-scenario breakdown for one exit price per unit area."""
    a = scenario.assumptions
    prop = scenario.selected_property

    size = prop.size
    possession = prop.possession_months
    holding = holding_months(a)
    years = round(holding / 12, 2)

    base_cost = size * scenario.purchase_price
    stamp_duty_cost = base_cost * scenario.stamp_duty / 100
    gst_cost = base_cost * scenario.gst_percentage / 100
    # ancillary charges are reported but not financed
    total_cost = base_cost

    hl_share, pl1_share, pl2_share, dp_share = resolve_shares(scenario.payment_plan, a)
    hl_amount = total_cost * hl_share / 100
    pl1_amount = total_cost * pl1_share / 100
    pl2_amount = total_cost * pl2_share / 100
    dp_amount = total_cost * dp_share / 100

    funding_end = funding_end_month(a, possession)
    hl_start = home_loan_start_month(a, funding_end)
    cutoff = hl_start - 1
    disb_start = a.bank_disbursement_start_month

    hl_payments = max(0.0, holding - (hl_start - 1))
    pl1_payments = max(0.0, holding - a.personal_loan1_start_month)
    pl2_start = possession + a.personal_loan2_start_month
    pl2_payments = max(0.0, holding - pl2_start)

    hl = _loan(hl_amount, a.home_loan_rate, a.home_loan_term, hl_payments)
    pl1 = _loan(pl1_amount, a.personal_loan1_rate, a.personal_loan1_term, pl1_payments)
    pl2 = _loan(pl2_amount, a.personal_loan2_rate, a.personal_loan2_term, pl2_payments)

    slabs = build_slabs(hl_amount, disb_start, a.bank_disbursement_interval, funding_end)
    ledger = simulate_ledger(
        home_loan_amount=hl_amount,
        home_loan_rate=a.home_loan_rate,
        home_loan_emi=hl["emi"],
        slabs=slabs,
        funding_end_month=funding_end,
        start_month=hl_start,
        mode=a.home_loan_start_mode,
        possession_months=possession,
        pl1_amount=pl1_amount,
        pl1_emi=pl1["emi"],
        pl1_start_month=a.personal_loan1_start_month,
    )
    idc_report = build_idc_report(slabs, a.home_loan_rate, cutoff)

    total_idc = ledger.total_idc
    active_idc_months = min(cutoff, funding_end) - disb_start + 1
    monthly_idc_emi = total_idc / active_idc_months if active_idc_months > 0 else 0.0

    hl_paid = hl["emi"] * hl_payments
    pl1_paid = pl1["emi"] * pl1_payments
    pl2_paid = pl2["emi"] * pl2_payments
    total_emi_paid = hl_paid + pl1_paid + pl2_paid + total_idc
    total_outstanding = hl["outstanding"] + pl1["outstanding"] + pl2["outstanding"]

    sale_value = size * exit_price
    leftover_cash = sale_value - total_outstanding
    net_gain_loss = leftover_cash - total_emi_paid - dp_amount
    total_investment = dp_amount + total_emi_paid
    roi = net_gain_loss / total_investment * 100 if total_investment > 0 else 0.0

    pre_months = min(holding, possession)
    post_months = max(0.0, holding - possession)
    pre_emi = pl1["emi"] + monthly_idc_emi
    post_emi = hl["emi"] + pl1["emi"] + pl2["emi"]
    pl1_delay = max(0, a.personal_loan1_start_month - (possession + 1))
    pl1_post_months = max(0.0, post_months - pl1_delay)
    pl2_post_months = max(0.0, post_months - a.personal_loan2_start_month)
    post_total = hl["emi"] * post_months + pl1["emi"] * pl1_post_months + pl2["emi"] * pl2_post_months
    pre_total = ledger.outflow_through(pre_months)

    return {
        "property_size": size,
        "total_cost": total_cost,
        "total_cash_invested": dp_amount + pl1_amount + pl2_amount,
        "total_loan_outstanding": total_outstanding,
        "home_loan_emi": hl["emi"],
        "personal_loan1_emi": pl1["emi"],
        "personal_loan2_emi": pl2["emi"],
        "gst_cost": gst_cost,
        "stamp_duty_cost": stamp_duty_cost,
        "home_loan_amount": hl_amount,
        "personal_loan1_amount": pl1_amount,
        "personal_loan2_amount": pl2_amount,
        "down_payment_amount": dp_amount,
        "home_loan_share": hl_share,
        "personal_loan1_share": pl1_share,
        "personal_loan2_share": pl2_share,
        "down_payment_share": dp_share,
        "total_interest_paid": hl["interest"] + pl1["interest"] + pl2["interest"] + total_idc,
        "home_loan_interest_paid": hl["interest"],
        "personal_loan1_interest_paid": pl1["interest"],
        "personal_loan2_interest_paid": pl2["interest"],
        "home_loan_emi_paid": hl_paid,
        "personal_loan1_emi_paid": pl1_paid,
        "personal_loan2_emi_paid": pl2_paid,
        "total_idc": total_idc,
        "monthly_idc_emi": monthly_idc_emi,
        "min_idc_emi": ledger.min_idc_emi,
        "max_idc_emi": ledger.max_idc_emi,
        "idc_schedule": annotate_slabs(idc_report),
        "idc_report": asdict(idc_report),
        "monthly_ledger": [asdict(row) for row in ledger.rows],
        "total_emi_paid": total_emi_paid,
        "sale_value": sale_value,
        "leftover_cash": leftover_cash,
        "net_gain_loss": net_gain_loss,
        "roi": roi,
        "exit_price": exit_price,
        "years": years,
        "pre_possession_months": pre_months,
        "post_possession_months": post_months,
        "pre_possession_emi": pre_emi,
        "post_possession_emi": post_emi,
        "pre_possession_total": pre_total,
        "post_possession_total": post_total,
        "possession_months": possession,
        "total_holding_months": holding,
        "funding_end_month": funding_end,
        "home_loan_start_month": hl_start,
        "has_home_loan": hl_amount > 0,
        "has_personal_loan1": pl1_amount > 0,
        "has_personal_loan2": pl2_amount > 0,
        "has_down_payment": dp_amount > 0,
        "has_idc": total_idc > 0,
        "pl1_start_month": a.personal_loan1_start_month,
        "pl2_start_month": pl2_start,
    }


def sweep_exit_prices(scenario: ScenarioInput) -> List[Dict[str, Any]]:
    """Evaluate the selected exit price alongside every comparison price, lowest first."""
    selected = scenario.selected_exit_price
    prices = sorted({selected, *scenario.scenario_exit_prices})
    out: List[Dict[str, Any]] = []
    for price in prices:
        result = evaluate_for_price(scenario, price)
        logger.debug("exit price %.2f -> net %.2f roi %.2f%%", price, result["net_gain_loss"], result["roi"])
        out.append(
            {
                "exit_price": price,
                "sale_value": result["sale_value"],
                "net_profit": result["net_gain_loss"],
                "roi": result["roi"],
                "leftover_cash": result["leftover_cash"],
                "is_selected": price == selected,
            }
        )
    return out


def evaluate(scenario: ScenarioInput | Mapping[str, Any] | None) -> Dict[str, Any]:
    """
    Full breakdown for one scenario:
      - detailed_breakdown at the selected exit price,
      - multiple_scenarios / profits across all exit prices,
      - stage_calculations for display.
    """
    s = coerce_scenario(scenario)
    detail = evaluate_for_price(s, s.selected_exit_price)
    scenarios = sweep_exit_prices(s)
    return {
        "detailed_breakdown": detail,
        "multiple_scenarios": scenarios,
        "profits": [
            {"exit_price": x["exit_price"], "net_profit": x["net_profit"], "roi": x["roi"]}
            for x in scenarios
        ],
        "stage_calculations": build_stages(s, detail),
    }
