from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Tuple

DEFAULT_DISBURSEMENT_START_MONTH = 1
DEFAULT_DISBURSEMENT_INTERVAL = 3


def safe_value(value: Any) -> float:
    """Coerce user input to a float; empty, missing or non-numeric becomes 0."""
    if value is None or value == "":
        return 0.0
    try:
        out = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(out):
        return 0.0
    return out


def safe_month(value: Any) -> int:
    return int(safe_value(value))


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


class PaymentPlan(str, Enum):
    CLP = "clp"
    PLAN_20_80 = "20-80"
    PLAN_40_60 = "40-60"
    RTM = "rtm"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Any) -> "PaymentPlan":
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.CUSTOM


# (home loan, personal loan 1, personal loan 2, down payment) in %
PLAN_SHARES: Dict[PaymentPlan, Tuple[float, float, float, float]] = {
    PaymentPlan.CLP: (80.0, 10.0, 10.0, 0.0),
    PaymentPlan.PLAN_20_80: (80.0, 20.0, 0.0, 0.0),
    PaymentPlan.PLAN_40_60: (60.0, 40.0, 0.0, 0.0),
    PaymentPlan.RTM: (80.0, 20.0, 0.0, 0.0),
}


@dataclass(frozen=True)
class Assumptions:
    home_loan_rate: float = 0.0
    home_loan_term: float = 0.0
    home_loan_share: float = 0.0
    home_loan_start_month: int = 0
    home_loan_start_mode: str = "default"  # default | manual
    personal_loan1_rate: float = 0.0
    personal_loan1_term: float = 0.0
    personal_loan1_start_month: int = 0
    personal_loan1_share: float = 0.0
    personal_loan2_rate: float = 0.0
    personal_loan2_term: float = 0.0
    personal_loan2_start_month: int = 0  # offset after possession
    personal_loan2_share: float = 0.0
    down_payment_share: float = 0.0
    investment_period: float = 0.0
    holding_period_unit: str = "years"  # months | years
    clp_duration_years: float = 0.0
    bank_disbursement_start_month: int = DEFAULT_DISBURSEMENT_START_MONTH
    bank_disbursement_interval: int = DEFAULT_DISBURSEMENT_INTERVAL
    last_bank_disbursement_month: int = 0

    @staticmethod
    def from_dict(d: Mapping[str, Any] | None) -> "Assumptions":
        d = _mapping(d)
        mode = str(d.get("home_loan_start_mode") or "default").strip().lower()
        unit = str(d.get("holding_period_unit") or "years").strip().lower()
        start = safe_month(d.get("bank_disbursement_start_month"))
        interval = safe_month(d.get("bank_disbursement_interval"))
        return Assumptions(
            home_loan_rate=safe_value(d.get("home_loan_rate")),
            home_loan_term=safe_value(d.get("home_loan_term")),
            home_loan_share=safe_value(d.get("home_loan_share")),
            home_loan_start_month=safe_month(d.get("home_loan_start_month")),
            home_loan_start_mode="manual" if mode == "manual" else "default",
            personal_loan1_rate=safe_value(d.get("personal_loan1_rate")),
            personal_loan1_term=safe_value(d.get("personal_loan1_term")),
            # loan starts are month indices on the 0..holding timeline
            personal_loan1_start_month=max(0, safe_month(d.get("personal_loan1_start_month"))),
            personal_loan1_share=safe_value(d.get("personal_loan1_share")),
            personal_loan2_rate=safe_value(d.get("personal_loan2_rate")),
            personal_loan2_term=safe_value(d.get("personal_loan2_term")),
            personal_loan2_start_month=max(0, safe_month(d.get("personal_loan2_start_month"))),
            personal_loan2_share=safe_value(d.get("personal_loan2_share")),
            down_payment_share=safe_value(d.get("down_payment_share")),
            investment_period=safe_value(d.get("investment_period")),
            holding_period_unit="months" if unit == "months" else "years",
            clp_duration_years=safe_value(d.get("clp_duration_years")),
            bank_disbursement_start_month=start if start > 0 else DEFAULT_DISBURSEMENT_START_MONTH,
            bank_disbursement_interval=interval if interval > 0 else DEFAULT_DISBURSEMENT_INTERVAL,
            last_bank_disbursement_month=safe_month(d.get("last_bank_disbursement_month")),
        )


@dataclass(frozen=True)
class PropertyInput:
    size: float = 0.0
    possession_months: int = 0
    id: Any = None
    name: str | None = None
    location: str | None = None

    @staticmethod
    def from_dict(d: Mapping[str, Any] | None) -> "PropertyInput":
        d = _mapping(d)
        return PropertyInput(
            size=safe_value(d.get("size")),
            # month 0 is always part of the ledger
            possession_months=max(0, safe_month(d.get("possession_months"))),
            id=d.get("id"),
            name=d.get("name"),
            location=d.get("location"),
        )


@dataclass(frozen=True)
class ScenarioInput:
    purchase_price: float = 0.0
    other_charges: float = 0.0
    stamp_duty: float = 0.0
    gst_percentage: float = 0.0
    payment_plan: PaymentPlan = PaymentPlan.CUSTOM
    assumptions: Assumptions = field(default_factory=Assumptions)
    selected_property: PropertyInput = field(default_factory=PropertyInput)
    selected_exit_price: float = 0.0
    scenario_exit_prices: Tuple[float, ...] = ()

    @staticmethod
    def from_dict(d: Mapping[str, Any] | None) -> "ScenarioInput":
        d = _mapping(d)
        extra = d.get("scenario_exit_prices") or []
        if not isinstance(extra, (list, tuple)):
            extra = []
        return ScenarioInput(
            purchase_price=safe_value(d.get("purchase_price")),
            other_charges=safe_value(d.get("other_charges")),
            stamp_duty=safe_value(d.get("stamp_duty")),
            gst_percentage=safe_value(d.get("gst_percentage")),
            payment_plan=PaymentPlan.parse(d.get("payment_plan")),
            assumptions=Assumptions.from_dict(d.get("assumptions")),
            selected_property=PropertyInput.from_dict(d.get("selected_property")),
            selected_exit_price=safe_value(d.get("selected_exit_price")),
            scenario_exit_prices=tuple(safe_value(p) for p in extra),
        )


def coerce_scenario(scenario: ScenarioInput | Mapping[str, Any] | None) -> ScenarioInput:
    if isinstance(scenario, ScenarioInput):
        return scenario
    return ScenarioInput.from_dict(scenario)


def resolve_shares(plan: PaymentPlan, a: Assumptions) -> Tuple[float, float, float, float]:
    """Return (home loan, PL1, PL2, down payment) shares in % for a payment plan."""
    if plan in PLAN_SHARES:
        return PLAN_SHARES[plan]
    return (
        a.home_loan_share,
        a.personal_loan1_share,
        a.personal_loan2_share,
        a.down_payment_share,
    )


def holding_months(a: Assumptions) -> float:
    if a.holding_period_unit == "months":
        return a.investment_period
    return a.investment_period * 12


def funding_end_month(a: Assumptions, possession_months: int) -> int:
    """Last month the bank releases funds: explicit month, else CLP duration, else possession."""
    if a.last_bank_disbursement_month > 0:
        return a.last_bank_disbursement_month
    construction_end = int(a.clp_duration_years * 12)
    if construction_end > 0:
        return construction_end
    return possession_months


def home_loan_start_month(a: Assumptions, funding_end: int) -> int:
    if a.home_loan_start_mode == "manual":
        return max(0, a.home_loan_start_month)
    return max(0, funding_end + a.home_loan_start_month + 1)
