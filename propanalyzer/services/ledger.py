from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Union

from propanalyzer.services.amortization import monthly_rate
from propanalyzer.services.disbursement import Slab


@dataclass(frozen=True)
class LedgerRow:
    month: int
    disbursement: float
    active_slabs: Union[int, str]
    cumulative_disbursement: float
    outstanding_balance: float
    hl_component: float
    interest_part: float
    principal_part: float
    is_full_emi: bool
    pl1: float
    total_outflow: float


@dataclass(frozen=True)
class LedgerResult:
    rows: List[LedgerRow] = field(default_factory=list)
    total_idc: float = 0.0
    min_idc_emi: float = 0.0
    max_idc_emi: float = 0.0

    def outflow_through(self, month: float) -> float:
        return sum(r.total_outflow for r in self.rows if r.month <= month)


def _releases_by_month(slabs: Sequence[Slab]) -> Dict[int, float]:
    out: Dict[int, float] = defaultdict(float)
    for s in slabs:
        out[s.release_month] += s.amount
    return out


def simulate_ledger(
    *,
    home_loan_amount: float,
    home_loan_rate: float,
    home_loan_emi: float,
    slabs: Sequence[Slab],
    funding_end_month: int,
    start_month: int,
    mode: str,
    possession_months: int,
    pl1_amount: float = 0.0,
    pl1_emi: float = 0.0,
    pl1_start_month: int = 0,
) -> LedgerResult:
    """
    Month-by-month home loan ledger from month 0 to possession.

    Before `start_month` the loan is in pre-EMI: in default mode the buyer pays
    interest only on what has been disbursed (IDC); in manual mode nothing is
    paid. From `start_month` onwards the full EMI is paid and amortizes the
    disbursed balance.
    """
    r = monthly_rate(home_loan_rate)
    releases = _releases_by_month(slabs)
    has_loan = home_loan_amount > 0

    rows: List[LedgerRow] = []
    balance = 0.0
    cumulative = 0.0
    active = 0
    total_idc = 0.0
    min_idc = 0.0
    max_idc = 0.0
    seen_idc = False
    full_emi = False

    for m in range(possession_months + 1):
        disbursed = 0.0
        if has_loan and m in releases:
            disbursed = min(releases[m], home_loan_amount - cumulative)
            cumulative = min(home_loan_amount, cumulative + disbursed)
            balance += disbursed
            active += sum(1 for s in slabs if s.release_month == m)

        interest = balance * r
        principal = 0.0
        payment = 0.0

        if has_loan:
            if m >= start_month:
                full_emi = True
            if full_emi:
                payment = home_loan_emi
                if balance > 0:
                    principal = max(0.0, payment - interest)
                    balance = max(0.0, balance - principal)
            elif mode != "manual":
                payment = interest
                total_idc += interest
                if interest > 0:
                    if not seen_idc:
                        min_idc = interest
                        seen_idc = True
                    max_idc = interest

        pl1 = pl1_emi if pl1_amount > 0 and m >= pl1_start_month else 0.0

        rows.append(
            LedgerRow(
                month=m,
                disbursement=disbursed,
                active_slabs="Max" if m > funding_end_month else active,
                cumulative_disbursement=cumulative,
                outstanding_balance=balance,
                hl_component=payment,
                interest_part=interest,
                principal_part=principal,
                is_full_emi=full_emi,
                pl1=pl1,
                total_outflow=payment + pl1,
            )
        )

    return LedgerResult(rows=rows, total_idc=total_idc, min_idc_emi=min_idc, max_idc_emi=max_idc)
