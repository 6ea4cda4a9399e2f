from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from propanalyzer.services.amortization import monthly_rate
from propanalyzer.services.disbursement import Slab


@dataclass(frozen=True)
class IdcReportRow:
    slab_no: int
    release_month: int
    amount: float
    monthly_interest: float
    cumulative_monthly_interest: float
    duration: int
    total_cost_for_slab: float


@dataclass(frozen=True)
class IdcReport:
    grand_total_interest: float = 0.0
    min_monthly_interest: float = 0.0
    max_monthly_interest: float = 0.0
    schedule: List[IdcReportRow] = field(default_factory=list)
    cutoff_month: int = 0


def slab_duration(release_month: int, cutoff_month: int) -> int:
    """Months a slab accrues pre-EMI interest, release month and cutoff month included."""
    return max(0, cutoff_month - release_month + 1)


def build_idc_report(slabs: Sequence[Slab], annual_rate_pct: float, cutoff_month: int) -> IdcReport:
    if not slabs:
        return IdcReport()

    r = monthly_rate(annual_rate_pct)
    rows: List[IdcReportRow] = []
    running = 0.0
    grand_total = 0.0
    for s in slabs:
        per_month = s.amount * r
        running += per_month
        duration = slab_duration(s.release_month, cutoff_month)
        cost = per_month * duration
        grand_total += cost
        rows.append(
            IdcReportRow(
                slab_no=s.slab_no,
                release_month=s.release_month,
                amount=s.amount,
                monthly_interest=per_month,
                cumulative_monthly_interest=running,
                duration=duration,
                total_cost_for_slab=cost,
            )
        )

    return IdcReport(
        grand_total_interest=grand_total,
        min_monthly_interest=rows[0].monthly_interest,
        max_monthly_interest=rows[-1].cumulative_monthly_interest,
        schedule=rows,
        cutoff_month=cutoff_month,
    )


def annotate_slabs(report: IdcReport) -> List[Dict[str, Any]]:
    """Flatten the report into the slab list shown next to the ledger."""
    return [
        {
            "slab_no": row.slab_no,
            "release_month": row.release_month,
            "amount": row.amount,
            "interest_cost": row.total_cost_for_slab,
        }
        for row in report.schedule
    ]
