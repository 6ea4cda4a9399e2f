from __future__ import annotations

from dataclasses import dataclass
from typing import List

from propanalyzer.services.inputs import DEFAULT_DISBURSEMENT_INTERVAL


@dataclass(frozen=True)
class Slab:
    slab_no: int
    release_month: int
    amount: float


def slab_count(start_month: int, interval: int, funding_end_month: int) -> int:
    return max(1, (funding_end_month - start_month) // interval + 1)


def build_slabs(
    amount: float,
    start_month: int,
    interval: int,
    funding_end_month: int,
) -> List[Slab]:
    """
    Split a home loan into equal tranches released every `interval` months
    from `start_month` up to `funding_end_month` (inclusive).
    The last tranche takes whatever is left so the slabs sum to `amount`.
    """
    if amount <= 0:
        return []
    if interval <= 0:
        interval = DEFAULT_DISBURSEMENT_INTERVAL
    # the ledger starts at month 0; an earlier tranche would never be released
    start_month = max(0, start_month)

    months = list(range(start_month, funding_end_month + 1, interval))
    if not months:
        # funding window closes before it opens: release everything at the start
        return [Slab(slab_no=1, release_month=start_month, amount=amount)]

    count = slab_count(start_month, interval, funding_end_month)
    share = amount / count
    slabs: List[Slab] = []
    released = 0.0
    for idx, month in enumerate(months[:count]):
        if idx == count - 1:
            part = amount - released
        else:
            part = share
        released += part
        slabs.append(Slab(slab_no=idx + 1, release_month=month, amount=part))
    return slabs
