import math


def monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / (12 * 100)


def _discount(r: float, months: float) -> float:
    # (1+r)^-n; underflows to 0 for long terms instead of overflowing
    if 1 + r <= 0:
        return math.nan
    try:
        return (1 + r) ** (-months)
    except OverflowError:
        return math.inf


def emi(principal: float, annual_rate_pct: float, term_years: float) -> float:
    """
    Equated monthly installment:
      EMI = P * r * (1+r)^n / ((1+r)^n - 1) = P * r / (1 - (1+r)^-n)
    Zero principal or term -> 0; zero rate (or one too small to move 1+r) -> straight-line P / n.
    """
    if principal <= 0 or term_years <= 0:
        return 0.0
    months = term_years * 12
    straight_line = principal / months
    if annual_rate_pct == 0:
        return straight_line
    r = monthly_rate(annual_rate_pct)
    d = _discount(r, months)
    if not math.isfinite(d) or d == 1:
        return straight_line
    out = principal * r / (1 - d)
    return out if math.isfinite(out) and out >= 0 else straight_line


def outstanding_after_payments(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    payments_made: float,
) -> float:
    """Remaining balance after `payments_made` installments (closed form, clamped >= 0)."""
    if principal <= 0:
        return 0.0
    if payments_made <= 0:
        return principal
    total_months = term_years * 12
    if payments_made >= total_months:
        return 0.0
    linear = max(0.0, principal - (principal / total_months) * payments_made)
    if annual_rate_pct == 0:
        return linear
    # P * ((1+r)^n - (1+r)^k) / ((1+r)^n - 1), divided through by (1+r)^n
    r = monthly_rate(annual_rate_pct)
    d_n = _discount(r, total_months)
    d_rest = _discount(r, total_months - payments_made)
    if not (math.isfinite(d_n) and math.isfinite(d_rest)) or d_n == 1:
        return linear
    out = principal * (1 - d_rest) / (1 - d_n)
    return max(0.0, out) if math.isfinite(out) else linear


def total_interest_paid(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    payments_made: float,
) -> float:
    # Walked month by month so the split matches the ledger's interest/principal rows.
    if principal <= 0 or payments_made <= 0:
        return 0.0
    if term_years > 0:
        # the loan is settled after its last installment
        payments_made = min(payments_made, term_years * 12)
    r = monthly_rate(annual_rate_pct)
    installment = emi(principal, annual_rate_pct, term_years)
    remaining = principal
    paid = 0.0
    k = 0
    while k < payments_made:
        interest = remaining * r
        paid += interest
        remaining -= installment - interest
        k += 1
    return paid
