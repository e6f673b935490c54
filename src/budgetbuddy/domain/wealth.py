"""Month-by-month wealth projection for a fixed savings rate."""

from budgetbuddy.domain.entities import WealthPoint, WealthProjection


def project_wealth(
    current_savings: float,
    monthly_income: float,
    savings_rate_percent: float = 20.0,
    annual_return_percent: float = 7.0,
    years: int = 10,
) -> WealthProjection:
    """Compound savings monthly over ``years``.

    Month 0 is the starting balance. Each following month earns
    ``annual_return_percent / 12`` and then receives that month's savings.
    """
    monthly_savings = max(0.0, monthly_income) * savings_rate_percent / 100
    monthly_return = annual_return_percent / 12 / 100
    start = current_savings or 0.0

    points = []
    balance = start
    for month in range(max(0, years) * 12 + 1):
        if month > 0:
            balance = balance * (1 + monthly_return) + monthly_savings
        points.append(
            WealthPoint(
                month=month,
                balance=balance,
                contributions=start + monthly_savings * month,
            )
        )

    return WealthProjection(points=tuple(points), monthly_savings=monthly_savings)
