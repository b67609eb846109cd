"""
Retirement savings projection engine.

This module implements the compounding-interest and inflation-adjusted cash
flow calculations behind the retirement calculator: the future value of
savings at retirement, the savings required to fund retirement, year-by-year
balances before and after retirement, and a numerical solver for the monthly
contribution needed to reach a savings goal.

Conventions:
- Percentages are annual and expressed as numbers (6 means 6%). They are
  converted to monthly rates as ``pct / 12 / 100``.
- Interest compounds monthly. Contributions are made at the end of each month
  and step up by the income-increase rate once every 12 months.
- Yearly maps are keyed by age. The accumulation map holds the balance on each
  birthday from ``current_age + 1`` to ``retirement_age``; the drawdown map
  continues from ``retirement_age + 1`` to ``life_expectancy``.

None of these functions validate their arguments. Non-positive horizons
produce empty maps and zero-length sums rather than errors.
"""

import logging
from typing import Dict

import numpy as np
from numpy.typing import NDArray

from .errors import DidNotConvergeError

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
DEFAULT_TOLERANCE = 0.01
DEFAULT_MAX_ITERATIONS = 10_000


def monthly_rate(annual_pct: float) -> float:
    """Convert an annual percentage (6 = 6%) to a monthly decimal rate."""
    return annual_pct / MONTHS_PER_YEAR / 100


def months_between(start_age: int, end_age: int) -> int:
    """Number of months between two ages (negative if end precedes start)."""
    return int((end_age - start_age) * MONTHS_PER_YEAR)


def compound(balance: float, rate: float, months: int) -> float:
    """
    Compound a balance monthly.

    A negative month count discounts the balance instead, following the
    semantics of the power function.
    """
    return balance * (1 + rate) ** months


def contribution_weights(
    total_months: int, rate: float, annual_increase_rate: float
) -> NDArray[np.float64]:
    """
    Future value at the end of the horizon of each month's contribution, per
    unit of starting monthly contribution.

    Month ``i`` contributes ``(1 + g) ** (i // 12)`` units (the annual step-up)
    and compounds for the remaining ``total_months - i - 1`` months.

    Args:
        total_months: Length of the contribution stream
        rate: Monthly return rate (decimal)
        annual_increase_rate: Annual contribution step-up (decimal)

    Returns:
        Array of per-month weights (empty if total_months <= 0)
    """
    if total_months <= 0:
        return np.zeros(0, dtype=np.float64)

    months = np.arange(total_months)
    step_ups = (1 + annual_increase_rate) ** (months // MONTHS_PER_YEAR)
    growth = (1 + rate) ** (total_months - months - 1)
    return np.asarray(step_ups * growth, dtype=np.float64)


def future_value_of_contributions(
    monthly_contribution: float,
    total_months: int,
    rate: float,
    annual_increase_rate: float,
) -> float:
    """Future value of a monthly contribution stream with annual step-ups."""
    weights = contribution_weights(total_months, rate, annual_increase_rate)
    return float(monthly_contribution * weights.sum())


def project_future_savings(
    current_savings: float,
    monthly_contribution: float,
    current_age: int,
    retirement_age: int,
    annual_return_pct: float,
    annual_income_increase_pct: float,
) -> float:
    """
    Project total savings at retirement.

    Args:
        current_savings: Lump sum saved today
        monthly_contribution: Monthly contribution in the first year
        current_age: Age today
        retirement_age: Age at retirement
        annual_return_pct: Expected annual return before retirement (6 = 6%)
        annual_income_increase_pct: Annual contribution increase (2 = 2%)

    Returns:
        Future value of the lump sum plus the contribution stream. When
        retirement_age <= current_age only the lump-sum term remains.
    """
    total_months = months_between(current_age, retirement_age)
    rate = monthly_rate(annual_return_pct)

    lump_sum = compound(current_savings, rate, total_months)
    contributions = future_value_of_contributions(
        monthly_contribution, total_months, rate, annual_income_increase_pct / 100
    )
    return lump_sum + contributions


def inflate_expense_to_retirement(
    monthly_expense: float,
    current_age: int,
    retirement_age: int,
    annual_inflation_pct: float,
) -> float:
    """Inflate today's monthly expense to retirement-age dollars (annual compounding)."""
    years = retirement_age - current_age
    return monthly_expense * (1 + annual_inflation_pct / 100) ** years


def project_required_savings(
    monthly_expense_at_retirement: float,
    retirement_age: int,
    life_expectancy: int,
    annual_inflation_pct: float,
    post_retirement_return_pct: float,
) -> float:
    """
    Present value, at retirement, of the expenses through life expectancy.

    The expense inflates every month; month ``i``'s expense is discounted back
    to the retirement date by ``(1 + r) ** i``.

    Args:
        monthly_expense_at_retirement: Monthly expense in retirement-age dollars
        retirement_age: Age at retirement
        life_expectancy: Age the savings must last until
        annual_inflation_pct: Annual inflation (3 = 3%)
        post_retirement_return_pct: Expected annual return in retirement

    Returns:
        Savings needed at retirement (0.0 for an empty drawdown period)
    """
    total_months = months_between(retirement_age, life_expectancy)
    if total_months <= 0:
        return 0.0

    inflation = monthly_rate(annual_inflation_pct)
    rate = monthly_rate(post_retirement_return_pct)

    months = np.arange(total_months)
    inflated_expenses = monthly_expense_at_retirement * (1 + inflation) ** (months + 1)
    discount_factors = (1 + rate) ** months
    return float(np.sum(inflated_expenses / discount_factors))


def accumulate_annual_savings(
    current_savings: float,
    monthly_contribution: float,
    current_age: int,
    retirement_age: int,
    annual_return_pct: float,
    annual_income_increase_pct: float,
) -> Dict[int, float]:
    """
    Year-by-year savings balance until retirement.

    Returns:
        Mapping of age to the balance on that birthday, keyed
        ``current_age + 1 .. retirement_age``
    """
    savings_per_year: Dict[int, float] = {}
    savings = float(current_savings)
    annual_contribution = monthly_contribution * MONTHS_PER_YEAR
    rate = monthly_rate(annual_return_pct)

    for age in range(current_age, retirement_age):
        for _ in range(MONTHS_PER_YEAR):
            savings = savings * (1 + rate) + monthly_contribution
        savings_per_year[age + 1] = savings

        # Raise next year's contribution in line with income
        annual_contribution *= 1 + annual_income_increase_pct / 100
        monthly_contribution = annual_contribution / MONTHS_PER_YEAR

    return savings_per_year


def simulate_drawdown(
    starting_savings: float,
    retirement_age: int,
    life_expectancy: int,
    monthly_expense_at_retirement: float,
    annual_inflation_pct: float,
    post_retirement_return_pct: float,
) -> Dict[int, float]:
    """
    Year-by-year savings balance after retirement.

    ``starting_savings`` is the balance on the retirement birthday. Each year
    the balance compounds monthly while the inflating monthly expenses are
    totalled; the total is withdrawn at year end and the balance is floored
    at zero.

    Returns:
        Mapping of age to balance, keyed ``retirement_age + 1 .. life_expectancy``
    """
    drawdown_per_year: Dict[int, float] = {}
    savings = float(starting_savings)
    adjusted_monthly_expense = float(monthly_expense_at_retirement)
    rate = monthly_rate(post_retirement_return_pct)
    inflation = monthly_rate(annual_inflation_pct)

    for age in range(retirement_age + 1, life_expectancy + 1):
        annual_expenses = 0.0
        for _ in range(MONTHS_PER_YEAR):
            savings *= 1 + rate
            adjusted_monthly_expense *= 1 + inflation
            annual_expenses += adjusted_monthly_expense

        savings = max(savings - annual_expenses, 0.0)
        drawdown_per_year[age] = savings

    return drawdown_per_year


def solve_monthly_contribution(
    current_savings: float,
    future_savings_goal: float,
    current_age: int,
    retirement_age: int,
    annual_return_pct: float,
    annual_income_increase_pct: float,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """
    Find the starting monthly contribution that reaches a savings goal.

    The contribution steps up annually exactly as in project_future_savings.
    The search raises the trial contribution by ``step`` while the stream
    falls short, and lowers it by ``step`` then halves ``step`` once it
    overshoots, until the stream's future value is within ``tolerance`` of the
    shortfall.

    Args:
        current_savings: Lump sum saved today
        future_savings_goal: Target balance at retirement
        current_age: Age today
        retirement_age: Age at retirement
        annual_return_pct: Expected annual return before retirement
        annual_income_increase_pct: Annual contribution increase
        tolerance: Acceptable difference in currency units
        max_iterations: Iteration cap for the search

    Returns:
        Monthly contribution, exactly 0.0 if the lump sum already meets the goal

    Raises:
        DidNotConvergeError: If there are no months left to contribute or the
            search exceeds max_iterations
    """
    total_months = months_between(current_age, retirement_age)
    rate = monthly_rate(annual_return_pct)

    future_value_current_savings = compound(current_savings, rate, total_months)
    if future_value_current_savings >= future_savings_goal:
        return 0.0

    shortfall = future_savings_goal - future_value_current_savings
    if total_months <= 0:
        raise DidNotConvergeError(
            f"No months to contribute before retirement; shortfall of "
            f"{shortfall:.2f} cannot be closed",
            iterations=0,
            difference=shortfall,
        )

    # The stream is linear in the contribution, so the weights are computed once
    total_weight = float(
        contribution_weights(
            total_months, rate, annual_income_increase_pct / 100
        ).sum()
    )

    contribution = 0.0
    step = shortfall / total_months
    difference = shortfall

    for iteration in range(1, max_iterations + 1):
        future_value = contribution * total_weight
        difference = future_value - shortfall
        if abs(difference) <= tolerance:
            logger.debug(
                f"Solved monthly contribution {contribution:.2f} "
                f"in {iteration} iterations"
            )
            return contribution

        if future_value < shortfall:
            contribution += step
        else:
            contribution -= step
            step /= 2

    raise DidNotConvergeError(
        f"Contribution solver did not converge within {max_iterations} iterations",
        iterations=max_iterations,
        difference=difference,
    )


def merge_projections(
    accumulation: Dict[int, float], drawdown: Dict[int, float]
) -> Dict[int, float]:
    """
    Merge the accumulation and drawdown maps into one series.

    Raises:
        ValueError: If the two maps share an age
    """
    overlap = accumulation.keys() & drawdown.keys()
    if overlap:
        raise ValueError(f"Projection phases overlap at ages {sorted(overlap)}")

    merged = dict(accumulation)
    merged.update(drawdown)
    return merged
