"""Projection engine and data models for the retirement calculator."""

from .errors import DidNotConvergeError, InvalidInputError, ProjectionError
from .formatting import CurrencyFormatter, currency_format
from .inputs import FORM_DEFAULTS, RetirementInputs
from .projection import (
    accumulate_annual_savings,
    inflate_expense_to_retirement,
    merge_projections,
    project_future_savings,
    project_required_savings,
    simulate_drawdown,
    solve_monthly_contribution,
)
from .result import ProjectionResult, SeriesPoint, to_series

__all__ = [
    "ProjectionError",
    "InvalidInputError",
    "DidNotConvergeError",
    "CurrencyFormatter",
    "currency_format",
    "FORM_DEFAULTS",
    "RetirementInputs",
    "project_future_savings",
    "project_required_savings",
    "inflate_expense_to_retirement",
    "accumulate_annual_savings",
    "simulate_drawdown",
    "solve_monthly_contribution",
    "merge_projections",
    "ProjectionResult",
    "SeriesPoint",
    "to_series",
]
