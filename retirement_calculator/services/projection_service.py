"""
Projection service for running a complete retirement projection.

This service wires the projection engine together the way one submission of
the calculator form needs it: projected and required savings at retirement,
the contribution that would close the gap, and the two year-by-year series
charted against age.
"""

import logging
from typing import Dict, Optional

from retirement_calculator.config import get_global_settings
from retirement_calculator.models.inputs import RetirementInputs
from retirement_calculator.models.projection import (
    accumulate_annual_savings,
    inflate_expense_to_retirement,
    merge_projections,
    project_future_savings,
    project_required_savings,
    simulate_drawdown,
    solve_monthly_contribution,
)
from retirement_calculator.models.result import ProjectionResult, to_series

logger = logging.getLogger(__name__)


class ProjectionService:
    """Service for running retirement projections."""

    def __init__(
        self,
        tolerance: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> None:
        """Initialize the projection service.

        Args:
            tolerance: Solver tolerance in currency units (defaults to settings)
            max_iterations: Solver iteration cap (defaults to settings)
        """
        settings = get_global_settings()
        self.tolerance = (
            tolerance if tolerance is not None else settings.solver_tolerance
        )
        self.max_iterations = (
            max_iterations
            if max_iterations is not None
            else settings.solver_max_iterations
        )
        self.logger = logging.getLogger(__name__)

    def run_projection(self, inputs: RetirementInputs) -> ProjectionResult:
        """Run a complete retirement projection.

        Args:
            inputs: Validated retirement inputs

        Returns:
            ProjectionResult with headline figures and chart series

        Raises:
            DidNotConvergeError: If the required contribution cannot be solved
        """
        try:
            self.logger.info(
                f"Starting projection for ages {inputs.current_age}-"
                f"{inputs.retirement_age}-{inputs.life_expectancy}"
            )

            monthly_expense_at_retirement = inflate_expense_to_retirement(
                inputs.monthly_expense,
                inputs.current_age,
                inputs.retirement_age,
                inputs.annual_inflation,
            )

            future_savings = project_future_savings(
                inputs.current_savings,
                inputs.monthly_contribution,
                inputs.current_age,
                inputs.retirement_age,
                inputs.pre_retirement_return,
                inputs.annual_income_increase,
            )

            required_savings = project_required_savings(
                monthly_expense_at_retirement,
                inputs.retirement_age,
                inputs.life_expectancy,
                inputs.annual_inflation,
                inputs.post_retirement_return,
            )
            self.logger.debug(
                f"Future savings {future_savings:.2f}, "
                f"required savings {required_savings:.2f}"
            )

            savings_projection = self._project_balances(
                inputs, inputs.monthly_contribution, monthly_expense_at_retirement
            )

            required_monthly_contribution = solve_monthly_contribution(
                inputs.current_savings,
                required_savings,
                inputs.current_age,
                inputs.retirement_age,
                inputs.pre_retirement_return,
                inputs.annual_income_increase,
                tolerance=self.tolerance,
                max_iterations=self.max_iterations,
            )

            needs_projection = self._project_balances(
                inputs, required_monthly_contribution, monthly_expense_at_retirement
            )

            result = ProjectionResult(
                inputs=inputs,
                future_savings=future_savings,
                required_savings=required_savings,
                monthly_expense_at_retirement=monthly_expense_at_retirement,
                required_monthly_contribution=required_monthly_contribution,
                savings_series=to_series(savings_projection),
                needs_series=to_series(needs_projection),
            )

            self.logger.info(
                f"Completed projection: required monthly contribution "
                f"{required_monthly_contribution:.2f}"
            )
            return result

        except Exception as e:
            self.logger.error(f"Projection failed: {str(e)}")
            raise

    def _project_balances(
        self,
        inputs: RetirementInputs,
        monthly_contribution: float,
        monthly_expense_at_retirement: float,
    ) -> Dict[int, float]:
        """Year-by-year balances through accumulation and drawdown.

        Args:
            inputs: Validated retirement inputs
            monthly_contribution: Starting monthly contribution
            monthly_expense_at_retirement: Monthly expense in retirement-age dollars

        Returns:
            Balance by age from current_age + 1 to life_expectancy
        """
        accumulation = accumulate_annual_savings(
            inputs.current_savings,
            monthly_contribution,
            inputs.current_age,
            inputs.retirement_age,
            inputs.pre_retirement_return,
            inputs.annual_income_increase,
        )
        savings_at_retirement = accumulation.get(
            inputs.retirement_age, inputs.current_savings
        )

        drawdown = simulate_drawdown(
            savings_at_retirement,
            inputs.retirement_age,
            inputs.life_expectancy,
            monthly_expense_at_retirement,
            inputs.annual_inflation,
            inputs.post_retirement_return,
        )
        return merge_projections(accumulation, drawdown)
