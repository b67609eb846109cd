"""
Projection result model.

ProjectionResult is the full output of one projection: the headline figures
shown as summary labels and the two age-keyed series (projected savings and
required savings) that the chart plots against each other.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .formatting import CurrencyFormatter, default_formatter
from .inputs import RetirementInputs


class SeriesPoint(BaseModel):
    """A single chart point."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(..., description="Age at the point")
    value: float = Field(..., ge=0, description="Projected balance at that age")


def to_series(projection: Mapping[int, float]) -> List[SeriesPoint]:
    """Convert an age-keyed projection map to chart points in ascending age order."""
    return [
        SeriesPoint(age=age, value=projection[age]) for age in sorted(projection)
    ]


class ProjectionResult(BaseModel):
    """
    Result of a retirement projection.

    Example:
        ```python
        result = ProjectionService().run_projection(inputs)
        result.summary()["future_savings"]  # "$1,234,567.89"
        result.to_dict()["savingsSeries"][0]  # {"age": 36, "value": ...}
        ```
    """

    model_config = ConfigDict(frozen=True)

    inputs: RetirementInputs = Field(..., description="Inputs the result was built from")
    future_savings: float = Field(
        ..., description="Projected savings at retirement"
    )
    required_savings: float = Field(
        ..., ge=0, description="Savings needed at retirement to last to life expectancy"
    )
    monthly_expense_at_retirement: float = Field(
        ..., ge=0, description="Monthly expense inflated to retirement-age dollars"
    )
    required_monthly_contribution: float = Field(
        ..., ge=0, description="Starting monthly contribution that reaches the required savings"
    )
    savings_series: List[SeriesPoint] = Field(
        default_factory=list, description="Projected balance by age"
    )
    needs_series: List[SeriesPoint] = Field(
        default_factory=list, description="Balance by age on the required-savings path"
    )

    @property
    def shortfall(self) -> float:
        """Amount by which projected savings fall short of the requirement."""
        return max(self.required_savings - self.future_savings, 0.0)

    @property
    def on_track(self) -> bool:
        """Whether projected savings meet the requirement."""
        return self.future_savings >= self.required_savings

    def depletion_age(self) -> Optional[int]:
        """First age at which projected savings run out, if they do."""
        for point in self.savings_series:
            if point.age > self.inputs.retirement_age and point.value <= 0:
                return point.age
        return None

    def summary(self, formatter: CurrencyFormatter = default_formatter) -> Dict[str, str]:
        """Currency-formatted labels for the headline figures."""
        return {
            "future_savings": formatter.format_currency(self.future_savings),
            "required_savings": formatter.format_currency(self.required_savings),
            "shortfall": formatter.format_currency(self.shortfall),
            "monthly_expense_at_retirement": formatter.format_currency(
                self.monthly_expense_at_retirement
            ),
            "required_monthly_contribution": formatter.format_currency(
                self.required_monthly_contribution
            ),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the calculator UI (camelCase keys)."""
        return {
            "inputs": self.inputs.to_form(),
            "futureSavings": self.future_savings,
            "requiredSavings": self.required_savings,
            "monthlyExpenseAtRetirement": self.monthly_expense_at_retirement,
            "requiredMonthlyContribution": self.required_monthly_contribution,
            "shortfall": self.shortfall,
            "onTrack": self.on_track,
            "depletionAge": self.depletion_age(),
            "savingsSeries": [point.model_dump() for point in self.savings_series],
            "needsSeries": [point.model_dump() for point in self.needs_series],
            "summary": self.summary(),
        }
