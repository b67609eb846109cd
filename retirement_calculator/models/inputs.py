"""
Typed, validated inputs for a retirement projection.

The calculator form submits every field as text. RetirementInputs parses and
validates those values once, at the boundary, so the projection engine only
ever sees sane numbers.
"""

import re
from typing import Any, Dict, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .errors import InvalidInputError

# Form field values as first rendered by the calculator
FORM_DEFAULTS: Dict[str, str] = {
    "currentAge": "35",
    "currentSavings": "",
    "monthlyContribution": "",
    "monthlyExpense": "",
    "retirementAge": "67",
    "lifeExpectancy": "95",
    "preRetirementReturn": "6",
    "postRetirementReturn": "5",
    "annualInflation": "3",
    "annualIncomeIncrease": "2",
}

# Legacy form keys that don't follow the camelCase field names
_KEY_ALIASES = {"retirement_age_input": "retirement_age"}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_FORMATTING_CHARS = re.compile(r"[\s$,%]")


def _to_snake(key: str) -> str:
    snake = _CAMEL_BOUNDARY.sub("_", key).lower()
    return _KEY_ALIASES.get(snake, snake)


def _clean(value: Any) -> Any:
    """Strip currency and percent formatting from text input."""
    if isinstance(value, str):
        cleaned = _FORMATTING_CHARS.sub("", value)
        if not cleaned:
            raise ValueError("Field is required")
        return cleaned
    return value


class RetirementInputs(BaseModel):
    """Validated inputs for one retirement projection."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    current_age: int = Field(..., ge=0, le=130, description="Age today")
    retirement_age: int = Field(..., ge=0, le=130, description="Age at retirement")
    life_expectancy: int = Field(
        ..., ge=0, le=130, description="Age the savings must last until"
    )
    current_savings: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Retirement savings today"
    )
    monthly_contribution: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Monthly contribution today"
    )
    monthly_expense: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Monthly expense in retirement, in today's dollars",
    )
    pre_retirement_return: float = Field(
        ..., ge=0, le=100, description="Annual return before retirement (6 = 6%)"
    )
    post_retirement_return: float = Field(
        ..., ge=0, le=100, description="Annual return in retirement (5 = 5%)"
    )
    annual_inflation: float = Field(
        ..., ge=0, le=100, description="Annual inflation (3 = 3%)"
    )
    annual_income_increase: float = Field(
        ..., ge=0, le=100, description="Annual contribution increase (2 = 2%)"
    )

    @field_validator("current_age", "retirement_age", "life_expectancy", mode="before")
    @classmethod
    def parse_age(cls, v: Any) -> Any:
        v = _clean(v)
        if isinstance(v, str):
            try:
                return int(v, 10)
            except ValueError:
                raise ValueError("Must be a whole number of years")
        return v

    @field_validator(
        "current_savings",
        "monthly_contribution",
        "monthly_expense",
        "pre_retirement_return",
        "post_retirement_return",
        "annual_inflation",
        "annual_income_increase",
        mode="before",
    )
    @classmethod
    def parse_number(cls, v: Any) -> Any:
        v = _clean(v)
        if isinstance(v, str):
            try:
                return float(v)
            except ValueError:
                raise ValueError("Must be a number")
        return v

    @field_validator("retirement_age")
    @classmethod
    def validate_retirement_age(cls, v: int, info: ValidationInfo) -> int:
        if "current_age" in info.data and v <= info.data["current_age"]:
            raise ValueError("Retirement age must be greater than current age")
        return v

    @field_validator("life_expectancy")
    @classmethod
    def validate_life_expectancy(cls, v: int, info: ValidationInfo) -> int:
        if "retirement_age" in info.data and v < info.data["retirement_age"]:
            raise ValueError("Life expectancy must be at least the retirement age")
        return v

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "RetirementInputs":
        """
        Build inputs from submitted form fields.

        Keys may be camelCase (as sent by the form) or snake_case; values may
        be numbers or text such as "$30,000" or "6%".

        Raises:
            InvalidInputError: With a message per offending field
        """
        normalized = {_to_snake(str(key)): value for key, value in data.items()}
        try:
            return cls.model_validate(normalized)
        except ValidationError as e:
            field_errors: Dict[str, str] = {}
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "form"
                message = error["msg"].removeprefix("Value error, ")
                field_errors.setdefault(field, message)
            raise InvalidInputError(
                "Invalid retirement inputs", field_errors=field_errors
            ) from e

    def to_form(self) -> Dict[str, Any]:
        """Dump the inputs with the form's camelCase field names."""
        return {to_camel(name): value for name, value in self.model_dump().items()}
