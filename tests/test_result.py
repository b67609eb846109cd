"""
Tests for the projection result model and display formatting.
"""

import pytest
from pydantic import ValidationError

from retirement_calculator.models.formatting import CurrencyFormatter, currency_format
from retirement_calculator.models.result import ProjectionResult, SeriesPoint, to_series


@pytest.fixture
def sample_result(reference_inputs):
    """A small hand-built result for the reference inputs."""
    return ProjectionResult(
        inputs=reference_inputs,
        future_savings=864000.0,
        required_savings=1990000.0,
        monthly_expense_at_retirement=7500.25,
        required_monthly_contribution=1335.5,
        savings_series=to_series({66: 864000.0, 67: 790000.0, 68: 0.0, 36: 37000.0}),
        needs_series=to_series({66: 1990000.0, 67: 1950000.0}),
    )


class TestCurrencyFormatter:
    """Test CurrencyFormatter functionality."""

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (0, "$0.00"),
            (5, "$5.00"),
            (999.999, "$1,000.00"),
            (1234.5, "$1,234.50"),
            (1415000.123, "$1,415,000.12"),
            (-1234.5, "$-1,234.50"),
        ],
    )
    def test_format_currency(self, amount, expected):
        """Test dollar sign, two decimals and thousands separators."""
        assert currency_format(amount) == expected

    def test_format_without_symbol(self):
        """Test suppressing the currency symbol."""
        formatter = CurrencyFormatter(show_currency_symbol=False)

        assert formatter.format_currency(1234.5) == "1,234.50"
        assert formatter.format_currency(1234.5, show_symbol=True) == "$1,234.50"

    def test_custom_formatting(self):
        """Test custom symbol, separator and precision."""
        formatter = CurrencyFormatter(
            currency_symbol="€", thousands_separator=" ", decimal_places=0
        )

        assert formatter.format_currency(1234567.4) == "€1 234 567"

    def test_format_percentage(self):
        """Test percentage formatting."""
        formatter = CurrencyFormatter()

        assert formatter.format_percentage(6) == "6.00%"
        assert formatter.format_percentage(2.5, decimal_places=1) == "2.5%"

    def test_decimal_places_validation(self):
        """Test that decimal places are bounded."""
        with pytest.raises(ValidationError):
            CurrencyFormatter(decimal_places=11)


class TestSeries:
    """Test conversion of projection maps to chart series."""

    def test_sorted_by_age(self):
        """Test that series are emitted in ascending age order."""
        series = to_series({70: 3.0, 68: 1.0, 69: 2.0})

        assert [point.age for point in series] == [68, 69, 70]
        assert [point.value for point in series] == [1.0, 2.0, 3.0]

    def test_empty(self):
        """Test that an empty map gives an empty series."""
        assert to_series({}) == []

    def test_negative_value_rejected(self):
        """Test that chart points cannot hold a negative balance."""
        with pytest.raises(ValidationError):
            SeriesPoint(age=70, value=-1.0)


class TestProjectionResult:
    """Test ProjectionResult helpers."""

    def test_shortfall_and_on_track(self, sample_result):
        """Test the gap between projected and required savings."""
        assert sample_result.shortfall == pytest.approx(1126000.0)
        assert sample_result.on_track is False

    def test_on_track_when_savings_suffice(self, sample_result):
        """Test that no shortfall is reported when savings exceed the need."""
        result = sample_result.model_copy(update={"future_savings": 2500000.0})

        assert result.shortfall == 0.0
        assert result.on_track is True

    def test_depletion_age(self, sample_result):
        """Test the first post-retirement age with no savings left."""
        assert sample_result.depletion_age() == 68

    def test_no_depletion(self, sample_result):
        """Test that savings lasting to life expectancy report no depletion age."""
        result = sample_result.model_copy(
            update={"savings_series": to_series({66: 864000.0, 67: 790000.0})}
        )

        assert result.depletion_age() is None

    def test_summary(self, sample_result):
        """Test currency-formatted summary labels."""
        summary = sample_result.summary()

        assert summary["future_savings"] == "$864,000.00"
        assert summary["required_savings"] == "$1,990,000.00"
        assert summary["shortfall"] == "$1,126,000.00"
        assert summary["monthly_expense_at_retirement"] == "$7,500.25"
        assert summary["required_monthly_contribution"] == "$1,335.50"

    def test_to_dict(self, sample_result):
        """Test serialization for the calculator UI."""
        data = sample_result.to_dict()

        assert data["futureSavings"] == 864000.0
        assert data["requiredSavings"] == 1990000.0
        assert data["onTrack"] is False
        assert data["depletionAge"] == 68
        assert data["inputs"]["currentAge"] == 35
        assert data["savingsSeries"][0] == {"age": 36, "value": 37000.0}
        assert [p["age"] for p in data["savingsSeries"]] == [36, 66, 67, 68]
        assert data["needsSeries"][-1] == {"age": 67, "value": 1950000.0}
        assert data["summary"]["future_savings"] == "$864,000.00"

    def test_result_is_immutable(self, sample_result):
        """Test that results cannot be modified after construction."""
        with pytest.raises(ValidationError):
            sample_result.future_savings = 0.0
