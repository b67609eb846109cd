"""
Display formatting for projection figures.

Summary labels show currency as a dollar sign followed by the amount with two
decimals and thousands separators; assumption labels show percentages.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CurrencyFormatter(BaseModel):
    """Formats currency and percentage values for display."""

    currency_symbol: str = Field(default="$", description="Currency symbol")
    decimal_places: int = Field(
        default=2, ge=0, le=10, description="Number of decimal places"
    )
    thousands_separator: str = Field(default=",", description="Thousands separator")
    show_currency_symbol: bool = Field(
        default=True, description="Whether to show currency symbol"
    )

    def format_currency(self, amount: float, show_symbol: Optional[bool] = None) -> str:
        """
        Format a currency amount for display.

        Args:
            amount: The amount to format
            show_symbol: Override the default symbol display setting

        Returns:
            Formatted currency string, e.g. "$1,234.56"
        """
        show_symbol = (
            show_symbol if show_symbol is not None else self.show_currency_symbol
        )

        formatted = f"{amount:,.{self.decimal_places}f}"
        if self.thousands_separator != ",":
            formatted = formatted.replace(",", self.thousands_separator)

        if show_symbol:
            return f"{self.currency_symbol}{formatted}"
        return formatted

    def format_percentage(self, pct: float, decimal_places: int = 2) -> str:
        """
        Format a percentage for display.

        Args:
            pct: The percentage as a number (6 = 6%)
            decimal_places: Number of decimal places to show

        Returns:
            Formatted percentage string
        """
        return f"{pct:.{decimal_places}f}%"


default_formatter = CurrencyFormatter()


def currency_format(amount: float) -> str:
    """Format an amount with the default formatter ("$1,234.56")."""
    return default_formatter.format_currency(amount)
