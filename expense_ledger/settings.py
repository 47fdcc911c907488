"""
settings.py - Display configuration shared by the ledger and its views

One Settings object is created by the composition root and passed by
reference to the Ledger and to the presentation layer. The ledger only
forwards mutation requests to it; views read it to format amounts and pick
colors.

Classes:
- Settings: currency symbol and theme, with theme-derived colors
"""

from decimal import Decimal
from typing import Tuple, Union

from .core import (
    DEFAULT_CURRENCY_SYMBOL, THEME_LIGHT, THEME_DARK, THEMES,
    InvalidArgument, to_amount,
)


# RGB triples
Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)
DARK_GRAY: Color = (30, 30, 30)

# theme -> (background, foreground)
THEME_COLORS = {
    THEME_LIGHT: (WHITE, BLACK),
    THEME_DARK: (DARK_GRAY, WHITE),
}


class Settings:
    """
    Currency symbol and display theme for one running application.

    Setters validate and raise InvalidArgument; getters never fail.
    """

    def __init__(self, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL, theme: str = THEME_LIGHT):
        """
        Initialize settings.

        Args:
            currency_symbol: Non-empty symbol prefixed to amounts (default "$")
            theme: "Light" or "Dark" (default "Light")

        Raises:
            InvalidArgument: If either value is invalid
        """
        self._currency_symbol = DEFAULT_CURRENCY_SYMBOL
        self._theme = THEME_LIGHT
        self.set_currency_symbol(currency_symbol)
        self.set_theme(theme)

    @property
    def currency_symbol(self) -> str:
        return self._currency_symbol

    @property
    def theme(self) -> str:
        return self._theme

    def set_currency_symbol(self, symbol: str) -> None:
        """Set the currency symbol. Must be a non-empty string."""
        if not isinstance(symbol, str) or not symbol:
            raise InvalidArgument("Currency symbol cannot be null or empty")
        self._currency_symbol = symbol

    def set_theme(self, theme: str) -> None:
        """Set the theme. Must be exactly "Light" or "Dark"."""
        if theme not in THEMES:
            raise InvalidArgument(f"Theme must be one of {THEMES}, got {theme!r}")
        self._theme = theme

    @property
    def background_color(self) -> Color:
        return THEME_COLORS[self._theme][0]

    @property
    def foreground_color(self) -> Color:
        return THEME_COLORS[self._theme][1]

    def format_amount(self, amount: Union[Decimal, int, float, str]) -> str:
        """
        Render an amount with the currency symbol and two decimal places.

        Example:
            Settings("€").format_amount(Decimal("12.5"))  # "€12.50"
        """
        return f"{self._currency_symbol}{to_amount(amount):.2f}"

    def __repr__(self):
        return f"Settings(currency_symbol={self._currency_symbol!r}, theme={self._theme!r})"
