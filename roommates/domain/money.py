"""Money value type - integer minor units tagged with a currency code"""

from dataclasses import dataclass
from typing import Dict

from roommates.domain.exceptions import MismatchedCurrencies

# Currencies without a minor unit; everything else uses two decimals
MINOR_UNIT_DIGITS: Dict[str, int] = {"JPY": 0, "KRW": 0}

CURRENCY_SYMBOLS: Dict[str, str] = {"USD": "$"}


@dataclass(frozen=True)
class Money:
    """An exact amount of money in minor units (cents for USD)"""

    minor: int
    currency: str = "USD"

    @classmethod
    def zero(cls, currency: str = "USD") -> "Money":
        return cls(0, currency)

    @classmethod
    def of_major_minor(cls, currency: str, major: int, minor: int) -> "Money":
        """Build from a major and minor part, e.g. (USD, 99, 99) -> $99.99"""
        return cls(major * 10 ** minor_digits(currency) + minor, currency)

    def _check_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Expected Money, got {type(other).__name__}")
        if other.currency != self.currency:
            raise MismatchedCurrencies(
                f"Cannot combine {self.currency} and {other.currency} amounts"
            )

    def __add__(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.minor + other.minor, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.minor - other.minor, self.currency)

    def __neg__(self) -> "Money":
        return Money(-self.minor, self.currency)

    def __lt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.minor < other.minor

    def __le__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.minor <= other.minor

    def __gt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.minor > other.minor

    def __ge__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.minor >= other.minor

    def is_negative(self) -> bool:
        return self.minor < 0

    def __str__(self) -> str:
        digits = minor_digits(self.currency)
        sign = "-" if self.minor < 0 else ""
        major, minor = divmod(abs(self.minor), 10 ** digits)
        number = f"{major}.{minor:0{digits}d}" if digits else str(major)
        symbol = CURRENCY_SYMBOLS.get(self.currency)
        if symbol:
            return f"{sign}{symbol}{number}"
        return f"{sign}{number} {self.currency}"


def minor_digits(currency: str) -> int:
    """Number of decimal places used by a currency's minor unit"""
    return MINOR_UNIT_DIGITS.get(currency, 2)
