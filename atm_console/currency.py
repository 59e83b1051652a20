"""
Currency and Money Module

Handles ISO 4217 currency codes and proper Decimal precision for every
monetary value in the simulator. NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from dataclasses import dataclass
from enum import Enum
from typing import Union
import re

# Set global decimal context for financial precision
getcontext().prec = 28

AmountLike = Union["Money", Decimal, int, str]

_THOUSANDS_PATTERN = re.compile(r'[+-]?[0-9]{1,3}(,[0-9]{3})+(\.[0-9]*)?')
_NUMBER_PATTERN = re.compile(r'[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?')

# Largest accepted amount and balance; sums of two such values stay within
# the Decimal context precision
MAX_AMOUNT = Decimal('1000000000000')


class Currency(Enum):
    """ISO 4217 Currency Codes with precision and display symbol"""
    USD = ("USD", 2, "$")  # US Dollar
    EUR = ("EUR", 2, "€")  # Euro
    GBP = ("GBP", 2, "£")  # British Pound
    CAD = ("CAD", 2, "$")  # Canadian Dollar
    CHF = ("CHF", 2, "CHF ")  # Swiss Franc
    JPY = ("JPY", 0, "¥")  # Japanese Yen, no minor unit

    def __init__(self, code: str, precision: int, symbol: str):
        self.code = code
        self.precision = precision
        self.symbol = symbol

    @property
    def quantum(self) -> Decimal:
        """Smallest representable amount, e.g. Decimal('0.01')"""
        return Decimal('0.1') ** self.precision

    @classmethod
    def from_code(cls, code: str) -> 'Currency':
        """Look up a currency by its ISO code (case-insensitive)"""
        for currency in cls:
            if currency.code == code.strip().upper():
                return currency
        raise ValueError(f"Unsupported currency code: {code}")


@dataclass(frozen=True)
class Money:
    """
    Immutable money representation with currency and proper precision.
    All monetary values MUST use this class or raw Decimal.
    """
    amount: Decimal
    currency: Currency

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if not self.amount.is_finite():
            raise ValueError(f"Money amount must be finite, got {self.amount}")

        # Round to currency precision
        try:
            rounded = self.amount.quantize(self.currency.quantum, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise ValueError(f"Money amount out of range: {self.amount}")
        if rounded.is_zero():
            rounded = abs(rounded)  # no negative zero
        object.__setattr__(self, 'amount', rounded)

    @classmethod
    def zero(cls, currency: Currency) -> 'Money':
        return cls(Decimal('0'), currency)

    @classmethod
    def maximum(cls, currency: Currency) -> 'Money':
        """Largest amount or balance the simulator accepts"""
        return cls(MAX_AMOUNT, currency)

    def _check_currency(self, other: 'Money', verb: str) -> None:
        if self.currency != other.currency:
            raise ValueError(f"Cannot {verb} {self.currency.code} and {other.currency.code}")

    def __add__(self, other: 'Money') -> 'Money':
        self._check_currency(other, "add")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract {other.currency.code} from {self.currency.code}")
        return Money(self.amount - other.amount, self.currency)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return False
        return self.amount == other.amount and self.currency == other.currency

    def __hash__(self) -> int:
        return hash((self.amount, self.currency))

    def __lt__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.amount <= other.amount

    def __gt__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.amount > other.amount

    def __ge__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.amount >= other.amount

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == Decimal('0')

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > Decimal('0')

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < Decimal('0')

    def format_amount(self) -> str:
        """Fixed-precision amount without symbol, e.g. '150.00'"""
        return f"{self.amount:.{self.currency.precision}f}"

    def to_display(self) -> str:
        """Amount prefixed with the currency symbol, e.g. '$150.00'"""
        return f"{self.currency.symbol}{self.format_amount()}"

    def to_string(self) -> str:
        """Format for logs, e.g. 'USD 1,234.56'"""
        return f"{self.currency.code} {self.amount:,.{self.currency.precision}f}"

    def __str__(self) -> str:
        return self.to_display()


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert user-entered text to Decimal

    Accepts surrounding whitespace, a leading currency symbol and
    comma thousands separators ("$1,250.50"). Only ASCII digits are
    accepted; NaN, infinities and underscores are rejected.

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to a finite Decimal
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Value must be a non-empty string")

    clean_value = value.strip()
    for currency in Currency:
        symbol = currency.symbol.strip()
        if clean_value.startswith(symbol):
            clean_value = clean_value[len(symbol):].strip()
            break

    if _THOUSANDS_PATTERN.fullmatch(clean_value):
        clean_value = clean_value.replace(',', '')

    # ASCII digits only, no underscores
    if not _NUMBER_PATTERN.fullmatch(clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    return Decimal(clean_value)


def to_money(value: AmountLike, currency: Currency) -> Money:
    """
    Normalize a Money, Decimal, int or numeric string to Money in `currency`

    Raises:
        ValueError: On currency mismatch or unparseable input
    """
    if isinstance(value, Money):
        if value.currency != currency:
            raise ValueError(
                f"Amount currency {value.currency.code} does not match {currency.code}"
            )
        return value
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError("Monetary amounts must not be float or bool")
    if isinstance(value, str):
        return Money(decimal_from_string(value), currency)
    return Money(Decimal(value), currency)
