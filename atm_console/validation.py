"""
Input Validation Module

Pure functions that turn raw console text into typed values. Each returns a
ValidationResult instead of raising, so the retry loop stays with the caller.
"""

from dataclasses import dataclass
from typing import Any, Optional
import re

from .accounts import is_valid_pin
from .currency import Currency, Money, decimal_from_string

EMPTY_INPUT_MESSAGE = "Input cannot be empty."
INVALID_PIN_MESSAGE = "PIN must be exactly 4 digits."
INVALID_INPUT_MESSAGE = "Invalid input."
INVALID_AMOUNT_MESSAGE = "Enter a valid non-negative amount."

INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one line of input"""
    ok: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> 'ValidationResult':
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> 'ValidationResult':
        return cls(ok=False, error=error)


def unparseable(message: str) -> str:
    """Error for text that is not a number at all: two lines, "Invalid input." first"""
    return f"{INVALID_INPUT_MESSAGE}\n{message}"


def validate_non_blank(raw: Optional[str]) -> ValidationResult:
    text = (raw or "").strip()
    if not text:
        return ValidationResult.failure(EMPTY_INPUT_MESSAGE)
    return ValidationResult.success(text)


def validate_pin(raw: Optional[str]) -> ValidationResult:
    text = (raw or "").strip()
    if not is_valid_pin(text):
        return ValidationResult.failure(INVALID_PIN_MESSAGE)
    return ValidationResult.success(text)


def validate_amount(raw: Optional[str], currency: Currency = Currency.USD) -> ValidationResult:
    """
    Parse a non-negative decimal amount into Money

    Amounts with more fractional digits than the currency allows are
    rounded half-up to its minor unit. Amounts above Money.maximum() are
    rejected.
    """
    try:
        amount = decimal_from_string(raw or "")
    except ValueError:
        return ValidationResult.failure(unparseable(INVALID_AMOUNT_MESSAGE))

    if amount < 0:
        return ValidationResult.failure(INVALID_AMOUNT_MESSAGE)
    maximum = Money.maximum(currency)
    if amount > maximum.amount:
        return ValidationResult.failure(f"Amount cannot exceed {maximum.to_display()}.")
    return ValidationResult.success(Money(amount, currency))


def validate_int_in_range(raw: Optional[str], minimum: int, maximum: int) -> ValidationResult:
    if minimum > maximum:
        raise ValueError(f"Empty range: {minimum} > {maximum}")

    message = f"Enter a number between {minimum} and {maximum}."
    text = (raw or "").strip()
    if not INTEGER_PATTERN.fullmatch(text):
        return ValidationResult.failure(unparseable(message))

    value = int(text)
    if value < minimum or value > maximum:
        return ValidationResult.failure(message)
    return ValidationResult.success(value)
