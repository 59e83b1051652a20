"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
With no ATM_* variables set, the simulator runs with its standard behaviour.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import Optional

from .currency import MAX_AMOUNT, Currency, Money, decimal_from_string

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AtmConfig(BaseSettings):
    """ATM console simulator configuration"""

    # Account configuration
    currency: str = "USD"
    max_opening_balance: Optional[str] = None  # None = unlimited

    # Session configuration
    max_pin_attempts: int = 3
    statement_max_entries: Optional[int] = None  # None = full history

    # Logging configuration
    log_level: str = "WARNING"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr

    class Config:
        env_prefix = "ATM_"
        case_sensitive = False

    @field_validator("currency")
    @classmethod
    def _known_currency(cls, value: str) -> str:
        return Currency.from_code(value).code

    @field_validator("max_opening_balance")
    @classmethod
    def _valid_cap(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        cap = decimal_from_string(value)
        if cap < 0:
            raise ValueError("max_opening_balance must be non-negative")
        if cap > MAX_AMOUNT:
            raise ValueError(f"max_opening_balance must not exceed {MAX_AMOUNT}")
        return value

    @field_validator("max_pin_attempts")
    @classmethod
    def _positive_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_pin_attempts must be at least 1")
        return value

    @field_validator("statement_max_entries")
    @classmethod
    def _non_negative_entries(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("statement_max_entries must be non-negative")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return value

    @property
    def account_currency(self) -> Currency:
        return Currency.from_code(self.currency)

    @property
    def opening_balance_cap(self) -> Optional[Money]:
        if self.max_opening_balance is None:
            return None
        return Money(decimal_from_string(self.max_opening_balance), self.account_currency)


# Global configuration instance
config = AtmConfig()


def get_config() -> AtmConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> AtmConfig:
    """Reload configuration from environment"""
    global config
    config = AtmConfig()
    return config
