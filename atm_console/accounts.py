"""
Account Module

The single in-memory bank account: holder identity, hashed PIN, Decimal
balance and the append-only transaction log. Every state-changing or
security-relevant operation appends exactly one entry to the log.
"""

from typing import Optional, Tuple
import hashlib
import hmac
import re
import secrets

from .clock import Clock, SystemClock
from .currency import AmountLike, Currency, Money, to_money
from .logging_config import get_logger, log_action
from .transactions import TransactionEntry, TransactionLog, TransactionType

PIN_PATTERN = re.compile(r'[0-9]{4}')


def is_valid_pin(value) -> bool:
    """Exactly four ASCII digits"""
    return isinstance(value, str) and PIN_PATTERN.fullmatch(value) is not None


class Account:
    """
    Bank account with PIN protection and an append-only transaction log

    The balance never goes negative: withdrawals larger than the balance are
    rejected and logged as failed attempts.
    """

    def __init__(
        self,
        holder_name: str,
        pin: str,
        opening_balance: AmountLike,
        currency: Currency = Currency.USD,
        clock: Optional[Clock] = None
    ):
        if not isinstance(holder_name, str) or not holder_name.strip():
            raise ValueError("Holder name must be a non-empty string")
        if not is_valid_pin(pin):
            raise ValueError("PIN must be exactly 4 digits")

        opening = to_money(opening_balance, currency)
        if opening.is_negative():
            raise ValueError("Opening balance must be non-negative")
        if opening > Money.maximum(currency):
            raise ValueError(f"Opening balance cannot exceed {Money.maximum(currency).to_display()}")

        self._holder_name = holder_name.strip()
        self._currency = currency
        self._clock = clock or SystemClock()
        self._pin_salt = ""
        self._pin_hash = ""
        self._set_pin_hash(pin)
        self._balance = opening
        self._log = TransactionLog()
        self.logger = get_logger("atm_console.accounts")

        self.add_transaction(
            f"Account created with opening balance {opening.to_display()}",
            TransactionType.ACCOUNT_CREATED,
            amount=opening
        )
        log_action(
            self.logger, "info", "Account created",
            action="create_account", resource="account",
            extra={"holder_name": self._holder_name, "opening_balance": opening.to_string()}
        )

    def __repr__(self) -> str:
        return f"Account({self._holder_name!r}, balance={self._balance.to_string()})"

    # Read-only state

    @property
    def holder_name(self) -> str:
        return self._holder_name

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def balance(self) -> Money:
        return self._balance

    @property
    def transactions(self) -> Tuple[TransactionEntry, ...]:
        """Immutable snapshot of the transaction log, oldest first"""
        return self._log.entries

    @property
    def deposit_headroom(self) -> Money:
        """Largest deposit that keeps the balance within Money.maximum()"""
        return Money.maximum(self._currency) - self._balance

    # PIN handling

    def check_pin(self, candidate: str) -> bool:
        """Return True iff `candidate` matches the current PIN. No side effects."""
        if not is_valid_pin(candidate):
            return False
        return hmac.compare_digest(self._hash_pin(candidate, self._pin_salt), self._pin_hash)

    def set_pin(self, new_pin: str) -> None:
        """
        Replace the PIN

        The caller is responsible for having verified the current PIN.

        Raises:
            ValueError: If new_pin is not exactly 4 digits
        """
        if not is_valid_pin(new_pin):
            raise ValueError("PIN must be exactly 4 digits")

        self._set_pin_hash(new_pin)
        self.add_transaction("PIN changed", TransactionType.PIN_CHANGED)
        log_action(self.logger, "info", "PIN changed", action="change_pin", resource="account")

    def record_login(self) -> TransactionEntry:
        """Log a successful authentication"""
        entry = self.add_transaction("User logged in", TransactionType.LOGIN)
        log_action(self.logger, "info", "User logged in", action="login", resource="account")
        return entry

    # Money movement

    def deposit(self, amount: AmountLike) -> Money:
        """
        Add `amount` to the balance

        Returns:
            The new balance

        Raises:
            ValueError: If amount is negative, in another currency, or would
                push the balance past Money.maximum()
        """
        money = self._normalize_amount(amount)
        if money > self.deposit_headroom:
            raise ValueError(
                f"Deposit would exceed the maximum balance of "
                f"{Money.maximum(self._currency).to_display()}"
            )

        self._balance = self._balance + money
        self.add_transaction(
            f"Deposited {money.to_display()}", TransactionType.DEPOSIT, amount=money
        )
        log_action(
            self.logger, "info", "Deposit completed",
            action="deposit", resource="account",
            extra={"amount": money.to_string(), "balance": self._balance.to_string()}
        )
        return self._balance

    def withdraw(self, amount: AmountLike) -> bool:
        """
        Remove `amount` from the balance if funds allow

        A request larger than the balance leaves it unchanged and is logged
        as a failed withdrawal attempt.

        Returns:
            True if the withdrawal succeeded, False on insufficient funds

        Raises:
            ValueError: If amount is negative or in another currency
        """
        money = self._normalize_amount(amount)

        if money > self._balance:
            self.add_transaction(
                f"Failed withdrawal attempt of {money.to_display()}",
                TransactionType.WITHDRAWAL_FAILED,
                amount=money
            )
            log_action(
                self.logger, "warning", "Withdrawal rejected: insufficient funds",
                action="withdraw", resource="account",
                extra={"amount": money.to_string(), "balance": self._balance.to_string()}
            )
            return False

        self._balance = self._balance - money
        self.add_transaction(
            f"Withdrew {money.to_display()}", TransactionType.WITHDRAWAL, amount=money
        )
        log_action(
            self.logger, "info", "Withdrawal completed",
            action="withdraw", resource="account",
            extra={"amount": money.to_string(), "balance": self._balance.to_string()}
        )
        return True

    # Transaction log

    def add_transaction(
        self,
        description: str,
        transaction_type: TransactionType,
        amount: Optional[Money] = None
    ) -> TransactionEntry:
        """Append a timestamped entry to the log"""
        entry = TransactionEntry(
            timestamp=self._clock.now(),
            description=description,
            transaction_type=transaction_type,
            amount=amount
        )
        return self._log.append(entry)

    def mini_statement(self, limit: Optional[int] = None) -> Tuple[TransactionEntry, ...]:
        """Newest `limit` entries (all when None), oldest first"""
        return self._log.latest(limit)

    # Internals

    def _normalize_amount(self, amount: AmountLike) -> Money:
        money = to_money(amount, self._currency)
        if money.is_negative():
            raise ValueError("Amount must be non-negative")
        return money

    def _set_pin_hash(self, pin: str) -> None:
        self._pin_salt = secrets.token_hex(16)
        self._pin_hash = self._hash_pin(pin, self._pin_salt)

    @staticmethod
    def _hash_pin(pin: str, salt: str) -> str:
        """Hash PIN with salt using scrypt"""
        return hashlib.scrypt(
            pin.encode(),
            salt=salt.encode(),
            n=16384, r=8, p=1
        ).hex()
