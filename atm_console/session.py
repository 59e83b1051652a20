"""
Session Controller Module

Drives one ATM session: PIN authentication with a limited number of
attempts, then a menu loop dispatching to Account operations until the user
exits. States move strictly forward:

    UNAUTHENTICATED -> AUTHENTICATED -> TERMINATED
    UNAUTHENTICATED -> TERMINATED   (attempts exhausted)
"""

from enum import Enum, IntEnum
from typing import Callable, Dict, Optional

from .accounts import Account
from .clock import Clock
from .config import AtmConfig, get_config
from .console import Console, InputReader
from .logging_config import get_logger, log_action


class SessionState(Enum):
    """Session lifecycle states"""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    TERMINATED = "terminated"


class MenuOption(IntEnum):
    """Main menu entries, numbered as shown to the user"""
    CHECK_BALANCE = 1
    DEPOSIT = 2
    WITHDRAW = 3
    MINI_STATEMENT = 4
    CHANGE_PIN = 5
    EXIT = 6

    @property
    def label(self) -> str:
        return MENU_LABELS[self]


MENU_LABELS = {
    MenuOption.CHECK_BALANCE: "Check Balance",
    MenuOption.DEPOSIT: "Deposit",
    MenuOption.WITHDRAW: "Withdraw",
    MenuOption.MINI_STATEMENT: "Mini Statement",
    MenuOption.CHANGE_PIN: "Change PIN",
    MenuOption.EXIT: "Exit",
}


def print_header(console: Console, title: str) -> None:
    console.write(f"\n=== {title} ===")


def open_account(reader: InputReader, config: Optional[AtmConfig] = None,
                 clock: Optional[Clock] = None) -> Account:
    """
    Interactive account creation: holder name, PIN and opening balance

    The opening balance is logged as the first transaction entry.
    """
    config = config or get_config()
    currency = config.account_currency

    reader.console.write("Create your account to begin.")
    holder_name = reader.read_non_blank("Account holder name: ")
    pin = reader.read_pin("Set a 4-digit PIN: ")
    opening_balance = reader.read_amount(
        "Enter opening balance: ", currency, maximum=config.opening_balance_cap
    )

    return Account(holder_name, pin, opening_balance, currency=currency, clock=clock)


class Session:
    """
    One authenticated run of the ATM against a single account
    """

    def __init__(self, account: Account, console: Console, config: Optional[AtmConfig] = None):
        self.account = account
        self.console = console
        self.reader = InputReader(console)
        self.config = config or get_config()
        self.state = SessionState.UNAUTHENTICATED
        self.failed_attempts = 0
        self.logger = get_logger("atm_console.session")

        self._handlers: Dict[MenuOption, Callable[[], None]] = {
            MenuOption.CHECK_BALANCE: self.show_balance,
            MenuOption.DEPOSIT: self.deposit,
            MenuOption.WITHDRAW: self.withdraw,
            MenuOption.MINI_STATEMENT: self.print_mini_statement,
            MenuOption.CHANGE_PIN: self.change_pin,
            MenuOption.EXIT: self.terminate,
        }

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED

    @property
    def is_terminated(self) -> bool:
        return self.state == SessionState.TERMINATED

    def run(self) -> SessionState:
        """
        Authenticate, then serve menu choices until exit

        Returns:
            The final state (always TERMINATED)

        Raises:
            RuntimeError: If the session has already terminated
        """
        if self.is_terminated:
            raise RuntimeError("Session has already terminated")

        if self.state == SessionState.UNAUTHENTICATED and not self.authenticate():
            self.console.write("Too many failed attempts. Session terminated.")
            return self.state

        while not self.is_terminated:
            self.print_menu()
            choice = self.reader.read_int_in_range("Choose an option: ", 1, len(MenuOption))
            self.dispatch(MenuOption(choice))

        return self.state

    def authenticate(self) -> bool:
        """
        Ask for the PIN up to `max_pin_attempts` times

        Returns:
            True once authenticated; False (and TERMINATED) when attempts run out
        """
        if self.state != SessionState.UNAUTHENTICATED:
            raise RuntimeError(f"Cannot authenticate from state {self.state.value}")

        max_attempts = self.config.max_pin_attempts
        while self.failed_attempts < max_attempts:
            candidate = self.reader.read_pin("Enter your PIN: ")
            if self.account.check_pin(candidate):
                self.state = SessionState.AUTHENTICATED
                self.console.write(f"\nWelcome, {self.account.holder_name}.")
                self.account.record_login()
                return True

            self.failed_attempts += 1
            remaining = max_attempts - self.failed_attempts
            log_action(
                self.logger, "warning", "Incorrect PIN entered",
                action="login", resource="session",
                extra={"attempt": self.failed_attempts, "remaining": remaining}
            )
            if remaining > 0:
                self.console.write(f"Incorrect PIN. Attempts remaining: {remaining}")

        self.state = SessionState.TERMINATED
        log_action(
            self.logger, "warning", "Session locked out after failed PIN attempts",
            action="lockout", resource="session",
            extra={"attempts": self.failed_attempts}
        )
        return False

    def dispatch(self, option: MenuOption) -> None:
        if not self.is_authenticated:
            raise RuntimeError("Menu actions require an authenticated session")
        self._handlers[option]()

    def print_menu(self) -> None:
        print_header(self.console, "Main Menu")
        for option in MenuOption:
            self.console.write(f"{option.value}. {option.label}")

    # Menu actions

    def show_balance(self) -> None:
        self.console.write(f"Current balance: {self.account.balance.to_display()}")

    def deposit(self) -> None:
        amount = self.reader.read_amount(
            "Enter deposit amount: ", self.account.currency,
            maximum=self.account.deposit_headroom
        )
        self.account.deposit(amount)
        self.console.write(
            f"Deposit successful. New balance: {self.account.balance.to_display()}"
        )

    def withdraw(self) -> None:
        amount = self.reader.read_amount("Enter withdrawal amount: ", self.account.currency)
        if self.account.withdraw(amount):
            self.console.write("Please collect your cash.")
            self.console.write(f"New balance: {self.account.balance.to_display()}")
        else:
            self.console.write("Insufficient funds.")

    def print_mini_statement(self) -> None:
        print_header(self.console, "Mini Statement")
        entries = self.account.mini_statement(self.config.statement_max_entries)
        if not entries:
            self.console.write("No transactions yet.")
        for entry in entries:
            self.console.write(entry.format())
        self.console.write(f"Available balance: {self.account.balance.to_display()}")

    def change_pin(self) -> None:
        current = self.reader.read_pin("Enter current PIN: ")
        if not self.account.check_pin(current):
            self.console.write("Current PIN does not match.")
            log_action(
                self.logger, "warning", "PIN change rejected: current PIN mismatch",
                action="change_pin", resource="session"
            )
            return

        new_pin = self.reader.read_pin("Enter new 4-digit PIN: ")
        self.account.set_pin(new_pin)
        self.console.write("PIN changed successfully.")

    def terminate(self) -> None:
        self.state = SessionState.TERMINATED
        log_action(self.logger, "info", "Session ended by user", action="exit", resource="session")
