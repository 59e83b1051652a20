"""
Console I/O Module

Input-source abstraction used by the session instead of global stdin/stdout,
plus InputReader, which owns the re-prompt loops around the pure validators.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

from .currency import Currency, Money
from .validation import (
    ValidationResult, validate_amount, validate_int_in_range,
    validate_non_blank, validate_pin
)


class Console(ABC):
    """Abstract line-oriented terminal"""

    @abstractmethod
    def read_line(self, prompt: str) -> str:
        """
        Show `prompt` and return one line of input without its newline

        Raises:
            EOFError: When no more input is available
        """
        pass

    @abstractmethod
    def write(self, text: str = "") -> None:
        """Write one line of output"""
        pass


class StdConsole(Console):
    """Console over the process stdin/stdout"""

    def read_line(self, prompt: str) -> str:
        return input(prompt)

    def write(self, text: str = "") -> None:
        print(text)


class ScriptedConsole(Console):
    """
    Console that replays prepared input lines and records everything shown

    Prompts are recorded in `prompts`; written lines in `lines`. Reading past
    the end of the script raises EOFError, like a closed stdin.
    """

    def __init__(self, inputs: Iterable[str] = ()):
        self._inputs: List[str] = list(inputs)
        self._position = 0
        self.prompts: List[str] = []
        self.lines: List[str] = []

    def feed(self, *inputs: str) -> None:
        self._inputs.extend(inputs)

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._position >= len(self._inputs):
            raise EOFError("Scripted input exhausted")
        line = self._inputs[self._position]
        self._position += 1
        return line

    def write(self, text: str = "") -> None:
        self.lines.extend(text.split("\n"))

    @property
    def remaining(self) -> int:
        return len(self._inputs) - self._position

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


class InputReader:
    """
    Prompts until a line validates

    Invalid input is reported with the validator's message and the prompt is
    shown again; nothing is raised to the caller except EOFError when the
    console runs out of input.
    """

    def __init__(self, console: Console):
        self.console = console

    def read(self, prompt: str, validator: Callable[[str], ValidationResult]):
        while True:
            result = validator(self.console.read_line(prompt))
            if result.ok:
                return result.value
            self.console.write(result.error)

    def read_non_blank(self, prompt: str) -> str:
        return self.read(prompt, validate_non_blank)

    def read_pin(self, prompt: str) -> str:
        return self.read(prompt, validate_pin)

    def read_amount(self, prompt: str, currency: Currency = Currency.USD,
                    maximum: Optional[Money] = None) -> Money:
        def validator(raw: str) -> ValidationResult:
            result = validate_amount(raw, currency)
            if result.ok and maximum is not None and result.value > maximum:
                return ValidationResult.failure(f"Amount cannot exceed {maximum.to_display()}.")
            return result

        return self.read(prompt, validator)

    def read_int_in_range(self, prompt: str, minimum: int, maximum: int) -> int:
        return self.read(prompt, lambda raw: validate_int_in_range(raw, minimum, maximum))
