"""
Test suite for console abstraction and InputReader retry loops
"""

import pytest
from decimal import Decimal

from atm_console.console import InputReader, ScriptedConsole, StdConsole
from atm_console.currency import Money, Currency


class TestScriptedConsole:

    def test_replays_inputs_and_records_prompts(self):
        console = ScriptedConsole(["a", "b"])

        assert console.read_line("first: ") == "a"
        assert console.read_line("second: ") == "b"
        assert console.prompts == ["first: ", "second: "]
        assert console.remaining == 0

    def test_eof_when_exhausted(self):
        console = ScriptedConsole([])
        with pytest.raises(EOFError):
            console.read_line("anything: ")

    def test_feed_and_output(self):
        console = ScriptedConsole()
        console.feed("x")
        console.write("\n=== Title ===")
        console.write("body")

        assert console.read_line("> ") == "x"
        assert console.lines == ["", "=== Title ===", "body"]
        assert console.output == "\n=== Title ===\nbody"


class TestStdConsole:

    def test_uses_input_and_print(self, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt: "typed")
        console = StdConsole()

        assert console.read_line("Prompt: ") == "typed"
        console.write("hello")
        assert capsys.readouterr().out == "hello\n"


class TestInputReader:
    """Invalid input is absorbed by re-prompting"""

    def test_read_non_blank_reprompts(self):
        console = ScriptedConsole(["", "   ", " Jane "])
        reader = InputReader(console)

        assert reader.read_non_blank("Name: ") == "Jane"
        assert console.prompts == ["Name: "] * 3
        assert console.lines == ["Input cannot be empty."] * 2

    def test_read_pin_reprompts(self):
        console = ScriptedConsole(["12", "abcd", "4321"])
        reader = InputReader(console)

        assert reader.read_pin("PIN: ") == "4321"
        assert console.lines == ["PIN must be exactly 4 digits."] * 2

    def test_read_amount_reprompts(self):
        console = ScriptedConsole(["ten", "-5", "10.25"])
        reader = InputReader(console)

        assert reader.read_amount("Amount: ") == Money(Decimal("10.25"), Currency.USD)
        assert console.lines == [
            "Invalid input.",
            "Enter a valid non-negative amount.",
            "Enter a valid non-negative amount.",
        ]

    def test_read_amount_with_maximum(self):
        console = ScriptedConsole(["500", "100"])
        reader = InputReader(console)
        cap = Money(Decimal("250"), Currency.USD)

        assert reader.read_amount("Amount: ", maximum=cap) == Money(Decimal("100"), Currency.USD)
        assert console.lines == ["Amount cannot exceed $250.00."]

    def test_read_int_in_range_reprompts(self):
        console = ScriptedConsole(["9", "x", "4"])
        reader = InputReader(console)

        assert reader.read_int_in_range("Choice: ", 1, 6) == 4
        assert console.lines == [
            "Enter a number between 1 and 6.",
            "Invalid input.",
            "Enter a number between 1 and 6.",
        ]

    def test_eof_propagates(self):
        reader = InputReader(ScriptedConsole(["bad"]))
        with pytest.raises(EOFError):
            reader.read_pin("PIN: ")
