"""
Transaction Log Module

Append-only, ordered log of timestamped entries. Every balance-affecting or
security-relevant event on the account produces exactly one entry, including
failed withdrawal attempts and logins.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .currency import Money

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class TransactionType(Enum):
    """Kinds of logged account events"""
    ACCOUNT_CREATED = "account_created"
    LOGIN = "login"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    WITHDRAWAL_FAILED = "withdrawal_failed"
    PIN_CHANGED = "pin_changed"


@dataclass(frozen=True)
class TransactionEntry:
    """
    Immutable log line describing one account event
    """
    timestamp: datetime
    description: str
    transaction_type: TransactionType
    amount: Optional[Money] = None

    def format(self) -> str:
        """Statement line: '[YYYY-MM-DD HH:MM:SS] <description>'"""
        return f"[{self.timestamp.strftime(TIMESTAMP_FORMAT)}] {self.description}"

    def __str__(self) -> str:
        return self.format()


class TransactionLog:
    """
    Ordered, append-only sequence of TransactionEntry objects

    Entries can be read but never removed or replaced.
    """

    def __init__(self):
        self._entries: List[TransactionEntry] = []

    def append(self, entry: TransactionEntry) -> TransactionEntry:
        if not isinstance(entry, TransactionEntry):
            raise ValueError("Only TransactionEntry objects can be logged")
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> Tuple[TransactionEntry, ...]:
        """Snapshot of all entries in insertion order"""
        return tuple(self._entries)

    def latest(self, limit: Optional[int] = None) -> Tuple[TransactionEntry, ...]:
        """Newest `limit` entries, oldest first; all entries when limit is None"""
        if limit is None:
            return self.entries
        if limit < 0:
            raise ValueError("limit must be non-negative")
        if limit == 0:
            return ()
        return tuple(self._entries[-limit:])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TransactionEntry]:
        return iter(self.entries)
