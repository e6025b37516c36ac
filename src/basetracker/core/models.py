from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# Lookup models

@dataclass(frozen=True)
class Transaction:
    """
    Earliest known transaction of an address.

    Same shape whether it came from the transfer index or the simulator;
    `simulated` is informational only.
    """

    hash: str
    timestamp: int           # unix seconds
    block_number: int
    simulated: bool = False


@dataclass(frozen=True)
class TransactionView:

    hash: str
    timestamp: int
    block_number: int
    formatted_date: str
    days_since: int
    simulated: bool = False

    @property
    def months(self) -> int:
        return self.days_since // 30

    @property
    def short_hash(self) -> str:
        if len(self.hash) <= 18:
            return self.hash
        return f"{self.hash[:10]}...{self.hash[-8:]}"


# Frame models

@dataclass(frozen=True)
class FrameTransaction:

    hash: str
    date: str
    days_since: int


@dataclass(frozen=True)
class FrameRecord:

    address: str
    transaction_data: Optional[FrameTransaction] = None
