from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from basetracker.config import settings
from basetracker.core.address import is_valid_address
from basetracker.core.errors import InvalidAddress, LookupInProgress, NoTransactionsFound
from basetracker.core.models import TransactionView
from basetracker.services.age import build_view
from basetracker.services.lookup_service import FirstTransactionService

logger = logging.getLogger(__name__)

EMPTY_ADDRESS_MESSAGE = "Please enter an Ethereum address"
INVALID_ADDRESS_MESSAGE = "Invalid Ethereum address format"
BUSY_MESSAGE = "A lookup is already in progress"
UNEXPECTED_MESSAGE = "Failed to fetch transaction data. Please check the address and try again."


@dataclass(frozen=True)
class SessionResult:
    view: Optional[TransactionView] = None
    error: Optional[str] = None
    celebrate: bool = False

    @property
    def ok(self) -> bool:
        return self.view is not None


class TrackerSession:
    """
    Form-level controller: one address in, one view or one message out.

    Only one lookup may be in flight; a second submit while busy raises
    LookupInProgress instead of racing the first.
    """

    def __init__(self, service: FirstTransactionService) -> None:
        self.service = service
        self.address = ""
        self.last_result: Optional[SessionResult] = None
        self._busy = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    def prefill(self, connected_address: Optional[str]) -> None:
        # wallet connector is just another source of the form input
        if connected_address:
            self.address = connected_address.strip()

    def submit(self, address: Optional[str] = None, now_ts: Optional[int] = None) -> SessionResult:
        if not self._busy.acquire(blocking=False):
            raise LookupInProgress(BUSY_MESSAGE)
        try:
            # form state only changes once this submission owns the lock
            if address is not None:
                self.address = address.strip()
            result = self._lookup(self.address, now_ts)
            self.last_result = result
        finally:
            self._busy.release()

        return result

    def _lookup(self, address: str, now_ts: Optional[int]) -> SessionResult:
        if not address:
            return SessionResult(error=EMPTY_ADDRESS_MESSAGE)
        if not is_valid_address(address):
            return SessionResult(error=INVALID_ADDRESS_MESSAGE)

        try:
            tx = self.service.get_first_transaction(address, now_ts=now_ts)
            view = build_view(tx, now_ts)
        except InvalidAddress as e:
            return SessionResult(error=str(e) or INVALID_ADDRESS_MESSAGE)
        except NoTransactionsFound:
            return SessionResult(error=f"No transactions found for this address on {settings.NETWORK_NAME}")
        except Exception:
            logger.exception("Lookup failed for %s", address)
            return SessionResult(error=UNEXPECTED_MESSAGE)

        return SessionResult(view=view, celebrate=True)
