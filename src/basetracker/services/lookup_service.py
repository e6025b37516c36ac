from __future__ import annotations

import logging
import time
from typing import Optional

from basetracker.config import settings
from basetracker.core.address import normalize_address
from basetracker.core.dto import RawAssetTransfer
from basetracker.core.errors import NetworkError, NoTransactionsFound
from basetracker.core.models import Transaction
from basetracker.ports.transfer_data_port import TransferDataPort
from basetracker.services.simulator import TransactionSimulator

logger = logging.getLogger(__name__)


class FirstTransactionService:
    """
    Finds the earliest outbound transaction of an address.

    - Source: transfer index (external transfers, ascending, one result)
      plus a block read for the timestamp
    - Miss or unreachable index: simulated transaction (unless disabled)
    - Anything else raised by the port propagates
    """

    def __init__(
        self,
        chain: TransferDataPort,
        simulator: Optional[TransactionSimulator] = None,
        simulate_on_miss: bool = settings.SIMULATE_ON_MISS,
    ) -> None:
        self.chain = chain
        self.simulator = simulator or TransactionSimulator()
        self.simulate_on_miss = simulate_on_miss

    def get_first_transaction(self, address: str, now_ts: Optional[int] = None) -> Transaction:
        addr = normalize_address(address)
        now = int(now_ts) if now_ts is not None else int(time.time())

        try:
            transfer = self.chain.get_first_outbound_transfer(addr)
        except NetworkError as e:
            if not self.simulate_on_miss:
                raise
            logger.warning("Transfer index unreachable (%s); falling back to simulation for %s", e, addr)
            return self.simulator.simulate(addr, now)

        if transfer is None:
            if not self.simulate_on_miss:
                raise NoTransactionsFound(f"No transactions found for {addr} on {settings.NETWORK_NAME}")
            logger.warning("No transfers found for %s; falling back to simulation", addr)
            return self.simulator.simulate(addr, now)

        return Transaction(
            hash=transfer.tx_hash,
            timestamp=self._block_timestamp(transfer, now),
            block_number=transfer.block_number,
        )

    # -------------------------
    # Helpers
    # -------------------------

    def _block_timestamp(self, transfer: RawAssetTransfer, now: int) -> int:
        # best-effort: a missing block time should not sink the lookup
        try:
            ts = self.chain.get_block_timestamp(transfer.block_number)
        except Exception as e:
            logger.warning("Block %s timestamp unavailable (%s); using current time", transfer.block_number, e)
            return now

        if ts is None:
            logger.warning("Block %s not found; using current time", transfer.block_number)
            return now
        return int(ts)
