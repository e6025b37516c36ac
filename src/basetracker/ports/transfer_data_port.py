from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from basetracker.core.dto import RawAssetTransfer

class TransferDataPort(ABC):
    """
    Abstract Class for the remote facts a first-transaction lookup needs.
    """

    # --- Transfer index ---

    @abstractmethod
    def get_first_outbound_transfer(self, address: str) -> Optional[RawAssetTransfer]:
        """Earliest external transfer sent from `address`, or None."""
        raise NotImplementedError

    # --- Blocks ---

    @abstractmethod
    def get_block_timestamp(self, block_number: int) -> Optional[int]:
        raise NotImplementedError
