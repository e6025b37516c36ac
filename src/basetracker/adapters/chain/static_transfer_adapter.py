from basetracker.ports.transfer_data_port import TransferDataPort
from basetracker.core.dto import RawAssetTransfer
from typing import Optional, Dict, List

class StaticTransferAdapter(TransferDataPort):
    def __init__(self,
                 transfers: Optional[List[RawAssetTransfer]] = None,
                 block_timestamps: Optional[Dict[int, int]] = None,
                 ):
        self._transfers = transfers or []
        self._block_ts = block_timestamps or {}

    def get_first_outbound_transfer(self, address):
        ad = address.lower()
        items = [t for t in self._transfers if t.from_address.lower() == ad]
        if not items:
            return None
        items.sort(key=lambda x: x.block_number)
        return items[0]

    def get_block_timestamp(self, block_number):
        return self._block_ts.get(int(block_number))
