from dataclasses import dataclass


@dataclass(frozen=True)
class RawAssetTransfer:
    tx_hash: str
    block_number: int
    from_address: str
    to_address: str
    category: str = "external"
