from __future__ import annotations

import re

from web3 import Web3

from basetracker.core.errors import InvalidAddress

_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")


def is_valid_address(address: str) -> bool:
    try:
        return bool(_ADDRESS_RE.fullmatch(address))
    except Exception:
        return False


def normalize_address(address: str) -> str:
    """
    Return the checksummed form of `address`.

    Raises InvalidAddress for anything that is not 0x + 40 hex digits.
    """
    candidate = address.strip() if isinstance(address, str) else address
    if not is_valid_address(candidate):
        raise InvalidAddress("Invalid Ethereum address format")
    return Web3.to_checksum_address(candidate)
