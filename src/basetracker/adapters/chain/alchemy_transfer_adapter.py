from typing import Any, Optional
import logging

import requests
from web3 import Web3

from basetracker.config.settings import (
    ALCHEMY_API_KEY,
    ALCHEMY_BASE_URL,
    ALCHEMY_TIMEOUT_SEC,
    BASE_RPC_URL,
    RPC_TIMEOUT_SEC,
)

from basetracker.core.errors import DataSourceError, NetworkError
from basetracker.ports.transfer_data_port import TransferDataPort
from basetracker.core.dto import RawAssetTransfer

logger = logging.getLogger(__name__)


def _int_from_hex_or_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        except ValueError:
            return None
    return None


class AlchemyTransferAdapter(TransferDataPort):

    def __init__(
        self,
        api_key: Optional[str] = ALCHEMY_API_KEY,
        base_url: str = ALCHEMY_BASE_URL,
        rpc_url: str = BASE_RPC_URL,
        timeout_sec: int = ALCHEMY_TIMEOUT_SEC,
        rpc_timeout_sec: int = RPC_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
        web3: Optional[Web3] = None,
    ) -> None:
        if not api_key:
            raise ValueError("Alchemy API key is required")
        self._endpoint = f"{base_url.rstrip('/')}/{api_key}"
        self._timeout = timeout_sec
        self._session = session or requests.Session()
        self._w3 = web3 or Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": rpc_timeout_sec}))
        self._request_id = 0

    # ---------- internal ----------

    def _rpc(self, method: str, params: list) -> Any:
        self._request_id += 1
        payload = {
            "id": self._request_id,
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
        }

        try:
            resp = self._session.post(
                self._endpoint,
                json=payload,
                headers={"accept": "application/json"},
                timeout=self._timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise NetworkError(f"Alchemy unreachable: {e}") from e

        try:
            resp.raise_for_status()
            data = resp.json()
        except requests.HTTPError as e:
            raise DataSourceError(f"Alchemy HTTP error: {e}") from e
        except ValueError as e:
            raise DataSourceError("Alchemy returned a non-JSON response") from e

        if not isinstance(data, dict):
            raise DataSourceError(f"Invalid Alchemy response: {data}")
        if data.get("error"):
            err = data["error"]
            message = err.get("message") if isinstance(err, dict) else str(err)
            raise DataSourceError(f"Alchemy error: {message}")

        return data.get("result")

    # ---------- port methods ----------

    def get_first_outbound_transfer(self, address: str) -> Optional[RawAssetTransfer]:
        result = self._rpc("alchemy_getAssetTransfers", [{
            "fromBlock": "0x0",
            "toBlock": "latest",
            "fromAddress": address,
            "category": ["external"],
            "order": "asc",
            "maxCount": "0x1",
            "withMetadata": False,
            "excludeZeroValue": False,
        }])
        logger.debug("alchemy_getAssetTransfers(%s) -> %s", address, result)

        transfers = result.get("transfers") if isinstance(result, dict) else None
        if not transfers:
            return None

        t = transfers[0]
        block_number = _int_from_hex_or_int(t.get("blockNum"))
        if block_number is None or not t.get("hash"):
            raise DataSourceError(f"Invalid transfer record: {t}")

        return RawAssetTransfer(
            tx_hash=t["hash"],
            block_number=block_number,
            from_address=t.get("from") or address,
            to_address=t.get("to") or "",
            category=t.get("category") or "external",
        )

    def get_block_timestamp(self, block_number: int) -> Optional[int]:
        block = self._w3.eth.get_block(int(block_number))
        if not block:
            return None
        return _int_from_hex_or_int(block.get("timestamp"))
