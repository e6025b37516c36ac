from __future__ import annotations

import html
import time
from typing import Optional

from basetracker.config import settings
from basetracker.core.address import is_valid_address
from basetracker.core.cache import BoundedCache
from basetracker.core.models import FrameRecord, FrameTransaction
from basetracker.io.share import share_sentence
from basetracker.services.age import SECONDS_PER_DAY, format_date


def new_frame_cache() -> "BoundedCache[str, FrameRecord]":
    return BoundedCache(settings.FRAME_CACHE_MAX_ENTRIES, settings.FRAME_CACHE_TTL_SEC)


class FrameService:
    """
    Canned social-frame data for an address.

    Records are generated from the address itself (no lookup) and kept in the
    cache handed in by the caller.
    """

    def __init__(
        self,
        cache: Optional["BoundedCache[str, FrameRecord]"] = None,
        image_url: str = settings.FRAME_IMAGE_URL,
        network: str = settings.NETWORK_NAME,
    ) -> None:
        self.cache = cache if cache is not None else new_frame_cache()
        self.image_url = image_url
        self.network = network

    def generate_frame(self, address: str, now_ts: Optional[int] = None) -> FrameRecord:
        addr = (address or "").strip()
        if not is_valid_address(addr):
            return FrameRecord(address=addr, transaction_data=None)

        key = addr.lower()
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        now = int(now_ts) if now_ts is not None else int(time.time())
        seed = addr[2:10]
        days_ago = int(seed, 16) % 365 + 1

        record = FrameRecord(
            address=addr,
            transaction_data=FrameTransaction(
                hash="0x" + "0" * (64 - len(seed)) + seed,
                date=format_date(now - days_ago * SECONDS_PER_DAY),
                days_since=days_ago,
            ),
        )
        self.cache.put(key, record)
        return record

    def generate_frame_metadata(self, address: str, now_ts: Optional[int] = None) -> str:
        frame = self.generate_frame(address, now_ts)
        image = html.escape(self.image_url, quote=True)

        if frame.transaction_data is None:
            # initial frame: ask for an address
            return (
                '<meta property="fc:frame" content="vNext" />\n'
                f'<meta property="fc:frame:image" content="{image}" />\n'
                '<meta property="fc:frame:button:1" content="Enter Address" action="input" />\n'
                '<meta property="fc:frame:input:text" content="Enter your Ethereum address" />\n'
            )

        t = frame.transaction_data
        title = html.escape(f"{self.network} First Transaction Tracker", quote=True)
        description = html.escape(share_sentence(t.date, t.days_since, self.network), quote=True)
        return (
            '<meta property="fc:frame" content="vNext" />\n'
            f'<meta property="fc:frame:image" content="{image}" />\n'
            '<meta property="fc:frame:button:1" content="Share" action="post" />\n'
            f'<meta property="og:title" content="{title}" />\n'
            f'<meta property="og:description" content="{description}" />\n'
        )
