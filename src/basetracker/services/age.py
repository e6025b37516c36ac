from __future__ import annotations

import time
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from basetracker.config import settings
from basetracker.core.models import Transaction, TransactionView

SECONDS_PER_DAY = 24 * 60 * 60
# absorbs clock / timezone skew between the chain and the local clock
SKEW_BUFFER_SEC = 3600


def format_date(timestamp: int, tz: Optional[str] = None, fmt: Optional[str] = None) -> str:
    d = datetime.fromtimestamp(int(timestamp), tz=ZoneInfo(tz or settings.DISPLAY_TIMEZONE))
    fmt = fmt if fmt is not None else settings.DATE_FORMAT
    if fmt:
        return d.strftime(fmt)
    return f"{d.month}/{d.day}/{d.year}"


def days_since(timestamp: int, now_ts: Optional[int] = None) -> int:
    now = int(now_ts) if now_ts is not None else int(time.time())
    diff = now - int(timestamp)
    return max(1, (diff + SKEW_BUFFER_SEC) // SECONDS_PER_DAY)


def build_view(tx: Transaction, now_ts: Optional[int] = None) -> TransactionView:
    return TransactionView(
        hash=tx.hash,
        timestamp=tx.timestamp,
        block_number=tx.block_number,
        formatted_date=format_date(tx.timestamp),
        days_since=days_since(tx.timestamp, now_ts),
        simulated=tx.simulated,
    )
