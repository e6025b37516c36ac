from __future__ import annotations

from typing import Any, Dict

from basetracker.core.models import FrameRecord, TransactionView
from basetracker.io.share import build_share_text


def view_to_dict(v: TransactionView, address: str = "") -> Dict[str, Any]:
    return {
        "address": address,
        "hash": v.hash,
        "timestamp": v.timestamp,
        "block_number": v.block_number,
        "date": v.formatted_date,
        "days_since": v.days_since,
        "months": v.months,
        "simulated": v.simulated,
        "share_text": build_share_text(v),
    }


def frame_to_dict(f: FrameRecord) -> Dict[str, Any]:
    t = f.transaction_data
    return {
        "address": f.address,
        "transaction_data": None if t is None else {
            "hash": t.hash,
            "date": t.date,
            "days_since": t.days_since,
        },
    }
