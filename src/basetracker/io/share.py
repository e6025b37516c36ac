from __future__ import annotations

from basetracker.config import settings
from basetracker.core.models import TransactionView


def build_share_text(view: TransactionView, network: str = settings.NETWORK_NAME) -> str:
    return share_sentence(view.formatted_date, view.days_since, network)


def share_sentence(date: str, days: int, network: str = settings.NETWORK_NAME) -> str:
    return (
        f"I've been building on {network} since {date}! "
        f"It's been {days} days since my first {network} transaction!"
    )
