"""Display helpers for tournaments."""

from __future__ import annotations

import datetime
from typing import Any

from olympiad.constants import FORMAT_OFFLINE, FORMAT_ONLINE

FORMAT_LABELS = {
    FORMAT_ONLINE: "Online",
    FORMAT_OFFLINE: "In person",
}


def format_label(tournament_format: str | None) -> str:
    """Human-readable label for a tournament format."""
    return FORMAT_LABELS.get(tournament_format or "", "Hybrid")


def format_date(value: Any) -> str:
    """Format a Firestore timestamp, datetime or ISO string as DD.MM.YYYY."""
    if value is None:
        return ""
    if hasattr(value, "to_datetime"):  # Firestore Timestamp
        value = value.to_datetime()
    if isinstance(value, str):
        try:
            value = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.strftime("%d.%m.%Y")
    return str(value)
