"""Built-in tournaments shown when Firebase is not configured."""

from __future__ import annotations

import datetime
from typing import Any

from .constants import FORMAT_HYBRID, FORMAT_OFFLINE, FORMAT_ONLINE


def demo_tournaments(now: datetime.datetime | None = None) -> list[dict[str, Any]]:
    """Return demo tournaments with dates relative to ``now``.

    One tournament is already finished and carries results, the other two are
    still open for registration.
    """
    now = now or datetime.datetime.now(datetime.timezone.utc)
    day = datetime.timedelta(days=1)
    return [
        {
            "id": "demo-autumn-cup",
            "name": "Autumn Mathematics Cup",
            "description": "Individual olympiad for grades 5-11.",
            "date": now + 30 * day,
            "registration_deadline": now + 20 * day,
            "format": FORMAT_OFFLINE,
            "max_participants": 120,
            "is_active": True,
            "top_participants": [],
        },
        {
            "id": "demo-online-sprint",
            "name": "Online Problem Sprint",
            "description": "Two hours, ten problems, solved from home.",
            "date": now + 14 * day,
            "registration_deadline": now + 10 * day,
            "format": FORMAT_ONLINE,
            "max_participants": None,
            "is_active": True,
            "top_participants": [],
        },
        {
            "id": "demo-spring-open",
            "name": "Spring Open Olympiad",
            "description": "Team rounds on site with an online qualifier.",
            "date": now - 60 * day,
            "registration_deadline": now - 75 * day,
            "format": FORMAT_HYBRID,
            "max_participants": 200,
            "is_active": True,
            "top_participants": [
                {"name": "Anna Petrova", "place": 1, "score": 98},
                {"name": "Ivan Sidorov", "place": 2, "score": 91},
                {"name": "Maria Volkova", "place": 3, "score": 87},
            ],
        },
    ]


def open_demo_tournaments(now: datetime.datetime | None = None) -> list[dict[str, Any]]:
    """Demo tournaments whose registration deadline has not passed yet."""
    now = now or datetime.datetime.now(datetime.timezone.utc)
    tournaments = [t for t in demo_tournaments(now) if t["registration_deadline"] > now]
    return sorted(tournaments, key=lambda t: t["date"])
