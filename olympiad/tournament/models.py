"""Data models for tournaments."""

from __future__ import annotations

from typing import Any, TypedDict

from olympiad.core.types import FirestoreDocument


class TopParticipant(TypedDict):
    """A podium entry shown on a tournament card."""

    name: str
    place: int
    score: float | int | None


class Tournament(FirestoreDocument, total=False):
    """A tournament document in Firestore."""

    name: str
    description: str
    date: Any
    registration_deadline: Any
    format: str
    max_participants: int | None
    is_active: bool

    # UI and calculated fields
    top_participants: list[TopParticipant]


class TournamentResult(FirestoreDocument, total=False):
    """A tournament result document in Firestore."""

    tournament_id: str
    profile_id: str
    place: int
    score: float | int
