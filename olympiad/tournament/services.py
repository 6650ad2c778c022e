"""Service layer for tournament queries."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from olympiad.constants import (
    PROFILES_COLLECTION,
    RECENT_TOURNAMENTS_LIMIT,
    RESULTS_COLLECTION,
    TOP_PARTICIPANTS_LIMIT,
    TOURNAMENTS_COLLECTION,
)

from .models import TopParticipant, Tournament, TournamentResult

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


def _to_tournament(doc: DocumentSnapshot) -> Tournament:
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return cast(Tournament, data)


class TournamentService:
    """Handles data access for tournaments and their results."""

    @staticmethod
    def get_tournament(db: Client, tournament_id: str) -> Tournament | None:
        """Fetch a single tournament, or None if it does not exist."""
        doc = db.collection(TOURNAMENTS_COLLECTION).document(tournament_id).get()
        if not doc.exists:
            return None
        return _to_tournament(doc)

    @staticmethod
    def get_active_tournaments(
        db: Client, limit: int | None = None
    ) -> list[Tournament]:
        """Active tournaments, most recent first."""
        query = (
            db.collection(TOURNAMENTS_COLLECTION)
            .where(filter=firestore.FieldFilter("is_active", "==", True))
            .order_by("date", direction=firestore.Query.DESCENDING)
        )
        if limit is not None:
            query = query.limit(limit)
        return [_to_tournament(doc) for doc in query.stream()]

    @staticmethod
    def get_recent_tournaments(
        db: Client, limit: int = RECENT_TOURNAMENTS_LIMIT
    ) -> list[Tournament]:
        """Most recent active tournaments with their podium attached."""
        tournaments = TournamentService.get_active_tournaments(db, limit=limit)
        for tournament in tournaments:
            tournament["top_participants"] = TournamentService.get_top_participants(
                db, tournament["id"]
            )
        return tournaments

    @staticmethod
    def get_open_tournaments(
        db: Client, now: datetime.datetime | None = None
    ) -> list[Tournament]:
        """Active tournaments still accepting registrations, soonest first."""
        now = now or datetime.datetime.now(datetime.timezone.utc)
        query = (
            db.collection(TOURNAMENTS_COLLECTION)
            .where(filter=firestore.FieldFilter("is_active", "==", True))
            .where(filter=firestore.FieldFilter("registration_deadline", ">=", now))
            .order_by("date", direction=firestore.Query.ASCENDING)
        )
        return [_to_tournament(doc) for doc in query.stream()]

    @staticmethod
    def get_top_participants(
        db: Client, tournament_id: str, limit: int = TOP_PARTICIPANTS_LIMIT
    ) -> list[TopParticipant]:
        """Return the best ``limit`` results of a tournament, ordered by place."""
        results_query = (
            db.collection(RESULTS_COLLECTION)
            .where(filter=firestore.FieldFilter("tournament_id", "==", tournament_id))
            .stream()
        )
        results = [cast(TournamentResult, doc.to_dict() or {}) for doc in results_query]
        # Results without a place go after every placed participant
        results.sort(key=lambda r: (r.get("place") is None, r.get("place") or 0))
        results = results[:limit]
        if not results:
            return []

        profile_refs = [
            db.collection(PROFILES_COLLECTION).document(r["profile_id"])
            for r in results
            if r.get("profile_id")
        ]
        profiles: dict[str, dict[str, Any]] = {}
        if profile_refs:
            for doc in db.get_all(profile_refs):
                if doc.exists:
                    profiles[doc.id] = doc.to_dict() or {}

        top = []
        for result in results:
            profile = profiles.get(result.get("profile_id", ""), {})
            top.append(
                TopParticipant(
                    name=f"{profile.get('first_name')} {profile.get('last_name')}",
                    place=result.get("place"),
                    score=result.get("score"),
                )
            )
        return top
