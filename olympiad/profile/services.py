"""Service layer for participant profiles and tournament registrations."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any, Mapping, cast

from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists

from olympiad.constants import (
    PROFILE_REQUIRED_FIELDS,
    PROFILES_COLLECTION,
    REGISTRATIONS_COLLECTION,
)
from olympiad.errors import DuplicateResourceError, NotFoundError, ValidationError
from olympiad.tournament import TournamentService
from olympiad.webhooks.services import utc_timestamp

from .models import Profile

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from .forms import ProfileForm

PROFILE_TEXT_FIELDS = (
    "last_name",
    "first_name",
    "middle_name",
    "city",
    "school",
    "parent_name",
    "teacher_name",
    "tutor_name",
    "phone",
    "email",
    "telegram_username",
)


def registration_id(tournament_id: str, user_id: str) -> str:
    """Registrations are keyed by tournament and user so each pair exists once."""
    return f"{tournament_id}_{user_id}"


class ProfileService:
    """Handles business logic and data access for participant profiles."""

    @staticmethod
    def get_profile(db: Client, user_id: str) -> Profile:
        """Fetch a profile, returning an empty one if none has been saved yet."""
        doc = db.collection(PROFILES_COLLECTION).document(user_id).get()
        if not doc.exists:
            return cast(Profile, {})
        data = doc.to_dict() or {}
        data["id"] = doc.id
        return cast(Profile, data)

    @staticmethod
    def save_profile(db: Client, user_id: str, data: Mapping[str, Any]) -> None:
        """Create or update the profile document of ``user_id``."""
        profile_ref = db.collection(PROFILES_COLLECTION).document(user_id)
        update_data = dict(data)
        update_data.pop("id", None)
        update_data["updated_at"] = firestore.SERVER_TIMESTAMP
        if profile_ref.get().exists:
            profile_ref.update(update_data)
        else:
            profile_ref.set(update_data)

    @staticmethod
    def profile_from_form(form: ProfileForm) -> dict[str, Any]:
        """Convert submitted form data into the stored profile shape."""
        data: dict[str, Any] = {}
        for field in PROFILE_TEXT_FIELDS:
            value = getattr(form, field).data
            data[field] = value.strip() if isinstance(value, str) else value
        birth_date = form.birth_date.data
        data["birth_date"] = birth_date.isoformat() if birth_date else None
        class_number = form.class_number.data
        data["class_number"] = int(class_number) if class_number else None
        return data

    @staticmethod
    def profile_to_form_data(profile: Mapping[str, Any]) -> dict[str, Any]:
        """Convert a stored profile into data accepted by ProfileForm."""
        data = {field: profile.get(field) for field in PROFILE_TEXT_FIELDS}
        birth_date = profile.get("birth_date")
        if isinstance(birth_date, str) and birth_date:
            try:
                birth_date = datetime.date.fromisoformat(birth_date[:10])
            except ValueError:
                birth_date = None
        data["birth_date"] = birth_date or None
        class_number = profile.get("class_number")
        data["class_number"] = str(class_number) if class_number else ""
        return data

    @staticmethod
    def is_profile_complete(profile: Mapping[str, Any]) -> bool:
        """Return True when every required profile field is filled in."""
        return all(profile.get(field) for field in PROFILE_REQUIRED_FIELDS)

    @staticmethod
    def full_name(profile: Mapping[str, Any]) -> str:
        """Participant name as "last first middle"."""
        return (
            f"{profile.get('last_name')} {profile.get('first_name')} "
            f"{profile.get('middle_name')}"
        )

    @staticmethod
    def get_registered_tournament_ids(db: Client, user_id: str) -> set[str]:
        """Ids of the tournaments ``user_id`` has registered for."""
        registrations = (
            db.collection(REGISTRATIONS_COLLECTION)
            .where(filter=firestore.FieldFilter("user_id", "==", user_id))
            .stream()
        )
        return {
            (doc.to_dict() or {}).get("tournament_id", "") for doc in registrations
        }

    @staticmethod
    def build_registration_event(
        user_id: str,
        profile: Mapping[str, Any],
        tournament_id: str,
        now: datetime.datetime | None = None,
    ) -> dict[str, Any]:
        """Payload relayed to the automation platform after a registration."""
        return {
            "user_id": user_id,
            "full_name": ProfileService.full_name(profile),
            "school": profile.get("school"),
            "class": profile.get("class_number"),
            "tournament_id": tournament_id,
            "registration_date": utc_timestamp(now),
        }

    @staticmethod
    def register_for_tournament(
        db: Client, user_id: str, profile: Mapping[str, Any], tournament_id: str
    ) -> dict[str, Any]:
        """Register ``user_id`` for a tournament.

        Returns:
            The registration event to relay to the automation platform.

        Raises:
            ValidationError: If the profile is missing required fields.
            NotFoundError: If the tournament does not exist.
            DuplicateResourceError: If the user is already registered.
        """
        if not ProfileService.is_profile_complete(profile):
            raise ValidationError(
                "Fill in the required profile fields before registering."
            )

        if TournamentService.get_tournament(db, tournament_id) is None:
            raise NotFoundError("Tournament not found.")

        registration_ref = db.collection(REGISTRATIONS_COLLECTION).document(
            registration_id(tournament_id, user_id)
        )
        try:
            # Fails atomically when the pair is already registered
            registration_ref.create(
                {
                    "user_id": user_id,
                    "tournament_id": tournament_id,
                    "created_at": firestore.SERVER_TIMESTAMP,
                }
            )
        except AlreadyExists as e:
            raise DuplicateResourceError(
                "You are already registered for this tournament."
            ) from e
        return ProfileService.build_registration_event(user_id, profile, tournament_id)
