"""Data models for the profile blueprint."""

from __future__ import annotations

from collections import UserDict

from flask_login import UserMixin

from olympiad.constants import DEMO_USER_ID
from olympiad.core.types import FirestoreDocument


class Profile(FirestoreDocument, total=False):
    """A participant profile document in Firestore."""

    last_name: str
    first_name: str
    middle_name: str
    birth_date: str
    city: str
    school: str
    class_number: int
    parent_name: str
    teacher_name: str
    tutor_name: str
    phone: str
    email: str
    telegram_username: str


class UserSession(UserDict, UserMixin):
    """A wrapper class for the signed-in user that provides Flask-Login properties."""

    def get_id(self) -> str:
        """Return the user ID."""
        return str(self.get("uid", ""))

    @property
    def is_demo(self) -> bool:
        """Return True for the built-in demo user."""
        return self.get("uid") == DEMO_USER_ID
