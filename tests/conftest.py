"""Common utilities for tests."""

import unittest
from typing import Any, Optional
from unittest.mock import MagicMock, patch

from google.api_core.exceptions import AlreadyExists
from mockfirestore import CollectionReference, MockFirestore, Query
from mockfirestore.document import DocumentReference

from olympiad import create_app

MOCK_USER_ID = "user1"
MOCK_USER_EMAIL = "user1@example.com"

# Modules that hold their own reference to firebase_admin.firestore
FIRESTORE_MODULES = (
    "olympiad.main.routes",
    "olympiad.profile.routes",
    "olympiad.profile.services",
    "olympiad.tournament.services",
)


class MockFieldFilter:
    def __init__(self, field_path: str, op_string: str, value: Any) -> None:
        self.field_path = field_path
        self.op_string = op_string
        self.value = value


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter, create and equality."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    def query_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = query_where

    def doc_ref_eq(self: Any, other: Any) -> bool:
        if not isinstance(other, DocumentReference):
            return False
        return self._path == other._path

    def doc_ref_create(self: Any, data: dict) -> None:
        if self.get().exists:
            raise AlreadyExists(f"Document already exists: {'/'.join(self._path)}")
        self.set(data)

    if not hasattr(DocumentReference, "create"):
        DocumentReference.create = doc_ref_create

    if not hasattr(DocumentReference, "_orig_eq"):
        DocumentReference._orig_eq = DocumentReference.__eq__
        DocumentReference.__eq__ = doc_ref_eq
        DocumentReference.__hash__ = lambda self: hash(tuple(self._path))


def make_firestore_module(db: MockFirestore) -> MagicMock:
    """Build a stand-in for firebase_admin.firestore backed by ``db``."""
    module = MagicMock()
    module.client.return_value = db
    module.FieldFilter = MockFieldFilter
    module.Query.ASCENDING = "ASCENDING"
    module.Query.DESCENDING = "DESCENDING"
    module.SERVER_TIMESTAMP = "2024-01-01T00:00:00Z"
    return module


patch_mockfirestore()


class FirestoreTestCase(unittest.TestCase):
    """Test case with a Flask app wired to an in-memory Firestore."""

    app_config: dict[str, Any] = {}

    def setUp(self) -> None:
        """Set up a test client and the mock Firestore environment."""
        self.mock_db = MockFirestore()
        self.mock_firestore_module = make_firestore_module(self.mock_db)

        for target in FIRESTORE_MODULES:
            patcher = patch(f"{target}.firestore", new=self.mock_firestore_module)
            patcher.start()
            self.addCleanup(patcher.stop)

        self.app = create_app(
            {
                "TESTING": True,
                "WTF_CSRF_ENABLED": False,
                "SERVER_NAME": "localhost",
                **self.app_config,
            }
        )
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()
        self.addCleanup(self.app_context.pop)

    def set_session_user(
        self, user_id: str = MOCK_USER_ID, email: str = MOCK_USER_EMAIL
    ) -> None:
        """Set a logged-in user in the session."""
        with self.client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["email"] = email
