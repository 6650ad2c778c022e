"""Core data types for the olympiad application."""

from typing import Any, TypedDict


class _FirestoreDocumentBase(TypedDict):
    id: str


class FirestoreDocument(_FirestoreDocumentBase, total=False):
    """Generic Firestore document structure."""

    created_at: Any
    updated_at: Any


class APIResponse(TypedDict, total=False):
    """JSON body returned by the webhook relay."""

    success: bool
    message: str
    error: str
    details: str
