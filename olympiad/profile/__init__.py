"""The profile blueprint."""

from flask import Blueprint

bp = Blueprint("profile", __name__, url_prefix="/profile")

from . import routes  # noqa: E402
from .models import Profile, UserSession  # noqa: E402
from .services import ProfileService  # noqa: E402

__all__ = ["Profile", "ProfileService", "UserSession", "routes"]
