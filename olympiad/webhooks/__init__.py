"""The webhooks blueprint: relays registration events to n8n."""

from flask import Blueprint

bp = Blueprint("webhooks", __name__, url_prefix="/api/webhooks")

from . import routes  # noqa: E402
from .services import WebhookService  # noqa: E402

__all__ = ["WebhookService", "routes"]
