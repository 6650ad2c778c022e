"""Routes for the webhooks blueprint."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request

from olympiad.constants import WEBHOOK_ENDPOINT, WEBHOOK_REQUIRED_FIELDS
from olympiad.core.types import APIResponse

from . import bp
from .services import WebhookService


@bp.route("/tournament-registration", methods=["POST"])
def tournament_registration() -> Any:
    """Validate a registration event and forward it to n8n.

    ValidationError and WebhookError are answered by the app-wide JSON
    error handlers.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}

    WebhookService.send_registration_event(payload)

    body: APIResponse = {"success": True, "message": "Webhook sent successfully"}
    return jsonify(body)


@bp.route("/tournament-registration", methods=["GET"])
def tournament_registration_docs() -> Any:
    """Describe the webhook endpoint."""
    return jsonify(
        {
            "endpoint": WEBHOOK_ENDPOINT,
            "method": "POST",
            "description": "Forwards tournament registration data to n8n",
            "required_fields": list(WEBHOOK_REQUIRED_FIELDS),
            "example_payload": {
                "user_id": "uuid-string",
                "full_name": "Ivanov Ivan Ivanovich",
                "school": "School No. 1",
                "class": 10,
                "tournament_id": "uuid-string",
                "registration_date": "2024-01-15T10:30:00Z",
            },
            "environment_variables": [
                "N8N_WEBHOOK_URL - n8n webhook URL",
                "N8N_WEBHOOK_TOKEN - authorization token (optional)",
            ],
        }
    )
