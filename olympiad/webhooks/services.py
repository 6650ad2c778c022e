"""Service for relaying tournament registrations to the automation platform."""

from __future__ import annotations

import datetime
from typing import Any, Mapping

import requests
from flask import current_app

from olympiad.constants import WEBHOOK_REQUIRED_FIELDS
from olympiad.errors import ValidationError, WebhookError


def utc_timestamp(now: datetime.datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = now or datetime.datetime.now(datetime.timezone.utc)
    now = now.astimezone(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WebhookService:
    """Validates registration payloads and forwards them to n8n."""

    @staticmethod
    def validate_payload(payload: Mapping[str, Any]) -> None:
        """Raise ValidationError naming the first missing required field.

        Empty strings, zero and null count as missing.
        """
        for field in WEBHOOK_REQUIRED_FIELDS:
            if not payload.get(field):
                raise ValidationError(f"Missing required field: {field}")

    @staticmethod
    def build_event(
        payload: Mapping[str, Any], now: datetime.datetime | None = None
    ) -> dict[str, Any]:
        """Copy the required fields and stamp the event with the server time."""
        event = {field: payload[field] for field in WEBHOOK_REQUIRED_FIELDS}
        event["timestamp"] = utc_timestamp(now)
        return event

    @staticmethod
    def send_registration_event(payload: Mapping[str, Any]) -> dict[str, Any]:
        """Validate ``payload`` and POST it to the configured n8n webhook.

        Returns:
            The event that was delivered.

        Raises:
            ValidationError: If a required field is missing.
            WebhookError: If the request fails or n8n answers with an error status.
        """
        WebhookService.validate_payload(payload)
        event = WebhookService.build_event(payload)

        config = current_app.config
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.get('N8N_WEBHOOK_TOKEN') or ''}",
        }
        try:
            response = requests.post(
                config["N8N_WEBHOOK_URL"],
                json=event,
                headers=headers,
                timeout=config.get("WEBHOOK_TIMEOUT", 10),
            )
        except requests.RequestException as e:
            raise WebhookError(str(e)) from e
        except Exception as e:
            # e.g. a token that cannot be encoded into the header
            current_app.logger.exception("Unexpected error sending webhook")
            raise WebhookError(str(e)) from e

        if not response.ok:
            raise WebhookError(f"n8n webhook failed: {response.reason}")

        current_app.logger.info(
            "Tournament registration webhook sent successfully: "
            f"user_id={event['user_id']} tournament_id={event['tournament_id']} "
            f"timestamp={utc_timestamp()}"
        )
        return event
