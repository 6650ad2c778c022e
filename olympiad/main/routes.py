"""Routes for the main blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, render_template

from olympiad.demo import demo_tournaments
from olympiad.tournament import TournamentService
from olympiad.tournament.utils import format_date, format_label

from . import bp


@bp.app_template_filter("format_label")
def format_label_filter(value: str | None) -> str:
    return format_label(value)


@bp.app_template_filter("format_date")
def format_date_filter(value: Any) -> str:
    return format_date(value)


@bp.route("/")
def index() -> Any:
    """Render the landing page with the most recent tournaments."""
    if current_app.config["DEMO_MODE"]:
        tournaments = demo_tournaments()
    else:
        try:
            db = firestore.client()
            tournaments = TournamentService.get_recent_tournaments(db)
        except Exception as e:
            current_app.logger.error(f"Error fetching tournaments: {e}")
            # Fall back to demo data rather than an empty landing page
            tournaments = demo_tournaments()

    return render_template("index.html", tournaments=tournaments)


@bp.route("/tournaments")
def list_tournaments() -> Any:
    """List all active tournaments."""
    if current_app.config["DEMO_MODE"]:
        tournaments = demo_tournaments()
    else:
        try:
            db = firestore.client()
            tournaments = TournamentService.get_active_tournaments(db)
        except Exception as e:
            current_app.logger.error(f"Error fetching tournaments: {e}")
            tournaments = []

    return render_template("tournaments.html", tournaments=tournaments)
