"""Routes for the profile blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import (
    current_app,
    flash,
    g,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from olympiad.auth.decorators import login_required
from olympiad.constants import (
    DEMO_PROFILE_SESSION_KEY,
    DEMO_REGISTRATIONS_SESSION_KEY,
)
from olympiad.demo import open_demo_tournaments
from olympiad.errors import AppError, WebhookError
from olympiad.tournament import TournamentService
from olympiad.webhooks.services import WebhookService

from . import bp
from .forms import ProfileForm, TournamentRegistrationForm
from .services import ProfileService


def _load_page_data(db: Any, user_id: str) -> tuple[dict, list, set]:
    """Load the profile, open tournaments and existing registrations."""
    profile: dict = {}
    tournaments: list = []
    registered_ids: set = set()
    try:
        profile = dict(ProfileService.get_profile(db, user_id))
    except Exception as e:
        current_app.logger.error(f"Error loading profile: {e}")
    try:
        tournaments = TournamentService.get_open_tournaments(db)
        registered_ids = ProfileService.get_registered_tournament_ids(db, user_id)
    except Exception as e:
        current_app.logger.error(f"Error loading tournaments: {e}")
    return profile, tournaments, registered_ids


@bp.route("", methods=["GET", "POST"])
@login_required
def view_profile() -> Any:
    """Show the profile form and the tournaments open for registration.

    On POST, it saves the submitted profile.
    """
    user_id = g.user["uid"]
    demo = current_app.config["DEMO_MODE"]
    db = None if demo else firestore.client()

    if demo:
        profile = session.get(DEMO_PROFILE_SESSION_KEY, {})
        tournaments = open_demo_tournaments()
        registered_ids = set(session.get(DEMO_REGISTRATIONS_SESSION_KEY, []))
    else:
        profile, tournaments, registered_ids = _load_page_data(db, user_id)

    if request.method == "POST":
        form = ProfileForm()
    else:
        form = ProfileForm(data=ProfileService.profile_to_form_data(profile))

    if form.validate_on_submit():
        if demo:
            session[DEMO_PROFILE_SESSION_KEY] = ProfileService.profile_from_form(form)
            flash("Profile saved! (demo mode)", "success")
            return redirect(url_for(".view_profile"))
        try:
            ProfileService.save_profile(
                db, user_id, ProfileService.profile_from_form(form)
            )
            flash("Profile saved!", "success")
        except Exception as e:
            current_app.logger.error(f"Error saving profile: {e}")
            flash("Error saving profile", "danger")
        return redirect(url_for(".view_profile"))

    return render_template(
        "profile.html",
        form=form,
        profile=profile,
        profile_complete=ProfileService.is_profile_complete(profile),
        tournaments=tournaments,
        registered_ids=registered_ids,
        register_form=TournamentRegistrationForm(),
    )


@bp.route("/tournaments/<string:tournament_id>/register", methods=["POST"])
@login_required
def register_for_tournament(tournament_id: str) -> Any:
    """Register the current user for a tournament and notify n8n."""
    form = TournamentRegistrationForm()
    if not form.validate_on_submit():
        flash("Your session may have expired. Please try again.", "warning")
        return redirect(url_for(".view_profile"))

    if current_app.config["DEMO_MODE"]:
        registered = session.get(DEMO_REGISTRATIONS_SESSION_KEY, [])
        if tournament_id not in registered:
            session[DEMO_REGISTRATIONS_SESSION_KEY] = [*registered, tournament_id]
        flash("Registration successful! (demo mode)", "success")
        return redirect(url_for(".view_profile"))

    user_id = g.user["uid"]
    db = firestore.client()
    try:
        profile = ProfileService.get_profile(db, user_id)
        event = ProfileService.register_for_tournament(
            db, user_id, profile, tournament_id
        )
    except AppError as e:
        current_app.logger.warning(f"Registration rejected for {user_id}: {e.message}")
        flash(e.message, "danger")
        return redirect(url_for(".view_profile"))
    except Exception as e:
        current_app.logger.error(f"Registration error: {e}")
        flash("Tournament registration failed", "danger")
        return redirect(url_for(".view_profile"))

    current_app.logger.info(f"User {user_id} registered for tournament {tournament_id}")
    try:
        WebhookService.send_registration_event(event)
    except WebhookError as e:
        current_app.logger.error(f"Registration webhook failed: {e.details}")
    except AppError as e:
        current_app.logger.error(f"Registration webhook rejected: {e.message}")

    flash("You have successfully registered for the tournament!", "success")
    return redirect(url_for(".view_profile"))
