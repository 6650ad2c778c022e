import json

from firebase_admin import auth
from flask import (
    Response,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from olympiad.constants import DEMO_USER_ID

from . import bp
from .forms import DemoLoginForm


@bp.route("/login", methods=["GET"])
def login():
    """
    Renders the login page.
    The actual sign-in is handled by the Firebase client-side SDK, which posts
    the resulting ID token to session_login.
    """
    if session.get("user_id"):
        return redirect(url_for("profile.view_profile"))
    form = DemoLoginForm()
    return render_template("login.html", form=form)


@bp.route("/session_login", methods=["POST"])
def session_login():
    """
    This endpoint is called from the client-side after a successful Firebase login.
    It receives the ID token, verifies it, and creates a server-side session.
    """
    payload = request.get_json(silent=True) or {}
    id_token = payload.get("idToken")
    if not id_token:
        return jsonify({"status": "error", "message": "Missing ID token."}), 400
    try:
        decoded_token = auth.verify_id_token(id_token)
    except Exception as e:
        current_app.logger.error(f"Error during session login: {e}")
        return jsonify({"status": "error", "message": "Invalid token."}), 401

    session.clear()
    session["user_id"] = decoded_token["uid"]
    session["email"] = decoded_token.get("email")
    return jsonify({"status": "success"})


@bp.route("/demo_login", methods=["POST"])
def demo_login():
    """Sign in with the shared demo account, creating it on first use."""
    form = DemoLoginForm()
    if not form.validate_on_submit():
        return redirect(url_for(".login"))

    email = current_app.config["DEMO_USER_EMAIL"]
    if current_app.config["DEMO_MODE"]:
        session.clear()
        session["user_id"] = DEMO_USER_ID
        session["email"] = email
        return redirect(url_for("profile.view_profile"))

    try:
        try:
            user_record = auth.get_user_by_email(email)
        except auth.UserNotFoundError:
            user_record = auth.create_user(
                email=email, password=current_app.config["DEMO_USER_PASSWORD"]
            )
    except Exception as e:
        current_app.logger.error(f"Error during demo login: {e}")
        flash("Sign-in failed. Please try again later.", "danger")
        return redirect(url_for(".login"))

    session.clear()
    session["user_id"] = user_record.uid
    session["email"] = email
    return redirect(url_for("profile.view_profile"))


@bp.route("/logout")
def logout():
    """
    The actual sign-out is handled by the Firebase client-side SDK.
    This route clears the server-side session.
    """
    session.clear()
    flash("You have been logged out.", "success")
    return redirect(url_for("main.index"))


@bp.route("/firebase-config.js")
def firebase_config():
    api_key = current_app.config.get("FIREBASE_API_KEY")
    if not api_key:
        current_app.logger.error(
            "FIREBASE_API_KEY is not set. Frontend will not be able to connect to Firebase."
        )
        error_script = 'console.error("Firebase API key is missing. Please set the FIREBASE_API_KEY environment variable.");'
        return Response(error_script, mimetype="application/javascript")

    project_id = current_app.config.get("FIREBASE_PROJECT_ID")
    config = {
        "apiKey": api_key,
        "authDomain": current_app.config.get("FIREBASE_AUTH_DOMAIN")
        or f"{project_id}.firebaseapp.com",
        "projectId": project_id,
        "appId": current_app.config.get("FIREBASE_APP_ID"),
    }
    js_config = f"const firebaseConfig = {json.dumps(config)};"
    return Response(js_config, mimetype="application/javascript")
