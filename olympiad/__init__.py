"""Initialize the Flask app and its extensions."""

import os

import firebase_admin
from firebase_admin import credentials
from flask import Flask, g, session
from werkzeug.middleware.proxy_fix import ProxyFix

from .extensions import csrf

TRUTHY = ["true", "1", "t", "yes"]


def _init_firebase(app):
    """Initialize the Firebase Admin SDK.

    Returns True when credentials were found and the SDK is ready.
    """
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        import json

        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            import json

            try:
                with open(cred_path, "r") as f:
                    project_id = json.load(f).get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    # If both methods fail, fallback to default credentials
    if not cred:
        try:
            cred = credentials.ApplicationDefault()
            cred.get_credential()
            project_id = os.environ.get("FIREBASE_PROJECT_ID")
        except Exception as e:
            app.logger.error(
                f"Could not find any valid credentials (env, file, or default): {e}"
            )
            return False

    if not firebase_admin._apps:
        try:
            options = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, options)
        except ValueError:
            # This can happen if the app is already initialized, which is fine.
            app.logger.info("Firebase app already initialized.")
    return True


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(
        __name__,
        instance_relative_config=True,
        static_folder="static",
        static_url_path="/static",
    )

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        N8N_WEBHOOK_URL=os.environ.get("N8N_WEBHOOK_URL")
        or "https://your-n8n-instance.com/webhook/tournament-registration",
        N8N_WEBHOOK_TOKEN=os.environ.get("N8N_WEBHOOK_TOKEN") or "",
        WEBHOOK_TIMEOUT=float(os.environ.get("WEBHOOK_TIMEOUT") or 10),
        FIREBASE_API_KEY=os.environ.get("FIREBASE_API_KEY"),
        FIREBASE_AUTH_DOMAIN=os.environ.get("FIREBASE_AUTH_DOMAIN"),
        FIREBASE_PROJECT_ID=os.environ.get("FIREBASE_PROJECT_ID"),
        FIREBASE_APP_ID=os.environ.get("FIREBASE_APP_ID"),
        DEMO_MODE=(os.environ.get("DEMO_MODE") or "false").lower() in TRUTHY,
        DEMO_USER_EMAIL=os.environ.get("DEMO_USER_EMAIL") or "demo@example.com",
        DEMO_USER_PASSWORD=os.environ.get("DEMO_USER_PASSWORD") or "demo123456",
    )

    if test_config:
        app.config.update(test_config)

    # Initialize Firebase Admin SDK only if not in testing or demo mode
    if not app.config.get("TESTING") and not app.config["DEMO_MODE"]:
        if not _init_firebase(app):
            app.logger.warning(
                "Firebase is not configured, running in demo mode. "
                "Data will not be saved."
            )
            app.config["DEMO_MODE"] = True

    # Initialize extensions
    csrf.init_app(app)

    # Register blueprints
    from . import main as main_bp

    app.register_blueprint(main_bp.bp)

    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import profile as profile_bp

    app.register_blueprint(profile_bp.bp)

    from . import webhooks as webhooks_bp

    csrf.exempt(webhooks_bp.bp)
    app.register_blueprint(webhooks_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.before_request
    def load_logged_in_user():
        """If a user_id is in the session, expose it to views as g.user."""
        from .profile.models import UserSession

        user_id = session.get("user_id")
        g.user = None
        if user_id is None:
            return
        g.user = UserSession(uid=user_id, email=session.get("email"))

    @app.context_processor
    def inject_globals():
        """Injects the application version and demo flag into templates."""
        return dict(
            app_version=os.environ.get("APP_VERSION", "dev"),
            is_demo=app.config["DEMO_MODE"],
        )

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
