from flask import (
    Blueprint,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_wtf.csrf import CSRFError
from google.api_core.exceptions import GoogleAPICallError

from .core.types import APIResponse
from .errors import (
    AppError,
    DuplicateResourceError,
    NotFoundError,
    ValidationError,
    WebhookError,
)

error_handlers_bp = Blueprint("error_handlers", __name__)


def _wants_json():
    """API routes answer with JSON bodies instead of HTML pages."""
    return request.path.startswith("/api/")


def _render_error(template, message, status_code):
    if _wants_json():
        return jsonify({"error": message}), status_code
    return render_template(template, error=message), status_code


@error_handlers_bp.app_errorhandler(ValidationError)
def handle_validation_error(error):
    """Handles validation errors by rendering a generic error page."""
    current_app.logger.warning(f"Validation Error: {error.message}")
    return _render_error("error.html", error.message, error.status_code)


@error_handlers_bp.app_errorhandler(DuplicateResourceError)
def handle_duplicate_resource_error(error):
    """Handles duplicate resource errors."""
    current_app.logger.warning(f"Duplicate Resource Error: {error.message}")
    return _render_error("error.html", error.message, error.status_code)


@error_handlers_bp.app_errorhandler(NotFoundError)
def handle_not_found_error(error):
    """Handles not found errors."""
    current_app.logger.warning(f"Not Found Error: {error.message}")
    return _render_error("404.html", error.message, error.status_code)


@error_handlers_bp.app_errorhandler(WebhookError)
def handle_webhook_error(error):
    """Handles failed deliveries to the n8n webhook."""
    current_app.logger.error(f"Webhook error: {error.details}")
    if _wants_json():
        body: APIResponse = {"error": error.message, "details": error.details}
        return jsonify(body), error.status_code
    return render_template("error.html", error=error.message), error.status_code


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles generic application errors."""
    current_app.logger.error(f"Application Error: {error.message}")
    return _render_error("error.html", error.message, error.status_code)


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return _render_error("404.html", "Not found.", 404)


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return _render_error("500.html", "Internal server error.", 500)


@error_handlers_bp.app_errorhandler(GoogleAPICallError)
def handle_db_error(e):
    """Handles Firestore errors."""
    current_app.logger.error(f"Database Error: {e}")
    # Avoid exposing raw database error details to the user
    return _render_error(
        "error.html", "A database error occurred. Please try again later.", 500
    )


@error_handlers_bp.app_errorhandler(CSRFError)
def handle_csrf_error(e):
    """
    Handles CSRF errors, which usually indicate a session timeout or invalid form submission.
    """
    current_app.logger.warning(f"CSRF Error: {e.description}")
    flash("Your session may have expired. Please try your action again.", "warning")
    # Redirect to the previous page or a default page if the referrer is not available
    return redirect(request.referrer or url_for("main.index"))
