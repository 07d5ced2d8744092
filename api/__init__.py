from flask import Blueprint, Flask, current_app

from api.envelope import PageSizeError
from api.responses import bad_request, error, internal_error


def create_api_bp() -> Blueprint:
    api_bp = Blueprint("api", __name__, url_prefix="/api/v1")

    from api.health import health_bp

    api_bp.register_blueprint(health_bp)

    return api_bp


def register_error_handlers(app: Flask) -> None:
    """Render framework-level failures as standard envelopes."""

    @app.errorhandler(PageSizeError)
    def api_bad_page_size(e):
        return bad_request(str(e))

    # app-level so unmatched routes are covered too
    @app.errorhandler(404)
    def api_not_found(e):
        return error(404, 404, "NOT_FOUND", "Not found")

    @app.errorhandler(405)
    def api_method_not_allowed(e):
        return error(405, 405, "METHOD_NOT_ALLOWED", "Method not allowed")

    @app.errorhandler(500)
    def api_server_error(e):
        original = getattr(e, "original_exception", None)
        current_app.logger.error("Unhandled error: %r", original or e)
        return internal_error("Internal server error")
