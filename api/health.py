from flask import Blueprint, current_app

from api.responses import success

health_bp = Blueprint("api_health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Liveness probe for monitoring/load balancers."""
    return success({"status": "ok", "env": current_app.config.get("ENV_NAME")})
