from flask import Blueprint, current_app, jsonify, request

from audit.logger import logger
from infrastructure.redis_client import redis_client
from security.auth import require_api_key
from services.killswitch import DEFAULT_KILLSWITCH_KEY, Killswitch, RedisFlagStore

# Administrative surface for the payment killswitch.
killswitch_bp = Blueprint("killswitch", __name__)


def _killswitch():
    return Killswitch(
        RedisFlagStore(redis_client),
        key=current_app.config.get("KILLSWITCH_KEY", DEFAULT_KILLSWITCH_KEY),
    )


@killswitch_bp.route("/admin/killswitch", methods=["GET"])
@require_api_key
def get_killswitch():
    try:
        killswitch = _killswitch()
    except Exception:
        logger.exception("Failed to read killswitch state")
        return jsonify({"error": "Service unavailable"}), 503

    return jsonify({"enabled": killswitch.enabled})


@killswitch_bp.route("/admin/killswitch", methods=["POST"])
@require_api_key
def toggle_killswitch():
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or not isinstance(data.get("enabled"), bool):
        return jsonify({"error": "Field 'enabled' must be a boolean"}), 400

    try:
        killswitch = _killswitch()
        killswitch.toggle(data["enabled"])
    except Exception:
        logger.exception("Failed to persist killswitch state")
        return jsonify({"error": "Service unavailable"}), 503

    return jsonify({"enabled": killswitch.enabled})
