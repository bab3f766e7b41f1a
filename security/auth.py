from flask import request, jsonify, current_app
from functools import wraps

from audit.logger import logger


def require_api_key(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        expected_key = current_app.config.get("EXTERNAL_API_KEY")

        if not expected_key:
            logger.error("EXTERNAL_API_KEY not configured; admin endpoint refused")
            return jsonify({"error": "Admin access not configured"}), 503

        auth_header = request.headers.get("Authorization") or request.headers.get("x-api-key")

        if not auth_header:
            return jsonify({"error": "API key missing"}), 401

        # Aceita padrão: Authorization: Bearer TOKEN
        if auth_header.startswith("Bearer "):
            api_key = auth_header.replace("Bearer ", "").strip()
        else:
            api_key = auth_header.strip()

        if api_key != expected_key:
            logger.warning(f"Invalid API key on admin endpoint | path={request.path}")
            return jsonify({"error": "Invalid API key"}), 403

        return f(*args, **kwargs)
    return decorated
