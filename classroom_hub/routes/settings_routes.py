"""
Settings and status API routes.
Tenant settings are read from disk on every request.
"""
import logging

from flask import Blueprint, current_app, request, jsonify

logger = logging.getLogger(__name__)

settings_bp = Blueprint('settings', __name__)


@settings_bp.route('/api/settings', methods=['GET'])
def load_settings():
    """Load tenant settings (Ontario defaults when nothing is saved)."""
    provider = current_app.extensions['classroom_hub']['settings']
    return jsonify(provider.load())


@settings_bp.route('/api/settings', methods=['PUT'])
def save_settings():
    """Merge and save tenant settings."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Settings must be a JSON object"}), 400

    provider = current_app.extensions['classroom_hub']['settings']
    try:
        return jsonify(provider.save(data))
    except OSError as e:
        logger.error("Could not save settings: %s", e)
        return jsonify({"error": str(e)}), 500


@settings_bp.route('/api/status')
def get_status():
    """Health check with the detected storage shape."""
    state = current_app.extensions['classroom_hub']
    ai = state['comment_bank'].ai
    return jsonify({
        "status": "ok",
        "storage": state['comment_bank'].store.describe(),
        "ai": {
            "model": ai.model if ai else None,
            "configured": bool(ai and ai.available),
        },
    })
