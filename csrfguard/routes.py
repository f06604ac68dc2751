from flask import Blueprint, jsonify

from csrfguard.security.csrf import EXTENSION_KEY, generate_csrf

# Blueprint for CSRF token endpoints
csrf_bp = Blueprint("csrf", __name__)


@csrf_bp.route("/token", methods=["GET"])
def csrf_token():
    """Mint a fresh masked token for clients that do not render forms."""
    from flask import current_app

    settings = current_app.extensions[EXTENSION_KEY].settings
    return jsonify(
        {
            "success": True,
            "token": generate_csrf(),
            "header_name": settings.header_name,
            "field_name": settings.field_name,
        }
    ), 200
