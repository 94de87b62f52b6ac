# terminalscreener/routes/mentions.py
from flask import Blueprint, current_app, jsonify, request

from ..services.mentions import utcnow

mentions_bp = Blueprint("mentions", __name__)


def _service():
    return current_app.extensions["mentions_service"]


@mentions_bp.route("/api/x-mentions", methods=["GET"])
def x_mentions():
    """
    Mention counts for up to 8 symbols, e.g. /api/x-mentions?symbols=BTC,ETH
    """
    service = _service()
    symbols = request.args.get("symbols", service.settings.DEFAULT_SYMBOLS)
    body, status = service.get_mentions(symbols)
    return jsonify(body), status


@mentions_bp.route("/api/reset-rate-limit", methods=["POST"])
def reset_rate_limit():
    now = utcnow()
    state = _service().reset(now)
    return jsonify({
        "success": True,
        "message": "Rate limit and cache cleared",
        **state,
        "timestamp": now.isoformat(),
    })
