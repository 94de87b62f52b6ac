# terminalscreener/routes/coins.py
from flask import Blueprint, current_app, jsonify

from ..services.coins import catalog
from ..services.mentions import utcnow

coins_bp = Blueprint("coins", __name__)


@coins_bp.route("/api/coins", methods=["GET"])
def list_coins():
    """Known symbols grouped by category, plus how to query them."""
    settings = current_app.extensions["mentions_service"].settings
    return jsonify({
        "success": True,
        **catalog(),
        "usage": {
            "endpoint": "/api/x-mentions?symbols=BTC,ETH,PEPE",
            "maxSymbolsPerRequest": settings.MAX_SYMBOLS_PER_REQUEST,
            "defaultSymbols": settings.DEFAULT_SYMBOLS.split(","),
            "cacheMinutes": settings.CACHE_TTL_MINUTES,
            "note": "Any ticker works; unknown symbols are searched by cashtag only ($TICKER).",
            "symbolPattern": "1-15 letters or digits",
        },
        "timestamp": utcnow().isoformat(),
    })
