# terminalscreener/routes/health.py
from flask import Blueprint, abort, current_app, jsonify, request, send_from_directory
import logging, os, time, psutil

from ..services.mentions import utcnow

logger = logging.getLogger(__name__)
health_bp = Blueprint("health_bp", __name__)

start_time = time.time()

HEALTH_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# front-end asset types served from STATIC_DIR; anything else (.env, .py, ...) is a 404
STATIC_EXTENSIONS = {
    ".html", ".css", ".js", ".map", ".png", ".jpg", ".jpeg", ".gif",
    ".svg", ".ico", ".webp", ".woff", ".woff2", ".ttf",
}


def _settings():
    return current_app.extensions["mentions_service"].settings


@health_bp.route("/health", methods=HEALTH_METHODS)
def health():
    """Liveness probe; answers any method."""
    mem = psutil.virtual_memory()
    return jsonify({
        "status": "healthy",
        "timestamp": utcnow().isoformat(),
        "port": _settings().PORT,
        "message": "TerminalScreener API is running",
        "uptimeSec": round(time.time() - start_time, 2),
        "memory": {
            "used_mb": round(mem.used / (1024**2), 2),
            "available_mb": round(mem.available / (1024**2), 2),
            "percent": mem.percent,
        },
    })


@health_bp.route("/api", methods=["GET"])
def api_status():
    service = current_app.extensions["mentions_service"]
    logger.debug("API health check requested")
    return jsonify({
        "status": "OK",
        "message": "TerminalScreener X.com API Server",
        "endpoints": ["/api/x-mentions", "/api/coins", "/api/reset-rate-limit"],
        "port": service.settings.PORT,
        "xApiConfigured": service.settings.x_configured,
        "rateLimit": service.status(),
        "timestamp": utcnow().isoformat(),
    })


@health_bp.route("/", methods=["GET"])
def root():
    """Front end for browsers, JSON for load balancers asking for it."""
    static_dir = _settings().STATIC_DIR
    wants_json = "application/json" in (request.headers.get("Accept") or "")
    has_frontend = os.path.isfile(os.path.join(static_dir, "index.html"))

    if wants_json or not has_frontend:
        return jsonify({
            "status": "OK",
            "message": "TerminalScreener Frontend + API",
            "frontend": has_frontend,
            "timestamp": utcnow().isoformat(),
        })
    return send_from_directory(static_dir, "index.html")


@health_bp.route("/<path:filename>", methods=["GET"])
def frontend_asset(filename):
    """CSS/JS/images referenced by index.html."""
    name = os.path.basename(filename)
    ext = os.path.splitext(name)[1].lower()
    if name.startswith(".") or ext not in STATIC_EXTENSIONS:
        abort(404)
    return send_from_directory(_settings().STATIC_DIR, filename)
