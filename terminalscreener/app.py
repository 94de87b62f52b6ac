# terminalscreener/app.py
from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
import logging, sys

# ---- Core Config ----
from terminalscreener.config import Settings, settings as default_settings
from terminalscreener.logging_config import setup_logging
from terminalscreener.routes.coins import coins_bp
from terminalscreener.routes.health import health_bp
from terminalscreener.routes.mentions import mentions_bp
from terminalscreener.services.mentions import MentionsService

logger = logging.getLogger(__name__)

AVAILABLE_ROUTES = ["/", "/api", "/health", "/api/x-mentions", "/api/coins", "/api/reset-rate-limit"]


def create_app(settings: Settings | None = None, service: MentionsService | None = None) -> Flask:
    settings = settings or (service.settings if service else default_settings)
    service = service or MentionsService(settings)

    # ---- Initialize Flask ----
    app = Flask(__name__, static_folder=None)
    app.json.sort_keys = False
    CORS(app, origins="*", methods=["GET", "POST"], allow_headers=["Content-Type", "Authorization"])
    app.extensions["mentions_service"] = service

    # ---- Blueprints ----
    app.register_blueprint(health_bp)
    app.register_blueprint(mentions_bp)
    app.register_blueprint(coins_bp)

    # ---- Error handlers ----
    @app.errorhandler(404)
    def not_found(e):
        logger.info("Unknown route requested: %s %s", request.method, request.full_path.rstrip("?"))
        return jsonify({
            "error": "Route not found",
            "method": request.method,
            "path": request.full_path.rstrip("?"),
            "availableRoutes": AVAILABLE_ROUTES,
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        # only the catch-all asset route matched: still an unknown route
        if request.path not in AVAILABLE_ROUTES:
            return not_found(e)
        return jsonify({
            "error": "Method not allowed",
            "method": request.method,
            "path": request.full_path.rstrip("?"),
            "availableRoutes": AVAILABLE_ROUTES,
        }), 405

    @app.errorhandler(Exception)
    def server_error(e):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.name, "message": e.description}), e.code
        logger.exception("Server error")
        return jsonify({"error": "Internal server error", "message": str(e)}), 500

    return app


# ---- Run Server ----
def main() -> None:
    setup_logging(default_settings.LOG_LEVEL)
    app = create_app()
    logger.info("TerminalScreener API server starting on %s:%s", default_settings.HOST, default_settings.PORT)
    logger.info("X API configured: %s", "YES" if default_settings.x_configured else "NO")
    logger.info("Routes: %s", ", ".join(AVAILABLE_ROUTES))
    try:
        app.run(host=default_settings.HOST, port=default_settings.PORT, threaded=True)
    except OSError as e:
        logger.critical("Server failed to start: %s", e)
        sys.exit(1)
    logger.info("Server closed")


if __name__ == "__main__":
    main()
