"""Flask Web Application for dohjson."""
import logging
from datetime import datetime
from typing import Optional

from flask import Flask, jsonify, request

from dohjson.config import Config
from dohjson.api.server import DoHServer, HandlerFunc


logger = logging.getLogger(__name__)


# DoHServer answers 400 for anything but GET, so the route accepts them all.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    config: Optional[Config] = None,
    handler: Optional[HandlerFunc] = None,
) -> Flask:
    """Create Flask application serving DNS-over-HTTPS.

    Args:
        config: Application configuration
        handler: Resolution handler invoked for every valid question

    Returns:
        Flask app
    """
    config = config or Config()

    app = Flask(__name__)

    # Store server in app context
    app.doh_server = DoHServer(handler=handler, allow_http=config.allow_http)
    app.config_obj = config

    @app.route(config.path, methods=ALL_METHODS)
    def resolve():
        """Answer a DNS-over-HTTPS question."""
        return app.doh_server.serve(request)

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Let DoHServer reject verbs outside ALL_METHODS on the DoH path."""
        if request.path == config.path:
            return app.doh_server.serve(request)
        return error

    @app.route('/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            "status": "healthy",
            "handler_configured": app.doh_server.handler is not None,
            "timestamp": datetime.now().isoformat(),
        })

    logger.info(f"Serving DNS-over-HTTPS on {config.path} (allow_http={config.allow_http})")

    return app
