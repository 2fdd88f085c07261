"""
Markup Audit - API Server
Flask application exposing the audit engine over HTTP.
"""

import argparse
import logging
from typing import Any, Mapping, Optional

from flask import Flask

from markup_auditor.controllers.audit_controller import AuditController
from markup_auditor.managers.config_manager import config_manager
from markup_auditor.server.routers.audit_api_router import audit_api_router
from markup_auditor.utils.configure_logging import configure_from_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Application factory. The controller is created once and shared by all requests.
    """
    flask_app = Flask(__name__)
    settings = config_manager.get_all() if settings is None else settings

    flask_app.config['AUDIT_CONTROLLER'] = AuditController(settings=settings)
    flask_app.config['MAX_CONTENT_LENGTH'] = 10 * 1024 * 1024

    flask_app.register_blueprint(audit_api_router, url_prefix='/api')
    return flask_app


def serve(host: str, port: int, debug: bool = False) -> None:
    app = create_app()

    print("\n" + "=" * 50)
    print("🚀  MARKUP AUDIT | API server")
    print("=" * 50)
    print(f"📡  Listening on: http://{host}:{port}")
    print("-" * 50)
    for rule in app.url_map.iter_rules():
        if "api" in str(rule):
            print(f"   ✅ {rule}")
    print("-" * 50 + "\n")

    # use_reloader=False prevents double-initialization
    app.run(debug=debug, host=host, port=port, use_reloader=False)


def main():
    parser = argparse.ArgumentParser(description="Markup Audit API Server")
    parser.add_argument("--host", type=str, default=config_manager.get_nested("server.host", "127.0.0.1"),
                        help="Host interface to bind to")
    parser.add_argument("--port", type=int, default=config_manager.get_nested("server.port", 5000),
                        help="Port to bind the server to")
    parser.add_argument("--debug", action="store_true", help="Enable the Flask debugger")
    args = parser.parse_args()

    configure_from_settings(config_manager.get_all())
    serve(args.host, args.port, args.debug)


if __name__ == '__main__':
    main()
