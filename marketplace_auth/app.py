# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask, Response
from flask_cors import CORS

from marketplace_auth.container import container
from marketplace_auth.infrastructure.db import init_db
from marketplace_auth.shared.config import load_config
from marketplace_auth.shared.logging import logger, setup_logging
from marketplace_auth.shared.middleware.error_handler import configure_error_handling
from marketplace_auth.shared.middleware.request_logger import (
    REQUEST_ID_HEADER,
    configure_request_logging,
)

_config = load_config()

_SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    # responses carry bearer tokens and personal data
    "Cache-Control": "no-store",
}
_HSTS = "max-age=31536000; includeSubDomains"


def create_app() -> Flask:
    setup_logging(_config.log_level, debug_mode=_config.debug_logging)
    init_db()

    app = Flask(__name__)
    app.config["SECRET_KEY"] = _config.secret_key
    app.json.sort_keys = False

    configure_error_handling(app)
    configure_request_logging(app)
    CORS(
        app,
        resources={r"/api/*": {"origins": _config.security.allowed_origins}},
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _security_headers(response: Response) -> Response:
        for name, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if _config.security.enable_hsts:
            response.headers.setdefault("Strict-Transport-Security", _HSTS)
        return response

    logger.info(f"marketplace_auth ready (env={_config.app_env})")
    return app


if __name__ == "__main__":
    create_app().run(host=_config.host, port=_config.port)
