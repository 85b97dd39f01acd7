# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from marketplace_auth.shared.config import load_config
from marketplace_auth.shared.logging import logger

from .base import AppError, UnauthenticatedError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    if isinstance(error, UnauthenticatedError):
        response.headers["WWW-Authenticate"] = "Bearer"
    return response, error.status


def register_error_handler(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.errorhandler(AppError)
    def _app_error(exc: AppError):
        logger.debug(f"{exc.code} ({int(exc.status)}) on {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        where = f"{request.method} {request.path} cliente={g.get('user_id')}"
        if verbose:
            logger.exception(f"unhandled {type(exc).__name__} on {where}")
        else:
            logger.error(f"unhandled {type(exc).__name__} on {where}")
        return jsonify({"error": "internal_error"}), HTTPStatus.INTERNAL_SERVER_ERROR


__all__ = ["handle_app_error", "register_error_handler"]
