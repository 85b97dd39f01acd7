# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import re
import secrets
import time

from flask import Flask, Response, g, request

from marketplace_auth.shared.config import load_config
from marketplace_auth.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"

_SECRET_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
_SECRET_PARAMS = ("senha", "password", "token", "secret")
_REQUEST_ID_RE = re.compile(r"^[\w\-.]{1,64}$")


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def _incoming_request_id() -> str:
    candidate = request.headers.get(REQUEST_ID_HEADER, "")
    return candidate if _REQUEST_ID_RE.match(candidate) else secrets.token_urlsafe(8)


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers() -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _SECRET_HEADERS else value
        for key, value in request.headers.items()
    }


def _safe_args() -> dict[str, str]:
    return {
        key: "<redacted>" if any(s in key.lower() for s in _SECRET_PARAMS) else value
        for key, value in request.args.items()
    }


def configure_request_logging(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.before_request
    def _open_request() -> None:
        g.correlation_id = _incoming_request_id()
        g.request_started = time.perf_counter()
        set_correlation_id(g.correlation_id)

        line = f"--> {request.method} {request.path} ip={client_ip()}"
        if verbose:
            line += f" args={_safe_args()} headers={_safe_headers()} bytes={request.content_length or 0}"
        logger.info(line)

    @app.after_request
    def _close_request(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        line = f"<-- {request.method} {request.path} {response.status_code} {elapsed_ms:.1f}ms"
        if verbose:
            line += f" cliente={g.get('user_id')}"
        logger.info(line)
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("correlation_id", "-"))
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "client_ip", "configure_request_logging"]
