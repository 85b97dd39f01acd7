# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request

from marketplace_auth.application.use_cases.clientes.get_current_cliente import \
    GetCurrentClienteUseCase
from marketplace_auth.application.use_cases.clientes.login_cliente import \
    LoginClienteUseCase
from marketplace_auth.application.use_cases.clientes.logout_cliente import \
    LogoutClienteUseCase
from marketplace_auth.application.use_cases.clientes.register_cliente import \
    RegisterClienteUseCase
from marketplace_auth.domain.clientes.exceptions import InvalidCredentialsError
from marketplace_auth.infrastructure.audit import AuditAction, audit_log
from marketplace_auth.interfaces.http.auth import (BearerAuthenticator,
                                                   bearer_token,
                                                   current_principal)
from marketplace_auth.interfaces.http.dto.auth import (AuthSuccessDTO,
                                                       ClienteDTO, MessageDTO)
from marketplace_auth.shared.errors.base import ValidationError
from marketplace_auth.shared.logging import logger
from marketplace_auth.shared.middleware.rate_limit import rate_limit
from marketplace_auth.shared.middleware.request_logger import client_ip


def _json_payload() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


class AuthController:
    """``/api`` routes for registration, login, current cliente and logout."""

    def __init__(
        self,
        *,
        register_use_case: RegisterClienteUseCase,
        login_use_case: LoginClienteUseCase,
        current_cliente_use_case: GetCurrentClienteUseCase,
        logout_use_case: LogoutClienteUseCase,
        authenticator: BearerAuthenticator,
    ) -> None:
        self._register = register_use_case
        self._login = login_use_case
        self._current_cliente = current_cliente_use_case
        self._logout = logout_use_case
        self._authenticator = authenticator

    @rate_limit(limit=5, window_seconds=60.0)
    def register(self) -> tuple[Response, int]:
        try:
            result = self._register.execute(_json_payload())
        except ValidationError as exc:
            audit_log(
                AuditAction.REGISTER_FAILED,
                ip_address=client_ip(),
                details={"fields": sorted(exc.errors)},
                success=False,
            )
            raise

        audit_log(
            AuditAction.REGISTER,
            cliente_id=result.cliente.id,
            ip_address=client_ip(),
            details={"tipo": result.cliente.tipo},
        )
        body = AuthSuccessDTO.from_result("Cliente registrado com sucesso", result)
        return jsonify(body.model_dump()), 201

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        payload = _json_payload()
        try:
            result = self._login.execute(payload)
        except InvalidCredentialsError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=client_ip(),
                details={"email": payload.get("email"), "reason": exc.reason},
                success=False,
            )
            raise

        audit_log(AuditAction.LOGIN_SUCCESS, cliente_id=result.cliente.id, ip_address=client_ip())
        body = AuthSuccessDTO.from_result("Login realizado com sucesso", result)
        return jsonify(body.model_dump()), 200

    def me(self) -> tuple[Response, int]:
        view = self._current_cliente.execute(current_principal())
        return jsonify(ClienteDTO.from_view(view).model_dump()), 200

    def logout(self) -> tuple[Response, int]:
        principal = current_principal()
        self._logout.execute(principal, bearer_token())

        audit_log(
            AuditAction.LOGOUT,
            cliente_id=principal.cliente.id if principal else None,
            ip_address=client_ip(),
        )
        logger.debug("auth.logout: current token revoked")
        return jsonify(MessageDTO(message="Logout realizado com sucesso").model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/me", endpoint="me", view_func=self._authenticator.required(self.me), methods=["GET"]
        )
        bp.add_url_rule(
            "/logout",
            endpoint="logout",
            view_func=self._authenticator.required(self.logout),
            methods=["POST"],
        )
        return bp
