# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from marketplace_auth.shared.errors.base import DomainError


class ClienteAlreadyExistsError(DomainError):
    default_code = "cliente_already_exists"
    default_status = HTTPStatus.CONFLICT

    def __init__(self, field: str) -> None:
        super().__init__(context={"field": field})
        self.field = field


class InvalidCredentialsError(DomainError):
    """Bad email or password.

    ``reason`` is kept for logs and audit only; it never reaches the response.
    """

    default_code = "invalid_credentials"
    default_status = HTTPStatus.UNAUTHORIZED
    default_message = "Credenciais inválidas"

    EMAIL_NOT_FOUND = "email not found"
    WRONG_PASSWORD = "wrong password"

    def __init__(self, reason: str) -> None:
        super().__init__()
        self.reason = reason
