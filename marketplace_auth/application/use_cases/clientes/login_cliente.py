# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Mapping
from functools import cached_property
from typing import Any

from marketplace_auth.application.validation.clientes import parse_login
from marketplace_auth.domain.clientes.exceptions import InvalidCredentialsError
from marketplace_auth.domain.clientes.repositories import (ClienteRepository,
                                                           PasswordHasher,
                                                           SessionTokenStore)
from marketplace_auth.shared.errors.validation import raise_validation_error

from .results import AuthResult, ClienteView, RedirectPaths


class LoginClienteUseCase:
    def __init__(
        self,
        *,
        clientes: ClienteRepository,
        tokens: SessionTokenStore,
        password_hasher: PasswordHasher,
        redirects: RedirectPaths | None = None,
    ) -> None:
        self._clientes = clientes
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._redirects = redirects or RedirectPaths()

    @cached_property
    def _dummy_hash(self) -> str:
        return self._password_hasher.hash(secrets.token_urlsafe(16))

    def execute(self, payload: Mapping[str, Any]) -> AuthResult:
        data, errors = parse_login(payload)
        if errors or data is None:
            raise_validation_error(errors)

        cliente = self._clientes.find_by_email(data.email)
        if cliente is None:
            # unknown email pays the same hashing cost as a wrong password
            self._password_hasher.verify(data.senha, self._dummy_hash)
            raise InvalidCredentialsError(InvalidCredentialsError.EMAIL_NOT_FOUND)

        if not self._password_hasher.verify(data.senha, cliente.password_hash):
            raise InvalidCredentialsError(InvalidCredentialsError.WRONG_PASSWORD)

        token = self._tokens.issue(cliente.id)
        return AuthResult(
            cliente=ClienteView.from_cliente(cliente),
            token=token.token,
            redirect=self._redirects.for_cliente(cliente),
        )
