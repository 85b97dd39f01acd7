# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

from marketplace_auth.application.validation.clientes import (
    RegisterClienteInput, normalize_email, parse_register)
from marketplace_auth.domain.clientes.entities import NovoCliente
from marketplace_auth.domain.clientes.exceptions import \
    ClienteAlreadyExistsError
from marketplace_auth.domain.clientes.repositories import (ClienteRepository,
                                                           PasswordHasher,
                                                           SessionTokenStore)
from marketplace_auth.shared.errors.validation import (FieldError, field_error,
                                                       raise_validation_error)
from marketplace_auth.shared.errors.validation_types import \
    ValidationErrorType

from .results import AuthResult, ClienteView, RedirectPaths


def _raw_value(payload: Mapping[str, Any], field: str) -> str | None:
    # only called for fields that passed validation, so normalising cannot fail
    value = payload.get(field)
    if not isinstance(value, str):
        return None
    return normalize_email(value.strip()) if field == "email" else value.strip()


class RegisterClienteUseCase:
    def __init__(
        self,
        *,
        clientes: ClienteRepository,
        tokens: SessionTokenStore,
        password_hasher: PasswordHasher,
        redirects: RedirectPaths | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._clientes = clientes
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._redirects = redirects or RedirectPaths()
        self._today = today

    def execute(self, payload: Mapping[str, Any]) -> AuthResult:
        data, errors = parse_register(payload, today=self._today())
        errors.extend(self._uniqueness_errors(payload, data, errors))
        if errors or data is None:
            raise_validation_error(errors)

        novo = NovoCliente(
            nome_completo=data.nome_completo,
            email=data.email,
            password_hash=self._password_hasher.hash(data.senha),
            cpf=data.cpf,
            telefone=data.telefone,
            data_nascimento=data.data_nascimento,
            cep=data.cep,
            rua=data.rua,
            numero=data.numero,
            complemento=data.complemento,
            is_produtor=data.is_produtor,
        )
        try:
            cliente = self._clientes.create(novo)
        except ClienteAlreadyExistsError as exc:
            raise_validation_error([field_error(exc.field, ValidationErrorType.ALREADY_TAKEN)])

        token = self._tokens.issue(cliente.id)
        return AuthResult(
            cliente=ClienteView.from_cliente(cliente),
            token=token.token,
            redirect=self._redirects.for_cliente(cliente),
        )

    def _uniqueness_errors(
        self,
        payload: Mapping[str, Any],
        data: RegisterClienteInput | None,
        errors: list[FieldError],
    ) -> list[FieldError]:
        invalid = {error.field for error in errors}
        checks = (("email", self._clientes.exists_by_email), ("cpf", self._clientes.exists_by_cpf))

        found: list[FieldError] = []
        for field, exists in checks:
            if field in invalid:
                continue
            value = getattr(data, field) if data is not None else _raw_value(payload, field)
            if value and exists(value):
                found.append(field_error(field, ValidationErrorType.ALREADY_TAKEN))
        return found
