# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps

from flask import g, request

from marketplace_auth.domain.clientes.entities import Principal
from marketplace_auth.domain.clientes.repositories import ClienteRepository, SessionTokenStore
from marketplace_auth.shared.errors.base import UnauthenticatedError
from marketplace_auth.shared.logging import logger


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    scheme, _, value = auth.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return value.strip()


def current_principal() -> Principal | None:
    return getattr(g, "principal", None)


class BearerAuthenticator:
    """Resolves ``Authorization: Bearer`` into a :class:`Principal`."""

    def __init__(self, *, clientes: ClienteRepository, tokens: SessionTokenStore) -> None:
        self._clientes = clientes
        self._tokens = tokens

    def authenticate(self, token: str) -> Principal | None:
        if not token:
            return None
        cliente_id = self._tokens.resolve(token)
        if cliente_id is None:
            return None
        cliente = self._clientes.find_by_id(cliente_id)
        if cliente is None:
            return None
        return Principal(cliente=cliente, token=token)

    def required(self, f):
        @wraps(f)
        def inner(*a, **kw):
            token = bearer_token()
            if not token:
                logger.warning(
                    f"No bearer token on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise UnauthenticatedError()

            principal = self.authenticate(token)
            if principal is None:
                logger.warning(
                    f"Auth failed (token unknown/revoked/expired) on {request.method} {request.path}"
                )
                raise UnauthenticatedError()

            g.principal = principal
            g.user_id = principal.cliente.id
            logger.debug(f"Auth OK: cliente={principal.cliente.id} {request.method} {request.path}")
            return f(*a, **kw)

        return inner
