"""Use-case for revoking the token of the current session."""

from __future__ import annotations

from marketplace_auth.domain.clientes.entities import Principal
from marketplace_auth.domain.clientes.repositories import SessionTokenStore
from marketplace_auth.shared.errors.base import UnauthenticatedError


class LogoutClienteUseCase:
    def __init__(self, *, tokens: SessionTokenStore) -> None:
        self._tokens = tokens

    def execute(self, principal: Principal | None, token: str | None = None) -> None:
        if principal is None:
            raise UnauthenticatedError()
        # Only the presented token is revoked; other sessions of the cliente stay active
        if not self._tokens.revoke(token or principal.token):
            raise UnauthenticatedError()
