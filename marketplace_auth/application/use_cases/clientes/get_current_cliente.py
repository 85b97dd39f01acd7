# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace_auth.domain.clientes.entities import Principal
from marketplace_auth.shared.errors.base import UnauthenticatedError

from .results import ClienteView


class GetCurrentClienteUseCase:
    def execute(self, principal: Principal | None) -> ClienteView:
        if principal is None:
            raise UnauthenticatedError()
        return ClienteView.from_cliente(principal.cliente)
