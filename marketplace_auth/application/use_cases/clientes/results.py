# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from marketplace_auth.domain.clientes.entities import Cliente


@dataclass(slots=True, frozen=True)
class ClienteView:
    """Public projection of a cliente. Carries no password material."""

    id: str
    nome: str
    email: str
    tipo: str
    logado: bool = True

    @classmethod
    def from_cliente(cls, cliente: Cliente) -> ClienteView:
        return cls(
            id=cliente.id,
            nome=cliente.nome_completo,
            email=cliente.email,
            tipo=cliente.tipo.value,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class RedirectPaths:
    cliente: str = "/"
    fornecedor: str = "/fornecedor/dashboard"

    def for_cliente(self, cliente: Cliente) -> str:
        return self.fornecedor if cliente.is_produtor else self.cliente


@dataclass(slots=True, frozen=True)
class AuthResult:
    cliente: ClienteView
    token: str
    redirect: str
