# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class TipoCliente(str, Enum):
    CLIENTE = "cliente"
    FORNECEDOR = "fornecedor"


@dataclass(slots=True, frozen=True)
class NovoCliente:
    """Registration data after validation, with the password already hashed."""

    nome_completo: str
    email: str
    password_hash: str
    cpf: str
    telefone: str
    data_nascimento: date
    cep: str
    rua: str
    numero: str
    complemento: str | None = None
    is_produtor: bool = False


@dataclass(slots=True, frozen=True)
class Cliente:

    id: str
    nome_completo: str
    email: str
    password_hash: str
    cpf: str
    telefone: str
    data_nascimento: date
    cep: str
    rua: str
    numero: str
    complemento: str | None
    is_produtor: bool
    created_at: datetime

    @property
    def tipo(self) -> TipoCliente:
        return TipoCliente.FORNECEDOR if self.is_produtor else TipoCliente.CLIENTE


@dataclass(slots=True, frozen=True)
class SessionToken:
    """Issued bearer token. ``token`` holds the plaintext only at issuance."""

    cliente_id: str
    token: str
    name: str
    created_at: datetime
    expires_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class Principal:

    cliente: Cliente
    token: str
