# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Cliente, NovoCliente, SessionToken


class ClienteRepository(Protocol):
    def find_by_email(self, email: str) -> Cliente | None: ...
    def find_by_id(self, cliente_id: str) -> Cliente | None: ...
    def exists_by_email(self, email: str) -> bool: ...
    def exists_by_cpf(self, cpf: str) -> bool: ...
    def create(self, cliente: NovoCliente) -> Cliente: ...


class SessionTokenStore(Protocol):
    def issue(self, cliente_id: str) -> SessionToken: ...
    def revoke(self, token: str) -> bool: ...
    def resolve(self, token: str) -> str | None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
