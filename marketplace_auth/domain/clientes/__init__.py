# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Cliente, NovoCliente, Principal, SessionToken, TipoCliente
from .exceptions import ClienteAlreadyExistsError, InvalidCredentialsError
from .repositories import ClienteRepository, PasswordHasher, SessionTokenStore

__all__ = [
    "Cliente",
    "ClienteAlreadyExistsError",
    "ClienteRepository",
    "InvalidCredentialsError",
    "NovoCliente",
    "PasswordHasher",
    "Principal",
    "SessionToken",
    "SessionTokenStore",
    "TipoCliente",
]
