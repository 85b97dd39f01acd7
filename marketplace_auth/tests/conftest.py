from __future__ import annotations

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="marketplace-auth-tests-")

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "app.log")
os.environ["ENABLE_RATE_LIMIT"] = "0"
os.environ.pop("TOKEN_TTL_SECONDS", None)

import secrets  # noqa: E402
from datetime import UTC, date, datetime, timedelta  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402

from marketplace_auth.domain.clientes.entities import (  # noqa: E402
    Cliente, NovoCliente, SessionToken)
from marketplace_auth.domain.clientes.exceptions import \
    ClienteAlreadyExistsError  # noqa: E402
from marketplace_auth.domain.clientes.repositories import (  # noqa: E402
    ClienteRepository, PasswordHasher, SessionTokenStore)


class InMemoryClienteRepository(ClienteRepository):
    def __init__(self) -> None:
        self._clientes: dict[str, Cliente] = {}
        self._seq = 1
        # Simulates a concurrent writer: pre-checks see nothing, the store still rejects
        self.blind_prechecks = False

    def find_by_email(self, email: str) -> Cliente | None:
        return next((c for c in self._clientes.values() if c.email == email), None)

    def find_by_id(self, cliente_id: str) -> Cliente | None:
        return self._clientes.get(cliente_id)

    def exists_by_email(self, email: str) -> bool:
        return not self.blind_prechecks and self.find_by_email(email) is not None

    def exists_by_cpf(self, cpf: str) -> bool:
        return not self.blind_prechecks and any(c.cpf == cpf for c in self._clientes.values())

    def create(self, cliente: NovoCliente) -> Cliente:
        for existing in self._clientes.values():
            if existing.email == cliente.email:
                raise ClienteAlreadyExistsError("email")
            if existing.cpf == cliente.cpf:
                raise ClienteAlreadyExistsError("cpf")
        created = Cliente(
            id=f"cliente-{self._seq}",
            nome_completo=cliente.nome_completo,
            email=cliente.email,
            password_hash=cliente.password_hash,
            cpf=cliente.cpf,
            telefone=cliente.telefone,
            data_nascimento=cliente.data_nascimento,
            cep=cliente.cep,
            rua=cliente.rua,
            numero=cliente.numero,
            complemento=cliente.complemento,
            is_produtor=cliente.is_produtor,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self._clientes[created.id] = created
        return created

    def all(self) -> list[Cliente]:
        return list(self._clientes.values())


class InMemoryTokenStore(SessionTokenStore):
    def __init__(self) -> None:
        self._tokens: dict[str, SessionToken] = {}
        self._revoked: set[str] = set()

    def issue(self, cliente_id: str) -> SessionToken:
        token = SessionToken(
            cliente_id=cliente_id,
            token=secrets.token_urlsafe(16),
            name="auth_token",
            created_at=datetime.now(UTC),
        )
        self._tokens[token.token] = token
        return token

    def revoke(self, token: str) -> bool:
        if token not in self._tokens or token in self._revoked:
            return False
        self._revoked.add(token)
        return True

    def resolve(self, token: str) -> str | None:
        if token in self._revoked or token not in self._tokens:
            return None
        return self._tokens[token].cliente_id

    def count_for(self, cliente_id: str) -> int:
        return sum(1 for t in self._tokens.values() if t.cliente_id == cliente_id)


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.verify_calls = 0

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"


@pytest.fixture()
def clientes() -> InMemoryClienteRepository:
    return InMemoryClienteRepository()


@pytest.fixture()
def tokens() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def register_payload() -> dict[str, Any]:
    return {
        "nome_completo": "Ana Silva",
        "email": "ana@x.com",
        "senha": "abcdef",
        "cpf": "123.456.789-00",
        "telefone": "11999999999",
        "data_nascimento": "1990-01-01",
        "cep": "01000-000",
        "rua": "Rua A",
        "numero": "10",
        "isProdutor": False,
    }


@pytest.fixture()
def fornecedor_payload(register_payload: dict[str, Any]) -> dict[str, Any]:
    return {
        **register_payload,
        "nome_completo": "Sítio Boa Vista",
        "email": "contato@boavista.com.br",
        "cpf": "987.654.321-00",
        "isProdutor": True,
    }


@pytest.fixture()
def today() -> date:
    return date(2026, 10, 19)


@pytest.fixture()
def yesterday(today: date) -> date:
    return today - timedelta(days=1)

