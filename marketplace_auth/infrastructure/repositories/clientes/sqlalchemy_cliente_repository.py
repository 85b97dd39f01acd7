# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError

from marketplace_auth.domain.clientes.entities import Cliente as DomainCliente
from marketplace_auth.domain.clientes.entities import NovoCliente
from marketplace_auth.domain.clientes.entities import SessionToken as DomainSessionToken
from marketplace_auth.domain.clientes.exceptions import ClienteAlreadyExistsError
from marketplace_auth.domain.clientes.repositories import ClienteRepository, SessionTokenStore
from marketplace_auth.infrastructure.db.models import Cliente, SessionToken
from marketplace_auth.infrastructure.db.session import session_scope
from marketplace_auth.shared.logging import logger


def _to_domain(row: Cliente) -> DomainCliente:
    return DomainCliente(
        id=row.id,
        nome_completo=row.nome_completo,
        email=row.email,
        password_hash=row.senha,
        cpf=row.cpf,
        telefone=row.telefone,
        data_nascimento=row.data_nascimento,
        cep=row.cep,
        rua=row.rua,
        numero=row.numero,
        complemento=row.complemento,
        is_produtor=row.is_produtor,
        created_at=row.created_at,
    )


def _duplicate_field(exc: IntegrityError) -> str | None:
    detail = str(exc.orig).lower()
    if "uq_clientes_cpf" in detail or "clientes.cpf" in detail or "(cpf)" in detail:
        return "cpf"
    if "uq_clientes_email" in detail or "clientes.email" in detail or "(email)" in detail:
        return "email"
    return None


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SqlAlchemyClienteRepository(ClienteRepository):
    def find_by_email(self, email: str) -> DomainCliente | None:
        with session_scope() as session:
            row = session.scalars(select(Cliente).where(Cliente.email == email)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, cliente_id: str) -> DomainCliente | None:
        with session_scope() as session:
            row = session.get(Cliente, cliente_id)
            return _to_domain(row) if row else None

    def exists_by_email(self, email: str) -> bool:
        with session_scope() as session:
            return session.scalar(select(Cliente.id).where(Cliente.email == email)) is not None

    def exists_by_cpf(self, cpf: str) -> bool:
        with session_scope() as session:
            return session.scalar(select(Cliente.id).where(Cliente.cpf == cpf)) is not None

    def create(self, cliente: NovoCliente) -> DomainCliente:
        try:
            with session_scope() as session:
                row = Cliente(
                    nome_completo=cliente.nome_completo,
                    email=cliente.email,
                    senha=cliente.password_hash,
                    cpf=cliente.cpf,
                    telefone=cliente.telefone,
                    data_nascimento=cliente.data_nascimento,
                    cep=cliente.cep,
                    rua=cliente.rua,
                    numero=cliente.numero,
                    complemento=cliente.complemento,
                    is_produtor=cliente.is_produtor,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                created = _to_domain(row)
        except IntegrityError as exc:
            field = _duplicate_field(exc)
            if field is None:
                raise
            logger.info(f"clientes.create: unique constraint hit on {field}")
            raise ClienteAlreadyExistsError(field) from exc
        return created


class SqlAlchemySessionTokenStore(SessionTokenStore):
    def __init__(self, *, name: str = "auth_token", ttl_seconds: int | None = None) -> None:
        self._name = name
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None

    def issue(self, cliente_id: str) -> DomainSessionToken:
        token_value = secrets.token_urlsafe(48)
        now = datetime.now(UTC)
        expires_at = now + self._ttl if self._ttl else None
        with session_scope() as session:
            session.add(
                SessionToken(
                    cliente_id=cliente_id,
                    name=self._name,
                    token_hash=hash_token(token_value),
                    created_at=now,
                    expires_at=expires_at,
                )
            )
        logger.info(f"tokens.issue: cliente={cliente_id} exp={expires_at.isoformat() if expires_at else '-'}")
        return DomainSessionToken(
            cliente_id=cliente_id,
            token=token_value,
            name=self._name,
            created_at=now,
            expires_at=expires_at,
        )

    def revoke(self, token: str) -> bool:
        with session_scope() as session:
            result = session.execute(
                update(SessionToken)
                .where(
                    SessionToken.token_hash == hash_token(token),
                    SessionToken.revoked_at.is_(None),
                )
                .values(revoked_at=datetime.now(UTC))
            )
            return bool(result.rowcount)

    def resolve(self, token: str) -> str | None:
        if not token:
            return None
        now = datetime.now(UTC)
        with session_scope() as session:
            row = session.scalars(
                select(SessionToken).where(
                    SessionToken.token_hash == hash_token(token),
                    SessionToken.revoked_at.is_(None),
                    or_(SessionToken.expires_at.is_(None), SessionToken.expires_at > now),
                )
            ).first()
            if row is None:
                return None
            row.last_used_at = now
            return row.cliente_id
