# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace_auth.infrastructure.db.session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class Cliente(Base):
    __tablename__ = "clientes"
    __table_args__ = (
        UniqueConstraint("email", name="uq_clientes_email"),
        UniqueConstraint("cpf", name="uq_clientes_cpf"),
    )
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    nome_completo: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    senha: Mapped[str] = mapped_column(String(255))
    cpf: Mapped[str] = mapped_column(String(14))
    telefone: Mapped[str] = mapped_column(String(15))
    data_nascimento: Mapped[date] = mapped_column(Date)
    cep: Mapped[str] = mapped_column(String(9))
    rua: Mapped[str] = mapped_column(String(255))
    numero: Mapped[str] = mapped_column(String(10))
    complemento: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_produtor: Mapped[bool] = mapped_column(
        "isProdutor", Boolean, nullable=False, default=False, server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, onupdate=_now
    )
    tokens: Mapped[list["SessionToken"]] = relationship(
        "SessionToken", back_populates="cliente", cascade="all,delete"
    )


class SessionToken(Base):
    __tablename__ = "session_tokens"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    cliente_id: Mapped[str] = mapped_column(
        ForeignKey("clientes.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(64))
    # sha256 hex digest; the plaintext token is never stored
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    last_used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    cliente: Mapped["Cliente"] = relationship("Cliente", back_populates="tokens")
