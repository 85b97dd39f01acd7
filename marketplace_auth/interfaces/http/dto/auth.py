from __future__ import annotations

from pydantic import BaseModel

from marketplace_auth.application.use_cases.clientes.results import (
    AuthResult, ClienteView)


class ClienteDTO(BaseModel):
    id: str
    nome: str
    email: str
    tipo: str
    logado: bool = True

    @classmethod
    def from_view(cls, view: ClienteView) -> ClienteDTO:
        return cls.model_validate(view.to_dict())


class AuthSuccessDTO(BaseModel):
    message: str
    cliente: ClienteDTO
    token: str
    redirect: str

    @classmethod
    def from_result(cls, message: str, result: AuthResult) -> AuthSuccessDTO:
        return cls(
            message=message,
            cliente=ClienteDTO.from_view(result.cliente),
            token=result.token,
            redirect=result.redirect,
        )


class MessageDTO(BaseModel):
    message: str
