# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Input rules for registration and login.

The ``validate_*`` functions are pure: they take the raw payload mapping and
return field errors without touching storage or the request. Uniqueness of
``email`` and ``cpf`` is checked later by the register use case.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Annotated, Any

from email_validator import validate_email
from pydantic import (AfterValidator, BaseModel, ConfigDict, Field,
                      StringConstraints, ValidationInfo, field_validator)
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from marketplace_auth.shared.errors.validation import (FieldError,
                                                       format_pydantic_errors)
from marketplace_auth.shared.errors.validation_types import \
    ValidationErrorType


def normalize_email(value: str) -> str:
    """Bare address only, lowercased whole; raises ``EmailNotValidError`` (a ValueError)."""
    return validate_email(value, check_deliverability=False).normalized.lower()


def _required_text(max_length: int) -> Any:
    return Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=max_length)
    ]


Text9 = _required_text(9)
Text10 = _required_text(10)
Text14 = _required_text(14)
Text15 = _required_text(15)
Text255 = _required_text(255)


Email = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=255),
    AfterValidator(normalize_email),
]


class RegisterClienteInput(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    nome_completo: Text255
    email: Email
    senha: str = Field(min_length=6)
    cpf: Text14
    telefone: Text15
    data_nascimento: date
    cep: Text9
    rua: Text255
    numero: Text10
    complemento: Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)] | None = None
    is_produtor: bool = Field(False, alias="isProdutor")

    @field_validator("data_nascimento")
    @classmethod
    def _before_today(cls, value: date, info: ValidationInfo) -> date:
        today = (info.context or {}).get("today") or date.today()
        if value >= today:
            raise PydanticCustomError(
                ValidationErrorType.DATE_NOT_BEFORE_TODAY.value,
                "Birth date must be before today",
                {"today": today.isoformat()},
            )
        return value

    @field_validator("complemento")
    @classmethod
    def _blank_complemento(cls, value: str | None) -> str | None:
        return value or None


class LoginInput(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    email: Email
    senha: str = Field(min_length=1)


def _validate(
    model: type[BaseModel], payload: Mapping[str, Any], context: dict[str, Any] | None = None
) -> tuple[BaseModel | None, list[FieldError]]:
    # isProdutor: null reads as "not sent"
    data = {key: value for key, value in payload.items() if not (key == "isProdutor" and value is None)}
    try:
        return model.model_validate(data, context=context), []
    except PydanticValidationError as exc:
        return None, format_pydantic_errors(exc)


def parse_register(
    payload: Mapping[str, Any], *, today: date | None = None
) -> tuple[RegisterClienteInput | None, list[FieldError]]:
    parsed, errors = _validate(RegisterClienteInput, payload, {"today": today})
    return parsed, errors  # type: ignore[return-value]


def parse_login(payload: Mapping[str, Any]) -> tuple[LoginInput | None, list[FieldError]]:
    parsed, errors = _validate(LoginInput, payload)
    return parsed, errors  # type: ignore[return-value]


def validate_register(payload: Mapping[str, Any], *, today: date | None = None) -> list[FieldError]:
    return parse_register(payload, today=today)[1]


def validate_login(payload: Mapping[str, Any]) -> list[FieldError]:
    return parse_login(payload)[1]


__all__ = [
    "LoginInput",
    "RegisterClienteInput",
    "normalize_email",
    "parse_login",
    "parse_register",
    "validate_login",
    "validate_register",
]
