# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError
from .validation_types import ValidationErrorType

_MESSAGES: dict[str, str] = {
    ValidationErrorType.MISSING.value: "O campo {field} é obrigatório.",
    ValidationErrorType.DATE_NOT_BEFORE_TODAY.value: (
        "O campo {field} deve ser uma data anterior a hoje."
    ),
    ValidationErrorType.ALREADY_TAKEN.value: "O valor informado para o campo {field} já está em uso.",
    "string_type": "O campo {field} deve ser um texto.",
    "string_too_long": "O campo {field} não pode ter mais de {max_length} caracteres.",
    "string_too_short": "O campo {field} deve ter pelo menos {min_length} caracteres.",
    "value_error": "O campo {field} deve ser um endereço de e-mail válido.",
    "date_type": "O campo {field} não é uma data válida.",
    "date_parsing": "O campo {field} não é uma data válida.",
    "date_from_datetime_parsing": "O campo {field} não é uma data válida.",
    "date_from_datetime_inexact": "O campo {field} não é uma data válida.",
    "bool_type": "O campo {field} deve ser verdadeiro ou falso.",
    "bool_parsing": "O campo {field} deve ser verdadeiro ou falso.",
}


@dataclass(slots=True, frozen=True)
class FieldError:
    field: str
    message: str
    type: str = "value_error"


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc if part is not None) or "unknown"


def _render(error_type: str, field: str, ctx: dict[str, Any]) -> str | None:
    template = _MESSAGES.get(error_type)
    if template is None:
        return None
    try:
        return template.format(field=field, **ctx)
    except (KeyError, IndexError):
        return None


def format_pydantic_errors(exc: PydanticValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for error in exc.errors():
        field = _field_path(error.get("loc", ()))
        error_type = error.get("type", "value_error")
        ctx = dict(error.get("ctx") or {})

        # Blank strings read as missing, not as "too short"
        raw = error.get("input")
        if error_type == "string_too_short" and isinstance(raw, str) and not raw.strip():
            error_type = ValidationErrorType.MISSING.value

        message = _render(error_type, field, ctx) or str(error.get("msg", "Valor inválido."))
        errors.append(FieldError(field=field, message=message, type=error_type))
    return errors


def field_error(field: str, error_type: ValidationErrorType) -> FieldError:
    message = _render(error_type.value, field, {}) or "Valor inválido."
    return FieldError(field=field, message=message, type=error_type.value)


def errors_by_field(errors: Iterable[FieldError]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(error.field, []).append(error.message)
    return grouped


def raise_validation_error(errors: Iterable[FieldError]) -> NoReturn:
    raise ValidationError(errors_by_field(errors))


__all__ = [
    "FieldError",
    "errors_by_field",
    "field_error",
    "format_pydantic_errors",
    "raise_validation_error",
]
