# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    """Error that knows its HTTP status and JSON body."""

    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.code}
        if self.message:
            body["message"] = self.message
        if self.context:
            body["context"] = dict(self.context)
        return body


class DomainError(AppError):
    default_code: ClassVar[str] = "domain_error"
    default_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST
    default_message: ClassVar[str | None] = None

    def __init__(self, *, context: Mapping[str, Any] | None = None, message: str | None = None) -> None:
        super().__init__(
            code=self.default_code,
            status=self.default_status,
            context=context,
            message=message or self.default_message,
        )


class ValidationError(AppError):
    """Field-level input errors, rendered as ``{"errors": {field: [messages]}}``."""

    def __init__(self, errors: Mapping[str, Sequence[str]] | None = None) -> None:
        super().__init__(
            code="validation_error",
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context={"errors": {field: list(msgs) for field, msgs in (errors or {}).items()}},
            message="Erro de validação",
        )

    @property
    def errors(self) -> dict[str, list[str]]:
        return dict(self.context or {}).get("errors", {})

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, "errors": self.errors}


class UnauthenticatedError(AppError):
    """No valid bearer token; answered with ``WWW-Authenticate: Bearer``."""

    def __init__(self) -> None:
        super().__init__(
            code="unauthenticated",
            status=HTTPStatus.UNAUTHORIZED,
            message="Não autenticado",
        )
