from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pytest

from marketplace_auth.application.validation.clientes import (parse_login,
                                                              parse_register,
                                                              validate_login,
                                                              validate_register)
from marketplace_auth.shared.errors.validation import errors_by_field

REQUIRED_FIELDS = (
    "nome_completo",
    "email",
    "senha",
    "cpf",
    "telefone",
    "data_nascimento",
    "cep",
    "rua",
    "numero",
)


def _fields(errors) -> dict[str, list[str]]:
    return errors_by_field(errors)


def test_valid_register_payload_has_no_errors(register_payload: dict[str, Any], today: date) -> None:
    assert validate_register(register_payload, today=today) == []


def test_register_defaults_optional_fields(register_payload: dict[str, Any], today: date) -> None:
    register_payload.pop("isProdutor")
    parsed, errors = parse_register(register_payload, today=today)

    assert errors == []
    assert parsed is not None
    assert parsed.is_produtor is False
    assert parsed.complemento is None
    assert parsed.data_nascimento == date(1990, 1, 1)


def test_register_null_is_produtor_means_customer(
    register_payload: dict[str, Any], today: date
) -> None:
    register_payload["isProdutor"] = None
    parsed, errors = parse_register(register_payload, today=today)

    assert errors == []
    assert parsed is not None and parsed.is_produtor is False


def test_register_empty_payload_reports_every_required_field(today: date) -> None:
    fields = _fields(validate_register({}, today=today))

    assert set(fields) == set(REQUIRED_FIELDS)
    assert fields["email"] == ["O campo email é obrigatório."]


def test_register_blank_strings_count_as_missing(register_payload: dict[str, Any], today: date) -> None:
    register_payload["nome_completo"] = "   "
    register_payload["senha"] = ""

    fields = _fields(validate_register(register_payload, today=today))

    assert fields["nome_completo"] == ["O campo nome_completo é obrigatório."]
    assert fields["senha"] == ["O campo senha é obrigatório."]


@pytest.mark.parametrize(
    ("field", "limit"),
    [
        ("nome_completo", 255),
        ("cpf", 14),
        ("telefone", 15),
        ("cep", 9),
        ("rua", 255),
        ("numero", 10),
        ("complemento", 255),
    ],
)
def test_register_enforces_max_lengths(
    register_payload: dict[str, Any], today: date, field: str, limit: int
) -> None:
    register_payload[field] = "9" * (limit + 1)

    fields = _fields(validate_register(register_payload, today=today))

    assert fields == {field: [f"O campo {field} não pode ter mais de {limit} caracteres."]}


def test_register_rejects_short_password(register_payload: dict[str, Any], today: date) -> None:
    register_payload["senha"] = "abc"

    fields = _fields(validate_register(register_payload, today=today))

    assert fields == {"senha": ["O campo senha deve ter pelo menos 6 caracteres."]}


def test_register_keeps_password_whitespace(register_payload: dict[str, Any], today: date) -> None:
    register_payload["senha"] = " abcdef "
    parsed, errors = parse_register(register_payload, today=today)

    assert errors == []
    assert parsed is not None and parsed.senha == " abcdef "


def test_register_rejects_malformed_email(register_payload: dict[str, Any], today: date) -> None:
    register_payload["email"] = "ana.x.com"

    fields = _fields(validate_register(register_payload, today=today))

    assert fields == {"email": ["O campo email deve ser um endereço de e-mail válido."]}


def test_register_lowercases_whole_email(register_payload: dict[str, Any], today: date) -> None:
    register_payload["email"] = " Ana.Silva@X.COM "
    parsed, _ = parse_register(register_payload, today=today)

    assert parsed is not None
    assert parsed.email == "ana.silva@x.com"


@pytest.mark.parametrize("email", ["Ana Silva <ana@x.com>", "<ana@x.com>", "ana@x.com, bia@x.com"])
def test_register_rejects_email_with_extra_parts(
    register_payload: dict[str, Any], today: date, email: str
) -> None:
    register_payload["email"] = email

    fields = _fields(validate_register(register_payload, today=today))

    assert fields == {"email": ["O campo email deve ser um endereço de e-mail válido."]}


@pytest.mark.parametrize("offset_days", [0, 1, 365])
def test_register_birth_date_must_be_before_today(
    register_payload: dict[str, Any], today: date, offset_days: int
) -> None:
    register_payload["data_nascimento"] = (today + timedelta(days=offset_days)).isoformat()

    fields = _fields(validate_register(register_payload, today=today))

    assert fields == {
        "data_nascimento": ["O campo data_nascimento deve ser uma data anterior a hoje."]
    }


def test_register_accepts_birth_date_yesterday(
    register_payload: dict[str, Any], yesterday: date, today: date
) -> None:
    register_payload["data_nascimento"] = yesterday.isoformat()

    assert validate_register(register_payload, today=today) == []


def test_register_rejects_unparseable_birth_date(
    register_payload: dict[str, Any], today: date
) -> None:
    register_payload["data_nascimento"] = "31/02/1990"

    fields = _fields(validate_register(register_payload, today=today))

    assert fields == {"data_nascimento": ["O campo data_nascimento não é uma data válida."]}


def test_register_rejects_non_boolean_supplier_flag(
    register_payload: dict[str, Any], today: date
) -> None:
    register_payload["isProdutor"] = "talvez"

    fields = _fields(validate_register(register_payload, today=today))

    assert fields == {"isProdutor": ["O campo isProdutor deve ser verdadeiro ou falso."]}


def test_register_rejects_non_string_phone(register_payload: dict[str, Any], today: date) -> None:
    register_payload["telefone"] = 11999999999

    fields = _fields(validate_register(register_payload, today=today))

    assert fields == {"telefone": ["O campo telefone deve ser um texto."]}


def test_register_ignores_unknown_fields(register_payload: dict[str, Any], today: date) -> None:
    register_payload["is_admin"] = True

    assert validate_register(register_payload, today=today) == []


def test_login_requires_email_and_password() -> None:
    fields = _fields(validate_login({"email": "", "senha": ""}))

    assert fields == {
        "email": ["O campo email é obrigatório."],
        "senha": ["O campo senha é obrigatório."],
    }


def test_login_accepts_any_non_empty_password() -> None:
    parsed, errors = parse_login({"email": "ana@x.com", "senha": "x"})

    assert errors == []
    assert parsed is not None and parsed.senha == "x"


def test_login_rejects_malformed_email() -> None:
    fields = _fields(validate_login({"email": "ana", "senha": "abcdef"}))

    assert list(fields) == ["email"]
