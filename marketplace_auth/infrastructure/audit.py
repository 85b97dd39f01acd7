# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Audit trail for authentication events.

Entries go to the application log under the ``AUDIT`` prefix. This is the only
place the internal reason of a failed login is recorded.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from marketplace_auth.shared.logging import logger


class AuditAction(str, Enum):
    REGISTER = "register"
    REGISTER_FAILED = "register_failed"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"


_REDACTED_KEYS = ("senha", "password", "token", "cpf", "telefone", "secret")


def _redact(details: dict[str, Any]) -> dict[str, Any]:
    return {
        key: "***REDACTED***" if any(k in key.lower() for k in _REDACTED_KEYS) else value
        for key, value in details.items()
    }


def audit_log(
    action: AuditAction,
    cliente_id: str | None = None,
    ip_address: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    parts = [f"AUDIT {action.value}", f"cliente={cliente_id or '-'}", f"ip={ip_address or '-'}"]
    if details:
        parts.append(f"details={_redact(details)}")
    logger.log("INFO" if success else "WARNING", " | ".join(parts))


__all__ = ["AuditAction", "audit_log"]
