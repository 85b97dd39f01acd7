# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any, NamedTuple

_MASK = "***REDACTED***"


class Redaction(NamedTuple):
    pattern: re.Pattern[str]
    replacement: str


def _rule(pattern: str, replacement: str, flags: int = re.IGNORECASE) -> Redaction:
    return Redaction(re.compile(pattern, flags), replacement)


# Applied in order; credentials first so the e-mail rule never sees them.
SENSITIVE_PATTERNS: tuple[Redaction, ...] = (
    _rule(r"(bearer\s+)[\w\-.~+/]{16,}=*", rf"\1{_MASK}"),
    _rule(r"(authorization\s*[:=]\s*['\"]?)[^'\"\s,}]{10,}", rf"\1{_MASK}"),
    _rule(r"((?:auth_|session_)?token\s*['\"]?\s*[:=]\s*['\"]?)[\w\-.~+/]{16,}", rf"\1{_MASK}"),
    _rule(r"((?:secret_key|senha|password)\s*['\"]?\s*[:=]\s*['\"]?)[^'\"\s,}]+", rf"\1{_MASK}"),
    _rule(r"\b(\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s]+@", rf"\1{_MASK}@"),
    _rule(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-z]{2,})", r"***@\1"),
    _rule(r"\b\d{3}\.\d{3}\.\d{3}-\d{2}\b", "***.***.***-**", 0),
    _rule(r"(cpf\s*['\"]?\s*[:=]\s*['\"]?)\d{11}\b", r"\1***********"),
    _rule(r"(telefone\s*['\"]?\s*[:=]\s*['\"]?)\+?[\d\s()-]{8,20}", r"\1***"),
)


def sanitize_message(message: str) -> str:
    for rule in SENSITIVE_PATTERNS:
        message = rule.pattern.sub(rule.replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru sink filter: rewrites the message in place and never drops it."""
    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["SENSITIVE_PATTERNS", "sanitize_message", "sanitize_record"]
