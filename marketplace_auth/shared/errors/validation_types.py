# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import Enum


class ValidationErrorType(str, Enum):
    MISSING = "missing"
    DATE_NOT_BEFORE_TODAY = "date_not_before_today"
    ALREADY_TAKEN = "already_taken"
