# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_ENV = SettingsConfigDict(
    env_file=".env", env_file_encoding="utf-8", validate_by_name=True, extra="ignore"
)

_INSECURE_SECRETS = frozenset({"", "dev", "development", "test", "changeme"})


class DatabaseConfig(BaseSettings):
    model_config = _ENV

    url: str = Field("sqlite:///marketplace.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class SecurityConfig(BaseSettings):
    model_config = _ENV

    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(10, ge=1, alias="RL_LIMIT")
    rate_limit_window: float = Field(60.0, gt=0, alias="RL_WINDOW")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


class AuthConfig(BaseSettings):
    model_config = _ENV

    # unset or blank: tokens live until logout
    token_ttl_seconds: int | None = Field(None, ge=1, alias="TOKEN_TTL_SECONDS")
    token_name: str = Field("auth_token", min_length=1, max_length=64, alias="TOKEN_NAME")
    cliente_redirect: str = Field("/", alias="CLIENTE_REDIRECT")
    fornecedor_redirect: str = Field("/fornecedor/dashboard", alias="FORNECEDOR_REDIRECT")

    @field_validator("token_ttl_seconds", mode="before")
    @classmethod
    def _blank_ttl(cls, value: str | int | None) -> str | int | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AppConfig(BaseSettings):
    model_config = _ENV

    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, ge=1, le=65535, alias="PORT")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    @model_validator(mode="after")
    def _check_production(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in _INSECURE_SECRETS:
            print(
                "\n❌ marketplace_auth refuses to start: SECRET_KEY is a development value.\n"
                "   Set SECRET_KEY to a long random string before running with APP_ENV=production.\n",
                file=sys.stderr,
            )
            sys.exit(1)

        notes = [
            text
            for enabled, text in (
                ("*" in self.security.allowed_origins, "CORS accepts any origin (ALLOWED_ORIGINS=*)"),
                (not self.security.enable_hsts, "HSTS header is off (ENABLE_HSTS)"),
                (not self.security.enable_rate_limit, "register/login are not rate limited"),
                (self.auth.token_ttl_seconds is None, "session tokens never expire (TOKEN_TTL_SECONDS)"),
            )
            if enabled
        ]
        if notes:
            print("\n⚠️  production configuration warnings:", file=sys.stderr)
            for note in notes:
                print(f"   - {note}", file=sys.stderr)
        return self


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "SecurityConfig", "load_config"]
