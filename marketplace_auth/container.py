"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from marketplace_auth.application.services.password_hashing import WerkzeugPasswordHasher
from marketplace_auth.application.use_cases.clientes.get_current_cliente import (
    GetCurrentClienteUseCase,
)
from marketplace_auth.application.use_cases.clientes.login_cliente import LoginClienteUseCase
from marketplace_auth.application.use_cases.clientes.logout_cliente import LogoutClienteUseCase
from marketplace_auth.application.use_cases.clientes.register_cliente import (
    RegisterClienteUseCase,
)
from marketplace_auth.application.use_cases.clientes.results import RedirectPaths
from marketplace_auth.infrastructure.repositories.clientes.sqlalchemy_cliente_repository import (
    SqlAlchemyClienteRepository,
    SqlAlchemySessionTokenStore,
)
from marketplace_auth.interfaces.http.auth import BearerAuthenticator
from marketplace_auth.interfaces.http.controllers.auth_controller import AuthController
from marketplace_auth.interfaces.http.controllers.misc_controller import MiscController
from marketplace_auth.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def cliente_repository(self) -> SqlAlchemyClienteRepository:
        return SqlAlchemyClienteRepository()

    @cached_property
    def session_token_store(self) -> SqlAlchemySessionTokenStore:
        return SqlAlchemySessionTokenStore(
            name=self._config.auth.token_name,
            ttl_seconds=self._config.auth.token_ttl_seconds,
        )

    @cached_property
    def redirect_paths(self) -> RedirectPaths:
        return RedirectPaths(
            cliente=self._config.auth.cliente_redirect,
            fornecedor=self._config.auth.fornecedor_redirect,
        )

    @cached_property
    def register_cliente_use_case(self) -> RegisterClienteUseCase:
        return RegisterClienteUseCase(
            clientes=self.cliente_repository,
            tokens=self.session_token_store,
            password_hasher=self.password_hasher,
            redirects=self.redirect_paths,
        )

    @cached_property
    def login_cliente_use_case(self) -> LoginClienteUseCase:
        return LoginClienteUseCase(
            clientes=self.cliente_repository,
            tokens=self.session_token_store,
            password_hasher=self.password_hasher,
            redirects=self.redirect_paths,
        )

    @cached_property
    def current_cliente_use_case(self) -> GetCurrentClienteUseCase:
        return GetCurrentClienteUseCase()

    @cached_property
    def logout_cliente_use_case(self) -> LogoutClienteUseCase:
        return LogoutClienteUseCase(tokens=self.session_token_store)

    @cached_property
    def authenticator(self) -> BearerAuthenticator:
        return BearerAuthenticator(
            clientes=self.cliente_repository,
            tokens=self.session_token_store,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_cliente_use_case,
            login_use_case=self.login_cliente_use_case,
            current_cliente_use_case=self.current_cliente_use_case,
            logout_use_case=self.logout_cliente_use_case,
            authenticator=self.authenticator,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()


container = Container()
