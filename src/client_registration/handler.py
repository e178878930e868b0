from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from client_registration.authentication import authenticate, resolve_authentication
from client_registration.errors import InvalidRequestError, RegistrationError
from client_registration.issuance import (
    ensure_client_id,
    generate_client_id,
    generate_client_secret,
    generate_client_secret_value,
    stamp_issued_at,
)
from client_registration.models import ClientMetadata, RegistrationCredentials
from client_registration.normalizer import parse_registration, split_secret_lifetime
from client_registration.responses import RegistrationResponse, format_error, format_success
from client_registration.stores import StaticTokenValidator

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import BaseModel

    from client_registration.authentication import AuthenticationStrategy
    from client_registration.callbacks import (
        IdentifierGenerator,
        InitialAccessTokenValidator,
        RegisterCallback,
        SecretGenerator,
    )
    from client_registration.settings import RegistrationSettings


@dataclass(frozen=True, slots=True, kw_only=True)
class RegistrationRequest:
    authorization: str | None = None
    body: Any = None


class ClientRegistrationHandler:
    """Handles one RFC 7591 registration request at a time.

    The handler only holds configuration. Each call to :meth:`handle` builds
    its own :class:`ClientMetadata`, hands the finished registration to the
    ``register`` callback exactly once and turns the outcome into a
    :class:`RegistrationResponse`. Failures never reach the caller as
    exceptions.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        authentication: AuthenticationStrategy,
        register: RegisterCallback,
        defaults: Mapping[str, Any] | None = None,
        allow_client_provided_id: bool = False,
        client_secret_expires_at: int | None = None,
        logger: logging.Logger | None = None,
        generate_id: IdentifierGenerator = generate_client_id,
        generate_secret: SecretGenerator = generate_client_secret_value,
        metadata_cls: type[ClientMetadata] = ClientMetadata,
    ) -> None:
        self.authentication = authentication
        self.register = register
        self.defaults, lifetime = split_secret_lifetime(defaults)
        self.allow_client_provided_id = allow_client_provided_id
        # an explicit keyword wins over clientSecretExpiresAt in defaults
        if client_secret_expires_at is None:
            client_secret_expires_at = lifetime or 0
        self.client_secret_expires_at = client_secret_expires_at
        self.logger = logger or logging.getLogger(__name__)
        self.generate_id = generate_id
        self.generate_secret = generate_secret
        self.metadata_cls = metadata_cls

    @classmethod
    def from_settings(
        cls,
        settings: RegistrationSettings,
        *,
        register: RegisterCallback,
        validate_initial_access_token: InitialAccessTokenValidator | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> ClientRegistrationHandler:
        if validate_initial_access_token is None:
            validate_initial_access_token = StaticTokenValidator.from_secrets(settings.initial_access_tokens)
        authentication = resolve_authentication(settings.authentication_strategy, validate_initial_access_token)
        return cls(
            authentication=authentication,
            register=register,
            defaults=settings.defaults,
            allow_client_provided_id=settings.allow_client_provided_id,
            client_secret_expires_at=settings.client_secret_expires_at,
            **kwargs,
        )

    async def handle(self, request: RegistrationRequest) -> RegistrationResponse:
        try:
            return format_success(await self._register_client(request))
        except RegistrationError as exc:
            return self._error(exc)
        except Exception as exc:  # noqa: BLE001
            return self._error(InvalidRequestError(str(exc) or "client registration failed"), exc_info=exc)

    async def _register_client(self, request: RegistrationRequest) -> Mapping[str, Any] | BaseModel | None:
        initial_access_token = await authenticate(request.authorization, self.authentication)

        registration = parse_registration(request.body, self.defaults, metadata_cls=self.metadata_cls)
        result = registration.validate_new()
        if not result.valid:
            raise result.error or InvalidRequestError("invalid client metadata")

        # the register() callback may still replace the issued values
        await ensure_client_id(
            registration,
            self.generate_id,
            allow_client_provided_id=self.allow_client_provided_id,
        )
        await generate_client_secret(registration, self.generate_secret, expires_at=self.client_secret_expires_at)
        stamp_issued_at(registration)

        try:
            return await self.register(
                registration=registration.to_registration(),
                credentials=RegistrationCredentials(initial_access_token=initial_access_token),
            )
        except Exception as exc:
            msg = f'Error in register() callback: "{exc}".'
            raise InvalidRequestError(msg) from exc

    def _error(self, error: RegistrationError, exc_info: BaseException | None = None) -> RegistrationResponse:
        self.logger.error(
            "Dynamic client registration error: %s",
            error.description or error.error,
            exc_info=exc_info,
        )
        return format_error(error)
