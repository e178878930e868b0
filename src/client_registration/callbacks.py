from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import BaseModel

    from client_registration.models import RegistrationCredentials


@runtime_checkable
class InitialAccessTokenValidator(Protocol):
    """Checks the initial access token presented to the registration endpoint.

    Return normally to accept the token. Raise to reject it; the exception
    message is reported back to the caller as the rejection reason.
    """

    async def __call__(self, token: str) -> None: ...


@runtime_checkable
class IdentifierGenerator(Protocol):
    async def __call__(self) -> str: ...


@runtime_checkable
class SecretGenerator(Protocol):
    async def __call__(self) -> str: ...


@runtime_checkable
class RegisterCallback(Protocol):
    """Persists a finished registration.

    Whatever is returned becomes the body of the ``201 Created`` response.
    """

    async def __call__(
        self,
        *,
        registration: dict[str, Any],
        credentials: RegistrationCredentials,
    ) -> Mapping[str, Any] | BaseModel | None: ...
