from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from client_registration.errors import TokenRejectedError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pydantic import SecretStr

    from client_registration.models import RegistrationCredentials


@dataclass(slots=True, kw_only=True)
class StoredClient:
    registration: dict[str, Any]
    initial_access_token: str


class InMemoryClientStore:
    """Keeps registered clients in process memory, keyed by ``client_id``.

    Suitable for tests and demos; a real deployment persists from its own
    ``register`` callback.
    """

    def __init__(self) -> None:
        self.clients: dict[str, StoredClient] = {}

    async def register(self, *, registration: dict[str, Any], credentials: RegistrationCredentials) -> dict[str, Any]:
        client_id = registration.get("client_id")
        if not client_id:
            msg = "registration has no client_id"
            raise ValueError(msg)
        if client_id in self.clients:
            msg = f"client_id {client_id} is already registered"
            raise ValueError(msg)

        self.clients[client_id] = StoredClient(
            registration=dict(registration),
            initial_access_token=credentials.initial_access_token,
        )
        return dict(registration)

    async def get_client(self, client_id: str) -> dict[str, Any] | None:
        stored = self.clients.get(client_id)
        return dict(stored.registration) if stored else None


@dataclass(frozen=True, slots=True)
class StaticTokenValidator:
    tokens: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_secrets(cls, secrets: Iterable[SecretStr]) -> StaticTokenValidator:
        return cls(frozenset(secret.get_secret_value() for secret in secrets))

    async def __call__(self, token: str) -> None:
        if not any(hmac.compare_digest(token.encode(), known.encode()) for known in self.tokens):
            msg = "Token not found."
            raise TokenRejectedError(msg)
