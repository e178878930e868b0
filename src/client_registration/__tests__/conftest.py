from __future__ import annotations

from dataclasses import dataclass, field

import httpx
import pytest
import pytest_asyncio
from client_registration.authentication import BearerAuthentication
from client_registration.handler import ClientRegistrationHandler
from client_registration.router import create_registration_router
from client_registration.settings import RegistrationSettings
from client_registration.stores import InMemoryClientStore, StaticTokenValidator
from fastapi import FastAPI

VALID_TOKEN = "abcd1234"  # noqa: S105
INVALID_TOKEN = "xyz567"  # noqa: S105


@dataclass(slots=True)
class CountingGenerator:
    prefix: str
    calls: int = 0
    issued: list[str] = field(default_factory=list)

    async def __call__(self) -> str:
        self.calls += 1
        value = f"{self.prefix}-{self.calls}"
        self.issued.append(value)
        return value


@pytest.fixture
def token_validator() -> StaticTokenValidator:
    return StaticTokenValidator(frozenset({VALID_TOKEN}))


@pytest.fixture
def store() -> InMemoryClientStore:
    return InMemoryClientStore()


@pytest.fixture
def id_generator() -> CountingGenerator:
    return CountingGenerator("client")


@pytest.fixture
def secret_generator() -> CountingGenerator:
    return CountingGenerator("secret")


@pytest.fixture
def handler(
    token_validator: StaticTokenValidator,
    store: InMemoryClientStore,
    id_generator: CountingGenerator,
    secret_generator: CountingGenerator,
) -> ClientRegistrationHandler:
    return ClientRegistrationHandler(
        authentication=BearerAuthentication(validate_initial_access_token=token_validator),
        register=store.register,
        generate_id=id_generator,
        generate_secret=secret_generator,
    )


@pytest.fixture
def registration_settings() -> RegistrationSettings:
    return RegistrationSettings(prefix="/oauth2", path="/register")


@pytest.fixture
def app(handler: ClientRegistrationHandler, registration_settings: RegistrationSettings) -> FastAPI:
    app = FastAPI()
    app.include_router(create_registration_router(handler, registration_settings))
    return app


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    await transport.aclose()
