import logging
from typing import Any

from fastapi import FastAPI
from pydantic import SecretStr

from client_registration import (
    ClientRegistrationHandler,
    InMemoryClientStore,
    RegistrationSettings,
    create_registration_router,
)

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Dynamic Client Registration Example")

settings = RegistrationSettings(
    prefix="/oauth2",
    initial_access_tokens=[SecretStr("change-me")],
    defaults={"clientSecretExpiresAt": 0, "grantTypes": ["client_credentials"]},
)

store = InMemoryClientStore()
handler = ClientRegistrationHandler.from_settings(settings, register=store.register)

app.include_router(create_registration_router(handler, settings))


@app.get("/")
async def home() -> dict[str, Any]:
    return {
        "message": "POST a client metadata document to /oauth2/register",
        "authorization": "Bearer change-me",
        "registered_clients": len(store.clients),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)  # noqa: S104
