from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from client_registration.errors import ErrorKind, RegistrationError
from client_registration.models import ClientMetadata, OAuthErrorResponse

NO_STORE_HEADERS: Mapping[str, str] = {
    "Cache-Control": "no-store",
    "Pragma": "no-cache",
}

_HTTP_CREATED = 201


def _no_store_headers() -> dict[str, str]:
    return dict(NO_STORE_HEADERS)


@dataclass(frozen=True, slots=True, kw_only=True)
class RegistrationResponse:
    status_code: int
    body: Any
    headers: dict[str, str] = field(default_factory=_no_store_headers)


def format_success(client: Mapping[str, Any] | BaseModel | None) -> RegistrationResponse:
    if client is None:
        body = {}
    elif isinstance(client, ClientMetadata):
        body = client.to_registration()
    elif isinstance(client, BaseModel):
        body = client.model_dump(mode="json", exclude_none=True)
    else:
        body = dict(client)
    return RegistrationResponse(status_code=_HTTP_CREATED, body=body)


def format_error(error: RegistrationError) -> RegistrationResponse:
    payload = OAuthErrorResponse(
        error=error.error or str(ErrorKind.INVALID_REQUEST),
        error_description=error.description or str(error),
        error_uri=error.uri,
    )
    return RegistrationResponse(
        status_code=error.status_code or ErrorKind.INVALID_REQUEST.status_code,
        body=payload.model_dump(exclude_none=True),
    )
