from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from client_registration.errors import InvalidRequestError
from client_registration.models import (
    DEFAULT_GRANT_TYPES,
    DEFAULT_TOKEN_ENDPOINT_AUTH_METHOD,
    RESERVED_FIELDS,
    ClientMetadata,
)


SECRET_LIFETIME_FIELD = "client_secret_expires_at"


def registration_defaults() -> dict[str, Any]:
    return {
        "grant_types": list(DEFAULT_GRANT_TYPES),
        "token_endpoint_auth_method": DEFAULT_TOKEN_ENDPOINT_AUTH_METHOD,
    }


def normalize_defaults(defaults: Mapping[str, Any] | None) -> dict[str, Any]:
    """Translate operator defaults (``grantTypes``) to wire names (``grant_types``)."""
    if not defaults:
        return {}
    return {to_snake(key): value for key, value in defaults.items()}


def split_secret_lifetime(defaults: Mapping[str, Any] | None) -> tuple[dict[str, Any], int | None]:
    """Normalize ``defaults`` and take ``clientSecretExpiresAt`` out of them."""
    normalized = normalize_defaults(defaults)
    return normalized, normalized.pop(SECRET_LIFETIME_FIELD, None)


def parse_registration[MetadataT: ClientMetadata](
    body: Any,  # noqa: ANN401
    defaults: Mapping[str, Any] | None = None,
    *,
    metadata_cls: type[MetadataT] = ClientMetadata,
) -> MetadataT:
    if body is None:
        msg = "Missing registration request body."
        raise InvalidRequestError(msg)
    if not isinstance(body, Mapping):
        msg = "Registration request body must be a JSON object."
        raise InvalidRequestError(msg)

    # checked before defaults are merged so a reserved key never slips through
    for field in body:
        if field in RESERVED_FIELDS:
            msg = f'Registration MUST NOT include the "{field}" field.'
            raise InvalidRequestError(msg)

    operator_defaults = {
        key: value for key, value in normalize_defaults(defaults).items() if key not in RESERVED_FIELDS
    }
    document = {**registration_defaults(), **operator_defaults, **body}

    try:
        return metadata_cls.from_registration(document)
    except ValidationError as exc:
        raise InvalidRequestError(_format_validation_error(exc)) from exc


def _format_validation_error(error: ValidationError) -> str:
    entries = error.errors()
    if not entries:
        return "invalid client metadata"
    entry = entries[0]
    loc = ".".join(str(part) for part in entry.get("loc", []) if part is not None)
    msg = entry.get("msg", "invalid client metadata")
    if loc:
        return f"{loc}: {msg}"
    return msg
