from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from client_registration.errors import AccessDeniedError, ConfigurationError, InvalidRequestError

if TYPE_CHECKING:
    from client_registration.callbacks import InitialAccessTokenValidator

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"
UNSUPPORTED_STRATEGY_MESSAGE = "Only the Bearer auth scheme is currently supported."

# RFC 6750 section 2.1 b64token
_B64TOKEN = re.compile(r"[A-Za-z0-9\-._~+/]+=*")


@dataclass(frozen=True, slots=True, kw_only=True)
class BearerAuthentication:
    validate_initial_access_token: InitialAccessTokenValidator
    strategy: Literal["bearer"] = "bearer"


type AuthenticationStrategy = BearerAuthentication


def resolve_authentication(
    strategy: str,
    validate_initial_access_token: InitialAccessTokenValidator,
) -> AuthenticationStrategy:
    match strategy.strip().lower():
        case "bearer":
            return BearerAuthentication(validate_initial_access_token=validate_initial_access_token)
        case _:
            raise ConfigurationError(UNSUPPORTED_STRATEGY_MESSAGE)


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        msg = "Authentication Code required."
        raise AccessDeniedError(msg)

    scheme, _, token = authorization.strip().partition(" ")
    if scheme != BEARER_SCHEME:
        msg = "Invalid authorization scheme."
        raise InvalidRequestError(msg)

    if not _B64TOKEN.fullmatch(token):
        msg = "Invalid authorization header."
        raise InvalidRequestError(msg)

    return token


async def authenticate(authorization: str | None, authentication: AuthenticationStrategy) -> str:
    """Return the initial access token once the strategy has accepted it."""
    match authentication:
        case BearerAuthentication(validate_initial_access_token=validate):
            token = extract_bearer_token(authorization)
            try:
                await validate(token)
            except Exception as exc:
                logger.warning("Initial access token rejected: %s", exc)
                msg = f"Invalid authentication code: {exc}"
                raise AccessDeniedError(msg) from exc
            return token
        case _:
            raise ConfigurationError(UNSUPPORTED_STRATEGY_MESSAGE)
