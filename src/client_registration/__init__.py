"""OAuth 2.0 Dynamic Client Registration (RFC 7591) request handling."""

from client_registration.authentication import (
    AuthenticationStrategy,
    BearerAuthentication,
    authenticate,
    extract_bearer_token,
    resolve_authentication,
)
from client_registration.callbacks import (
    IdentifierGenerator,
    InitialAccessTokenValidator,
    RegisterCallback,
    SecretGenerator,
)
from client_registration.errors import (
    AccessDeniedError,
    ConfigurationError,
    ErrorKind,
    InvalidRequestError,
    RegistrationError,
    TokenRejectedError,
)
from client_registration.handler import ClientRegistrationHandler, RegistrationRequest
from client_registration.issuance import (
    ensure_client_id,
    generate_client_id,
    generate_client_secret,
    generate_client_secret_value,
    stamp_issued_at,
)
from client_registration.models import (
    RESERVED_FIELDS,
    ClientMetadata,
    OAuthErrorResponse,
    RegistrationCredentials,
    ValidationResult,
)
from client_registration.normalizer import normalize_defaults, parse_registration, split_secret_lifetime
from client_registration.responses import RegistrationResponse, format_error, format_success
from client_registration.router import create_registration_router
from client_registration.settings import RegistrationSettings
from client_registration.stores import InMemoryClientStore, StaticTokenValidator

__all__ = [  # noqa: RUF022
    # Pipeline
    "ClientRegistrationHandler",
    "RegistrationRequest",
    "RegistrationResponse",
    "RegistrationSettings",
    "create_registration_router",
    # Metadata
    "ClientMetadata",
    "OAuthErrorResponse",
    "RegistrationCredentials",
    "ValidationResult",
    "RESERVED_FIELDS",
    "normalize_defaults",
    "split_secret_lifetime",
    "parse_registration",
    # Authentication
    "AuthenticationStrategy",
    "BearerAuthentication",
    "authenticate",
    "extract_bearer_token",
    "resolve_authentication",
    # Issuance
    "ensure_client_id",
    "generate_client_id",
    "generate_client_secret",
    "generate_client_secret_value",
    "stamp_issued_at",
    # Responses
    "format_error",
    "format_success",
    # Collaborators
    "IdentifierGenerator",
    "InitialAccessTokenValidator",
    "RegisterCallback",
    "SecretGenerator",
    "InMemoryClientStore",
    "StaticTokenValidator",
    # Exceptions
    "ErrorKind",
    "RegistrationError",
    "InvalidRequestError",
    "AccessDeniedError",
    "ConfigurationError",
    "TokenRejectedError",
]
