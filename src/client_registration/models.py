from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from client_registration.errors import InvalidRequestError, RegistrationError

if TYPE_CHECKING:
    from collections.abc import Mapping

RESERVED_FIELDS = frozenset(
    {
        "registration_access_token",
        "registration_client_uri",
        "client_secret",
        "client_secret_expires_at",
        "client_id_issued_at",
    },
)

DEFAULT_GRANT_TYPES = ("client_credentials",)
DEFAULT_TOKEN_ENDPOINT_AUTH_METHOD = "client_secret_post"
IMPLICIT_RESPONSE_TYPE = "id_token token"


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationResult:
    valid: bool
    error: RegistrationError | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RegistrationCredentials:
    initial_access_token: str


class ClientMetadata(BaseModel):
    """RFC 7591 client metadata for a single registration request.

    Known fields are typed attributes. Anything else the caller sent is kept
    in ``extensions`` and only merged back in by :meth:`to_registration`.
    Subclass and override :meth:`redirect_uri_required` to change the
    redirect URI policy.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    client_id: str | None = None
    client_id_issued_at: int | None = None
    client_secret: str | None = None
    client_secret_expires_at: int | None = None

    redirect_uris: list[str] | None = None
    response_types: list[str] | None = None
    grant_types: list[str] = Field(default_factory=lambda: list(DEFAULT_GRANT_TYPES))
    token_endpoint_auth_method: str = DEFAULT_TOKEN_ENDPOINT_AUTH_METHOD
    scope: str | None = None

    client_name: str | None = None
    client_uri: str | None = None
    logo_uri: str | None = None
    policy_uri: str | None = None
    tos_uri: str | None = None
    jwks_uri: str | None = None
    jwks: dict[str, Any] | None = None
    contacts: list[str] | None = None
    application_type: str | None = None
    token_endpoint_auth_signing_alg: str | None = None
    software_id: str | None = None
    software_version: str | None = None

    extensions: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def wire_fields(cls) -> frozenset[str]:
        return frozenset(name for name in cls.model_fields if name != "extensions")

    @classmethod
    def from_registration(cls, document: Mapping[str, Any]) -> Self:
        known = cls.wire_fields()
        fields = {key: value for key, value in document.items() if key in known}
        extensions = {key: value for key, value in document.items() if key not in known}
        return cls.model_validate({**fields, "extensions": extensions})

    @model_validator(mode="after")
    def check_extension_names(self) -> Self:
        known = type(self).wire_fields()
        for key in self.extensions:
            if key in RESERVED_FIELDS or key in known:
                msg = f'extension field "{key}" collides with a registered field'
                raise ValueError(msg)
        return self

    def to_registration(self) -> dict[str, Any]:
        document = self.model_dump(mode="json", exclude_none=True, exclude={"extensions"})
        return {**document, **self.extensions}

    def validate_new(self) -> ValidationResult:
        try:
            if not self.redirect_uris and self.redirect_uri_required():
                msg = "Missing redirect_uris parameter."
                raise InvalidRequestError(msg)
        except RegistrationError as exc:
            return ValidationResult(valid=False, error=exc)
        except Exception as exc:  # noqa: BLE001
            return ValidationResult(valid=False, error=InvalidRequestError(str(exc) or "invalid client metadata"))
        return ValidationResult(valid=True)

    def requires_client_secret(self) -> bool:
        return not self.implicit_flow()

    def implicit_flow(self) -> bool:
        response_types = self.response_types
        return bool(response_types and len(response_types) == 1 and response_types[0] == IMPLICIT_RESPONSE_TYPE)

    def redirect_uri_required(self) -> bool:
        # client_credentials registrations have nowhere to redirect to
        return False


class OAuthErrorResponse(BaseModel):
    error: str
    error_description: str | None = None
    error_uri: str | None = None
