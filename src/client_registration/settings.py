from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from client_registration.models import RESERVED_FIELDS
from client_registration.normalizer import SECRET_LIFETIME_FIELD, normalize_defaults, split_secret_lifetime


class RegistrationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CLIENT_REGISTRATION_",
        env_file=".env",
        extra="ignore",
    )

    prefix: str = "/oauth"
    path: str = "/register"

    authentication_strategy: str = "bearer"
    initial_access_tokens: list[SecretStr] = Field(default_factory=list)

    allow_client_provided_id: bool = False
    client_secret_expires_at: int = Field(default=0, ge=0)
    defaults: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def lift_secret_lifetime_default(cls, values: object) -> object:
        """Move ``clientSecretExpiresAt`` out of ``defaults`` into its own setting."""
        if not isinstance(values, dict):
            return values
        defaults = values.get("defaults")
        if not isinstance(defaults, Mapping):
            return values

        normalized, lifetime = split_secret_lifetime(defaults)
        lifted = {**values, "defaults": normalized}
        if lifetime is not None and SECRET_LIFETIME_FIELD not in values:
            lifted[SECRET_LIFETIME_FIELD] = lifetime
        return lifted

    @field_validator("defaults")
    @classmethod
    def reject_reserved_defaults(cls, value: dict[str, Any]) -> dict[str, Any]:
        normalized = normalize_defaults(value)
        for key in normalized:
            if key in RESERVED_FIELDS:
                msg = f'defaults must not include the server-controlled "{key}" field'
                raise ValueError(msg)
        return normalized

    @field_validator("prefix", "path")
    @classmethod
    def validate_route(cls, value: str, info) -> str:  # noqa: ANN001
        normalized = value.strip()
        if info.field_name == "prefix":
            normalized = normalized.rstrip("/")
            if not normalized:
                return normalized
        if not normalized.startswith("/"):
            msg = f"{info.field_name} must start with '/'"
            raise ValueError(msg)
        return normalized
