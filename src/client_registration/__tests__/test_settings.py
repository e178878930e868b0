import pytest
from client_registration.settings import RegistrationSettings
from pydantic import SecretStr, ValidationError


def test_registration_settings_defaults() -> None:
    settings = RegistrationSettings()

    assert settings.prefix == "/oauth"
    assert settings.path == "/register"
    assert settings.authentication_strategy == "bearer"
    assert settings.initial_access_tokens == []
    assert settings.allow_client_provided_id is False
    assert settings.client_secret_expires_at == 0
    assert settings.defaults == {}


def test_registration_settings_normalizes_defaults() -> None:
    settings = RegistrationSettings(defaults={"grantTypes": ["authorization_code"]})

    assert settings.defaults == {"grant_types": ["authorization_code"]}


def test_registration_settings_lifts_secret_lifetime_from_defaults() -> None:
    settings = RegistrationSettings(defaults={"clientSecretExpiresAt": 3600, "clientName": "Demo"})

    assert settings.client_secret_expires_at == 3600
    assert settings.defaults == {"client_name": "Demo"}


def test_registration_settings_explicit_secret_lifetime_wins() -> None:
    settings = RegistrationSettings(client_secret_expires_at=60, defaults={"clientSecretExpiresAt": 3600})

    assert settings.client_secret_expires_at == 60


@pytest.mark.parametrize("key", ["clientSecret", "registrationAccessToken", "client_id_issued_at"])
def test_registration_settings_rejects_reserved_defaults(key: str) -> None:
    with pytest.raises(ValidationError) as exc:
        RegistrationSettings(defaults={key: "value"})

    assert "server-controlled" in str(exc.value)


def test_registration_settings_rejects_negative_secret_lifetime() -> None:
    with pytest.raises(ValidationError) as exc:
        RegistrationSettings(client_secret_expires_at=-1)

    assert "client_secret_expires_at" in str(exc.value)


def test_registration_settings_rejects_relative_path() -> None:
    with pytest.raises(ValidationError) as exc:
        RegistrationSettings(path="register")

    assert "path must start with '/'" in str(exc.value)


def test_registration_settings_strips_prefix() -> None:
    assert RegistrationSettings(prefix="/oauth2/").prefix == "/oauth2"
    assert RegistrationSettings(prefix="").prefix == ""


def test_registration_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLIENT_REGISTRATION_ALLOW_CLIENT_PROVIDED_ID", "true")
    monkeypatch.setenv("CLIENT_REGISTRATION_INITIAL_ACCESS_TOKENS", '["abcd1234"]')
    monkeypatch.setenv("CLIENT_REGISTRATION_DEFAULTS", '{"clientSecretExpiresAt": 86400}')

    settings = RegistrationSettings()

    assert settings.allow_client_provided_id is True
    assert settings.initial_access_tokens == [SecretStr("abcd1234")]
    assert settings.client_secret_expires_at == 86400
    assert settings.defaults == {}
