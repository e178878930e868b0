import pytest
from client_registration import issuance as issuance_module
from client_registration.issuance import (
    ensure_client_id,
    generate_client_id,
    generate_client_secret,
    generate_client_secret_value,
    stamp_issued_at,
)
from client_registration.models import ClientMetadata


async def _fixed_id() -> str:
    return "generated-id"


async def _fixed_secret() -> str:
    return "generated-secret"


@pytest.mark.asyncio
async def test_default_generators_produce_distinct_values() -> None:
    ids = {await generate_client_id() for _ in range(10)}
    secrets = {await generate_client_secret_value() for _ in range(10)}

    assert len(ids) == 10
    assert len(secrets) == 10
    assert all(isinstance(value, str) and value for value in ids | secrets)


@pytest.mark.asyncio
async def test_ensure_client_id_generates_when_missing() -> None:
    metadata = ClientMetadata()

    await ensure_client_id(metadata, _fixed_id)

    assert metadata.client_id == "generated-id"


@pytest.mark.asyncio
async def test_ensure_client_id_overwrites_caller_value_by_default() -> None:
    metadata = ClientMetadata(client_id="chosen")

    await ensure_client_id(metadata, _fixed_id)

    assert metadata.client_id == "generated-id"


@pytest.mark.asyncio
async def test_ensure_client_id_keeps_caller_value_when_allowed() -> None:
    metadata = ClientMetadata(client_id="chosen")

    await ensure_client_id(metadata, _fixed_id, allow_client_provided_id=True)

    assert metadata.client_id == "chosen"


@pytest.mark.asyncio
async def test_ensure_client_id_generates_for_empty_caller_value() -> None:
    metadata = ClientMetadata(client_id="")

    await ensure_client_id(metadata, _fixed_id, allow_client_provided_id=True)

    assert metadata.client_id == "generated-id"


@pytest.mark.asyncio
async def test_generate_client_secret_stamps_expiry() -> None:
    metadata = ClientMetadata()

    await generate_client_secret(metadata, _fixed_secret)

    assert metadata.client_secret == "generated-secret"
    assert metadata.client_secret_expires_at == 0


@pytest.mark.asyncio
async def test_generate_client_secret_uses_configured_expiry() -> None:
    metadata = ClientMetadata()

    await generate_client_secret(metadata, _fixed_secret, expires_at=1_900_000_000)

    assert metadata.client_secret_expires_at == 1_900_000_000


@pytest.mark.asyncio
async def test_generate_client_secret_skips_implicit_flow() -> None:
    metadata = ClientMetadata(response_types=["id_token token"])

    await generate_client_secret(metadata, _fixed_secret)

    assert metadata.client_secret is None
    assert metadata.client_secret_expires_at is None


def test_stamp_issued_at(monkeypatch: pytest.MonkeyPatch) -> None:
    metadata = ClientMetadata(client_id_issued_at=1)
    monkeypatch.setattr(issuance_module.time, "time", lambda: 1234.9)

    stamp_issued_at(metadata)

    assert metadata.client_id_issued_at == 1234
