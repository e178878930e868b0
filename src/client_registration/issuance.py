from __future__ import annotations

import logging
import secrets
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from client_registration.callbacks import IdentifierGenerator, SecretGenerator
    from client_registration.models import ClientMetadata

logger = logging.getLogger(__name__)


async def generate_client_id() -> str:
    return secrets.token_urlsafe(16)


async def generate_client_secret_value() -> str:
    return secrets.token_urlsafe(32)


async def ensure_client_id(
    metadata: ClientMetadata,
    generate_id: IdentifierGenerator,
    *,
    allow_client_provided_id: bool = False,
) -> None:
    if metadata.client_id and allow_client_provided_id:
        logger.debug("Keeping client provided client_id %s", metadata.client_id)
        return

    metadata.client_id = await generate_id()
    logger.debug("Issued client_id %s", metadata.client_id)


async def generate_client_secret(
    metadata: ClientMetadata,
    generate_secret: SecretGenerator,
    *,
    expires_at: int = 0,
) -> None:
    if metadata.requires_client_secret():
        metadata.client_secret = await generate_secret()
    if metadata.client_secret:
        metadata.client_secret_expires_at = expires_at


def stamp_issued_at(metadata: ClientMetadata) -> None:
    metadata.client_id_issued_at = int(time.time())
