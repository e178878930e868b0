from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from client_registration.handler import RegistrationRequest
from client_registration.settings import RegistrationSettings

if TYPE_CHECKING:
    from client_registration.handler import ClientRegistrationHandler

logger = logging.getLogger(__name__)


def create_registration_router(
    handler: ClientRegistrationHandler,
    settings: RegistrationSettings | None = None,
) -> APIRouter:
    settings = settings if settings is not None else RegistrationSettings()
    router = APIRouter(prefix=settings.prefix, tags=["oauth"])

    async def register_handler(request: Request) -> Response:
        body = await _read_json_body(request)
        outcome = await handler.handle(
            RegistrationRequest(authorization=request.headers.get("Authorization"), body=body),
        )
        return JSONResponse(outcome.body, status_code=outcome.status_code, headers=outcome.headers)

    router.add_api_route(settings.path, register_handler, methods=["POST"])
    return router


async def _read_json_body(request: Request) -> Any:  # noqa: ANN401
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        # reported downstream as a missing body
        logger.debug("Ignoring malformed registration body: %s", exc)
        return None
