"""Operator diagnostics for credential and upstream checks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from plant_relay.domain.errors import (
    ConfigurationError,
    ConfigurationProblem,
    UpstreamError,
)

if TYPE_CHECKING:
    from plant_relay.containers import AppContainer

router = APIRouter(tags=["diagnostics"])

_API_KEY_PREFIX_LENGTH = 8
_logger = logging.getLogger(__name__)


@router.get("/test-api")
async def test_api(request: Request) -> dict[str, object]:
    """Report whether the Pl@ntNet key is set, with a short prefix."""
    container: AppContainer = request.app.state.container
    api_key = container.settings.plantnet_api_key or ""
    return {
        "hasApiKey": bool(api_key),
        "apiKeyLength": len(api_key),
        "apiKeyPrefix": (
            f"{api_key[:_API_KEY_PREFIX_LENGTH]}..." if api_key else "No key"
        ),
    }


@router.get("/test-plantnet", response_model=None)
async def test_plantnet(request: Request) -> dict[str, object] | JSONResponse:
    """Probe Pl@ntNet with a tiny image and echo its reply."""
    container: AppContainer = request.app.state.container
    api_key = container.settings.plantnet_api_key
    if not api_key:
        raise ConfigurationError(
            ConfigurationProblem.MISSING_CREDENTIAL,
            "PlantNet API key is not configured",
        )
    _logger.info("Probing PlantNet API")
    try:
        probe = await container.plantnet_client.probe(api_key)
    except UpstreamError as exc:
        _logger.warning("PlantNet probe failed: %s", exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": exc.message,
                "details": exc.details(),
            },
        )
    return {
        "success": True,
        "message": "PlantNet API is reachable",
        "status": probe.status_code,
        "data": probe.data,
    }
