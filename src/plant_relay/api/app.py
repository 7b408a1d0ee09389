"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plant_relay.api.diagnostics import router as diagnostics_router
from plant_relay.api.models import ErrorResponse, IdentifyResponse
from plant_relay.api.multipart import read_file_part
from plant_relay.app_logging import configure_logging
from plant_relay.containers import AppContainer
from plant_relay.domain.errors import ConfigurationError, UploadValidationError
from plant_relay.services.uploads import MAX_UPLOAD_BYTES, accept_upload

IMAGE_FIELD = "image"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Plant relay ready: port=%s has_api_key=%s",
            app.state.container.settings.port,
            app.state.container.settings.has_api_key,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Plant Relay", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if container.settings.expose_diagnostics:
        app.include_router(diagnostics_router)

    @app.exception_handler(UploadValidationError)
    async def upload_rejected(
        request: Request, exc: UploadValidationError
    ) -> JSONResponse:
        logger.info("Upload rejected: reason=%s", exc.reason)
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(ConfigurationError)
    async def misconfigured(request: Request, exc: ConfigurationError) -> JSONResponse:
        logger.error("Configuration error: %s", exc.message)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error while serving %s", request.url.path)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal server error"
        )

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """Report process health and whether the Pl@ntNet key is set."""
        state_container: AppContainer = request.app.state.container
        return {
            "status": "OK",
            "message": "Server is running",
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "hasApiKey": state_container.settings.has_api_key,
        }

    @app.post("/identify")
    async def identify(request: Request) -> dict[str, object]:
        """Identify the plant in an uploaded photo."""
        state_container: AppContainer = request.app.state.container
        logger.info("Identification request received")
        part = await read_file_part(request, IMAGE_FIELD, MAX_UPLOAD_BYTES)
        if part is None:
            accepted = accept_upload(None, None, None)
        else:
            accepted = accept_upload(part.content, part.content_type, part.filename)
        outcome = await state_container.identification_service.identify(accepted)
        return IdentifyResponse.from_outcome(outcome).model_dump(
            mode="json", exclude_none=True
        )

    return app


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )
