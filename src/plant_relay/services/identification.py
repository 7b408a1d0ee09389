"""Identification service relaying uploads to Pl@ntNet."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from plant_relay.domain.errors import (
    ConfigurationError,
    ConfigurationProblem,
    UpstreamError,
    UpstreamFailure,
)
from plant_relay.domain.identification import (
    IdentificationCandidate,
    IdentificationOutcome,
    IdentificationResult,
    ProbeResult,
    ResultSource,
    UploadedImage,
)
from plant_relay.services.placeholders import PLACEHOLDER_NOTE, select_placeholder

DESCRIPTION_UNAVAILABLE = "Description unavailable"
ADVISORY_BENEFITS = (
    "Information about the plant's benefits. "
    "Consult a doctor before using it."
)
ADVISORY_WARNINGS = (
    "Be careful when using plants. Make sure the species is identified correctly."
)

_logger = logging.getLogger(__name__)


class PlantNetClient(Protocol):
    """Interface for the upstream identification API."""

    async def identify(self, image: UploadedImage, api_key: str) -> dict[str, object]:
        """Submit an image and return the raw upstream payload."""

    async def probe(self, api_key: str) -> ProbeResult:
        """Send a tiny test image to check upstream reachability."""


@dataclass
class IdentificationService:
    """Service that identifies plants and falls back to placeholder data."""

    client: PlantNetClient
    api_key: str | None

    async def identify(self, image: UploadedImage) -> IdentificationOutcome:
        """Identify the plant in an accepted upload."""
        if not self.api_key:
            raise ConfigurationError(
                ConfigurationProblem.MISSING_CREDENTIAL,
                "PlantNet API key is not configured",
            )
        try:
            payload = await self.client.identify(image, self.api_key)
        except UpstreamError as exc:
            _logger.warning(
                "PlantNet call failed: failure=%s status=%s message=%s",
                exc.failure,
                exc.status_code,
                exc.message,
            )
            return _placeholder_outcome(image, exc.failure)

        try:
            result = normalize_match(payload)
        except ValidationError:
            _logger.exception("PlantNet returned an unexpected payload")
            return _placeholder_outcome(image, UpstreamFailure.MALFORMED)
        if result is None:
            return _placeholder_outcome(image, UpstreamFailure.EMPTY_RESULT)
        return IdentificationOutcome(result=result, source=ResultSource.UPSTREAM)


def normalize_match(payload: dict[str, object]) -> IdentificationResult | None:
    """Map the top-ranked upstream match to a result, or None when empty."""
    matches = payload.get("results") if isinstance(payload, dict) else None
    _logger.info(
        "PlantNet response: results=%s",
        len(matches) if isinstance(matches, list) else 0,
    )
    if not isinstance(matches, list) or not matches:
        return None
    candidate = IdentificationCandidate.model_validate(matches[0])
    species = candidate.species
    image_url = ""
    if candidate.images:
        image_url = candidate.images[0].url.m or ""
    return IdentificationResult(
        name=(
            species.common_names[0]
            if species.common_names
            else species.scientific_name
        ),
        scientific_name=species.scientific_name,
        description=species.description or DESCRIPTION_UNAVAILABLE,
        benefits=ADVISORY_BENEFITS,
        warnings=ADVISORY_WARNINGS,
        confidence=candidate.score,
        image_url=image_url,
    )


def _placeholder_outcome(
    image: UploadedImage, failure: UpstreamFailure
) -> IdentificationOutcome:
    _logger.info("Serving placeholder data: reason=%s size=%s", failure, image.size)
    return IdentificationOutcome(
        result=select_placeholder(image.size),
        source=ResultSource.PLACEHOLDER,
        note=PLACEHOLDER_NOTE,
    )
