"""Response models for the HTTP API."""

from pydantic import BaseModel

from plant_relay.domain.identification import (
    IdentificationOutcome,
    IdentificationResult,
    ResultSource,
)


class IdentifyResponse(BaseModel):
    """Successful identification payload."""

    success: bool = True
    result: IdentificationResult
    source: ResultSource
    note: str | None = None

    @classmethod
    def from_outcome(cls, outcome: IdentificationOutcome) -> "IdentifyResponse":
        return cls(result=outcome.result, source=outcome.source, note=outcome.note)


class ErrorResponse(BaseModel):
    """Error payload shared by all failing endpoints."""

    success: bool = False
    error: str
