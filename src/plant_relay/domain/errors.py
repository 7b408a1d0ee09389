"""Error taxonomy for the identification pipeline."""

from enum import StrEnum


class UploadRejection(StrEnum):
    """Reasons an uploaded file is refused before any upstream call."""

    MISSING_FILE = "missing_file"
    UNSUPPORTED_TYPE = "unsupported_type"
    TOO_LARGE = "too_large"


class ConfigurationProblem(StrEnum):
    """Local configuration problems that block the pipeline."""

    MISSING_CREDENTIAL = "missing_credential"


class UpstreamFailure(StrEnum):
    """Ways the upstream identification call can fail."""

    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NETWORK = "network"
    EMPTY_RESULT = "empty_result"
    MALFORMED = "malformed"


class PlantRelayError(Exception):
    """Base class for errors raised by the relay."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UploadValidationError(PlantRelayError):
    """Raised when an upload is missing, oversized or not an image."""

    def __init__(self, reason: UploadRejection, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class ConfigurationError(PlantRelayError):
    """Raised when required process configuration is absent."""

    def __init__(self, reason: ConfigurationProblem, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class UpstreamError(PlantRelayError):
    """Raised by the upstream client when the identification call fails."""

    def __init__(
        self,
        failure: UpstreamFailure,
        message: str,
        *,
        status_code: int | None = None,
        status_text: str | None = None,
        body: object | None = None,
    ) -> None:
        super().__init__(message)
        self.failure = failure
        self.status_code = status_code
        self.status_text = status_text
        self.body = body

    def details(self) -> dict[str, object] | None:
        """Return upstream response details when a response was received."""
        if self.status_code is None:
            return None
        return {
            "status": self.status_code,
            "statusText": self.status_text,
            "data": self.body,
        }
