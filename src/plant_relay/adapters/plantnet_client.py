"""Pl@ntNet identification API client."""

import base64
from dataclasses import dataclass

import httpx

from plant_relay.domain.errors import UpstreamError, UpstreamFailure
from plant_relay.domain.identification import ProbeResult, UploadedImage
from plant_relay.services.identification import PlantNetClient

PLANTNET_API_URL = "https://my-api.plantnet.org/v2/identify"
IMAGE_FIELD = "images"
ORGANS = "auto"
MODIFIERS = "crops-simple,similar_images,plant_net,plant_net_detailed"
IDENTIFY_TIMEOUT_SECONDS = 30
PROBE_TIMEOUT_SECONDS = 15

# 1x1 PNG sent by the connectivity probe.
TEST_IMAGE_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="  # noqa: E501
)


@dataclass
class HttpxPlantNetClient(PlantNetClient):
    """HTTPX-backed Pl@ntNet client."""

    http_client: httpx.AsyncClient
    api_url: str = PLANTNET_API_URL

    @classmethod
    def create(cls) -> "HttpxPlantNetClient":
        """Create a Pl@ntNet client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(follow_redirects=True))

    async def identify(self, image: UploadedImage, api_key: str) -> dict[str, object]:
        """Submit an image for identification."""
        response = await self._post(
            files={IMAGE_FIELD: (image.filename, image.content, image.content_type)},
            data={"organs": ORGANS, "modifiers": MODIFIERS},
            api_key=api_key,
            timeout=IDENTIFY_TIMEOUT_SECONDS,
        )
        payload = _decode_json(response)
        if not isinstance(payload, dict):
            raise UpstreamError(
                UpstreamFailure.MALFORMED, "PlantNet returned a non-object payload"
            )
        return payload

    async def probe(self, api_key: str) -> ProbeResult:
        """Send the built-in test image and report the upstream reply."""
        response = await self._post(
            files={IMAGE_FIELD: ("test.jpg", TEST_IMAGE_BYTES, "image/jpeg")},
            data={"organs": ORGANS},
            api_key=api_key,
            timeout=PROBE_TIMEOUT_SECONDS,
        )
        return ProbeResult(
            status_code=response.status_code, data=_decode_json(response)
        )

    async def _post(
        self,
        *,
        files: dict[str, tuple[str, bytes, str]],
        data: dict[str, str],
        api_key: str,
        timeout: float,
    ) -> httpx.Response:
        try:
            response = await self.http_client.post(
                self.api_url,
                files=files,
                data=data,
                headers={"Authorization": f"Bearer {api_key}"},
                timeout=timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise UpstreamError(
                UpstreamFailure.TIMEOUT, f"PlantNet request timed out: {exc}"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                UpstreamFailure.HTTP_STATUS,
                f"PlantNet responded with status {exc.response.status_code}",
                status_code=exc.response.status_code,
                status_text=exc.response.reason_phrase,
                body=_body_or_text(exc.response),
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(
                UpstreamFailure.NETWORK, f"PlantNet request failed: {exc}"
            ) from exc
        return response

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _decode_json(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamError(
            UpstreamFailure.MALFORMED,
            "PlantNet returned a body that is not JSON",
            status_code=response.status_code,
            status_text=response.reason_phrase,
            body=response.text,
        ) from exc


def _body_or_text(response: httpx.Response) -> object:
    """Return the decoded JSON error body, falling back to raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text
