"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from plant_relay.config import Settings
from plant_relay.containers import AppContainer
from plant_relay.domain.errors import UpstreamError
from plant_relay.domain.identification import ProbeResult, UploadedImage
from plant_relay.services.identification import IdentificationService, PlantNetClient

# 1x1 PNG the diagnostics probe also sends.
TEST_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJ"
    "AAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def plantnet_payload(
    *,
    score: float = 0.9132,
    scientific_name: str = "Ficus lyrata",
    common_names: list[str] | None = None,
    description: str | None = None,
    image_url: str | None = "https://bs.plantnet.org/image/m/abc123",
) -> dict[str, object]:
    """Build a Pl@ntNet response with a single ranked match."""
    species: dict[str, object] = {
        "scientificNameWithoutAuthor": scientific_name,
        "scientificNameAuthorship": "Warb.",
        "commonNames": ["Fiddle-leaf fig"] if common_names is None else common_names,
    }
    if description is not None:
        species["description"] = description
    match: dict[str, object] = {"score": score, "species": species, "images": []}
    if image_url is not None:
        match["images"] = [
            {"url": {"o": image_url + "-o", "m": image_url, "s": image_url + "-s"}}
        ]
    return {"query": {"project": "all"}, "results": [match], "bestMatch": "Ficus"}


@dataclass
class FakePlantNetClient(PlantNetClient):
    """Fake Pl@ntNet client that records calls."""

    payload: dict[str, object] = field(default_factory=plantnet_payload)
    error: UpstreamError | None = None
    probe_result: ProbeResult = field(
        default_factory=lambda: ProbeResult(status_code=200, data={"results": []})
    )
    calls: list[tuple[UploadedImage, str]] = field(default_factory=list)
    probes: list[str] = field(default_factory=list)

    async def identify(self, image: UploadedImage, api_key: str) -> dict[str, object]:
        self.calls.append((image, api_key))
        if self.error is not None:
            raise self.error
        return self.payload

    async def probe(self, api_key: str) -> ProbeResult:
        self.probes.append(api_key)
        if self.error is not None:
            raise self.error
        return self.probe_result


def make_container(settings: Settings, client: FakePlantNetClient) -> AppContainer:
    """Wire a container around a fake upstream client."""

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        plantnet_client=client,
        identification_service=IdentificationService(
            client=client, api_key=settings.plantnet_api_key
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(plantnet_api_key="2b10abcdefghijklmnop")


@pytest.fixture
def plantnet_client() -> FakePlantNetClient:
    return FakePlantNetClient()


@pytest.fixture
def container(settings: Settings, plantnet_client: FakePlantNetClient) -> AppContainer:
    return make_container(settings, plantnet_client)
