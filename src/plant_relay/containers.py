"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from plant_relay.adapters.plantnet_client import HttpxPlantNetClient
from plant_relay.config import Settings
from plant_relay.services.identification import IdentificationService, PlantNetClient


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    plantnet_client: PlantNetClient
    identification_service: IdentificationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    plantnet_client = HttpxPlantNetClient.create()
    identification_service = IdentificationService(
        client=plantnet_client,
        api_key=resolved_settings.plantnet_api_key,
    )

    async def close_resources() -> None:
        await plantnet_client.close()

    return AppContainer(
        settings=resolved_settings,
        plantnet_client=plantnet_client,
        identification_service=identification_service,
        close_resources=close_resources,
    )
