"""Tests for container wiring."""

import asyncio

from plant_relay.adapters.plantnet_client import HttpxPlantNetClient
from plant_relay.containers import build_container


def test_build_container_wires_plantnet_client(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.plantnet_client, HttpxPlantNetClient)
    assert container.identification_service.api_key == settings.plantnet_api_key
    asyncio.run(container.close_resources())
