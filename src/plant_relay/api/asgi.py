"""ASGI entrypoint for the plant relay API."""

from plant_relay.api.app import create_app
from plant_relay.containers import build_container

app = create_app(build_container())
