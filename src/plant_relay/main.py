"""Command-line entrypoint that serves the relay with uvicorn."""

import uvicorn

from plant_relay.api.app import create_app
from plant_relay.config import Settings
from plant_relay.containers import build_container


def main() -> None:
    """Run the HTTP server on the configured host and port."""
    settings = Settings()
    app = create_app(build_container(settings))
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
