# ABOUTME: Executable entry point: serves the weather plugin to the host over stdin/stdout.
# ABOUTME: Logging goes to stderr because stdout is the protocol channel.

import asyncio
import logging
import os
import sys

from src.deps import WeatherDeps, create_http_client
from src.plugin import WeatherPlugin
from src.protocol import serve_plugin

LOG_LEVEL_ENV = "WEATHER_PLUGIN_LOG_LEVEL"


async def run() -> None:
    async with create_http_client() as client:
        await serve_plugin(WeatherPlugin(WeatherDeps(http_client=client)))


def main() -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run())


if __name__ == "__main__":
    main()
