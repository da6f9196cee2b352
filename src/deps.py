# ABOUTME: Dependency container for the weather plugin using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient used for the single upstream request of each invocation.

import httpx
from pydantic import BaseModel, ConfigDict


class WeatherDeps(BaseModel):
    """Dependencies shared by the plugin adapter and the agent toolset."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient


def create_http_client() -> httpx.AsyncClient:
    """Create an httpx client with the library's default timeout and no retries."""
    return httpx.AsyncClient(headers={"Accept": "application/json"})
