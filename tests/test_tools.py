# ABOUTME: Tests for the pydantic-ai toolset that exposes the weather filter to agents.
# ABOUTME: Calls the tool directly with a stand-in run context, and through an Agent driven by FunctionModel.

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from pydantic_ai import Agent, ModelRetry
from pydantic_ai.messages import ModelResponse, TextPart, ToolCallPart, ToolReturnPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from src.config import API_KEY_ENV
from src.deps import WeatherDeps
from src.errors import ConfigError
from src.tools import get_weather, weather_toolset


def _ctx(body: dict, status_code: int = 200) -> SimpleNamespace:
    """Create a minimal run context whose deps hold a mock HTTP client."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = httpx.Response(
        status_code, json=body, request=httpx.Request("GET", "https://test")
    )
    return SimpleNamespace(deps=WeatherDeps(http_client=mock_client))


@pytest.fixture(autouse=True)
def _env_key(monkeypatch, tmp_path):
    monkeypatch.setenv("WEATHER_PLUGIN_CONFIG", str(tmp_path / "missing.toml"))
    monkeypatch.setenv(API_KEY_ENV, "env-key")


class TestToolRegistration:
    def test_toolset_has_weather_tool(self):
        """The toolset registers exactly the get_weather tool."""
        assert set(weather_toolset.tools) == {"get_weather"}

    @pytest.mark.asyncio
    async def test_agent_calls_tool(self, current_payload):
        """An agent built with the toolset can call get_weather and receive the record.

        Implementation: A FunctionModel requests one get_weather call, then answers with text.
        Passing implies: The toolset attaches to an Agent and its deps reach the pipeline.
        """

        def call_weather_once(messages, info: AgentInfo) -> ModelResponse:
            if len(messages) == 1:
                return ModelResponse(parts=[ToolCallPart("get_weather", {"city": "Huntington"})])
            return ModelResponse(parts=[TextPart("done")])

        agent = Agent(FunctionModel(call_weather_once), deps_type=WeatherDeps, toolsets=[weather_toolset])
        result = await agent.run("What is the weather in Huntington?", deps=_ctx(current_payload).deps)

        returns = [
            part for message in result.all_messages() for part in message.parts if isinstance(part, ToolReturnPart)
        ]
        assert len(returns) == 1
        assert returns[0].content["condition_label"] == "Clear"


class TestGetWeatherTool:
    @pytest.mark.asyncio
    async def test_current(self, current_payload):
        """The tool returns the normalized current record using the environment key."""
        ctx = _ctx(current_payload)
        result = await get_weather(ctx, city="Huntington")
        assert result["condition_label"] == "Clear"
        assert ctx.deps.http_client.get.call_args.args[0].endswith("appid=env-key")

    @pytest.mark.asyncio
    async def test_forecast(self, forecast_payload):
        """info_type=forecast returns the list of records."""
        result = await get_weather(_ctx(forecast_payload), info_type="forecast")
        assert len(result) == 2

    @pytest.mark.asyncio
    async def test_upstream_failure_asks_model_to_retry(self):
        """Transport failures are raised as ModelRetry so the agent can adjust the city."""
        with pytest.raises(ModelRetry, match="city not found"):
            await get_weather(_ctx({"cod": "404", "message": "city not found"}, 404), city="Atlantis")

    @pytest.mark.asyncio
    async def test_invalid_type_asks_model_to_retry(self):
        """A bad info_type is something the model can correct."""
        with pytest.raises(ModelRetry, match="expected 'current' or 'forecast'"):
            await get_weather(_ctx({}), info_type="hourly")

    @pytest.mark.asyncio
    async def test_missing_key_is_not_retried(self, monkeypatch):
        """A missing key propagates as ConfigError."""
        monkeypatch.delenv(API_KEY_ENV)
        ctx = _ctx({})
        with pytest.raises(ConfigError):
            await get_weather(ctx)
        assert ctx.deps.http_client.get.call_count == 0
