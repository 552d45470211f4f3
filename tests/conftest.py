import json
from typing import Any, Callable, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from superface_agent import AgentConfig

HUB_URL = "https://hub.test/api/hub"

WEATHER_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "getWeather",
        "description": "Get the current weather in a city.",
        "parameters": {
            "type": "object",
            "properties": {"city": {"type": "string", "description": "Name of the city"}},
            "required": ["city"],
        },
    },
}

ToolCallSpec = Tuple[str, str, Dict[str, Any]]


def make_completion(content: Optional[str] = None, tool_calls: Optional[List[ToolCallSpec]] = None) -> ChatCompletion:
    """Build a real ChatCompletion; ``tool_calls`` is a list of (id, name, arguments)."""
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    finish_reason = "stop"
    if tool_calls:
        message["tool_calls"] = [
            {"id": call_id, "type": "function", "function": {"name": name, "arguments": json.dumps(args)}}
            for call_id, name, args in tool_calls
        ]
        finish_reason = "tool_calls"
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 0,
            "model": "gpt-4o",
            "choices": [{"index": 0, "finish_reason": finish_reason, "message": message, "logprobs": None}],
        }
    )


class FakeHub:
    """In-memory Superface hub served through ``httpx.MockTransport``."""

    def __init__(self, catalog: Any = None, catalog_status: int = 200) -> None:
        self.catalog = [WEATHER_TOOL] if catalog is None else catalog
        self.catalog_status = catalog_status
        self.requests: List[httpx.Request] = []
        self.perform_handler: Callable[[str, Dict[str, Any]], httpx.Response] = self.weather

    @staticmethod
    def weather(tool_name: str, args: Dict[str, Any]) -> httpx.Response:
        return httpx.Response(200, json={"city": args.get("city"), "temperature": 21, "description": "sunny"})

    @property
    def perform_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if "/perform/" in r.url.path]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path.endswith("/fd"):
            return httpx.Response(self.catalog_status, json=self.catalog)
        if request.method == "POST" and "/perform/" in path:
            tool_name = path.rsplit("/", 1)[-1]
            return self.perform_handler(tool_name, json.loads(request.content or b"{}"))
        return httpx.Response(404, json={"error": "not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def config() -> AgentConfig:
    return AgentConfig(hub_base_url=HUB_URL, hub_auth_token="hub-token", openai_api_key="sk-test")


@pytest.fixture
def fake_hub() -> FakeHub:
    return FakeHub()


@pytest.fixture
def mock_openai_client() -> Any:
    client = MagicMock(spec=AsyncOpenAI)
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client
