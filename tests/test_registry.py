import pytest

from superface_agent import OpenAIToolRegistry, ToolDefinition
from superface_agent.llm_core import ToolRegistrationError, ToolValidationError


async def noop(**kwargs: object) -> str:
    return "ok"


def test_register_by_name_builds_definition() -> None:
    registry = OpenAIToolRegistry()
    registry.register("getWeather", "Get weather", noop, {"type": "object", "properties": {"city": {"type": "string"}}})

    tool = registry.tools["getWeather"]
    assert tool.description == "Get weather"
    assert tool.func is noop
    assert tool.parameters == {"type": "object", "properties": {"city": {"type": "string"}}}


def test_register_without_schema_defaults_to_empty_object() -> None:
    registry = OpenAIToolRegistry()
    registry.register("ping", "Ping", noop)

    assert registry.tools["ping"].parameters == {"type": "object", "properties": {}}


def test_register_requires_func_for_names() -> None:
    registry = OpenAIToolRegistry()
    with pytest.raises(ToolRegistrationError):
        registry.register("ping", "Ping")


def test_register_rejects_duplicates() -> None:
    registry = OpenAIToolRegistry()
    registry.register(ToolDefinition(name="ping", description="Ping", func=noop))

    with pytest.raises(ToolRegistrationError):
        registry.register("ping", "Ping again", noop)


def test_register_rejects_non_object_schema() -> None:
    registry = OpenAIToolRegistry()

    with pytest.raises(ToolValidationError):
        registry.register("getWeather", "Get weather", noop, [{"name": "city", "type": "string"}])
    assert len(registry) == 0


def test_tool_object_uses_openai_function_format() -> None:
    registry = OpenAIToolRegistry()
    registry.register("getWeather", "Get weather", noop, {"type": "object", "properties": {}})
    registry.register("sendEmail", "Send email", noop)

    assert registry.tool_object == [
        {
            "type": "function",
            "function": {
                "name": "getWeather",
                "description": "Get weather",
                "parameters": {"type": "object", "properties": {}},
            },
        },
        {
            "type": "function",
            "function": {
                "name": "sendEmail",
                "description": "Send email",
                "parameters": {"type": "object", "properties": {}},
            },
        },
    ]
    assert registry.names == ["getWeather", "sendEmail"]
    assert set(registry.implementations) == {"getWeather", "sendEmail"}


def test_empty_registry_has_no_tools() -> None:
    assert OpenAIToolRegistry().tool_object == []
