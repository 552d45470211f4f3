"""Superface Agent - OpenAI tool calling with tools hosted on the Superface hub."""

from .config import AgentConfig
from .llm_core import (
    GenericLLM,
    ChatResult,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    ToolRegistry,
    ToolDefinition,
    ActionOk,
    ActionErr,
    ActionErrorKind,
    CatalogFetchError,
    ConfigurationError,
)
from .llm_impl.openai_api import GenericOpenAI, OpenAIToolRegistry
from .hub import SuperfaceHubClient
from .agent import DEFAULT_PROMPT, run_agent

__all__ = [
    "AgentConfig",
    "GenericLLM",
    "ChatResult",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ToolRegistry",
    "ToolDefinition",
    "ActionOk",
    "ActionErr",
    "ActionErrorKind",
    "CatalogFetchError",
    "ConfigurationError",
    "GenericOpenAI",
    "OpenAIToolRegistry",
    "SuperfaceHubClient",
    "DEFAULT_PROMPT",
    "run_agent",
]
