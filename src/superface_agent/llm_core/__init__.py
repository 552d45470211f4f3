"""Public exports for the core LLM abstractions and utilities."""

from .base import GenericLLM, ChatResult
from .exceptions import (
    LLMToolError,
    ToolRegistrationError,
    ToolExecutionError,
    ToolValidationError,
    HubError,
    CatalogFetchError,
    ConfigurationError,
)
from .logger import get_logger, setup_logging
from .messages import (
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
)
from .tools import (
    ToolDefinition,
    ActionErr,
    ActionErrorKind,
    ActionOk,
    ActionResult,
    ToolCallRequest,
    ToolCallResult,
    ToolRegistry,
    ToolAdapter,
    ToolExecutionLoop,
    SchemaValidator,
)

__all__ = [
    "GenericLLM",
    "ChatResult",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolExecutionError",
    "ToolValidationError",
    "HubError",
    "CatalogFetchError",
    "ConfigurationError",
    "get_logger",
    "setup_logging",
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ToolDefinition",
    "ActionErr",
    "ActionErrorKind",
    "ActionOk",
    "ActionResult",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolRegistry",
    "ToolAdapter",
    "ToolExecutionLoop",
    "SchemaValidator",
]
