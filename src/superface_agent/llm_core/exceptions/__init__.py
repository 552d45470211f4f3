"""Export the exception hierarchy used across configuration, hub and tool execution paths."""

from .exceptions import (
    LLMToolError,
    ToolRegistrationError,
    ToolExecutionError,
    ToolValidationError,
    HubError,
    CatalogFetchError,
    ConfigurationError,
)

__all__ = [
    "LLMToolError",
    "ToolRegistrationError",
    "ToolExecutionError",
    "ToolValidationError",
    "HubError",
    "CatalogFetchError",
    "ConfigurationError",
]
