"""
Custom exception classes for the superface agent.

This module defines a hierarchy of exceptions used to handle errors during
configuration, remote tool discovery, registration, validation, and execution.
"""


class LLMToolError(Exception):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(LLMToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolExecutionError(LLMToolError):
    """Raised when a tool fails during execution."""

    pass


class ToolValidationError(LLMToolError):
    """Raised when tool parameters or definition are invalid."""

    pass


class HubError(LLMToolError):
    """Base exception for failures talking to the Superface hub."""

    pass


class CatalogFetchError(HubError):
    """Raised when the tool catalog cannot be fetched or parsed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(Exception):
    """Raised when required settings are missing or invalid."""

    pass
