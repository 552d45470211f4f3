"""Expose OpenAI-specific chat integration and tool registry implementations."""

from .core import GenericOpenAI
from .registry import OpenAIToolRegistry
from .adapter import OpenAIToolAdapter

__all__ = ["GenericOpenAI", "OpenAIToolRegistry", "OpenAIToolAdapter"]
