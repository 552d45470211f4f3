"""Collect concrete LLM provider implementations and their provider-specific tool registries."""

from .openai_api import GenericOpenAI, OpenAIToolRegistry

__all__ = [
    "GenericOpenAI",
    "OpenAIToolRegistry",
]
