"""Expose provider-agnostic message model types shared by chat implementations."""

from .models import BaseMessage, UserMessage, AssistantMessage, SystemMessage, ToolMessage

__all__ = [
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
]
