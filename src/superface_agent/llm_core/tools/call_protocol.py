"""Data models for tool execution.

Remote actions never raise into the conversation: every outcome is an
``ActionResult``, either ``ActionOk`` or ``ActionErr``, and the assembler decides
how each is shown to the model.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class ActionErrorKind(str, Enum):
    """Failure categories for a tool call."""

    HTTP_STATUS = "http_status"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    UNKNOWN_TOOL = "unknown_tool"
    INVALID_ARGUMENTS = "invalid_arguments"
    EXECUTION = "execution"


@dataclass(frozen=True)
class ActionOk:
    """Successful remote action with its serialized payload."""

    payload: str

    @property
    def ok(self) -> bool:
        return True

    @property
    def text(self) -> str:
        return self.payload


@dataclass(frozen=True)
class ActionErr:
    """Failed remote action.

    ``detail`` holds the remote error body when the hub answered, otherwise a
    description of the local failure.
    """

    kind: ActionErrorKind
    detail: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def text(self) -> str:
        return self.detail


ActionResult = Union[ActionOk, ActionErr]


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a normalized tool call request from an LLM response."""

    name: str
    arguments: Any
    call_id: Optional[str] = None


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of executing a tool call, correlated by ``call_id``."""

    name: str
    outcome: ActionResult
    call_id: Optional[str] = None
