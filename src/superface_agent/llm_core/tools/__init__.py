from .models import ToolDefinition
from .call_protocol import (
    ActionErr,
    ActionErrorKind,
    ActionOk,
    ActionResult,
    ToolCallRequest,
    ToolCallResult,
)
from .registry import ToolRegistry
from .adapter import ToolAdapter
from .tool_loop import ToolExecutionLoop
from .schema_validator import SchemaValidator

__all__ = [
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
