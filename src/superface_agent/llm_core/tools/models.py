from typing import Optional, Any, Callable
from pydantic import BaseModel


class ToolDefinition(BaseModel):
    """
    Represents the definition of a tool that can be bound to an LLM.

    Attributes:
        name: The unique name of the tool, as published by the hub.
        description: A brief description of what the tool does.
        func: The async callable performing the tool's action. For hub tools this is a
              proxy that forwards the call to the remote ``perform`` endpoint.
        parameters: JSON schema describing the accepted arguments.
    """

    name: str
    description: str
    func: Callable
    parameters: Optional[Any] = None
