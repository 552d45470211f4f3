"""Tool registry abstraction."""

from abc import abstractmethod, ABC
from typing import Callable, Dict, Any, List, Union, Optional

from .models import ToolDefinition
from .schema_validator import SchemaValidator
from ..exceptions import ToolRegistrationError
from ..logger import get_logger

logger = get_logger(__name__)


class ToolRegistry(ABC):
    """
    A central registry of the tools bound to an LLM.

    This class holds the function declarations to be sent to the LLM and
    maps function names to the callables that perform them.
    """

    def __init__(self) -> None:
        """Initialize the ToolRegistry."""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition],
        description: Optional[str] = None,
        func: Optional[Callable] = None,
        parameters: Optional[Any] = None,
    ) -> None:
        """
        Register a new tool for the LLM.

        Either pass a complete `ToolDefinition`, or the name together with the
        description, the callable and the JSON schema of its parameters.

        Args:
            name_or_tool: Either a `ToolDefinition` object or the name of the tool.
            description: A brief description of what the tool does.
            func: The callable implementing the tool. Required if `name_or_tool` is a string.
            parameters: JSON schema of the tool's input. Resolved and sanitized before storing.

        Raises:
            ToolRegistrationError: If arguments are missing or the tool already exists.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        else:
            if not name_or_tool:
                raise ToolRegistrationError("Tool name must not be empty.")
            if func is None:
                raise ToolRegistrationError("If passing name as string, func is required.")
            tool = ToolDefinition(
                name=name_or_tool,
                description=description or f"Tool {name_or_tool}.",
                func=func,
                parameters=SchemaValidator.prepare(parameters),
            )

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.debug(f"Successfully registered tool: '{tool.name}'")

    @property
    def names(self) -> List[str]:
        """Names of the registered tools, in registration order."""
        return list(self.tools)

    def __len__(self) -> int:
        return len(self.tools)

    @property
    @abstractmethod
    def tool_object(self) -> Any:
        """Constructs the final tool list specific to the LLM provider.

        Returns:
            The provider-specific tool representation.
        """
        pass

    @property
    def implementations(self) -> Dict[str, Callable]:
        """Returns a dictionary mapping function names to their callables."""
        return {name: tool.func for name, tool in self.tools.items()}
