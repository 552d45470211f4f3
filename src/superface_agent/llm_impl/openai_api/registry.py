from typing import List

from openai.types.chat import ChatCompletionToolParam

from superface_agent.llm_core.tools import ToolRegistry


class OpenAIToolRegistry(ToolRegistry):
    """Registry that renders its tools in the OpenAI ``tools`` request format."""

    @property
    def tool_object(self) -> List[ChatCompletionToolParam]:
        """Build the OpenAI function-tool list for every registered tool.

        Returns:
            A list of ``{"type": "function", "function": {...}}`` entries, empty when no tools are bound.
        """
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.parameters or {"type": "object", "properties": {}},
                },
            }
            for tool in self.tools.values()
        ]
