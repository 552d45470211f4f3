from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion, ChatCompletionToolParam
from typing import List, Optional, Any, Dict, Sequence, Iterable, Set, Callable, Awaitable, cast
import json
from superface_agent.llm_core.tools import ActionOk, ToolCallRequest, ToolCallResult
from superface_agent.llm_core.tools.adapter import ToolAdapter


class OpenAIToolAdapter(ToolAdapter):
    """Adapter for OpenAI tool handling.

    Holds the running message list of one turn: the prompt, the assistant message
    with its tool calls, and one tool message per call.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        messages: List[Dict[str, Any]],
        tools: Optional[Iterable[ChatCompletionToolParam]],
        temperature: float,
        max_tokens: int,
        retry: Optional[Callable[..., Awaitable[ChatCompletion]]] = None,
    ):
        """Initialize the OpenAI tool adapter.

        Args:
            client: The OpenAI client instance.
            model: The name of the model to use.
            messages: The conversation history, mutated in place.
            tools: Tool definitions bound to the model, or None when no tools are bound.
            temperature: Sampling temperature.
            max_tokens: Maximum number of tokens to generate.
            retry: Wraps each completion request, e.g. with backoff on API errors.
        """
        self.client = client
        self.model = model
        self.messages = messages
        self.tools = tools
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.retry = retry
        self.failed_call_ids: Set[str] = set()

    def get_tool_calls(self, response: ChatCompletion) -> Sequence[ToolCallRequest]:
        """Extract function tool calls from an OpenAI chat completion response."""
        if not response.choices:
            return []

        tool_calls = response.choices[0].message.tool_calls
        if not tool_calls:
            return []

        return [
            ToolCallRequest(
                name=tool_call.function.name,
                arguments=tool_call.function.arguments,
                call_id=tool_call.id,
            )
            for tool_call in tool_calls
            if tool_call.type == "function"
        ]

    def record_assistant_message(self, response: ChatCompletion) -> None:
        """Append the assistant's message (with its tool calls) to the history."""
        self.messages.append(response.choices[0].message.model_dump(exclude_none=True))

    def build_tool_response_message(self, result: ToolCallResult) -> Dict[str, Any]:
        """Build a tool response message for the OpenAI API.

        Successful actions pass their payload through untouched. Failed actions are
        wrapped in an explicit error envelope so the model can tell them apart, and
        their call ids are collected in ``failed_call_ids``.

        Args:
            result: The tagged result of a tool call.

        Returns:
            A dictionary representing the tool response message.
        """
        outcome = result.outcome
        if isinstance(outcome, ActionOk):
            content = outcome.payload
        else:
            if result.call_id:
                self.failed_call_ids.add(result.call_id)
            content = json.dumps(
                {
                    "error": outcome.kind.value,
                    "status_code": outcome.status_code,
                    "detail": outcome.detail,
                }
            )
        return {
            "role": "tool",
            "tool_call_id": result.call_id,
            "name": result.name,
            "content": content,
        }

    async def send_tool_responses(self, tool_messages: Sequence[Dict[str, Any]]) -> ChatCompletion:
        """Send tool responses back to the OpenAI API and get a new completion."""
        self.messages.extend(tool_messages)
        return await self.create_completion()

    async def create_completion(self) -> ChatCompletion:
        """Invoke the model with the current messages and bound tools.

        The ``tools`` argument is left out entirely when nothing is bound, since the
        API rejects an empty list.
        """
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": cast(Iterable[Any], self.messages),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if self.tools:
            kwargs["tools"] = self.tools
        if self.retry is not None:
            return await self.retry(self.client.chat.completions.create, **kwargs)
        return await self.client.chat.completions.create(**kwargs)
