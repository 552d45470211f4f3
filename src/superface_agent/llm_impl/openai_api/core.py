from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion
from typing import List, Optional, Any, Dict, AbstractSet
import logging
from superface_agent.llm_core import GenericLLM, ChatResult, ToolExecutionLoop
from superface_agent.llm_core.messages import (
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
)
from .adapter import OpenAIToolAdapter
from .registry import OpenAIToolRegistry

logger = logging.getLogger(__name__)


class GenericOpenAI(GenericLLM[ChatCompletion]):
    """
    Implementation of GenericLLM for OpenAI's chat completion models.

    The model is bound to the tools of ``registry``. A turn sends the prompt, lets the
    tool loop execute any requested tool calls, and re-invokes the model with the
    prompt, its first response and the tool results.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        sys_instruction: Optional[str] = None,
        registry: Optional[OpenAIToolRegistry] = None,
        temp: float = 1.0,
        max_tokens: int = 128,
        max_function_loops: int = 1,
        tool_timeout: float = 180.0,
        max_retries: int = 0,
        base_retry_delay: float = 1.0,
    ):
        """
        Initializes the GenericOpenAI LLM wrapper.

        Args:
            client: The initialized AsyncOpenAI client.
            model_name: The identifier for the OpenAI model to use (e.g., 'gpt-4o').
            sys_instruction: Optional system-level instruction prepended to a fresh conversation.
            registry: Tools bound to the model. An empty registry is created when omitted.
            temp: The temperature for text generation.
            max_tokens: The maximum number of tokens to generate per response.
            max_function_loops: How many model -> tools -> model rounds a turn may take.
            tool_timeout: The maximum time in seconds to wait for a tool execution.
            max_retries: Retries of each completion request on API errors.
            base_retry_delay: Initial backoff delay in seconds.
        """
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.model: str = model_name
        self.registry: OpenAIToolRegistry = registry if registry is not None else OpenAIToolRegistry()
        self.max_function_loops = max_function_loops
        self.sys_instruction = sys_instruction
        self.temperature = temp
        self.max_tokens = max_tokens
        self.tool_timeout = tool_timeout

        self.client: AsyncOpenAI = client

        self._tool_loop = ToolExecutionLoop(
            registry=self.registry,
            max_function_loops=self.max_function_loops,
            tool_timeout=self.tool_timeout,
            argument_error_formatter=self._format_argument_error,
        )

    @property
    def bound_tools(self) -> List[str]:
        """Names of the tools sent with every request."""
        return self.registry.names

    async def _chat_impl(self, history: List[BaseMessage], user_prompt: str) -> ChatResult[ChatCompletion]:
        """
        Processes a single turn: prompt, optional tool round(s), final answer.

        Args:
            history: A list of `BaseMessage` objects representing the conversation so far.
            user_prompt: The current message from the user.

        Returns:
            ChatResult[ChatCompletion]: The final answer, the updated history
            (prompt, assistant tool-call message, tool messages, final answer) and
            the raw final ChatCompletion.
        """
        messages = self._convert_history(history)
        if not messages and self.sys_instruction:
            messages.append({"role": "system", "content": self.sys_instruction})
        messages.append({"role": "user", "content": user_prompt})

        tools = self.registry.tool_object or None
        logger.debug("Invoking model '%s' with %d bound tool(s).", self.model, len(self.registry))

        adapter = OpenAIToolAdapter(
            client=self.client,
            model=self.model,
            messages=messages,
            tools=tools,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            retry=self._execute_with_retry,
        )

        response = await adapter.create_completion()
        final_response: ChatCompletion = await self._tool_loop.run(initial_response=response, adapter=adapter)

        # The tool loop does not record the final response, so it is added here.
        if final_response.choices:
            last_msg = final_response.choices[0].message.model_dump(exclude_none=True)
            if not messages or messages[-1] != last_msg:
                messages.append(last_msg)

        failed_call_ids = adapter.failed_call_ids | {
            msg.tool_call_id for msg in history if isinstance(msg, ToolMessage) and msg.is_error
        }
        return self._build_response(final_response, messages, failed_call_ids)

    @staticmethod
    def _convert_history(history: List[BaseMessage]) -> List[Dict[str, Any]]:
        """
        Converts generic BaseMessage history to OpenAI specific dictionary history.

        Args:
            history: List of BaseMessage objects.

        Returns:
            List of OpenAI message dictionaries.
        """
        openai_history: List[Dict[str, Any]] = []
        for msg in history:
            if isinstance(msg, UserMessage):
                openai_history.append({"role": "user", "content": msg.content})
            elif isinstance(msg, AssistantMessage):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content}
                if msg.tool_calls:
                    openai_msg["tool_calls"] = msg.tool_calls
                openai_history.append(openai_msg)
            elif isinstance(msg, SystemMessage):
                openai_history.append({"role": "system", "content": msg.content})
            elif isinstance(msg, ToolMessage):
                openai_history.append(
                    {"role": "tool", "content": msg.content, "tool_call_id": msg.tool_call_id, "name": msg.name}
                )
        return openai_history

    @staticmethod
    def _build_response(
        response: ChatCompletion,
        history: List[Dict[str, Any]],
        failed_call_ids: AbstractSet[str] = frozenset(),
    ) -> ChatResult[ChatCompletion]:
        """
        Constructs the final ChatResult object from the raw API response and chat history.
        """
        if response.choices:
            message_content = response.choices[0].message.content or ""
        else:
            message_content = ""

        generic_history = GenericOpenAI._convert_to_generic_history(history, failed_call_ids)

        return ChatResult(content=message_content, history=generic_history, raw=response)

    @staticmethod
    def _convert_to_generic_history(
        history: List[Dict[str, Any]], failed_call_ids: AbstractSet[str] = frozenset()
    ) -> List[BaseMessage]:
        """
        Converts OpenAI specific dictionary history to generic BaseMessage history.

        Args:
            history: List of OpenAI message dictionaries.
            failed_call_ids: Ids of tool calls whose action failed.

        Returns:
            List of BaseMessage objects.
        """
        generic_history: List[BaseMessage] = []
        for msg in history:
            role = msg.get("role")
            content = msg.get("content")
            tool_calls = msg.get("tool_calls")

            if content is None:
                if role == "assistant" and tool_calls:
                    content = ""
                else:
                    continue

            # Empty content is kept for tool-calling assistant messages and tool results only.
            if content == "" and not (role == "tool" or (role == "assistant" and tool_calls)):
                continue

            if role == "user":
                generic_history.append(UserMessage(content=content))
            elif role == "assistant":
                generic_history.append(AssistantMessage(content=content, tool_calls=tool_calls))
            elif role == "system":
                generic_history.append(SystemMessage(content=content))
            elif role == "tool":
                tool_call_id = msg.get("tool_call_id")
                if tool_call_id:
                    generic_history.append(
                        ToolMessage(
                            content=content,
                            tool_call_id=tool_call_id,
                            name=msg.get("name", "unknown_tool"),
                            is_error=tool_call_id in failed_call_ids,
                        )
                    )
        return generic_history

    @staticmethod
    def _format_argument_error(tool_name: str, error: Exception) -> str:
        """Format an error message when tool argument decoding fails."""
        return f"Failed to decode function arguments for '{tool_name}': {error}"
