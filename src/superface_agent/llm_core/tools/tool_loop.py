"""Shared tool execution loop utilities for LLM implementations."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..exceptions import ToolExecutionError
from ..logger import get_logger
from .adapter import ToolAdapter
from .call_protocol import ActionErr, ActionErrorKind, ActionOk, ActionResult, ToolCallRequest, ToolCallResult
from .registry import ToolRegistry

logger = get_logger(__name__)


class ToolExecutionLoop:
    """Centralized tool execution loop for LLM providers.

    For every model response carrying tool calls, all calls are launched at once
    and awaited together. Each call produces exactly one ``ToolCallResult`` with
    the originating ``call_id``; failures become ``ActionErr`` outcomes instead
    of aborting sibling calls.
    """

    # Exceptions raised by a tool function that are reported to the LLM.
    # Anything else (MemoryError, programming errors in the loop itself) propagates.
    RECOVERABLE_ERRORS = (
        ToolExecutionError,
        ValueError,
        TypeError,
        KeyError,
        OSError,
    )

    def __init__(
        self,
        *,
        registry: Optional[ToolRegistry],
        max_function_loops: int = 1,
        tool_timeout: float = 180.0,
        argument_error_formatter: Optional[Callable[[str, Exception], str]] = None,
    ) -> None:
        """Initialize the tool execution loop.

        Args:
            registry: Tool registry used to resolve tool definitions.
            max_function_loops: Maximum number of tool rounds (model -> tools -> model) allowed.
            tool_timeout: Timeout in seconds for a single tool execution.
            argument_error_formatter: Optional formatter for argument parsing errors.
        """
        self._registry = registry
        self._max_function_loops = max_function_loops
        self._tool_timeout = tool_timeout
        self._argument_error_formatter = argument_error_formatter or self._default_argument_error

    async def run(
        self,
        *,
        initial_response: Any,
        adapter: ToolAdapter,
    ) -> Any:
        """Run the tool execution loop.

        Args:
            initial_response: Initial provider response to inspect.
            adapter: The provider-specific adapter for tool handling.

        Returns:
            The final provider response after tool execution completes.
        """
        current_response = initial_response

        for loop_index in range(self._max_function_loops):
            tool_calls = list(adapter.get_tool_calls(current_response))

            if not tool_calls:
                logger.debug("No tool calls found in response. Loop finished.")
                return current_response

            logger.info(f"Round {loop_index + 1}/{self._max_function_loops}: Processing {len(tool_calls)} tool call(s).")
            adapter.record_assistant_message(current_response)

            results = await self.execute_all(tool_calls)
            response_messages = [adapter.build_tool_response_message(result) for result in results]

            current_response = await adapter.send_tool_responses(response_messages)

        if list(adapter.get_tool_calls(current_response)):
            logger.warning(f"Max tool rounds ({self._max_function_loops}) reached. Further tool calls are ignored.")
        return current_response

    async def execute_all(self, tool_calls: Sequence[ToolCallRequest]) -> List[ToolCallResult]:
        """Execute tool calls concurrently and collect one result per call.

        Args:
            tool_calls: Tool call requests from a single model response.

        Returns:
            Results in the same order as ``tool_calls``.
        """
        return list(await asyncio.gather(*(self._handle_tool_call(tc) for tc in tool_calls)))

    async def _handle_tool_call(self, tool_call: ToolCallRequest) -> ToolCallResult:
        """Handle a single tool call request.

        Args:
            tool_call: The tool call request containing name, ID, and arguments.

        Returns:
            The tagged outcome of the call.
        """
        logger.debug(f"Handling tool call: {tool_call.name} (ID: {tool_call.call_id})")

        if self._registry is None or tool_call.name not in self._registry.tools:
            msg = f"Tool '{tool_call.name}' not found in registry."
            logger.warning(msg)
            return self._result(tool_call, ActionErr(kind=ActionErrorKind.UNKNOWN_TOOL, detail=msg))

        tool_def = self._registry.tools[tool_call.name]

        try:
            function_args = self._normalize_function_args(tool_call.name, tool_call.arguments)
        except ToolExecutionError as exc:
            msg = str(exc)
            logger.warning(f"Argument normalization failed for '{tool_call.name}': {msg}")
            return self._result(tool_call, ActionErr(kind=ActionErrorKind.INVALID_ARGUMENTS, detail=msg))

        try:
            function_result = await self._execute_tool(tool_def.func, function_args)
        except asyncio.TimeoutError:
            msg = f"Tool execution timed out after {self._tool_timeout} seconds."
            logger.warning(f"Timeout in '{tool_call.name}': {msg}")
            return self._result(tool_call, ActionErr(kind=ActionErrorKind.TIMEOUT, detail=msg))
        except self.RECOVERABLE_ERRORS as exc:
            msg = str(exc)
            logger.warning(f"Recoverable error in '{tool_call.name}': {msg} ({type(exc).__name__})")
            return self._result(tool_call, ActionErr(kind=ActionErrorKind.EXECUTION, detail=msg))

        return self._result(tool_call, self._to_action_result(function_result))

    @staticmethod
    def _result(tool_call: ToolCallRequest, outcome: ActionResult) -> ToolCallResult:
        return ToolCallResult(name=tool_call.name, outcome=outcome, call_id=tool_call.call_id)

    @staticmethod
    def _to_action_result(value: Any) -> ActionResult:
        """Hub proxies already return tagged results; plain values are serialized as success."""
        if isinstance(value, (ActionOk, ActionErr)):
            return value
        if isinstance(value, str):
            return ActionOk(payload=value)
        return ActionOk(payload=json.dumps(value, default=str))

    def _normalize_function_args(self, tool_name: str, raw_args: Any) -> Dict[str, Any]:
        """Normalize tool arguments into a dictionary.

        Handles JSON strings, dictionaries, or None values.

        Args:
            tool_name: Name of the tool (for error reporting).
            raw_args: The raw arguments (dict, string, or None).

        Returns:
            A dictionary of normalized arguments.

        Raises:
            ToolExecutionError: If arguments cannot be parsed or are invalid.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, dict):
            return raw_args

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as exc:
                raise ToolExecutionError(self._argument_error_formatter(tool_name, exc)) from exc

            if parsed is None:
                return {}

            if not isinstance(parsed, dict):
                error = ValueError("Function arguments must decode to a JSON object.")
                raise ToolExecutionError(self._argument_error_formatter(tool_name, error))

            return parsed

        try:
            return dict(raw_args)
        except (TypeError, ValueError) as exc:
            raise ToolExecutionError(self._argument_error_formatter(tool_name, exc)) from exc

    async def _execute_tool(self, tool_function: Any, function_args: Dict[str, Any]) -> Any:
        """Await the async tool function within the tool timeout.

        Raises:
            asyncio.TimeoutError: If execution exceeds the tool timeout.
        """
        return await asyncio.wait_for(tool_function(**function_args), timeout=self._tool_timeout)

    @staticmethod
    def _default_argument_error(tool_name: str, error: Exception) -> str:
        return f"Failed to parse arguments for tool '{tool_name}': {error}"
