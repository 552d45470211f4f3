"""Run one prompt against OpenAI with tools from the Superface hub.

Flow: fetch the tool catalog, bind it to the model, invoke the model, perform
the requested actions concurrently on the hub, re-invoke the model with the
results and return its answer.
"""

from typing import Optional

import httpx
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from .config import AgentConfig
from .hub import SuperfaceHubClient
from .llm_core import ChatResult
from .llm_core.exceptions import CatalogFetchError
from .llm_core.logger import get_logger
from .llm_impl.openai_api import GenericOpenAI, OpenAIToolRegistry

logger = get_logger(__name__)

DEFAULT_PROMPT = "What's the weather like in Prague and in Kosice?"


def build_llm(config: AgentConfig, registry: OpenAIToolRegistry, client: Optional[AsyncOpenAI] = None) -> GenericOpenAI:
    """Create the model invoker bound to ``registry``."""
    if client is None:
        client = AsyncOpenAI(api_key=config.openai_api_key, base_url=config.openai_base_url)
    return GenericOpenAI(
        client=client,
        model_name=config.model_name,
        registry=registry,
        temp=config.temperature,
        max_tokens=config.max_tokens,
        max_function_loops=config.max_tool_rounds,
        tool_timeout=config.tool_timeout,
        max_retries=config.max_retries,
    )


async def load_tools(hub: SuperfaceHubClient, registry: OpenAIToolRegistry, require_tools: bool = False) -> int:
    """Register the hub catalog in ``registry``.

    A failed fetch leaves the registry empty and the model runs without tools,
    unless ``require_tools`` is set.

    Returns:
        The number of tools bound.

    Raises:
        CatalogFetchError: If the fetch fails and ``require_tools`` is True.
    """
    try:
        count = await hub.load_into(registry)
    except CatalogFetchError as e:
        if require_tools:
            raise
        logger.error("Continuing without tools, the catalog could not be fetched: %s", e)
        return 0
    logger.info("Bound %d tool(s) to the model: %s", count, ", ".join(registry.names))
    return count


async def run_agent(
    config: AgentConfig,
    prompt: str = DEFAULT_PROMPT,
    *,
    openai_client: Optional[AsyncOpenAI] = None,
    hub_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ChatResult[ChatCompletion]:
    """Answer ``prompt`` using the hub's tools.

    Args:
        config: Agent configuration.
        prompt: The natural-language prompt.
        openai_client: Optional preconfigured client (tests pass a mock).
        hub_transport: Optional httpx transport for the hub client.

    Returns:
        The final answer with the conversation of the run.
    """
    registry = OpenAIToolRegistry()
    async with SuperfaceHubClient(config, transport=hub_transport) as hub:
        await load_tools(hub, registry, require_tools=config.require_tools)
        llm = build_llm(config, registry, client=openai_client)
        result = await llm.ask(prompt)

    logger.debug("Run finished with %d message(s) in history.", len(result.history))
    return result
