"""Bridge Superface hub tools into ToolRegistry entries over HTTP."""

import json
from types import TracebackType
from typing import Any, Dict, List, Optional, Type

import httpx

from superface_agent.config import AgentConfig
from superface_agent.llm_core import ToolRegistry
from superface_agent.llm_core.exceptions import CatalogFetchError
from superface_agent.llm_core.logger import get_logger
from superface_agent.llm_core.tools import ActionErr, ActionErrorKind, ActionOk, ActionResult

logger = get_logger(__name__)

__all__ = ["SuperfaceHubClient"]

USER_ID_HEADER = "x-superface-user-id"


class SuperfaceHubClient:
    """Client for the Superface hub: tool discovery (``GET /fd``) and execution (``POST /perform/{name}``)."""

    def __init__(self, config: AgentConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initializes the client; the HTTP connection pool is opened by ``async with``.

        Args:
            config: Agent configuration providing URL, credentials and timeout.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        """
        self._config = config
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "SuperfaceHubClient":
        self._http = httpx.AsyncClient(
            base_url=self._config.hub_base_url,
            headers={"Authorization": f"Bearer {self._config.hub_auth_token}"},
            timeout=self._config.request_timeout,
            transport=self._transport,
        )
        logger.debug("Opened HTTP session to %s", self._config.hub_base_url)
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.debug("Closed HTTP session to %s", self._config.hub_base_url)

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("Superface hub client is not connected. Use 'async with'.")
        return self._http

    async def fetch_tools(self) -> List[Dict[str, Any]]:
        """Fetch the function descriptors published by the hub.

        Returns:
            The raw list of tool definitions.

        Raises:
            CatalogFetchError: On transport errors, non-2xx responses or an unexpected body.
        """
        logger.debug("Fetching tool catalog from %s/fd", self._config.hub_base_url)
        try:
            response = await self.http.get("/fd")
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f"Tool catalog request failed with status {e.response.status_code}: {e.response.text}"
            logger.error(msg)
            raise CatalogFetchError(msg, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            msg = f"Tool catalog request failed: {e!r}"
            logger.error(msg)
            raise CatalogFetchError(msg) from e

        try:
            catalog = response.json()
        except ValueError as e:
            msg = "Tool catalog response is not valid JSON."
            logger.error(msg)
            raise CatalogFetchError(msg, status_code=response.status_code) from e

        if not isinstance(catalog, list):
            msg = f"Tool catalog must be a JSON list, got {type(catalog).__name__}."
            logger.error(msg)
            raise CatalogFetchError(msg, status_code=response.status_code)

        logger.info("Found %d tools in the Superface hub catalog.", len(catalog))
        return catalog

    async def load_into(self, registry: ToolRegistry) -> int:
        """Fetch the catalog and register a proxy for every tool in ``registry``.

        Args:
            registry: The ToolRegistry to register the tools into.

        Returns:
            The number of tools registered.

        Raises:
            CatalogFetchError: If the catalog cannot be fetched.
        """
        registered = 0
        for entry in await self.fetch_tools():
            if self._register_single_tool(registry, entry):
                registered += 1
        return registered

    async def perform(self, tool_name: str, arguments: Dict[str, Any]) -> ActionResult:
        """Perform a tool's action on the hub.

        Never raises for remote failures: errors are returned as ``ActionErr`` with the
        hub's error body as detail when there is one.

        Args:
            tool_name: Name of the tool to perform.
            arguments: JSON-serializable arguments chosen by the model.

        Returns:
            ``ActionOk`` with the serialized response body, or ``ActionErr``.
        """
        logger.info("Calling Superface hub function %s with arguments %s", tool_name, json.dumps(arguments))
        try:
            response = await self.http.post(
                f"/perform/{tool_name}",
                json=arguments,
                headers={"Content-Type": "application/json", USER_ID_HEADER: self._config.hub_user_id},
            )
        except httpx.TimeoutException as e:
            logger.error("PERFORM ERROR: %s timed out: %r", tool_name, e)
            return ActionErr(kind=ActionErrorKind.TIMEOUT, detail=f"Request to the hub timed out: {e!r}")
        except httpx.HTTPError as e:
            logger.error("PERFORM ERROR: %s failed: %r", tool_name, e)
            return ActionErr(kind=ActionErrorKind.TRANSPORT, detail=f"Request to the hub failed: {e!r}")

        if response.is_error:
            logger.error("PERFORM ERROR: %s returned %d: %s", tool_name, response.status_code, response.text)
            return ActionErr(
                kind=ActionErrorKind.HTTP_STATUS,
                detail=response.text,
                status_code=response.status_code,
            )

        result = self._serialize_body(response)
        logger.info("SUPERFACE RESPONSE: %s", result)
        return ActionOk(payload=result)

    @staticmethod
    def _serialize_body(response: httpx.Response) -> str:
        try:
            return json.dumps(response.json())
        except ValueError:
            return response.text

    @staticmethod
    def _unwrap_definition(entry: Any) -> Optional[Dict[str, Any]]:
        """Accept both ``{"type": "function", "function": {...}}`` and flat definitions."""
        if not isinstance(entry, dict):
            return None
        function = entry.get("function")
        if isinstance(function, dict):
            return function
        return entry

    def _register_single_tool(self, registry: ToolRegistry, entry: Any) -> bool:
        """Create the proxy function for one catalog entry and register it.

        Returns:
            True if the tool was registered.
        """
        definition = self._unwrap_definition(entry)
        tool_name = definition.get("name") if definition else None
        if not definition or not tool_name:
            logger.warning("Skipping catalog entry without a tool name: %r", entry)
            return False

        tool_description = definition.get("description") or f"Tool {tool_name} provided by the Superface hub."

        async def hub_proxy(**kwargs: Any) -> ActionResult:
            return await self.perform(tool_name, kwargs)

        hub_proxy.__name__ = tool_name
        hub_proxy.__doc__ = tool_description

        try:
            registry.register(
                name_or_tool=tool_name,
                description=tool_description,
                func=hub_proxy,
                parameters=definition.get("parameters"),
            )
        except Exception as e:
            logger.error("Error registering hub tool '%s': %s", tool_name, e)
            return False

        logger.debug("Hub tool '%s' successfully registered.", tool_name)
        return True
