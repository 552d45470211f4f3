"""Runtime configuration for the superface agent.

Settings are read once at start-up (``AgentConfig.from_env``) and passed
explicitly to every component; nothing else reads the process environment.
"""

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .llm_core.exceptions import ConfigurationError
from .llm_core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_HUB_BASE_URL = "https://pod.superface.ai/api/hub"
DEFAULT_HUB_USER_ID = "sflangchainexample|1234"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 128


class AgentConfig(BaseModel):
    """Settings shared by the hub client and the model invoker.

    Attributes:
        hub_base_url: Base URL of the Superface hub API.
        hub_auth_token: Bearer token for the hub.
        hub_user_id: Value of the ``x-superface-user-id`` header sent with every action.
        openai_api_key: API key for the LLM provider.
        openai_base_url: Optional alternative endpoint for OpenAI-compatible providers.
        model_name: Chat completion model identifier.
        max_tokens: Output token budget per model response.
        temperature: Sampling temperature.
        max_tool_rounds: Model -> tools -> model rounds per run.
        request_timeout: Timeout in seconds for hub HTTP requests.
        tool_timeout: Upper bound in seconds for a single tool execution.
        max_retries: Retries of a model turn on API errors.
        require_tools: Abort instead of continuing without tools when the catalog cannot be fetched.
    """

    model_config = ConfigDict(frozen=True)

    hub_base_url: str = DEFAULT_HUB_BASE_URL
    hub_auth_token: str = Field(min_length=1)
    hub_user_id: str = DEFAULT_HUB_USER_ID
    openai_api_key: str = Field(min_length=1)
    openai_base_url: Optional[str] = None
    model_name: str = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    temperature: float = Field(default=1.0, ge=0.0, le=2.0)
    max_tool_rounds: int = Field(default=1, ge=1)
    request_timeout: float = Field(default=30.0, gt=0)
    tool_timeout: float = Field(default=180.0, gt=0)
    max_retries: int = Field(default=0, ge=0)
    require_tools: bool = False

    @field_validator("hub_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides: object) -> "AgentConfig":
        """Build the configuration from environment variables (and a ``.env`` file if present).

        Args:
            dotenv_path: Explicit ``.env`` file. When None, the nearest ``.env`` is searched for.
            **overrides: Field values taking precedence over the environment.

        Returns:
            The validated configuration.

        Raises:
            ConfigurationError: If a required credential is missing or a value is invalid.
        """
        env_file = dotenv_path or find_dotenv(usecwd=True)
        if env_file:
            logger.debug("Loading environment from %s", env_file)
            load_dotenv(env_file)

        values: dict[str, object] = {
            "hub_auth_token": os.getenv("SUPERFACE_AUTH_TOKEN"),
            "openai_api_key": os.getenv("OPENAI_API_KEY"),
        }
        optional = {
            "hub_base_url": "SUPERFACE_BASE_URL",
            "hub_user_id": "SUPERFACE_USER_ID",
            "openai_base_url": "OPENAI_BASE_URL",
            "model_name": "OPENAI_MODEL",
            "max_tokens": "OPENAI_MAX_TOKENS",
        }
        for field_name, env_name in optional.items():
            env_value = os.getenv(env_name)
            if env_value:
                values[field_name] = env_value
        values.update(overrides)

        missing = [
            env_name
            for field_name, env_name in (
                ("hub_auth_token", "SUPERFACE_AUTH_TOKEN"),
                ("openai_api_key", "OPENAI_API_KEY"),
            )
            if not values.get(field_name)
        ]
        if missing:
            msg = f"Missing required environment variable(s): {', '.join(missing)}"
            logger.error(msg)
            raise ConfigurationError(msg)

        try:
            return cls(**values)  # type: ignore[arg-type]
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
