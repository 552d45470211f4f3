from pathlib import Path

import pytest

from superface_agent import AgentConfig, ConfigurationError
from superface_agent.config import DEFAULT_HUB_BASE_URL, DEFAULT_HUB_USER_ID

ENV_VARS = [
    "SUPERFACE_AUTH_TOKEN",
    "OPENAI_API_KEY",
    "SUPERFACE_BASE_URL",
    "SUPERFACE_USER_ID",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "OPENAI_MAX_TOKENS",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    for name in ENV_VARS:
        # setenv first so monkeypatch also undoes values written by load_dotenv
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    empty_env = tmp_path / ".env"
    empty_env.write_text("")
    return empty_env


def test_from_env_reads_credentials_and_defaults(monkeypatch: pytest.MonkeyPatch, clean_env: Path) -> None:
    monkeypatch.setenv("SUPERFACE_AUTH_TOKEN", "hub-token")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    config = AgentConfig.from_env(dotenv_path=str(clean_env))

    assert config.hub_auth_token == "hub-token"
    assert config.openai_api_key == "sk-test"
    assert config.hub_base_url == DEFAULT_HUB_BASE_URL
    assert config.hub_user_id == DEFAULT_HUB_USER_ID
    assert config.model_name == "gpt-4o"
    assert config.max_tokens == 128
    assert config.max_tool_rounds == 1
    assert config.require_tools is False


def test_from_env_reads_optional_overrides(monkeypatch: pytest.MonkeyPatch, clean_env: Path) -> None:
    monkeypatch.setenv("SUPERFACE_AUTH_TOKEN", "hub-token")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("SUPERFACE_BASE_URL", "https://hub.example/api/hub/")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("OPENAI_MAX_TOKENS", "512")

    config = AgentConfig.from_env(dotenv_path=str(clean_env), require_tools=True)

    assert config.hub_base_url == "https://hub.example/api/hub"
    assert config.model_name == "gpt-4o-mini"
    assert config.max_tokens == 512
    assert config.require_tools is True


def test_from_env_loads_dotenv_file(clean_env: Path) -> None:
    clean_env.write_text("SUPERFACE_AUTH_TOKEN=from-file\nOPENAI_API_KEY=sk-file\n")

    config = AgentConfig.from_env(dotenv_path=str(clean_env))

    assert config.hub_auth_token == "from-file"
    assert config.openai_api_key == "sk-file"


def test_from_env_reports_missing_credentials(monkeypatch: pytest.MonkeyPatch, clean_env: Path) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    with pytest.raises(ConfigurationError, match="SUPERFACE_AUTH_TOKEN"):
        AgentConfig.from_env(dotenv_path=str(clean_env))


def test_from_env_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, clean_env: Path) -> None:
    monkeypatch.setenv("SUPERFACE_AUTH_TOKEN", "hub-token")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MAX_TOKENS", "zero")

    with pytest.raises(ConfigurationError):
        AgentConfig.from_env(dotenv_path=str(clean_env))


def test_config_is_frozen() -> None:
    config = AgentConfig(hub_auth_token="t", openai_api_key="k")
    with pytest.raises(Exception):
        config.model_name = "other"  # type: ignore[misc]
