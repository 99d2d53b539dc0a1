"""Pytest configuration for all tests."""

import pytest

# Variables read by ResolverSettings, validate_environment and the CLI
RESOLVER_ENV_VARS = [
    "KILOCODE_API_KEY",
    "PAT_TOKEN",
    "PAT_USERNAME",
    "KILOCODE_PROVIDER",
    "KILOCODE_MODEL",
    "KILOCODE_PROFILE_ID",
    "KILOCODE_TIMEOUT",
    "KILOCODE_MODE",
    "KILOCODE_MACRO",
    "KILOCODE_TRIGGER_LABEL",
    "ALLOWED_COMMANDS",
    "DENIED_COMMANDS",
    "ENABLE_BROWSER",
    "ENABLE_MCP",
    "QUESTION_TIMEOUT",
    "RETRY_DELAY",
    "GITHUB_OUTPUT",
    "GITHUB_EVENT_PATH",
    "GITHUB_EVENT_NAME",
    "GITHUB_REPOSITORY",
    "GITHUB_RUN_ID",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove resolver variables inherited from the developer's environment."""
    for name in RESOLVER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def github_output(clean_env, tmp_path):
    """Point GITHUB_OUTPUT at a temporary file and return its path."""
    output = tmp_path / "github_output"
    output.write_text("")
    clean_env.setenv("GITHUB_OUTPUT", str(output))
    return output
