"""Unit tests for Kilocode CLI configuration generation.

Tests provider profile mapping, auto-approval defaults and overrides, and
writing the configuration file to disk.
"""

import json

import pytest

from src.resolver.agent import (
    AgentOptions,
    build_agent_config,
    get_config_path,
    write_agent_config,
)

CREDENTIAL_FIELDS = {
    "kilocodeToken",
    "kilocodeModel",
    "openRouterApiKey",
    "openRouterModelId",
    "openAiNativeApiKey",
    "apiKey",
    "apiModelId",
}


def _profile(**options) -> dict:
    return build_agent_config(AgentOptions(**options)).to_dict()["profiles"][0]


def _credential_fields(profile: dict) -> set:
    return set(profile) & CREDENTIAL_FIELDS


class TestProviderProfiles:
    def test_kilocode_provider(self):
        profile = _profile(provider="kilocode", api_key="k", model="m")

        assert profile["kilocodeToken"] == "k"
        assert profile["kilocodeModel"] == "m"
        assert _credential_fields(profile) == {"kilocodeToken", "kilocodeModel"}

    def test_openrouter_provider(self):
        profile = _profile(provider="openrouter", api_key="k", model="m")

        assert profile["openRouterApiKey"] == "k"
        assert profile["openRouterModelId"] == "m"
        assert _credential_fields(profile) == {"openRouterApiKey", "openRouterModelId"}

    def test_anthropic_provider(self):
        profile = _profile(provider="anthropic", api_key="sk-ant", model="claude")

        assert profile["apiKey"] == "sk-ant"
        assert profile["apiModelId"] == "claude"
        assert _credential_fields(profile) == {"apiKey", "apiModelId"}

    def test_openai_native_provider(self):
        profile = _profile(provider="openai-native", api_key="sk", model="gpt")

        assert profile["openAiNativeApiKey"] == "sk"
        assert profile["apiModelId"] == "gpt"
        assert _credential_fields(profile) == {"openAiNativeApiKey", "apiModelId"}

    @pytest.mark.parametrize("provider", ["gemini", "bedrock", ""])
    def test_unknown_provider_uses_generic_fields(self, provider):
        profile = _profile(provider=provider, api_key="k", model="m")

        assert profile["provider"] == provider
        assert _credential_fields(profile) == {"apiKey", "apiModelId"}

    def test_profile_keys_are_exact(self):
        profile = _profile(provider="kilocode", api_key="k", model="m")

        assert set(profile) == {"id", "provider", "kilocodeToken", "kilocodeModel"}

    def test_custom_profile_id(self):
        assert _profile(profile_id="ci")["id"] == "ci"


class TestDefaults:
    def test_default_config(self):
        config = build_agent_config().to_dict()
        profile = config["profiles"][0]

        assert len(config["profiles"]) == 1
        assert profile["id"] == "default"
        assert profile["provider"] == "openrouter"
        assert profile["openRouterApiKey"] == ""
        assert profile["openRouterModelId"] == "anthropic/claude-sonnet-4-20250514"

    def test_default_auto_approval(self):
        approval = build_agent_config().to_dict()["autoApproval"]

        assert approval == {
            "enabled": True,
            "read": {"enabled": True, "outside": False},
            "write": {"enabled": True, "outside": False, "protected": True},
            "execute": {
                "enabled": True,
                "allowed": [
                    "npm",
                    "git",
                    "pnpm",
                    "yarn",
                    "node",
                    "npx",
                    "make",
                    "cargo",
                    "python",
                    "pip",
                ],
                "denied": ["rm -rf /", "sudo"],
            },
            "browser": {"enabled": False},
            "mcp": {"enabled": True},
            "mode": {"enabled": True},
            "subtasks": {"enabled": True},
            "question": {"enabled": True, "timeout": 30},
            "retry": {"enabled": True, "delay": 10},
            "todo": {"enabled": True},
        }

    def test_default_lists_are_not_shared(self):
        first = AgentOptions()
        first.allowed_commands.append("rm")

        assert "rm" not in AgentOptions().allowed_commands


class TestOverrides:
    def test_custom_allowed_commands(self):
        config = build_agent_config(AgentOptions(allowed_commands=["npm", "git"]))

        assert config.to_dict()["autoApproval"]["execute"]["allowed"] == ["npm", "git"]

    def test_custom_denied_commands(self):
        config = build_agent_config(AgentOptions(denied_commands=["curl"]))

        assert config.to_dict()["autoApproval"]["execute"]["denied"] == ["curl"]

    def test_enable_browser(self):
        config = build_agent_config(AgentOptions(enable_browser=True))

        assert config.to_dict()["autoApproval"]["browser"]["enabled"] is True

    def test_disable_mcp(self):
        config = build_agent_config(AgentOptions(enable_mcp=False))

        assert config.to_dict()["autoApproval"]["mcp"]["enabled"] is False

    def test_question_timeout_and_retry_delay(self):
        approval = build_agent_config(
            AgentOptions(question_timeout=60, retry_delay=5)
        ).to_dict()["autoApproval"]

        assert approval["question"] == {"enabled": True, "timeout": 60}
        assert approval["retry"] == {"enabled": True, "delay": 5}


class TestConfigFile:
    def test_config_path(self):
        assert get_config_path() == "~/.kilocode/config.json"

    def test_write_and_read_back(self, tmp_path):
        config = build_agent_config(
            AgentOptions(api_key="test-api-key-12345", provider="openrouter")
        )
        target = tmp_path / ".kilocode" / "config.json"

        written = write_agent_config(config, target)

        assert written == target
        data = json.loads(target.read_text())
        assert data["profiles"][0]["openRouterApiKey"] == "test-api-key-12345"
        assert data["autoApproval"]["execute"]["allowed"][0] == "npm"

    def test_default_path_expands_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))

        written = write_agent_config(build_agent_config())

        assert written == tmp_path / ".kilocode" / "config.json"
        assert json.loads(written.read_text())["profiles"][0]["id"] == "default"

    def test_to_json_is_valid(self):
        data = json.loads(build_agent_config(AgentOptions(provider="kilocode")).to_json())

        assert data["profiles"][0]["provider"] == "kilocode"
