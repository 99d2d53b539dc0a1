"""Kilocode CLI configuration generation.

Maps a flat ``AgentOptions`` record onto the nested document the Kilocode
CLI reads from ``~/.kilocode/config.json``: one provider profile plus the
auto-approval policy.

Each provider stores its credentials under different keys:

    kilocode       kilocodeToken / kilocodeModel
    openrouter     openRouterApiKey / openRouterModelId
    anthropic      apiKey / apiModelId
    openai-native  openAiNativeApiKey / apiModelId
    (other)        apiKey / apiModelId
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from .models import (
    AgentConfig,
    AgentOptions,
    AutoApproval,
    ExecuteApproval,
    Profile,
    QuestionApproval,
    RetryApproval,
    Toggle,
)

logger = logging.getLogger(__name__)

CONFIG_PATH = "~/.kilocode/config.json"

# provider -> (credential field, model field) on Profile
PROVIDER_FIELDS: Dict[str, Tuple[str, str]] = {
    "kilocode": ("kilocode_token", "kilocode_model"),
    "openrouter": ("open_router_api_key", "open_router_model_id"),
    "anthropic": ("api_key", "api_model_id"),
    "openai-native": ("open_ai_native_api_key", "api_model_id"),
}
GENERIC_PROVIDER_FIELDS: Tuple[str, str] = ("api_key", "api_model_id")


def build_profile(options: AgentOptions) -> Profile:
    """Build the provider profile for the given options.

    Args:
        options: Agent options naming the provider, key and model.

    Returns:
        Profile with exactly one credential/model pair populated.
    """
    key_field, model_field = PROVIDER_FIELDS.get(
        options.provider, GENERIC_PROVIDER_FIELDS
    )
    if options.provider not in PROVIDER_FIELDS:
        logger.info(
            "Unrecognized provider %r, using generic apiKey/apiModelId fields",
            options.provider,
        )

    return Profile(
        id=options.profile_id,
        provider=options.provider,
        **{key_field: options.api_key, model_field: options.model},
    )


def build_auto_approval(options: AgentOptions) -> AutoApproval:
    return AutoApproval(
        execute=ExecuteApproval(
            allowed=list(options.allowed_commands),
            denied=list(options.denied_commands),
        ),
        browser=Toggle(enabled=options.enable_browser),
        mcp=Toggle(enabled=options.enable_mcp),
        question=QuestionApproval(timeout=options.question_timeout),
        retry=RetryApproval(delay=options.retry_delay),
    )


def build_agent_config(options: Optional[AgentOptions] = None) -> AgentConfig:
    """Generate the Kilocode CLI configuration.

    Omitted options fall back to the ``AgentOptions`` defaults; the API key
    is placed as given, without checking that it is valid.

    Args:
        options: Configuration options. Defaults to ``AgentOptions()``.

    Returns:
        AgentConfig ready to be serialised with ``to_dict`` or ``to_json``.
    """
    options = options or AgentOptions()

    return AgentConfig(
        profiles=[build_profile(options)],
        auto_approval=build_auto_approval(options),
    )


def get_config_path() -> str:
    """Return the path where the Kilocode CLI looks for its configuration."""
    return CONFIG_PATH


def write_agent_config(
    config: AgentConfig, path: Optional[Union[str, Path]] = None
) -> Path:
    """Write the configuration as indented JSON.

    Args:
        config: The configuration to write.
        path: Target file. Defaults to ``get_config_path()``; ``~`` is expanded.

    Returns:
        The resolved path the file was written to.

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    target = Path(path if path is not None else get_config_path()).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(config.to_json() + "\n", encoding="utf-8")

    logger.info(
        "Wrote Kilocode config: path=%s, provider=%s",
        target,
        config.profiles[0].provider,
    )
    return target
