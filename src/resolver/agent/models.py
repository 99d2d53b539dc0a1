"""Kilocode CLI configuration models.

This module defines the options accepted by the config and command builders
and the configuration document written for the Kilocode CLI.

The CLI reads camelCase keys, so every model here declares serialization
aliases and is dumped with ``by_alias=True``. Credential fields that do not
apply to the selected provider stay ``None`` and are excluded from the
output, which keeps exactly one credential/model pair per profile.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_PROVIDER = "openrouter"
DEFAULT_MODEL = "anthropic/claude-sonnet-4-20250514"
DEFAULT_PROFILE_ID = "default"
DEFAULT_ALLOWED_COMMANDS = [
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
]
DEFAULT_DENIED_COMMANDS = ["rm -rf /", "sudo"]
DEFAULT_TIMEOUT_SECONDS = 600


class AgentOptions(BaseModel):
    """Options for generating the Kilocode CLI configuration.

    Attributes:
        api_key: Provider API key. Placed in the profile verbatim.
        provider: Provider id (kilocode, openrouter, anthropic, openai-native,
            or any other id, which uses the generic apiKey/apiModelId pair).
        model: Model id for the selected provider.
        profile_id: Id of the generated profile.
        allowed_commands: Command prefixes the agent may execute.
        denied_commands: Command prefixes the agent must never execute.
        enable_browser: Auto-approve browser actions.
        enable_mcp: Auto-approve MCP tool use.
        question_timeout: Seconds before an unanswered question is auto-answered.
        retry_delay: Seconds the CLI waits before retrying a failed request.
    """

    api_key: str = ""
    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    profile_id: str = DEFAULT_PROFILE_ID
    allowed_commands: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_COMMANDS)
    )
    denied_commands: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DENIED_COMMANDS)
    )
    enable_browser: bool = False
    enable_mcp: bool = True
    question_timeout: int = 30
    retry_delay: int = 10


class CommandOptions(BaseModel):
    """Options for building the Kilocode CLI invocation.

    Attributes:
        timeout: Seconds the CLI may run before giving up.
        mode: Optional agent mode (e.g. "architect", "code").
    """

    timeout: int = DEFAULT_TIMEOUT_SECONDS
    mode: Optional[str] = None


class KilocodeCommand(BaseModel):
    """A Kilocode CLI invocation.

    Argument order matters: the CLI pairs each flag with the value that
    follows it.
    """

    command: str = "kilocode"
    args: List[str] = Field(default_factory=list)

    @property
    def argv(self) -> List[str]:
        return [self.command, *self.args]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Profile(_CamelModel):
    """A provider profile in the Kilocode configuration."""

    id: str
    provider: str
    kilocode_token: Optional[str] = Field(default=None, alias="kilocodeToken")
    kilocode_model: Optional[str] = Field(default=None, alias="kilocodeModel")
    open_router_api_key: Optional[str] = Field(default=None, alias="openRouterApiKey")
    open_router_model_id: Optional[str] = Field(
        default=None, alias="openRouterModelId"
    )
    open_ai_native_api_key: Optional[str] = Field(
        default=None, alias="openAiNativeApiKey"
    )
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    api_model_id: Optional[str] = Field(default=None, alias="apiModelId")


class Toggle(_CamelModel):
    enabled: bool = True


class ReadApproval(Toggle):
    outside: bool = False


class WriteApproval(Toggle):
    outside: bool = False
    protected: bool = True


class ExecuteApproval(Toggle):
    allowed: List[str] = Field(default_factory=list)
    denied: List[str] = Field(default_factory=list)


class QuestionApproval(Toggle):
    timeout: int = 30


class RetryApproval(Toggle):
    delay: int = 10


class AutoApproval(_CamelModel):
    """Auto-approval policy. Generated here, enforced by the CLI."""

    enabled: bool = True
    read: ReadApproval = Field(default_factory=ReadApproval)
    write: WriteApproval = Field(default_factory=WriteApproval)
    execute: ExecuteApproval = Field(default_factory=ExecuteApproval)
    browser: Toggle = Field(default_factory=lambda: Toggle(enabled=False))
    mcp: Toggle = Field(default_factory=Toggle)
    mode: Toggle = Field(default_factory=Toggle)
    subtasks: Toggle = Field(default_factory=Toggle)
    question: QuestionApproval = Field(default_factory=QuestionApproval)
    retry: RetryApproval = Field(default_factory=RetryApproval)
    todo: Toggle = Field(default_factory=Toggle)


class AgentConfig(_CamelModel):
    """The Kilocode CLI configuration document."""

    profiles: List[Profile]
    auto_approval: AutoApproval = Field(alias="autoApproval")

    def to_dict(self) -> Dict[str, Any]:
        """Dump with the CLI's camelCase keys, dropping unused credential fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
