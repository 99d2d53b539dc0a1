"""Resolver configuration using pydantic-settings.

This module defines the ResolverSettings class that reads the action's
inputs from environment variables, and the environment validator that
reports missing credentials before the agent runs.

Variables are read without a prefix, because the action documents them
under these exact names:
- KILOCODE_API_KEY: Provider API key (required to run the agent)
- PAT_TOKEN / PAT_USERNAME: Personal access token and its user, used to
  push branches and open PRs that trigger further workflows
- KILOCODE_PROVIDER, KILOCODE_MODEL, KILOCODE_PROFILE_ID: Provider profile
- KILOCODE_TIMEOUT, KILOCODE_MODE: CLI invocation
- KILOCODE_MACRO, KILOCODE_TRIGGER_LABEL: Trigger rules
- ALLOWED_COMMANDS, DENIED_COMMANDS (JSON lists), ENABLE_BROWSER,
  ENABLE_MCP, QUESTION_TIMEOUT, RETRY_DELAY: Auto-approval policy
"""

from typing import List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.resolver.agent.models import (
    DEFAULT_ALLOWED_COMMANDS,
    DEFAULT_DENIED_COMMANDS,
    DEFAULT_MODEL,
    DEFAULT_PROFILE_ID,
    DEFAULT_PROVIDER,
    DEFAULT_TIMEOUT_SECONDS,
    AgentOptions,
    CommandOptions,
)
from src.resolver.webhook.handler import (
    DEFAULT_MACRO,
    DEFAULT_TRIGGER_LABEL,
    EventClassifier,
)


class EnvironmentValidation(BaseModel):
    """Result of checking the action's credentials.

    Attributes:
        valid: False when any error was found. Warnings do not invalidate.
        errors: Problems that prevent the agent from running.
        warnings: Missing optional values, with the fallback that applies.
    """

    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


def validate_environment(env: Mapping[str, Optional[str]]) -> EnvironmentValidation:
    """Check that the required credentials are present.

    Args:
        env: Environment variables, e.g. ``os.environ``.

    Returns:
        EnvironmentValidation. A missing KILOCODE_API_KEY is an error;
        a missing PAT_TOKEN or PAT_USERNAME is a warning.
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not env.get("KILOCODE_API_KEY"):
        errors.append("KILOCODE_API_KEY is required")

    if not env.get("PAT_TOKEN"):
        warnings.append("PAT_TOKEN is not set, falling back to GITHUB_TOKEN")

    if not env.get("PAT_USERNAME"):
        warnings.append("PAT_USERNAME is not set, will use kilocode-agent")

    return EnvironmentValidation(
        valid=not errors,
        errors=errors,
        warnings=warnings,
    )


class ResolverSettings(BaseSettings):
    """Resolver configuration from environment variables.

    Credentials are optional here so that settings can always be loaded;
    use ``validate_environment`` to report missing ones.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        # Unset action inputs arrive as empty strings
        env_ignore_empty=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Credentials
    # -------------------------------------------------------------------------
    kilocode_api_key: str = ""
    pat_token: str = ""
    pat_username: str = ""

    # -------------------------------------------------------------------------
    # Provider Profile
    # -------------------------------------------------------------------------
    kilocode_provider: str = DEFAULT_PROVIDER
    kilocode_model: str = DEFAULT_MODEL
    kilocode_profile_id: str = DEFAULT_PROFILE_ID

    # -------------------------------------------------------------------------
    # CLI Invocation
    # -------------------------------------------------------------------------
    kilocode_timeout: int = DEFAULT_TIMEOUT_SECONDS
    kilocode_mode: Optional[str] = None

    # -------------------------------------------------------------------------
    # Trigger Rules
    # -------------------------------------------------------------------------
    kilocode_macro: str = DEFAULT_MACRO
    kilocode_trigger_label: str = DEFAULT_TRIGGER_LABEL

    # -------------------------------------------------------------------------
    # Auto-approval Policy
    # -------------------------------------------------------------------------
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

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("kilocode_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate that the CLI timeout is positive."""
        if v < 1:
            raise ValueError("kilocode_timeout must be at least 1")
        return v

    @field_validator("question_timeout")
    @classmethod
    def validate_question_timeout(cls, v: int) -> int:
        """Validate that the question timeout is positive."""
        if v < 1:
            raise ValueError("question_timeout must be at least 1")
        return v

    @field_validator("retry_delay")
    @classmethod
    def validate_retry_delay(cls, v: int) -> int:
        """Validate that the retry delay is not negative."""
        if v < 0:
            raise ValueError("retry_delay cannot be negative")
        return v

    @field_validator("kilocode_macro")
    @classmethod
    def validate_macro(cls, v: str) -> str:
        """Validate that the macro is not blank, which would match every comment."""
        if not v or not v.strip():
            raise ValueError("kilocode_macro cannot be empty")
        return v

    def agent_options(self) -> AgentOptions:
        """Options for the Kilocode CLI configuration file."""
        return AgentOptions(
            api_key=self.kilocode_api_key,
            provider=self.kilocode_provider,
            model=self.kilocode_model,
            profile_id=self.kilocode_profile_id,
            allowed_commands=self.allowed_commands,
            denied_commands=self.denied_commands,
            enable_browser=self.enable_browser,
            enable_mcp=self.enable_mcp,
            question_timeout=self.question_timeout,
            retry_delay=self.retry_delay,
        )

    def command_options(self) -> CommandOptions:
        """Options for the Kilocode CLI invocation."""
        return CommandOptions(timeout=self.kilocode_timeout, mode=self.kilocode_mode)

    def event_classifier(self) -> EventClassifier:
        """Classifier configured with this action's trigger rules."""
        return EventClassifier(
            macro=self.kilocode_macro,
            trigger_label=self.kilocode_trigger_label,
        )


def get_settings() -> ResolverSettings:
    """Create and return ResolverSettings instance.

    Returns:
        ResolverSettings: Configured settings instance.

    Raises:
        pydantic.ValidationError: If a value is present but invalid.
    """
    return ResolverSettings()
