"""Kilocode CLI preparation.

This module prepares everything the Kilocode CLI needs for a run:
- The JSON configuration (provider profile + auto-approval policy)
- The command line (--auto, --timeout, optional --mode)
- The task prompt rendered from the issue details

The CLI itself runs outside this package; the workflow executes the
command built here.
"""

from .command import KILOCODE_COMMAND, build_command
from .config import (
    CONFIG_PATH,
    PROVIDER_FIELDS,
    build_agent_config,
    build_auto_approval,
    build_profile,
    get_config_path,
    write_agent_config,
)
from .models import (
    AgentConfig,
    AgentOptions,
    AutoApproval,
    CommandOptions,
    KilocodeCommand,
    Profile,
)
from .prompt import NO_DESCRIPTION, generate_prompt, generate_prompt_for_issue

__all__ = [
    "AgentConfig",
    "AgentOptions",
    "AutoApproval",
    "CONFIG_PATH",
    "CommandOptions",
    "KILOCODE_COMMAND",
    "KilocodeCommand",
    "NO_DESCRIPTION",
    "PROVIDER_FIELDS",
    "Profile",
    "build_agent_config",
    "build_auto_approval",
    "build_command",
    "build_profile",
    "generate_prompt",
    "generate_prompt_for_issue",
    "get_config_path",
    "write_agent_config",
]
