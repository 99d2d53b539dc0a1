"""Kilocode CLI invocation builder.

The resolver always runs the CLI non-interactively:

    kilocode --auto --timeout <seconds> [--mode <mode>]
"""

import logging
from typing import Optional

from .models import CommandOptions, KilocodeCommand

logger = logging.getLogger(__name__)

KILOCODE_COMMAND = "kilocode"


def build_command(options: Optional[CommandOptions] = None) -> KilocodeCommand:
    """Build the Kilocode CLI command and its ordered arguments.

    Args:
        options: Timeout and mode. Defaults to ``CommandOptions()``.

    Returns:
        KilocodeCommand; ``--mode`` is only appended for a non-empty mode.
    """
    options = options or CommandOptions()

    args = ["--auto", "--timeout", str(options.timeout)]
    if options.mode:
        args.extend(["--mode", options.mode])

    logger.debug("Built kilocode command: %s", " ".join(args))
    return KilocodeCommand(command=KILOCODE_COMMAND, args=args)
