"""Branch naming for agent fixes."""

import time
from typing import Optional

BRANCH_PREFIX = "kilocode-fix"


def generate_branch_name(issue_number: int, timestamp_ms: Optional[int] = None) -> str:
    """Generate a branch name for the fix.

    Names only need to be unique per run, so the current wall-clock time
    is used when no timestamp is given.

    Args:
        issue_number: The issue being fixed.
        timestamp_ms: Unix timestamp in milliseconds.

    Returns:
        Branch name in format "kilocode-fix-{issue_number}-{unix_seconds}".
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)

    return f"{BRANCH_PREFIX}-{issue_number}-{int(timestamp_ms // 1000)}"
