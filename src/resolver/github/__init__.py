"""Text posted back to GitHub by the resolver.

This module renders the artifacts the workflow writes to GitHub after the
agent has run:
- Branch name for the fix
- Commit message with the agent co-author trailer
- Pull request body linking the issue
- Status comment for the triggering issue/PR
"""

from src.resolver.github.formatting import (
    CO_AUTHOR_TRAILER,
    generate_commit_message,
    generate_pr_body,
    generate_result_comment,
)
from src.resolver.github.models import IssueDetails, ResolutionResult
from src.resolver.github.naming import BRANCH_PREFIX, generate_branch_name

__all__ = [
    "BRANCH_PREFIX",
    "CO_AUTHOR_TRAILER",
    "IssueDetails",
    "ResolutionResult",
    "generate_branch_name",
    "generate_commit_message",
    "generate_pr_body",
    "generate_result_comment",
]
