"""Commit, pull request and status comment text for resolver runs.

The literal templates here are parsed downstream: GitHub closes the issue
when a PR whose body contains ``Closes #<n>`` is merged, and the co-author
trailer attributes the commit to the agent account. Change them only with
that in mind.

Source:
- src/resolver/github/models.py (ResolutionResult)
"""

from src.resolver.github.models import ResolutionResult


CO_AUTHOR_TRAILER = (
    "Co-authored-by: kilocode-agent <kilocode-agent@users.noreply.github.com>"
)

COMMIT_MESSAGE_TEMPLATE = """fix: resolve issue #{issue_number}

Automated fix by Kilocode

{trailer}"""

PR_BODY_TEMPLATE = """This PR was automatically generated by [Kilocode](https://kilo.ai) to fix issue #{issue_number}.

## Changes
Please review the changes made by the AI agent.

## Related Issue
Closes #{issue_number}"""

SUCCESS_COMMENT = (
    "✅ A potential fix has been generated and a draft PR #{pr_number} has been "
    "created. Please review the changes at {pr_url}."
)

PARTIAL_COMMENT = (
    "⚠️ Changes were made but PR creation failed. "
    "You can view the branch [here]({branch_url})."
)

FAILURE_COMMENT = (
    "❌ Kilocode was unable to generate a fix for this issue. The workflow "
    "completed but no code changes were made. You can check the "
    "[workflow logs]({run_url}) for more details."
)


def generate_commit_message(issue_number: int) -> str:
    """Format the commit message for the agent's changes.

    Args:
        issue_number: The issue the commit resolves.

    Returns:
        A conventional-commit style message ending in the co-author trailer.
    """
    return COMMIT_MESSAGE_TEMPLATE.format(
        issue_number=issue_number, trailer=CO_AUTHOR_TRAILER
    )


def generate_pr_body(issue_number: int) -> str:
    """Format the pull request body, linking the PR to its issue."""
    return PR_BODY_TEMPLATE.format(issue_number=issue_number)


def generate_result_comment(result: ResolutionResult) -> str:
    """Format the status comment posted back to the triggering issue/PR.

    Exactly one template applies:
    - changes and a PR number: success, links the PR
    - changes without a PR number: PR creation failed, links the branch
    - no changes: failure, links the workflow run logs

    Args:
        result: The outcome of the resolver run.

    Returns:
        The markdown comment body.
    """
    if result.has_changes and result.pr_number:
        return SUCCESS_COMMENT.format(pr_number=result.pr_number, pr_url=result.pr_url)

    if result.has_changes:
        return PARTIAL_COMMENT.format(branch_url=result.branch_url)

    return FAILURE_COMMENT.format(run_url=result.run_url)
