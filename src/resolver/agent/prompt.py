"""Task prompt for the Kilocode agent."""

from typing import Optional

from src.resolver.github.models import IssueDetails

NO_DESCRIPTION = "No description provided."

PROMPT_TEMPLATE = """Please fix the following issue:

Title: {title}

Description:
{body}

Please analyze the codebase and implement a fix for this issue. Make sure to:
1. Understand the problem described
2. Find the relevant code
3. Implement a proper fix
4. Test your changes if possible"""


def generate_prompt(title: str, body: Optional[str] = None) -> str:
    """Render the instruction prompt passed to the agent.

    Args:
        title: The issue or PR title.
        body: The issue or PR description. Empty or missing bodies are
            replaced with a fixed placeholder.

    Returns:
        The prompt text.
    """
    return PROMPT_TEMPLATE.format(title=title, body=body or NO_DESCRIPTION)


def generate_prompt_for_issue(details: IssueDetails) -> str:
    return generate_prompt(details.title, details.body)
