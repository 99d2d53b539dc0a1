"""Data models for issue details and resolution outcomes.

``IssueDetails`` is fetched from the GitHub API by the workflow before the
agent runs; ``ResolutionResult`` is assembled by the workflow after the
agent finishes and the branch/PR steps have run.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, model_validator

GITHUB_URL = "https://github.com"


class IssueDetails(BaseModel):
    """Title and description of the issue or PR to fix."""

    title: str
    body: Optional[str] = None


class ResolutionResult(BaseModel):
    """Outcome of a resolver run.

    Attributes:
        issue_number: The issue or PR the run worked on.
        has_changes: True when the agent modified any files.
        pr_number: Number of the created pull request, if creation succeeded.
        pr_url: URL of the created pull request.
        branch_name: Branch the changes were pushed to.
        repo_owner: Repository owner (user or organization).
        repo_name: Repository name without owner prefix.
        run_id: GitHub Actions run id, used to link the workflow logs.
    """

    issue_number: int = Field(..., gt=0)
    has_changes: bool
    pr_number: Optional[int] = None
    pr_url: Optional[str] = None
    branch_name: str = ""
    repo_owner: str
    repo_name: str
    run_id: Union[int, str]

    @model_validator(mode="after")
    def check_pr_url_present(self) -> "ResolutionResult":
        """A created PR must come with its URL, which the comment links."""
        if self.pr_number and not self.pr_url:
            raise ValueError("pr_url is required when pr_number is set")
        return self

    @property
    def repository_url(self) -> str:
        return f"{GITHUB_URL}/{self.repo_owner}/{self.repo_name}"

    @property
    def branch_url(self) -> str:
        return f"{self.repository_url}/tree/{self.branch_name}"

    @property
    def run_url(self) -> str:
        return f"{self.repository_url}/actions/runs/{self.run_id}"
