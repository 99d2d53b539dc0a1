"""GitHub webhook event models for the Kilocode resolver.

This module defines the data models for the webhook events that can launch
the Kilocode agent, plus the trigger verdict produced by the classifier.

Supported event kinds:
- workflow_call - Another workflow invoked the resolver directly
- issues - Issue opened/labeled (label trigger)
- issue_comment - Comment on an issue or PR conversation
- pull_request_review_comment - Inline comment on a PR diff
- pull_request_review - Submitted PR review

Each event kind has its own model; ``EVENT_MODELS`` maps the event name to
the model used to parse it. Unknown event names fall back to the generic
``WebhookEvent`` base, which still carries label and issue/PR references.
"""

from enum import Enum
from typing import Any, Dict, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, model_validator


class IssueType(str, Enum):
    """Kind of GitHub item an event refers to.

    Attributes:
        ISSUE: A plain issue.
        PR: A pull request, whether referenced directly or through an
            issue-shaped payload carrying a ``pull_request`` marker.
    """

    ISSUE = "issue"
    PR = "pr"


class _Payload(BaseModel):
    """Base for payload fragments. Unknown GitHub keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class LabelRef(_Payload):
    name: Optional[str] = None


class IssueRef(_Payload):
    """The ``issue`` object of a webhook payload.

    ``pull_request`` is only checked for presence: GitHub attaches it to
    issue-shaped payloads that actually describe a pull request. Any value
    other than null or false marks a PR, including an empty object.
    """

    number: Optional[int] = None
    pull_request: Optional[Any] = None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None and self.pull_request is not False


class PullRequestRef(_Payload):
    number: Optional[int] = None


class CommentRef(_Payload):
    """A comment or review body with its author's repository association."""

    id: Optional[int] = None
    body: Optional[str] = None
    author_association: Optional[str] = None


class WebhookEvent(_Payload):
    """Fields shared by every webhook event the resolver inspects.

    Attributes:
        event_name: The GitHub event name (``github.event_name``).
        label: The label added, for ``labeled`` actions.
        issue: The referenced issue, if any.
        pull_request: The referenced pull request, if any.
        macro: Optional override of the trigger macro for this event.
    """

    event_name: str = Field(..., min_length=1)
    label: Optional[LabelRef] = None
    issue: Optional[IssueRef] = None
    pull_request: Optional[PullRequestRef] = None
    macro: Optional[str] = None

    @model_validator(mode="after")
    def check_generic_event_name(self) -> "WebhookEvent":
        """Known event names must use their dedicated model from EVENT_MODELS."""
        if type(self) is WebhookEvent and self.event_name in EVENT_MODELS:
            raise ValueError(
                f"event {self.event_name!r} must be built with "
                f"{EVENT_MODELS[self.event_name].__name__} (see EVENT_MODELS)"
            )
        return self


class WorkflowCallEvent(WebhookEvent):
    event_name: Literal["workflow_call"]


class IssuesEvent(WebhookEvent):
    event_name: Literal["issues"]


class IssueCommentEvent(WebhookEvent):
    event_name: Literal["issue_comment"]
    comment: Optional[CommentRef] = None


class PullRequestReviewCommentEvent(WebhookEvent):
    event_name: Literal["pull_request_review_comment"]
    comment: Optional[CommentRef] = None


class PullRequestReviewEvent(WebhookEvent):
    event_name: Literal["pull_request_review"]
    review: Optional[CommentRef] = None


EVENT_MODELS: Dict[str, Type[WebhookEvent]] = {
    "workflow_call": WorkflowCallEvent,
    "issues": IssuesEvent,
    "issue_comment": IssueCommentEvent,
    "pull_request_review_comment": PullRequestReviewCommentEvent,
    "pull_request_review": PullRequestReviewEvent,
}


class TriggerVerdict(BaseModel):
    """Decision on whether an event should launch the Kilocode agent.

    Attributes:
        should_trigger: True when the agent should run.
        trigger_reason: Human-readable reason, set whenever should_trigger is.
        issue_number: Target issue or PR number, if one could be determined.
        issue_type: Whether the target is an issue or a pull request.
        comment_id: ID of the triggering comment or review, if any.
    """

    should_trigger: bool = False
    trigger_reason: Optional[str] = None
    issue_number: Optional[int] = None
    issue_type: Optional[IssueType] = None
    comment_id: Optional[int] = None

    @model_validator(mode="after")
    def check_reason_present(self) -> "TriggerVerdict":
        """A positive verdict must say why it fired."""
        if self.should_trigger and self.trigger_reason is None:
            raise ValueError("trigger_reason is required when should_trigger is set")
        return self

    @property
    def has_target(self) -> bool:
        """Whether a target issue/PR was identified for posting comments."""
        return self.issue_number is not None
