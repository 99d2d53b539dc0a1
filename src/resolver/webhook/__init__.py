"""GitHub webhook handling for the Kilocode resolver.

This module parses GitHub webhook events and classifies them into trigger
verdicts. Events that can launch the agent:
- workflow_call - Always triggers
- issues.labeled - The 'fix-me' label was added
- issue_comment / pull_request_review_comment - Comment mentioning the macro
- pull_request_review - Review mentioning the macro

Signature validation is performed by GitHub Actions before the workflow
runs, so payloads read from GITHUB_EVENT_PATH are trusted.
"""

from .handler import (
    DEFAULT_ALLOWED_ASSOCIATIONS,
    DEFAULT_MACRO,
    DEFAULT_TRIGGER_LABEL,
    EventClassifier,
    create_event_classifier,
    parse_event,
    parse_github_event,
)
from .models import (
    EVENT_MODELS,
    IssueCommentEvent,
    IssuesEvent,
    IssueType,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    TriggerVerdict,
    WebhookEvent,
    WorkflowCallEvent,
)

__all__ = [
    "DEFAULT_ALLOWED_ASSOCIATIONS",
    "DEFAULT_MACRO",
    "DEFAULT_TRIGGER_LABEL",
    "EVENT_MODELS",
    "EventClassifier",
    "IssueCommentEvent",
    "IssueType",
    "IssuesEvent",
    "PullRequestReviewCommentEvent",
    "PullRequestReviewEvent",
    "TriggerVerdict",
    "WebhookEvent",
    "WorkflowCallEvent",
    "create_event_classifier",
    "parse_event",
    "parse_github_event",
]
