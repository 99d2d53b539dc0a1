"""Webhook event parsing and trigger classification.

This module turns raw GitHub webhook payloads into typed event models and
decides whether an event should launch the Kilocode agent.

Trigger rules:
- ``workflow_call`` always triggers and carries no target identifiers
- the ``fix-me`` label triggers regardless of who added it
- comments and reviews trigger when their body contains the macro and the
  author is an OWNER, COLLABORATOR or MEMBER of the repository

GitHub delivers the event name separately from the payload
(``GITHUB_EVENT_NAME`` vs. ``GITHUB_EVENT_PATH``), so ``parse_event`` accepts
it as an argument and merges it into the payload before validation.

Example payload (issue_comment event):
{
  "event_name": "issue_comment",
  "issue": {"number": 42, "pull_request": {"url": "..."}},
  "comment": {
    "id": 1001,
    "body": "@kilocode-agent please fix",
    "author_association": "OWNER"
  }
}
"""

import logging
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from .models import (
    EVENT_MODELS,
    CommentRef,
    IssueCommentEvent,
    IssueType,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    TriggerVerdict,
    WebhookEvent,
    WorkflowCallEvent,
)

logger = logging.getLogger(__name__)

DEFAULT_MACRO = "@kilocode-agent"
DEFAULT_TRIGGER_LABEL = "fix-me"
DEFAULT_ALLOWED_ASSOCIATIONS = ("OWNER", "COLLABORATOR", "MEMBER")


def parse_event(
    payload: Any, event_name: Optional[str] = None
) -> Optional[WebhookEvent]:
    """Parse a raw webhook payload into the matching event model.

    Args:
        payload: The webhook payload as a dictionary.
        event_name: The GitHub event name. Overrides any ``event_name``
            key already present in the payload.

    Returns:
        The parsed event, or None for non-dict payloads, payloads without
        an event name, and payloads that fail validation. ``workflow_call``
        events are built from the event name alone, so the rest of their
        payload can never block the trigger.
    """
    if not isinstance(payload, dict):
        logger.warning("Invalid payload: expected dict, got %s", type(payload))
        return None

    data: Dict[str, Any] = dict(payload)
    if event_name is not None:
        data["event_name"] = event_name

    name = data.get("event_name")
    if not isinstance(name, str) or not name:
        logger.warning("Missing 'event_name' for webhook payload")
        return None

    if name == "workflow_call":
        # Triggers unconditionally and reads no other field
        return WorkflowCallEvent(event_name=name)

    model = EVENT_MODELS.get(name, WebhookEvent)
    if model is WebhookEvent:
        logger.debug("No dedicated model for event %s, using generic fields", name)

    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid %s payload: %s", name, e)
        return None


class EventClassifier:
    """Decides whether a webhook event should launch the Kilocode agent.

    Attributes:
        macro: Substring that authorized commenters include to request a fix.
            A ``macro`` field on the event takes precedence.
        trigger_label: Label name that triggers a fix when added.
        allowed_associations: Author associations allowed to trigger via
            comments and reviews. Matched exactly and case-sensitively.
    """

    def __init__(
        self,
        macro: str = DEFAULT_MACRO,
        trigger_label: str = DEFAULT_TRIGGER_LABEL,
        allowed_associations: Iterable[str] = DEFAULT_ALLOWED_ASSOCIATIONS,
    ) -> None:
        self.macro = macro
        self.trigger_label = trigger_label
        self.allowed_associations = frozenset(allowed_associations)

    def classify(self, event: WebhookEvent) -> TriggerVerdict:
        """Produce a trigger verdict and target identifiers for an event.

        The rules are evaluated independently; identifiers are extracted
        whether or not the event triggers, except for ``workflow_call``,
        which returns before any extraction.

        Args:
            event: A parsed webhook event.

        Returns:
            TriggerVerdict for the event.
        """
        if isinstance(event, WorkflowCallEvent):
            logger.info("Triggered by workflow_call")
            return TriggerVerdict(should_trigger=True, trigger_reason="workflow_call")

        should_trigger = False
        trigger_reason: Optional[str] = None
        comment_id: Optional[int] = None

        if event.label is not None and event.label.name == self.trigger_label:
            should_trigger = True
            trigger_reason = f"{self.trigger_label} label"

        macro = event.macro or self.macro

        if isinstance(event, (IssueCommentEvent, PullRequestReviewCommentEvent)):
            if self._is_authorized_request(event.comment, macro):
                should_trigger = True
                trigger_reason = f"comment with {macro}"
                comment_id = event.comment.id

        if isinstance(event, PullRequestReviewEvent):
            if self._is_authorized_request(event.review, macro):
                should_trigger = True
                trigger_reason = f"review with {macro}"
                comment_id = event.review.id

        issue_number, issue_type = self._extract_target(event)

        verdict = TriggerVerdict(
            should_trigger=should_trigger,
            trigger_reason=trigger_reason,
            issue_number=issue_number,
            issue_type=issue_type,
            comment_id=comment_id,
        )

        if verdict.should_trigger:
            logger.info(
                "Triggered by %s: event=%s, target=%s #%s",
                verdict.trigger_reason,
                event.event_name,
                issue_type.value if issue_type else None,
                issue_number,
            )
        else:
            logger.debug("Event %s does not trigger the agent", event.event_name)

        return verdict

    def _is_authorized_request(
        self, comment: Optional[CommentRef], macro: str
    ) -> bool:
        """Check that a comment mentions the macro and comes from a trusted author.

        Matching is plain substring containment, so the macro also matches
        inside a longer token.
        """
        if comment is None or not comment.body:
            return False
        return (
            macro in comment.body
            and comment.author_association in self.allowed_associations
        )

    def _extract_target(self, event: WebhookEvent):
        """Determine the issue/PR number and type an event refers to.

        Returns:
            Tuple of (issue_number, issue_type); both None when the event
            references neither an issue nor a pull request.
        """
        pr_number = event.pull_request.number if event.pull_request else None

        if pr_number is not None:
            return pr_number, IssueType.PR

        # Subsumed by the check above; kept so review payloads resolve the
        # same way if the first branch ever changes.
        review = event.review if isinstance(event, PullRequestReviewEvent) else None
        if review is not None and review.body and pr_number is not None:
            return pr_number, IssueType.PR

        if event.issue is not None and event.issue.is_pull_request:
            return event.issue.number, IssueType.PR

        if event.issue is not None and event.issue.number is not None:
            return event.issue.number, IssueType.ISSUE

        return None, None


def parse_github_event(
    payload: Any,
    event_name: Optional[str] = None,
    classifier: Optional[EventClassifier] = None,
) -> TriggerVerdict:
    """Parse a raw payload and classify it in one step.

    Args:
        payload: The raw webhook payload.
        event_name: The GitHub event name, if not embedded in the payload.
        classifier: Classifier to use. Defaults to the standard rules.

    Returns:
        The trigger verdict; a negative verdict with no identifiers when
        the payload cannot be parsed.
    """
    event = parse_event(payload, event_name=event_name)
    if event is None:
        return TriggerVerdict()

    return (classifier or EventClassifier()).classify(event)


def create_event_classifier(
    macro: str = DEFAULT_MACRO,
    trigger_label: str = DEFAULT_TRIGGER_LABEL,
    allowed_associations: Iterable[str] = DEFAULT_ALLOWED_ASSOCIATIONS,
) -> EventClassifier:
    """Factory function to create an EventClassifier instance.

    Args:
        macro: The trigger macro.
        trigger_label: The trigger label name.
        allowed_associations: Author associations allowed to trigger via
            comments and reviews.

    Returns:
        A configured EventClassifier instance.
    """
    return EventClassifier(
        macro=macro,
        trigger_label=trigger_label,
        allowed_associations=allowed_associations,
    )
