"""Property-based tests for webhook trigger classification.

This module uses Hypothesis to verify that the classifier's trigger and
target rules hold across generated comment, review, label and issue
payloads.

Testing Configuration:
- Library: Hypothesis (Python)
- Minimum iterations: 100 per property test
"""

from hypothesis import given, settings, strategies as st

from src.resolver.webhook import (
    DEFAULT_ALLOWED_ASSOCIATIONS,
    DEFAULT_MACRO,
    IssueType,
    parse_github_event,
)


# =============================================================================
# Hypothesis Strategies
# =============================================================================

ALL_ASSOCIATIONS = [
    "OWNER",
    "COLLABORATOR",
    "MEMBER",
    "CONTRIBUTOR",
    "FIRST_TIME_CONTRIBUTOR",
    "FIRST_TIMER",
    "MANNEQUIN",
    "NONE",
]

event_names = st.sampled_from(
    ["issues", "issue_comment", "pull_request_review_comment", "pull_request_review"]
)
numbers = st.integers(min_value=1, max_value=1000000)


@st.composite
def comment_body(draw: st.DrawFn) -> str:
    """Generate a comment body that may or may not mention the macro."""
    prefix = draw(st.text(max_size=200))
    suffix = draw(st.text(max_size=200))
    if draw(st.booleans()):
        return f"{prefix}{DEFAULT_MACRO}{suffix}"
    return prefix + suffix


@st.composite
def comment_event_payload(draw: st.DrawFn) -> dict:
    """Generate an issue_comment or pull_request_review_comment payload."""
    return {
        "event_name": draw(
            st.sampled_from(["issue_comment", "pull_request_review_comment"])
        ),
        "issue": {"number": draw(numbers)},
        "comment": {
            "id": draw(numbers),
            "body": draw(comment_body()),
            "author_association": draw(st.sampled_from(ALL_ASSOCIATIONS)),
        },
    }


@st.composite
def review_event_payload(draw: st.DrawFn) -> dict:
    return {
        "event_name": "pull_request_review",
        "pull_request": {"number": draw(numbers)},
        "review": {
            "id": draw(numbers),
            "body": draw(comment_body()),
            "author_association": draw(st.sampled_from(ALL_ASSOCIATIONS)),
        },
    }


# =============================================================================
# Property Tests
# =============================================================================


class TestWorkflowCallProperty:
    @given(
        issue_number=st.one_of(st.none(), numbers),
        pr_number=st.one_of(st.none(), numbers),
    )
    @settings(max_examples=100)
    def test_workflow_call_always_triggers_without_target(
        self, issue_number, pr_number
    ) -> None:
        payload = {
            "issue": {"number": issue_number},
            "pull_request": {"number": pr_number},
        }

        verdict = parse_github_event(payload, event_name="workflow_call")

        assert verdict.should_trigger is True
        assert verdict.trigger_reason == "workflow_call"
        assert verdict.issue_number is None
        assert verdict.issue_type is None


class TestLabelProperty:
    @given(event_name=event_names, number=numbers)
    @settings(max_examples=100)
    def test_fix_me_label_triggers_for_any_event(self, event_name, number) -> None:
        verdict = parse_github_event(
            {
                "event_name": event_name,
                "label": {"name": "fix-me"},
                "issue": {"number": number},
            }
        )

        assert verdict.should_trigger is True
        assert verdict.trigger_reason is not None

    @given(
        label=st.text(min_size=1, max_size=50).filter(lambda x: x != "fix-me"),
        number=numbers,
    )
    @settings(max_examples=100)
    def test_other_labels_do_not_trigger(self, label, number) -> None:
        verdict = parse_github_event(
            {"label": {"name": label}, "issue": {"number": number}},
            event_name="issues",
        )

        assert verdict.should_trigger is False
        assert verdict.trigger_reason is None


class TestMacroAuthorizationProperty:
    """Comments trigger iff the body has the macro AND the author is trusted."""

    @given(payload=comment_event_payload())
    @settings(max_examples=200)
    def test_comment_trigger_rule(self, payload: dict) -> None:
        comment = payload["comment"]
        expected = (
            DEFAULT_MACRO in comment["body"]
            and comment["author_association"] in DEFAULT_ALLOWED_ASSOCIATIONS
        )

        verdict = parse_github_event(payload)

        assert verdict.should_trigger is expected
        if expected:
            assert verdict.comment_id == comment["id"]
            assert verdict.trigger_reason == f"comment with {DEFAULT_MACRO}"
        else:
            assert verdict.comment_id is None

    @given(payload=review_event_payload())
    @settings(max_examples=200)
    def test_review_trigger_rule(self, payload: dict) -> None:
        review = payload["review"]
        expected = (
            DEFAULT_MACRO in review["body"]
            and review["author_association"] in DEFAULT_ALLOWED_ASSOCIATIONS
        )

        verdict = parse_github_event(payload)

        assert verdict.should_trigger is expected
        assert verdict.issue_number == payload["pull_request"]["number"]
        assert verdict.issue_type == IssueType.PR


class TestTargetProperty:
    @given(
        event_name=event_names,
        number=numbers,
        is_pr=st.booleans(),
        marker=st.sampled_from([{"url": "https://api.github.com/pulls/1"}, {}, True]),
    )
    @settings(max_examples=100)
    def test_issue_payload_type_follows_pull_request_marker(
        self, event_name, number, is_pr, marker
    ) -> None:
        issue = {"number": number}
        if is_pr:
            issue["pull_request"] = marker

        verdict = parse_github_event({"event_name": event_name, "issue": issue})

        assert verdict.issue_number == number
        assert verdict.issue_type == (IssueType.PR if is_pr else IssueType.ISSUE)

    @given(event_name=event_names, pr_number=numbers, issue_number=numbers)
    @settings(max_examples=100)
    def test_pull_request_number_takes_precedence(
        self, event_name, pr_number, issue_number
    ) -> None:
        verdict = parse_github_event(
            {
                "event_name": event_name,
                "pull_request": {"number": pr_number},
                "issue": {"number": issue_number},
            }
        )

        assert verdict.issue_number == pr_number
        assert verdict.issue_type == IssueType.PR

    @given(payload=st.one_of(comment_event_payload(), review_event_payload()))
    @settings(max_examples=100)
    def test_positive_verdict_always_has_reason(self, payload: dict) -> None:
        verdict = parse_github_event(payload)

        if verdict.should_trigger:
            assert verdict.trigger_reason is not None
