"""Command-line entry point for the Kilocode resolver action.

Each workflow step calls one subcommand and reads its result from the step
outputs (``$GITHUB_OUTPUT``) or stdout:

    kilocode-resolver validate-env
    kilocode-resolver classify
    kilocode-resolver write-config
    kilocode-resolver command
    kilocode-resolver prompt --title ... --body-file ...
    kilocode-resolver branch-name --issue 42
    kilocode-resolver commit-message --issue 42
    kilocode-resolver pr-body --issue 42
    kilocode-resolver result-comment --issue 42 --branch ... [--has-changes]

Exit codes: 0 on success, 1 on configuration or input errors.
"""

import argparse
import json
import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from .agent import (
    build_agent_config,
    build_command,
    generate_prompt,
    write_agent_config,
)
from .config import ResolverSettings, get_settings, validate_environment
from .github import (
    ResolutionResult,
    generate_branch_name,
    generate_commit_message,
    generate_pr_body,
    generate_result_comment,
)
from .webhook import TriggerVerdict, parse_github_event

logger = logging.getLogger(__name__)


def _redact_secret(value: str, visible_chars: int = 4) -> str:
    """Redact a secret value, showing only the first few characters.

    Args:
        value: The secret value to redact.
        visible_chars: Number of characters to show at the start.

    Returns:
        Redacted string with asterisks replacing hidden characters.
    """
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def _log_configuration(settings: ResolverSettings) -> None:
    """Log configuration values with secrets redacted."""
    logger.info("Resolver configuration:")
    logger.info("  API Key: %s", _redact_secret(settings.kilocode_api_key))
    logger.info("  PAT Token: %s", _redact_secret(settings.pat_token))
    logger.info("  PAT Username: %s", settings.pat_username or "<unset>")
    logger.info("  Provider: %s", settings.kilocode_provider)
    logger.info("  Model: %s", settings.kilocode_model)
    logger.info("  Timeout: %ss", settings.kilocode_timeout)
    logger.info("  Mode: %s", settings.kilocode_mode or "<default>")
    logger.info("  Macro: %s", settings.kilocode_macro)


def write_github_output(name: str, value: str) -> None:
    """Set a step output for the GitHub Actions workflow.

    Multi-line values use the heredoc form with a random delimiter. Nothing
    is written when GITHUB_OUTPUT is unset (e.g. local runs).
    """
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        return

    with open(output_file, "a", encoding="utf-8") as f:
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")


def _emit(name: str, value: str) -> None:
    print(value)
    write_github_output(name, value)


def _verdict_outputs(verdict: TriggerVerdict) -> Dict[str, str]:
    def text(value) -> str:
        return "" if value is None else str(value)

    return {
        "should_trigger": "true" if verdict.should_trigger else "false",
        "trigger_reason": text(verdict.trigger_reason),
        "issue_number": text(verdict.issue_number),
        "issue_type": text(verdict.issue_type.value if verdict.issue_type else None),
        "comment_id": text(verdict.comment_id),
    }


# -----------------------------------------------------------------------------
# Subcommands
# -----------------------------------------------------------------------------


def validate_env_cli(args: argparse.Namespace) -> int:
    result = validate_environment(os.environ)

    for warning in result.warnings:
        logger.warning(warning)
    for error in result.errors:
        print(f"error: {error}", file=sys.stderr)

    return 0 if result.valid else 1


def classify_cli(args: argparse.Namespace) -> int:
    event_path = args.event_path or os.environ.get("GITHUB_EVENT_PATH")
    event_name = args.event_name or os.environ.get("GITHUB_EVENT_NAME")

    if not event_path:
        print("error: no event file given and GITHUB_EVENT_PATH is unset", file=sys.stderr)
        return 1

    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        print(f"error: cannot read event file {event_path}: {exc}", file=sys.stderr)
        return 1

    settings = get_settings()
    verdict = parse_github_event(
        payload,
        event_name=event_name,
        classifier=settings.event_classifier(),
    )

    print(verdict.model_dump_json())
    for name, value in _verdict_outputs(verdict).items():
        write_github_output(name, value)

    if verdict.should_trigger and not verdict.has_target:
        logger.info("No target issue/PR identified; results will not be commented")

    return 0


def write_config_cli(args: argparse.Namespace) -> int:
    settings = get_settings()
    _log_configuration(settings)

    config = build_agent_config(settings.agent_options())
    try:
        path = write_agent_config(config, args.path)
    except OSError as exc:
        print(f"error: cannot write config: {exc}", file=sys.stderr)
        return 1

    _emit("config_path", str(path))
    return 0


def command_cli(args: argparse.Namespace) -> int:
    settings = get_settings()
    command = build_command(settings.command_options())
    _emit("command", " ".join(command.argv))
    return 0


def prompt_cli(args: argparse.Namespace) -> int:
    body = args.body
    if args.body_file:
        try:
            body = Path(args.body_file).read_text(encoding="utf-8")
        except OSError as exc:
            print(f"error: cannot read body file: {exc}", file=sys.stderr)
            return 1

    _emit("prompt", generate_prompt(args.title, body))
    return 0


def branch_name_cli(args: argparse.Namespace) -> int:
    _emit("branch_name", generate_branch_name(args.issue, args.timestamp))
    return 0


def commit_message_cli(args: argparse.Namespace) -> int:
    _emit("commit_message", generate_commit_message(args.issue))
    return 0


def pr_body_cli(args: argparse.Namespace) -> int:
    _emit("pr_body", generate_pr_body(args.issue))
    return 0


def result_comment_cli(args: argparse.Namespace) -> int:
    repository = args.repo or os.environ.get("GITHUB_REPOSITORY", "")
    run_id = args.run_id or os.environ.get("GITHUB_RUN_ID", "")

    owner, _, name = repository.partition("/")
    if not owner or not name:
        print(
            f"error: repository must be in owner/repo form, got {repository!r}",
            file=sys.stderr,
        )
        return 1

    try:
        result = ResolutionResult(
            issue_number=args.issue,
            has_changes=args.has_changes,
            pr_number=args.pr_number,
            pr_url=args.pr_url,
            branch_name=args.branch,
            repo_owner=owner,
            repo_name=name,
            run_id=run_id,
        )
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _emit("comment", generate_result_comment(result))
    return 0


# -----------------------------------------------------------------------------
# Parser
# -----------------------------------------------------------------------------


def _add_issue_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--issue",
        type=int,
        required=True,
        help="Issue or pull request number.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kilocode-resolver",
        description="Trigger decisions and text rendering for the Kilocode resolver action.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level. Defaults to INFO.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sub = subparsers.add_parser(
        "validate-env",
        help="Check that the required credentials are set.",
    )
    sub.set_defaults(func=validate_env_cli)

    sub = subparsers.add_parser(
        "classify",
        help="Decide whether the current event should launch the agent.",
    )
    sub.add_argument(
        "--event-path",
        help="Webhook payload file. Defaults to $GITHUB_EVENT_PATH.",
    )
    sub.add_argument(
        "--event-name",
        help="GitHub event name. Defaults to $GITHUB_EVENT_NAME.",
    )
    sub.set_defaults(func=classify_cli)

    sub = subparsers.add_parser(
        "write-config",
        help="Write the Kilocode CLI configuration file.",
    )
    sub.add_argument(
        "--path",
        help="Target file. Defaults to ~/.kilocode/config.json.",
    )
    sub.set_defaults(func=write_config_cli)

    sub = subparsers.add_parser(
        "command",
        help="Print the Kilocode CLI command line.",
    )
    sub.set_defaults(func=command_cli)

    sub = subparsers.add_parser(
        "prompt",
        help="Render the agent prompt for an issue.",
    )
    sub.add_argument("--title", required=True, help="Issue title.")
    body_group = sub.add_mutually_exclusive_group()
    body_group.add_argument("--body", help="Issue description.")
    body_group.add_argument("--body-file", help="File containing the issue description.")
    sub.set_defaults(func=prompt_cli)

    sub = subparsers.add_parser(
        "branch-name",
        help="Generate the branch name for a fix.",
    )
    _add_issue_argument(sub)
    sub.add_argument(
        "--timestamp",
        type=int,
        help="Unix timestamp in milliseconds. Defaults to now.",
    )
    sub.set_defaults(func=branch_name_cli)

    sub = subparsers.add_parser(
        "commit-message",
        help="Render the commit message for a fix.",
    )
    _add_issue_argument(sub)
    sub.set_defaults(func=commit_message_cli)

    sub = subparsers.add_parser(
        "pr-body",
        help="Render the pull request body for a fix.",
    )
    _add_issue_argument(sub)
    sub.set_defaults(func=pr_body_cli)

    sub = subparsers.add_parser(
        "result-comment",
        help="Render the status comment for the triggering issue/PR.",
    )
    _add_issue_argument(sub)
    sub.add_argument("--branch", default="", help="Branch the changes were pushed to.")
    sub.add_argument(
        "--has-changes",
        action="store_true",
        help="The agent modified files.",
    )
    sub.add_argument("--pr-number", type=int, help="Number of the created pull request.")
    sub.add_argument("--pr-url", help="URL of the created pull request.")
    sub.add_argument(
        "--repo",
        help="Repository in owner/repo form. Defaults to $GITHUB_REPOSITORY.",
    )
    sub.add_argument("--run-id", help="Workflow run id. Defaults to $GITHUB_RUN_ID.")
    sub.set_defaults(func=result_comment_cli)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    func: Callable[[argparse.Namespace], int] = args.func
    try:
        return func(args)
    except ValidationError as exc:
        print(f"error: invalid configuration: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
