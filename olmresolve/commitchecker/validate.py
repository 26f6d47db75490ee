"""Checks applied to every commit in a range."""

from __future__ import annotations

from typing import Callable

from .git import UPSTREAM_SUMMARY_EXPRESSION, Commit

_UPSTREAM = "UPSTREAM"

# (tag, description) pairs shown as well-formed summaries.
_EXAMPLES = (
    ("12345", "A kube fix"),
    ("<carry>", "A carried kube change"),
    ("<drop>", "A dropped kube change"),
    ("revert: 12345", "A kube revert"),
)


def _indent(line: str) -> str:
    return f"  {line}"


def _invalid_summary_report(commit: Commit) -> str:
    examples = "\n".join(
        _indent(f"{_UPSTREAM}: {tag}: {text}") for tag, text in _EXAMPLES
    )
    sections = [
        f"{_UPSTREAM} commit {commit.sha} has invalid summary {commit.summary}.",
        f"{_UPSTREAM} commits are validated against the following regular expression:\n"
        + _indent(UPSTREAM_SUMMARY_EXPRESSION),
        f"{_UPSTREAM} commit summaries should look like:",
        _indent(f"{_UPSTREAM}: <PR number|carry|drop>: description"),
        f"{_UPSTREAM} commits which revert previous {_UPSTREAM} commits should look like:",
        _indent(f"{_UPSTREAM}: revert: <normal upstream format>"),
        "Examples of valid summaries:",
        examples,
    ]
    return "\n" + "\n\n".join(sections) + "\n"


def validate_commit_author(commit: Commit) -> list[str]:
    """Reject commits authored from a root account."""
    if commit.email.startswith("root@"):
        return [f'Commit {commit.sha} has invalid email "{commit.email}"']
    return []


def validate_commit_message(commit: Commit) -> list[str]:
    """Require non-merge commit summaries to follow the upstream convention."""
    if commit.matches_merge_summary_pattern():
        return []
    if not commit.matches_upstream_summary_pattern():
        return [_invalid_summary_report(commit)]
    return []


ALL_COMMIT_VALIDATORS: tuple[Callable[[Commit], list[str]], ...] = (
    validate_commit_author,
    validate_commit_message,
)