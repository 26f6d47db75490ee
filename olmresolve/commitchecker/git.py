"""Inspection of git commits and the files they touch."""

from __future__ import annotations

import json
import os
import re
import subprocess
from dataclasses import dataclass, field
from typing import Iterable, Pattern

MERGE_SUMMARY_PATTERN = re.compile(r"^Merge commit .*")

# The expression as it is shown to people whose commits are rejected.
UPSTREAM_SUMMARY_EXPRESSION = (
    r"^UPSTREAM: (revert: )?(([\w\.-]+\/[\w-\.-]+)?: )?(\d+:|<carry>:|<drop>:)"
)
UPSTREAM_SUMMARY_PATTERN = re.compile(
    r"^UPSTREAM: (revert: )?(([\w.-]+/[\w.-]+)?: )?(\d+:|<carry>:|<drop>:)",
    re.ASCII,
)
BUMP_SUMMARY_PATTERN = re.compile(r"^bump[\(\w].*", re.ASCII)

# Paths inside the vendor directory that may be patched directly.
PATCH_REGEXPS: tuple[Pattern[str], ...] = (re.compile(r"^k8s.io/kubernetes/.*"),)

# Number of leading path segments that name the repository for each host.
SUPPORTED_HOSTS: dict[str, int] = {
    "bitbucket.org": 3,
    "cloud.google.com": 2,
    "code.google.com": 3,
    "github.com": 3,
    "gopkg.in": 2,
    "k8s.io": 2,
    "speter.net": 2,
}

_VENDOR_PREFIX = "vendor/"


class GitError(Exception):
    """Raised when a git command or a commit inspection fails."""


class NotCommitError(GitError):
    """Raised when a revision given for a range is not a commit."""

    def __init__(self) -> None:
        super().__init__("one or both of the provided commits was not a valid commit")


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def regexps_to_strings(patterns: Iterable[Pattern[str]]) -> list[str]:
    """Return the source text of each compiled pattern."""
    return [pattern.pattern for pattern in patterns]


class File(str):
    """A path changed by a commit."""

    def has_vendored_code_changes(self) -> bool:
        return self.startswith("vendor")

    def is_patch(self) -> bool:
        if not self.startswith(_VENDOR_PREFIX):
            return False
        inner = self[len(_VENDOR_PREFIX):]
        return any(pattern.search(inner) for pattern in PATCH_REGEXPS)

    def vendor_repo(self) -> str:
        """Return the repository a vendored file belongs to."""
        if not self.startswith(_VENDOR_PREFIX):
            raise GitError(f"file {_quote(self)} doesn't appear to be a vendor change")
        parts = self[len(_VENDOR_PREFIX):].split(os.sep)
        segments = SUPPORTED_HOSTS.get(parts[0])
        if segments is None:
            raise GitError(f"unsupported host for file {_quote(self)}")
        if segments < 1 or len(parts) < segments:
            raise GitError(
                f"invalid number of segments {segments} when processing file path {_quote(self)}"
            )
        return os.sep.join(parts[:segments])


@dataclass
class Commit:
    """A commit with its summary, description, changed files and author e-mail."""

    sha: str = ""
    summary: str = ""
    description: list[str] = field(default_factory=list)
    files: list[File] = field(default_factory=list)
    email: str = ""

    def matches_merge_summary_pattern(self) -> bool:
        return MERGE_SUMMARY_PATTERN.search(self.summary) is not None

    def matches_upstream_summary_pattern(self) -> bool:
        return UPSTREAM_SUMMARY_PATTERN.search(self.summary) is not None

    def matches_bump_summary_pattern(self) -> bool:
        return BUMP_SUMMARY_PATTERN.search(self.summary) is not None

    def declared_upstream_repo(self) -> str:
        match = UPSTREAM_SUMMARY_PATTERN.search(self.summary)
        if match is None:
            raise GitError("commit doesn't match the upstream commit summary pattern")
        return match.group(3) or "k8s.io/kubernetes"

    def has_vendored_code_changes(self) -> bool:
        return any(File(f).has_vendored_code_changes() for f in self.files)

    def has_non_vendored_code_changes(self) -> bool:
        return any(not File(f).has_vendored_code_changes() for f in self.files)

    def has_patches(self) -> bool:
        return any(File(f).is_patch() for f in self.files)

    def has_bumped_files(self) -> bool:
        return any(
            File(f).has_vendored_code_changes() and not File(f).is_patch()
            for f in self.files
        )

    def patched_repos(self) -> list[str]:
        """Return the repositories of patched files, first appearance first."""
        repos: dict[str, None] = {}
        for name in self.files:
            path = File(name)
            if path.is_patch():
                repos.setdefault(path.vendor_repo(), None)
        return list(repos)


class _CommandFailed(Exception):
    def __init__(self, stdout: str, stderr: str, reason: str) -> None:
        super().__init__(reason)
        self.stdout = stdout
        self.stderr = stderr
        self.reason = reason


def _run(*args: str, cwd: str | None = None) -> tuple[str, str]:
    try:
        proc = subprocess.run(
            list(args), capture_output=True, text=True, cwd=cwd, check=False
        )
    except OSError as exc:
        raise _CommandFailed("", "", str(exc)) from exc
    if proc.returncode != 0:
        raise _CommandFailed(
            proc.stdout or "", proc.stderr or "", f"exit status {proc.returncode}"
        )
    return proc.stdout or "", proc.stderr or ""


def _git_in(repo_dir: str, *args: str) -> str:
    if not os.path.isdir(repo_dir):
        raise FileNotFoundError(f"no such directory: {repo_dir}")
    try:
        stdout, _ = _run("git", *args, cwd=repo_dir)
    except _CommandFailed as exc:
        raise GitError(
            f"out={exc.stdout.strip()}, err={exc.stderr.strip()}, {exc.reason}"
        ) from exc
    return stdout


def _git_output(*args: str) -> str:
    try:
        stdout, _ = _run("git", *args)
    except _CommandFailed as exc:
        raise GitError(f"{exc.stderr}: {exc.reason}") from exc
    return stdout


def _non_empty_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line]


def is_commit(rev: str) -> bool:
    """Tell whether git can resolve the revision."""
    try:
        _run("git", "rev-parse", rev)
    except _CommandFailed:
        return False
    return True


def commits_between(start: str, end: str) -> list[Commit]:
    """Return the commits in the range start..end, newest first."""
    try:
        stdout, _ = _run("git", "log", "--oneline", f"{start}..{end}")
    except _CommandFailed as exc:
        if not is_commit(start) or not is_commit(end):
            raise NotCommitError() from exc
        raise GitError(f"error executing git log: {exc.stderr}: {exc.reason}") from exc
    return [commit_from_oneline_log(line) for line in _non_empty_lines(stdout)]


def commit_from_oneline_log(log: str) -> Commit:
    """Build a commit from one line of `git log --oneline`, querying its details."""
    parts = log.split(" ")
    if len(parts) < 2:
        raise GitError(f"invalid log entry: {log}")
    sha = parts[0]
    return Commit(
        sha=sha,
        summary=" ".join(parts[1:]),
        description=_non_empty_lines(_git_output("log", "--pretty=%b", "-1", sha)),
        files=[
            File(name)
            for name in _non_empty_lines(
                _git_output("diff-tree", "--no-commit-id", "--name-only", "-r", sha)
            )
        ],
        email=_git_output("show", "--format=%ae", "-s", sha).strip(),
    )


def fetch_repo(repo_dir: str) -> None:
    """Fetch from origin in the given repository."""
    _git_in(repo_dir, "fetch", "origin")


def is_ancestor(commit1: str, commit2: str, repo_dir: str) -> bool:
    """Return True when commit1 is an ancestor of commit2; raise GitError otherwise."""
    _git_in(repo_dir, "merge-base", "--is-ancestor", commit1, commit2)
    return True


def commit_date(commit: str, repo_dir: str) -> str:
    """Fetch from origin and return the committer date of a commit."""
    _git_in(repo_dir, "fetch", "origin")
    return _git_in(repo_dir, "show", "-s", "--format=%ci", commit).strip()


def checkout(commit: str, repo_dir: str) -> None:
    """Check out a commit in the given repository."""
    _git_in(repo_dir, "checkout", commit)


def current_rev(repo_dir: str) -> str:
    """Return the revision HEAD points at."""
    return _git_in(repo_dir, "rev-parse", "HEAD").strip()