"""Command line entry point that validates the commits in a revision range."""

from __future__ import annotations

import argparse
import sys

from .git import GitError, NotCommitError, commits_between
from .validate import ALL_COMMIT_VALIDATORS


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="commitchecker")
    parser.add_argument(
        "-start",
        "--start",
        default="master",
        help="The start of the revision range for analysis",
    )
    parser.add_argument(
        "-end",
        "--end",
        default="HEAD",
        help="The end of the revision range for analysis",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Validate every commit in start..end and return the exit status."""
    args = _parser().parse_args(argv)
    try:
        commits = commits_between(args.start, args.end)
    except NotCommitError:
        print(
            "WARNING: one of the provided commits does not exist, not a true branch",
            file=sys.stderr,
        )
        return 0
    except GitError as exc:
        print(
            f"ERROR: couldn't find commits from {args.start}..{args.end}: {exc}",
            file=sys.stderr,
        )
        return 1

    errors = [
        error
        for validate in ALL_COMMIT_VALIDATORS
        for commit in commits
        for error in validate(commit)
    ]
    for error in errors:
        print(error, end="\n\n", file=sys.stderr)
    return 2 if errors else 0


if __name__ == "__main__":
    sys.exit(main())