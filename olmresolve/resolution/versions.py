"""Semantic versions and version ranges."""

from __future__ import annotations

import functools
import operator
import re
from dataclasses import dataclass, field
from typing import Callable

_NUMBERS = re.compile(r"^[0-9]+$")
_ALNUM = re.compile(r"^[0-9A-Za-z-]+$")


class SemverError(ValueError):
    """Raised when a version or a version range cannot be parsed."""


def _parse_number(text: str, name: str) -> int:
    if not _NUMBERS.match(text):
        raise SemverError(f"Invalid character(s) found in {name} number {text!r}".replace("'", '"'))
    if len(text) > 1 and text.startswith("0"):
        raise SemverError(
            f"{name.capitalize()} number must not contain leading zeroes {text!r}".replace("'", '"')
        )
    return int(text)


def _parse_pre(text: str) -> int | str:
    if not text:
        raise SemverError("Prerelease is empty")
    if _NUMBERS.match(text):
        if len(text) > 1 and text.startswith("0"):
            raise SemverError(f'Number must not contain leading zeroes "{text}"')
        return int(text)
    if not _ALNUM.match(text):
        raise SemverError(f'Invalid character(s) found in prerelease "{text}"')
    return text


def _compare_pre(a: int | str, b: int | str) -> int:
    if isinstance(a, int) and isinstance(b, int):
        return (a > b) - (a < b)
    if isinstance(a, int):
        return -1
    if isinstance(b, int):
        return 1
    return (a > b) - (a < b)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version; build metadata does not take part in ordering."""

    major: int
    minor: int
    patch: int
    pre: tuple[int | str, ...] = ()
    build: tuple[str, ...] = field(default=())

    @classmethod
    def parse(cls, text: str) -> "Version":
        if not text:
            raise SemverError("Version string empty")
        parts = text.split(".", 2)
        if len(parts) != 3:
            raise SemverError("No Major.Minor.Patch elements found")
        major = _parse_number(parts[0], "major")
        minor = _parse_number(parts[1], "minor")
        rest = parts[2]
        build: tuple[str, ...] = ()
        pre: tuple[int | str, ...] = ()
        if "+" in rest:
            rest, build_text = rest.split("+", 1)
            build_parts = build_text.split(".")
            for item in build_parts:
                if not item:
                    raise SemverError("Build meta data is empty")
                if not _ALNUM.match(item):
                    raise SemverError(f'Invalid character(s) found in build meta data "{item}"')
            build = tuple(build_parts)
        if "-" in rest:
            rest, pre_text = rest.split("-", 1)
            pre = tuple(_parse_pre(item) for item in pre_text.split("."))
        patch = _parse_number(rest, "patch")
        return cls(major, minor, patch, pre, build)

    def compare(self, other: "Version") -> int:
        """Return -1, 0 or 1 as this version is lower, equal or higher."""
        left = (self.major, self.minor, self.patch)
        right = (other.major, other.minor, other.patch)
        if left != right:
            return -1 if left < right else 1
        if not self.pre and not other.pre:
            return 0
        if not self.pre:
            return 1
        if not other.pre:
            return -1
        for a, b in zip(self.pre, other.pre):
            result = _compare_pre(a, b)
            if result:
                return result
        return (len(self.pre) > len(other.pre)) - (len(self.pre) < len(other.pre))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "Version") -> bool:
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.pre))

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            text += "-" + ".".join(str(p) for p in self.pre)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


_OPERATORS: dict[str, Callable[[int], bool]] = {
    ">=": lambda c: c >= 0,
    "<=": lambda c: c <= 0,
    ">": lambda c: c > 0,
    "<": lambda c: c < 0,
    "!=": lambda c: c != 0,
    "!": lambda c: c != 0,
    "==": lambda c: c == 0,
    "=": lambda c: c == 0,
    "": lambda c: c == 0,
}
_OP_ORDER = (">=", "<=", "!=", "==", ">", "<", "!", "=")
_WILDCARDS = {"x", "X", "*"}


def _split_op(token: str) -> tuple[str, str]:
    for op in _OP_ORDER:
        if token.startswith(op):
            return op, token[len(op):]
    return "", token


def _expand_wildcard(op: str, text: str) -> list[tuple[str, str]]:
    parts = text.split(".")
    if not any(p in _WILDCARDS for p in parts):
        return [(op, text)]
    if len(parts) == 3 and parts[2] in _WILDCARDS and parts[1] not in _WILDCARDS:
        low = f"{parts[0]}.{parts[1]}.0"
        high = f"{parts[0]}.{_parse_number(parts[1], 'minor') + 1}.0"
    elif len(parts) in (2, 3) and parts[1] in _WILDCARDS:
        low = f"{parts[0]}.0.0"
        high = f"{_parse_number(parts[0], 'major') + 1}.0.0"
    else:
        raise SemverError(f"Could not parse Range {text!r}: invalid wildcard")
    expansions = {
        "": [(">=", low), ("<", high)],
        "=": [(">=", low), ("<", high)],
        "==": [(">=", low), ("<", high)],
        ">": [(">=", high)],
        ">=": [(">=", low)],
        "<": [("<", low)],
        "<=": [("<", high)],
    }
    if op not in expansions:
        raise SemverError(f"Could not parse Range {text!r}: wildcard with {op!r} is not supported")
    return expansions[op]


@dataclass(frozen=True)
class VersionRange:
    """Alternatives joined by '||', each a list of comparisons that must all hold."""

    alternatives: tuple[tuple[tuple[str, Version], ...], ...]
    text: str = ""

    @classmethod
    def parse(cls, text: str) -> "VersionRange":
        alternatives = []
        for part in text.split("||"):
            tokens = part.split()
            merged: list[str] = []
            pending = ""
            for token in tokens:
                if token in _OPERATORS and token:
                    pending += token
                    continue
                merged.append(pending + token)
                pending = ""
            if pending or not merged:
                raise SemverError(f"Could not parse Range {text!r}: incomplete comparison")
            comparisons = []
            for token in merged:
                op, version_text = _split_op(token)
                for exp_op, exp_text in _expand_wildcard(op, version_text):
                    try:
                        version = Version.parse(exp_text)
                    except SemverError as exc:
                        raise SemverError(f"Could not parse Range {token!r}: {exc}") from exc
                    comparisons.append((exp_op, version))
            alternatives.append(tuple(comparisons))
        return cls(tuple(alternatives), text)

    def __contains__(self, version: Version) -> bool:
        return any(
            all(_OPERATORS[op](version.compare(bound)) for op, bound in alternative)
            for alternative in self.alternatives
        )

    def __call__(self, version: Version) -> bool:
        return version in self


def parse_version(text: str) -> Version:
    """Parse a semantic version string."""
    return Version.parse(text)


def parse_range(text: str) -> VersionRange:
    """Parse a version range expression such as '>=1.0.0 <2.0.0 || 3.x'."""
    return VersionRange.parse(text)


_ = operator  # keeps imports explicit for readers of comparison helpers