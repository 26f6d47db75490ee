"""A variable source that requires a package to be installed."""

from __future__ import annotations

from typing import Any, Callable

from .entities import BundleEntity
from .model import all_of
from .ordering import sort_entities
from .predicates import in_channel as _channel_predicate
from .predicates import in_semver_range, with_package_name
from .variables import RequiredPackageVariable
from .versions import SemverError, parse_range

Option = Callable[["RequiredPackageVariableSource"], None]


def in_version_range(version_range: str) -> Option:
    """Restrict candidate bundles to a version range; an empty range means any."""

    def apply(source: "RequiredPackageVariableSource") -> None:
        if not version_range:
            return
        try:
            parsed = parse_range(version_range)
        except SemverError as exc:
            raise ValueError(f"invalid version range '{version_range}': {exc}") from exc
        source.version_range = version_range
        source.predicates.append(in_semver_range(parsed))

    return apply


def in_channel(channel_name: str) -> Option:
    """Restrict candidate bundles to a channel; an empty name means any."""

    def apply(source: "RequiredPackageVariableSource") -> None:
        if channel_name:
            source.channel_name = channel_name
            source.predicates.append(_channel_predicate(channel_name))

    return apply


class RequiredPackageVariableSource:
    """Produces one mandatory variable for a package and its candidate bundles."""

    def __init__(self, package_name: str, *options: Option) -> None:
        if not package_name:
            raise ValueError("package name must not be empty")
        self.package_name = package_name
        self.version_range = ""
        self.channel_name = ""
        self.predicates = [with_package_name(package_name)]
        for option in options:
            option(self)

    def get_variables(self, entity_source: Any) -> list:
        """Return the package variable, its bundles ordered highest version first."""
        found = entity_source.filter(all_of(*self.predicates))
        if not found:
            raise LookupError(self._not_found_message())
        bundles = [BundleEntity(entity) for entity in sort_entities(found)]
        return [RequiredPackageVariable(self.package_name, bundles)]

    def _not_found_message(self) -> str:
        if self.version_range and self.channel_name:
            return (
                f"package '{self.package_name}' at version '{self.version_range}' "
                f"in channel '{self.channel_name}' not found"
            )
        if self.version_range:
            return f"package '{self.package_name}' at version '{self.version_range}' not found"
        if self.channel_name:
            return f"package '{self.package_name}' in channel '{self.channel_name}' not found"
        return f"package '{self.package_name}' not found"