"""Predicates that select bundle entities by their properties."""

from __future__ import annotations

from .entities import GVK, BundleEntity, PropertyError
from .model import Entity, Predicate
from .versions import VersionRange


def with_package_name(package_name: str) -> Predicate:
    """Select entities that belong to the named package."""

    def predicate(entity: Entity) -> bool:
        try:
            return BundleEntity(entity).package_name() == package_name
        except PropertyError:
            return False

    return predicate


def in_semver_range(semver_range: VersionRange) -> Predicate:
    """Select entities whose version lies in the range."""

    def predicate(entity: Entity) -> bool:
        try:
            version = BundleEntity(entity).version()
        except PropertyError:
            return False
        return version in semver_range

    return predicate


def in_channel(channel_name: str) -> Predicate:
    """Select entities published in the named channel."""

    def predicate(entity: Entity) -> bool:
        try:
            return BundleEntity(entity).channel_name() == channel_name
        except PropertyError:
            return False

    return predicate


def provides_gvk(gvk: GVK) -> Predicate:
    """Select entities that provide the given group, version and kind."""
    wanted = str(gvk)

    def predicate(entity: Entity) -> bool:
        try:
            provided = BundleEntity(entity).provided_gvks()
        except PropertyError:
            return False
        return any(str(item) == wanted for item in provided)

    return predicate