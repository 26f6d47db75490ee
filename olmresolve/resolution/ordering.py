"""Ordering of bundle entities by package, channel and version."""

from __future__ import annotations

import functools
from typing import Any, Callable, Iterable

from .entities import BundleEntity, PropertyError
from .model import Entity


def _attempt(getter: Callable[[], Any]) -> tuple[Any, bool]:
    try:
        return getter(), False
    except PropertyError:
        return None, True


def _compare_errors(failed1: bool, failed2: bool) -> int:
    if failed1 and not failed2:
        return 1
    if failed2 and not failed1:
        return -1
    return 0


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _package_order(e1: BundleEntity, e2: BundleEntity) -> int:
    name1, failed1 = _attempt(e1.package_name)
    name2, failed2 = _attempt(e2.package_name)
    order = _compare_errors(failed1, failed2)
    if order:
        return order
    return _sign(name1 or "", name2 or "")


def _channel_order(e1: BundleEntity, e2: BundleEntity) -> int:
    channel1, failed1 = _attempt(e1.channel_properties)
    channel2, failed2 = _attempt(e2.channel_properties)
    order = _compare_errors(failed1, failed2)
    if order or failed1:
        return order
    if channel1.priority != channel2.priority:
        return channel1.priority - channel2.priority
    return _sign(channel1.channel_name, channel2.channel_name)


def _version_order(e1: BundleEntity, e2: BundleEntity) -> int:
    version1, failed1 = _attempt(e1.version)
    version2, failed2 = _attempt(e2.version)
    order = _compare_errors(failed1, failed2)
    if order or failed1:
        # versions run from highest to lowest, so the sign flips
        return -order
    return version1.compare(version2)


def compare_by_channel_and_version(entity1: Entity, entity2: Entity) -> int:
    """Compare two entities: package name, then channel, then highest version first.

    An entity missing a property sorts after one that has it. A negative
    result means entity1 comes first.
    """
    e1 = BundleEntity(entity1)
    e2 = BundleEntity(entity2)
    order = _package_order(e1, e2)
    if order:
        return order
    order = _channel_order(e1, e2)
    if order:
        return order
    return -_version_order(e1, e2)


def by_channel_and_version(entity1: Entity, entity2: Entity) -> bool:
    """Tell whether entity1 sorts before entity2."""
    return compare_by_channel_and_version(entity1, entity2) < 0


def sort_entities(entities: Iterable[Entity]) -> list[Entity]:
    """Return the entities in package, channel and descending version order."""
    return sorted(entities, key=functools.cmp_to_key(compare_by_channel_and_version))