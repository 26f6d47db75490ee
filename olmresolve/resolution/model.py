"""Entities, constraints, variables and an in-memory entity source."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

Predicate = Callable[["Entity"], bool]


@dataclass
class Entity:
    """A resolvable item with an identifier and JSON-encoded properties."""

    id: str
    properties: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Mandatory:
    """The variable must be part of any solution."""


@dataclass(frozen=True)
class Dependency:
    """At least one of the identified variables must be chosen."""

    ids: tuple[str, ...]


@dataclass(frozen=True)
class AtMost:
    """At most n of the identified variables may be chosen."""

    n: int
    ids: tuple[str, ...]


Constraint = Mandatory | Dependency | AtMost


@dataclass
class SimpleVariable:
    """A variable identified by an id and bound by constraints."""

    identifier: str
    constraints: list = field(default_factory=list)


def mandatory() -> Mandatory:
    return Mandatory()


def dependency(*ids: str) -> Dependency:
    return Dependency(tuple(ids))


def at_most(n: int, *ids: str) -> AtMost:
    return AtMost(n, tuple(ids))


def all_of(*predicates: Predicate) -> Predicate:
    """Combine predicates so that every one must hold."""

    def combined(entity: Entity) -> bool:
        return all(predicate(entity) for predicate in predicates)

    return combined


class CacheQuerier:
    """An entity source backed by a mapping of identifiers to entities."""

    def __init__(self, entities: dict[str, Entity] | Iterable[Entity]) -> None:
        if isinstance(entities, dict):
            self._entities = dict(entities)
        else:
            self._entities = {entity.id: entity for entity in entities}

    def get(self, identifier: str) -> Entity:
        try:
            return self._entities[identifier]
        except KeyError:
            raise KeyError(f"entity with id: {identifier} not found") from None

    def filter(self, predicate: Predicate) -> list[Entity]:
        return [entity for entity in self._entities.values() if predicate(entity)]

    def group_by(self, fn: Callable[[Entity], Iterable[str]]) -> dict[str, list[Entity]]:
        groups: dict[str, list[Entity]] = {}
        for entity in self._entities.values():
            for key in fn(entity):
                groups.setdefault(key, []).append(entity)
        return groups

    def iterate(self, fn: Callable[[Entity], None]) -> None:
        for entity in self._entities.values():
            fn(entity)