"""A variable source that expands required packages into bundles and their dependencies."""

from __future__ import annotations

import functools
from collections import deque
from typing import Any

from .entities import BundleEntity, PropertyError
from .model import all_of
from .ordering import compare_by_channel_and_version
from .predicates import in_semver_range, provides_gvk, with_package_name
from .variables import BundleVariable, RequiredPackageVariable
from .versions import parse_range


def _compare_bundles(a: BundleEntity, b: BundleEntity) -> int:
    return compare_by_channel_and_version(a.entity, b.entity)


class BundlesAndDepsVariableSource:
    """Adds a bundle variable for every candidate bundle and, transitively, its dependencies."""

    def __init__(self, *variable_sources: Any) -> None:
        self.variable_sources = list(variable_sources)

    def get_variables(self, entity_source: Any) -> list:
        """Return the input variables followed by one bundle variable per reachable bundle."""
        variables = [
            variable
            for source in self.variable_sources
            for variable in source.get_variables(entity_source)
        ]

        queue: deque[BundleEntity] = deque(
            bundle
            for variable in variables
            if isinstance(variable, RequiredPackageVariable)
            for bundle in variable.bundle_entities
        )

        visited: set[str] = set()
        while queue:
            head = queue.popleft()
            if head.id in visited:
                continue
            visited.add(head.id)
            try:
                dependencies = self._entity_dependencies(head, entity_source)
            except Exception as exc:
                raise LookupError(
                    f"could not determine dependencies for entity with id '{head.id}': {exc}"
                ) from exc
            queue.extend(dependencies)
            variables.append(BundleVariable(head, dependencies))

        return variables

    def _entity_dependencies(
        self, bundle: BundleEntity, entity_source: Any
    ) -> list[BundleEntity]:
        dependencies: list[BundleEntity] = []
        added: set[str] = set()

        def collect(found: list) -> None:
            for entity in found:
                if entity.id not in added:
                    dependencies.append(BundleEntity(entity))
                    added.add(entity.id)

        try:
            required_packages = bundle.required_packages()
        except PropertyError:
            required_packages = []
        for required in required_packages:
            semver_range = parse_range(required.version_range)
            found = entity_source.filter(
                all_of(with_package_name(required.package_name), in_semver_range(semver_range))
            )
            if not found:
                raise LookupError(
                    f"could not find package dependencies for bundle '{bundle.id}'"
                )
            collect(found)

        try:
            required_gvks = bundle.required_gvks()
        except PropertyError:
            required_gvks = []
        for required_gvk in required_gvks:
            found = entity_source.filter(provides_gvk(required_gvk.as_gvk()))
            if not found:
                raise LookupError(f"could not find gvk dependencies for bundle '{bundle.id}'")
            collect(found)

        return sorted(dependencies, key=functools.cmp_to_key(_compare_bundles))