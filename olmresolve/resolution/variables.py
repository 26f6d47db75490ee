"""Resolution variables for bundles, package requirements and uniqueness."""

from __future__ import annotations

from typing import Iterable

from .entities import BundleEntity
from .model import SimpleVariable, at_most, dependency, mandatory


class BundleVariable(SimpleVariable):
    """A bundle that may be chosen, depending on at least one of its dependencies."""

    def __init__(
        self, bundle_entity: BundleEntity, dependencies: Iterable[BundleEntity]
    ) -> None:
        deps = list(dependencies)
        ids = [dep.id for dep in deps]
        constraints = [dependency(*ids)] if ids else []
        super().__init__(bundle_entity.id, constraints)
        self.bundle_entity = bundle_entity
        self.dependencies = deps


class BundleUniquenessVariable(SimpleVariable):
    """Allows at most one of the given bundles into a solution.

    Used to keep a single bundle per package and per provided GVK.
    """

    def __init__(self, identifier: str, *at_most_ids: str) -> None:
        super().__init__(identifier, [at_most(1, *at_most_ids)])


class RequiredPackageVariable(SimpleVariable):
    """A mandatory variable satisfied by any of a package's candidate bundles."""

    def __init__(self, package_name: str, bundle_entities: Iterable[BundleEntity]) -> None:
        bundles = list(bundle_entities)
        super().__init__(
            f"required package {package_name}",
            [mandatory(), dependency(*(bundle.id for bundle in bundles))],
        )
        self.bundle_entities = bundles