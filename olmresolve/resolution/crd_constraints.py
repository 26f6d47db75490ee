"""A variable source that keeps one bundle per package and per provided GVK."""

from __future__ import annotations

from typing import Any

from .entities import PropertyError
from .variables import BundleUniquenessVariable, BundleVariable


class CRDUniquenessConstraintsVariableSource:
    """Adds uniqueness variables over the bundles named by the input source's bundle variables.

    The entity source is only handed on to the input source; it is never queried here.
    """

    def __init__(self, input_variable_source: Any) -> None:
        self.input_variable_source = input_variable_source

    def get_variables(self, entity_source: Any) -> list:
        """Return the input variables followed by package and GVK uniqueness variables."""
        variables = list(self.input_variable_source.get_variables(entity_source))

        package_bundles: dict[str, dict[str, None]] = {}
        gvk_bundles: dict[str, dict[str, None]] = {}
        for variable in variables:
            if not isinstance(variable, BundleVariable):
                continue
            for bundle in (variable.bundle_entity, *variable.dependencies):
                try:
                    package_name = bundle.package_name()
                    package_bundles.setdefault(package_name, {})[bundle.id] = None
                    provided = bundle.provided_gvks()
                except PropertyError as exc:
                    raise PropertyError(f"error creating global constraints: {exc}") from exc
                for gvk in provided:
                    gvk_bundles.setdefault(str(gvk), {})[bundle.id] = None

        variables.extend(
            BundleUniquenessVariable(f"{package_name} package uniqueness", *ids)
            for package_name, ids in package_bundles.items()
        )
        variables.extend(
            BundleUniquenessVariable(f"{gvk} gvk uniqueness", *ids)
            for gvk, ids in gvk_bundles.items()
        )
        return variables