"""Variable sources that combine other variable sources."""

from __future__ import annotations

from typing import Any, Callable, Iterable

# A constructor receives the source built so far (None for the first one)
# and returns a new source, usually wrapping the one it was given.
Constructor = Callable[[Any], Any]


class NestedVariableSource:
    """Builds a chain of variable sources, each wrapping the one before it."""

    def __init__(self, constructors: Iterable[Constructor] = ()) -> None:
        self.constructors = list(constructors)

    def get_variables(self, entity_source: Any) -> list:
        """Build the chain and return the variables of its outermost source."""
        if not self.constructors:
            raise ValueError("empty nested variable sources")
        source = None
        for construct in self.constructors:
            source = construct(source)
        return list(source.get_variables(entity_source))


class SliceVariableSource:
    """Concatenates the variables of several sources, in order."""

    def __init__(self, sources: Iterable[Any] = ()) -> None:
        self.sources = list(sources)

    def get_variables(self, entity_source: Any) -> list:
        """Return the variables of every source, one source after another."""
        return [
            variable
            for source in self.sources
            for variable in source.get_variables(entity_source)
        ]