"""Rate sources: the edge labels consumed by path search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class RateSource(Protocol):
    """Protocol for edge labels used by :func:`fxgraph.lib.search.search_path`.

    A rate source describes one directed edge ``base -> quote``. Implementations
    must be hashable because the graph uses labels as edge keys.
    """

    def rate(self) -> float:
        """Return the multiplier for traversing the edge (units of quote per base)."""
        ...

    def rate_to_reference_unit(self) -> float:
        """Return the factor converting the edge's destination into the reference unit."""
        ...


@dataclass(frozen=True)
class FixedRate:
    """Rate source with both factors known up front.

    Attributes:
        value: Traversal multiplier.
        reference: Destination-to-reference-unit factor.
    """

    value: float
    reference: float = 1.0

    def rate(self) -> float:
        return self.value

    def rate_to_reference_unit(self) -> float:
        return self.reference


@dataclass(frozen=True)
class IdentityRate:
    """Rate source for a zero-cost hop from a node to itself.

    Traversal multiplier is always 1; the reference factor is delegated to
    ``node_source`` so that the hop is priced the same way as the node.
    """

    node_source: RateSource

    def rate(self) -> float:
        return 1.0

    def rate_to_reference_unit(self) -> float:
        return self.node_source.rate_to_reference_unit()
