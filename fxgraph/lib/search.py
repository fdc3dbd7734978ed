from __future__ import annotations

from enum import IntEnum
from heapq import heappop, heappush
from itertools import count
from typing import Callable, Hashable, List, Optional, Set, Tuple

from fxgraph.lib.graph import LabeledDiGraph
from fxgraph.lib.path import Path
from fxgraph.lib.rates import IdentityRate, RateSource
from fxgraph.logging import get_logger

logger = get_logger(__name__)

NodeID = Hashable


class CostOrder(IntEnum):
    """
    Frontier ordering used by :func:`search_path`.
    """

    #: Pop the highest-cost path first (most profitable; default).
    MAXIMIZE_COST = 0
    #: Pop the lowest-cost path first.
    MINIMIZE_COST = 1

    @classmethod
    def from_string(cls, value: str) -> "CostOrder":
        """Parse a case-insensitive name such as "maximize_cost" or "MINIMIZE_COST".

        Raises:
            ValueError: If the string doesn't match any enum member.
        """
        try:
            return cls[value.upper()]
        except KeyError:
            valid = ", ".join(e.name for e in cls)
            raise ValueError(
                f"Invalid cost order '{value}'. Valid values are: {valid}"
            ) from None


def _priority(order: CostOrder) -> Callable[[Path], float]:
    """Return the heap key for ``order``; heapq always pops the smallest key."""
    if order == CostOrder.MINIMIZE_COST:
        return lambda path: path.cost
    if order == CostOrder.MAXIMIZE_COST:
        return lambda path: -path.cost
    raise ValueError(f"Unsupported cost order: {order!r}")


def search_path(
    graph: LabeledDiGraph,
    reference_of: Callable[[NodeID], RateSource],
    start: NodeID,
    destination: NodeID,
    order: CostOrder = CostOrder.MAXIMIZE_COST,
) -> Optional[Path]:
    """
    Best-first search for the best-cost path from ``start`` to ``destination``.

    Edge labels must be rate sources. Rates compose multiplicatively, and the
    objective is the path's reference-unit ``cost``. This is a greedy search:
    the first time ``destination`` is popped from the frontier its path is
    returned. It is not a verified optimum for arbitrary multiplicative rates.

    Args:
        graph: Graph whose edge labels implement :class:`RateSource`.
        reference_of: Maps a node to a rate source pricing it in the reference unit.
        start: Source node.
        destination: Destination node.
        order: Frontier ordering; maximizing cost finds the most profitable path.

    Returns:
        The path found, or None if ``destination`` could not be reached.

    Raises:
        ValueError: If ``start`` or ``destination`` is not a node of ``graph``.
    """
    if not graph.contains_node(start):
        raise ValueError(f"Start node '{start}' does not exist.")
    if not graph.contains_node(destination):
        raise ValueError(f"Destination node '{destination}' does not exist.")

    priority = _priority(order)
    start_source = reference_of(start)
    start_path: Path = Path(start, start_source)

    if start == destination:
        return start_path

    # The zero-length self hop makes the start path's cost computed the same
    # way as every other frontier entry.
    start_to_start = start_path.extend(start, IdentityRate(start_source))

    tie_breaker = count()
    frontier: List[Tuple[float, int, Path]] = []
    heappush(frontier, (priority(start_to_start), next(tie_breaker), start_to_start))
    finished: Set[NodeID] = set()

    while frontier:
        _, _, best = heappop(frontier)
        node = best.end

        if node == destination:
            logger.debug(f"Reached {destination!r} via {best} (cost={best.cost})")
            return best

        if node in finished:
            continue

        for edge in graph.iter_outgoing_edges(node):
            if edge.child in finished:
                continue
            if edge.parent == start:
                # Legacy behavior: hops leaving ``start`` always extend the
                # canonical zero-length start path, never the popped prefix.
                new_path = start_path.extend(edge.child, edge.label)
            else:
                new_path = best.extend(edge.child, edge.label)
            heappush(frontier, (priority(new_path), next(tie_breaker), new_path))

        finished.add(node)

    logger.debug(f"No path from {start!r} to {destination!r}")
    return None
