from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    FrozenSet,
    Generic,
    Hashable,
    Iterator,
    List,
    NoReturn,
    Optional,
    Set,
    TypeVar,
)

import networkx as nx

from fxgraph.logging import get_logger

logger = get_logger(__name__)

NodeID = Hashable
N = TypeVar("N", bound=Hashable)
L = TypeVar("L", bound=Hashable)


@dataclass(frozen=True)
class Edge(Generic[N, L]):
    """
    An immutable directed edge from ``parent`` to ``child`` carrying ``label``.

    Edges are plain values: two edges are equal iff parent, child and label
    are all equal. They hold no reference to the graph that stores them.

    Attributes:
        parent (N): Source node of the edge.
        child (N): Destination node of the edge.
        label (L): Opaque label, e.g. a rate source.
    """

    parent: N
    child: N
    label: L


class LabeledDiGraph(nx.MultiDiGraph, Generic[N, L]):
    """
    A mutable directed graph whose edges are identified by their label.

    This class enforces:
      - No automatic creation of missing nodes when connecting nodes.
      - No duplicate edges: at most one edge per (parent, child, label).
      - Append-only: nodes and edges are never removed.
      - Self-loops and several differently labeled edges between the same
        ordered pair of nodes are allowed.

    ``add_node`` and ``connect_nodes`` never raise; both report success as a
    boolean so callers decide whether a repeated insertion is an error. The
    inherited ``add_edge``/``add_edges_from`` raise ValueError instead, and
    every removal method raises NotImplementedError.

    The label doubles as the multi-edge key, so labels must be hashable.

    Inherits from:
        networkx.MultiDiGraph
    """

    #
    # Node management
    #
    def add_node(self, n: N, **attr: Any) -> bool:
        """
        Add a single node if it is not already present.

        Args:
            n (N): The node to add.
            **attr: Arbitrary attributes for this node (only on first insert).

        Returns:
            bool: True if the node was newly inserted, False if it already existed.
        """
        if n in self:
            return False
        super().add_node(n, **attr)
        return True

    def contains_node(self, n: N) -> bool:
        """Return True if ``n`` is a node of this graph."""
        return n in self

    def get_nodes(self) -> Set[N]:
        """
        Return a snapshot of all nodes.

        Mutating the returned set never affects the graph.
        """
        return set(self._adj)

    #
    # Edge management
    #
    def connect_nodes(self, parent: N, child: N, label: L) -> bool:
        """
        Create a directed edge from ``parent`` to ``child`` labeled ``label``.

        Args:
            parent (N): The source node. Must exist in the graph.
            child (N): The target node. Must exist in the graph.
            label (L): The edge label; also used as the multi-edge key.

        Returns:
            bool: True if the edge was added. False, with the graph left
            unchanged, if either node is unknown or the same edge exists.
        """
        if parent not in self or child not in self:
            logger.debug(
                f"Rejected edge {parent!r}->{child!r}: unknown endpoint node"
            )
            return False
        if self.has_edge(parent, child, key=label):
            logger.debug(f"Rejected edge {parent!r}->{child!r}: duplicate label")
            return False
        super().add_edge(parent, child, key=label)
        return True

    def add_edge(
        self,
        u_for_edge: N,
        v_for_edge: N,
        key: Optional[L] = None,
        **attr: Any,
    ) -> L:
        """
        Add a directed edge labeled ``key`` from u_for_edge to v_for_edge.

        Strict counterpart of :meth:`connect_nodes` for networkx callers
        (``add_edges_from`` goes through here). Nodes are not created
        automatically and the label must be given explicitly.

        Args:
            u_for_edge (N): The source node. Must exist in the graph.
            v_for_edge (N): The target node. Must exist in the graph.
            key (L): The edge label. Must not already label an edge between
                the same nodes.
            **attr: Arbitrary edge attributes.

        Returns:
            L: The label of the new edge.

        Raises:
            ValueError: If either node does not exist, the label is missing,
                or the same edge already exists.
        """
        if u_for_edge not in self:
            raise ValueError(f"Source node '{u_for_edge}' does not exist.")
        if v_for_edge not in self:
            raise ValueError(f"Target node '{v_for_edge}' does not exist.")
        if key is None:
            raise ValueError(
                f"Edge '{u_for_edge}'->'{v_for_edge}' needs a label; "
                "use connect_nodes(parent, child, label)."
            )
        if self.has_edge(u_for_edge, v_for_edge, key=key):
            raise ValueError(
                f"Edge '{u_for_edge}'->'{v_for_edge}' labeled {key!r} already exists."
            )
        super().add_edge(u_for_edge, v_for_edge, key=key, **attr)
        return key

    def _append_only(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise NotImplementedError(
            f"{type(self).__name__} is append-only; nodes and edges cannot be removed."
        )

    remove_node = _append_only
    remove_nodes_from = _append_only
    remove_edge = _append_only
    remove_edges_from = _append_only
    clear = _append_only
    clear_edges = _append_only

    def outgoing_edges(self, n: N) -> FrozenSet[Edge[N, L]]:
        """
        Return every edge whose parent is ``n``.

        Args:
            n (N): The parent node.

        Returns:
            FrozenSet[Edge]: The outgoing edges, empty if ``n`` has none.

        Raises:
            ValueError: If ``n`` is not a node of this graph.
        """
        return frozenset(self.iter_outgoing_edges(n))

    def iter_outgoing_edges(self, n: N) -> Iterator[Edge[N, L]]:
        """
        Yield the edges whose parent is ``n`` in insertion order.

        Raises:
            ValueError: If ``n`` is not a node of this graph.
        """
        if n not in self:
            raise ValueError(f"Node '{n}' does not exist.")
        return (
            Edge(n, child, label)
            for child, keyed in self._adj[n].items()
            for label in keyed
        )

    def get_edges(self) -> List[Edge[N, L]]:
        """
        Return all edges of the graph.

        Returns:
            List[Edge]: One entry per stored (parent, child, label) triple.
        """
        return [Edge(u, v, key) for u, v, key in self.edges(keys=True)]
