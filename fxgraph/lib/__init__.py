"""Core graph, path and search types for fxgraph."""

from fxgraph.lib.graph import Edge, LabeledDiGraph
from fxgraph.lib.path import InvalidEdgeWeightError, Path, Segment
from fxgraph.lib.rates import FixedRate, IdentityRate, RateSource
from fxgraph.lib.search import CostOrder, search_path

__all__ = [
    "Edge",
    "LabeledDiGraph",
    "Path",
    "Segment",
    "InvalidEdgeWeightError",
    "RateSource",
    "FixedRate",
    "IdentityRate",
    "CostOrder",
    "search_path",
]
