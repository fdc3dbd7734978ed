"""fxgraph: arbitrage search over exchange-rate graphs.

fxgraph models currencies as nodes of a labeled directed graph whose edges
carry exchange rates. Rates compose multiplicatively along a path, and a
best-first search looks for the most profitable route between two currencies.

Primary API:
    CurrencyWeb - Register exchange rates and search for arbitrage
    build_web() - Build a full web of currencies from a rate provider
    search_path() - Best-first search over any rate-labeled graph
    LabeledDiGraph, Path - Core graph and path types

Example:
    from fxgraph import CurrencyWeb, FixedRate

    web = CurrencyWeb()
    web.add_exchange_rate(
        "USD", "YEN", FixedRate(107.0, 0.0094), FixedRate(0.0093, 1.0)
    )
    path = web.find_path("USD", "YEN")
    print(path.nodes_seq, path.cost - 1)
"""

from __future__ import annotations

from fxgraph import cli, logging
from fxgraph._version import __version__
from fxgraph.lib.graph import Edge, LabeledDiGraph
from fxgraph.lib.path import InvalidEdgeWeightError, Path, Segment
from fxgraph.lib.rates import FixedRate, IdentityRate, RateSource
from fxgraph.lib.search import CostOrder, search_path
from fxgraph.loader import load_rates_file, load_rates_yaml
from fxgraph.providers import ProviderRate, RateProvider, StaticRateProvider
from fxgraph.report import path_to_dict, path_to_json
from fxgraph.web import CurrencyWeb, build_web

__all__ = [
    # Version
    "__version__",
    # Core
    "Edge",
    "LabeledDiGraph",
    "Path",
    "Segment",
    "InvalidEdgeWeightError",
    "CostOrder",
    "search_path",
    # Rates
    "RateSource",
    "FixedRate",
    "IdentityRate",
    "RateProvider",
    "ProviderRate",
    "StaticRateProvider",
    # Web
    "CurrencyWeb",
    "build_web",
    # IO
    "load_rates_file",
    "load_rates_yaml",
    "path_to_dict",
    "path_to_json",
    # Utilities
    "cli",
    "logging",
]
