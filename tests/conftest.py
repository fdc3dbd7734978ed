"""Shared fixtures for fxgraph tests."""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

import pytest

from fxgraph.lib.graph import LabeledDiGraph
from fxgraph.lib.rates import FixedRate, RateSource
from fxgraph.providers import ProviderRate, mock_provider
from fxgraph.web import CurrencyWeb

RATES_YAML = """\
reference: USD
reference_rates:
  USD: 1.0
  YEN: 0.0094
  RMB: 0.14
rates:
  USD: {YEN: 107.0, RMB: 7.0}
  YEN: {USD: 0.0093, RMB: 0.066}
  RMB: {USD: 0.14, YEN: 15.1}
"""


def make_graph(
    edges: Iterable[Tuple[str, str, float]],
    reference: Dict[str, float] | None = None,
) -> Tuple[LabeledDiGraph, Dict[str, RateSource]]:
    """Build a graph from ``(parent, child, rate)`` triples.

    Every edge prices its child with ``reference[child]`` (default 1.0). The
    returned mapping gives each node a source priced the same way, for use
    as ``reference_of``.
    """
    reference = reference or {}
    g: LabeledDiGraph = LabeledDiGraph()
    for parent, child, rate in edges:
        g.add_node(parent)
        g.add_node(child)
        g.connect_nodes(parent, child, FixedRate(rate, reference.get(child, 1.0)))
    ref_sources: Dict[str, RateSource] = {
        node: FixedRate(1.0, reference.get(node, 1.0)) for node in g.get_nodes()
    }
    return g, ref_sources


@pytest.fixture
def mock_web() -> CurrencyWeb:
    # USD <-> YEN <-> RMB priced by the mock provider:
    #   USD->YEN 107.0, YEN->RMB 0.066, every other pair 1.0
    #   to USD: USD 1.0, YEN 0.0094, RMB 0.14
    provider = mock_provider()
    web = CurrencyWeb()
    for base, quote in (("USD", "YEN"), ("YEN", "RMB")):
        web.add_exchange_rate(
            base,
            quote,
            ProviderRate(provider, base, quote),
            ProviderRate(provider, quote, base),
        )
    return web


@pytest.fixture
def greedy_trap():
    #        [2]       [0.9]
    #   S ───────► A ───────► D
    #   │                     ▲
    #   │ [1]     [0.5]       │ [100]
    #   └──────► B ───────► C─┘
    #
    # The A branch reaches D first even though S-B-C-D is worth far more.
    return make_graph(
        [
            ("S", "A", 2.0),
            ("A", "D", 0.9),
            ("S", "B", 1.0),
            ("B", "C", 0.5),
            ("C", "D", 100.0),
        ]
    )


@pytest.fixture
def rates_file(tmp_path):
    path = tmp_path / "rates.yaml"
    path.write_text(RATES_YAML, encoding="utf-8")
    return path


@pytest.fixture
def graph_factory():
    return make_graph
