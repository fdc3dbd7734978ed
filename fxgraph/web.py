"""Currency web: a rate graph between currencies with arbitrage search."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Set

from fxgraph.config import SEARCH_CONFIG
from fxgraph.lib.graph import LabeledDiGraph
from fxgraph.lib.path import Path
from fxgraph.lib.rates import RateSource
from fxgraph.lib.search import CostOrder, search_path
from fxgraph.logging import get_logger
from fxgraph.providers import ProviderRate, RateProvider
from fxgraph.report import path_to_json

logger = get_logger(__name__)


class CurrencyWeb:
    """Tracks exchange rates between currencies and finds arbitrage paths.

    Each call to :meth:`add_exchange_rate` registers a pair of directed
    edges. The first source seen arriving at a currency also becomes that
    currency's reference-unit price.
    """

    def __init__(self) -> None:
        self.graph: LabeledDiGraph[str, RateSource] = LabeledDiGraph()
        self._reference_sources: Dict[str, RateSource] = {}

    def add_exchange_rate(
        self,
        base: str,
        quote: str,
        base_source: RateSource,
        quote_source: RateSource,
    ) -> None:
        """Add a two-way exchange rate to the web.

        Args:
            base: Base currency.
            quote: Quote currency.
            base_source: Rate source of the ``base -> quote`` edge.
            quote_source: Rate source of the ``quote -> base`` edge.
        """
        self.graph.add_node(base)
        self.graph.add_node(quote)
        self.graph.connect_nodes(base, quote, base_source)
        self.graph.connect_nodes(quote, base, quote_source)
        # base_source ends at quote and vice versa
        self._reference_sources.setdefault(base, quote_source)
        self._reference_sources.setdefault(quote, base_source)

    def currencies(self) -> Set[str]:
        """Return the currencies in the web."""
        return self.graph.get_nodes()

    def reference_source(self, currency: str) -> RateSource:
        """Return the rate source pricing ``currency`` in the reference unit.

        Raises:
            ValueError: If ``currency`` is not part of the web.
        """
        try:
            return self._reference_sources[currency]
        except KeyError:
            raise ValueError(f"Unknown currency '{currency}'") from None

    def find_path(
        self,
        start: str,
        dest: str,
        order: Optional[CostOrder] = None,
    ) -> Optional[Path]:
        """Find the arbitrage path from ``start`` to ``dest``.

        Args:
            start: Starting currency.
            dest: Ending currency.
            order: Frontier ordering; defaults to ``SEARCH_CONFIG.cost_order``.

        Returns:
            The path found, or None if ``dest`` is unreachable.

        Raises:
            ValueError: If ``start`` or ``dest`` is not a currency in the web.
        """
        if order is None:
            order = SEARCH_CONFIG.cost_order
        logger.debug(f"Searching {start} -> {dest} ({order.name})")
        return search_path(self.graph, self.reference_source, start, dest, order)

    def arbitrage_path_json(
        self, start: str, dest: str, order: Optional[CostOrder] = None
    ) -> str:
        """Return :meth:`find_path` rendered as JSON."""
        return path_to_json(self.find_path(start, dest, order))


def build_web(currencies: Iterable[str], provider: RateProvider) -> CurrencyWeb:
    """Build a web with an edge between every ordered pair of ``currencies``.

    Rates are not fetched here; each edge queries ``provider`` when traversed.

    Raises:
        ValueError: If a currency is not offered by ``provider``.
    """
    currencies = list(dict.fromkeys(currencies))
    available = provider.available_currencies()
    for currency in currencies:
        if currency not in available:
            raise ValueError(f"invalid currency: {currency}")

    web = CurrencyWeb()
    for base in currencies:
        for quote in currencies:
            if base != quote:
                web.add_exchange_rate(
                    base,
                    quote,
                    ProviderRate(provider, base, quote),
                    ProviderRate(provider, quote, base),
                )
    logger.debug(
        f"Built web with {len(currencies)} currencies and "
        f"{web.graph.number_of_edges()} edges"
    )
    return web
