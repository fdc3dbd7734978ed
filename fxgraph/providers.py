"""Exchange-rate providers and the lazy rate sources built on them.

A provider answers two questions: how many ``quote`` units one ``base`` unit
buys, and what one unit of a currency is worth in the reference unit. Rate
sources created by :class:`ProviderRate` defer both questions to the provider
until the search actually traverses the edge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol, Set, Tuple

from fxgraph.config import SEARCH_CONFIG


class RateProvider(Protocol):
    """Protocol for anything able to quote exchange rates."""

    def exchange_rate(self, base: str, quote: str) -> float:
        """Return the BASE/QUOTE rate."""
        ...

    def rate_to_reference(self, currency: str) -> float:
        """Return the CURRENCY/reference rate."""
        ...

    def available_currencies(self) -> Set[str]:
        """Return every currency this provider can quote."""
        ...


@dataclass
class StaticRateProvider:
    """In-memory rate table.

    Attributes:
        rates: Mapping ``(base, quote) -> rate``.
        reference_rates: Mapping ``currency -> rate to the reference unit``.
        default_rate: Rate returned for pairs missing from ``rates``. When None,
            a missing pair raises KeyError.
        default_reference_rate: Same as ``default_rate`` for ``reference_rates``.
        reference: Label of the reference unit.
    """

    rates: Dict[Tuple[str, str], float] = field(default_factory=dict)
    reference_rates: Dict[str, float] = field(default_factory=dict)
    default_rate: Optional[float] = None
    default_reference_rate: Optional[float] = None
    reference: str = field(default_factory=lambda: SEARCH_CONFIG.reference_currency)

    def exchange_rate(self, base: str, quote: str) -> float:
        try:
            return self.rates[(base, quote)]
        except KeyError:
            if self.default_rate is None:
                raise KeyError(f"No exchange rate for pair {base}/{quote}") from None
            return self.default_rate

    def rate_to_reference(self, currency: str) -> float:
        if currency == self.reference:
            return self.reference_rates.get(currency, 1.0)
        try:
            return self.reference_rates[currency]
        except KeyError:
            if self.default_reference_rate is None:
                raise KeyError(
                    f"No rate from {currency} to reference unit {self.reference}"
                ) from None
            return self.default_reference_rate

    def available_currencies(self) -> Set[str]:
        currencies = set(self.reference_rates)
        for base, quote in self.rates:
            currencies.add(base)
            currencies.add(quote)
        return currencies


@dataclass(frozen=True)
class ProviderRate:
    """Rate source for the directed edge ``base -> quote`` backed by a provider.

    Every call re-queries the provider, so a provider with changing quotes is
    observed at search time rather than at graph construction time.

    Equality and hashing use ``(base, quote)`` only; ``provider`` is ignored.
    Two sources for the same pair from different providers are therefore the
    same edge label, and :meth:`LabeledDiGraph.connect_nodes` rejects the
    second one as a duplicate.
    """

    provider: RateProvider = field(compare=False, hash=False)
    base: str
    quote: str

    def rate(self) -> float:
        return self.provider.exchange_rate(self.base, self.quote)

    def rate_to_reference_unit(self) -> float:
        return self.provider.rate_to_reference(self.quote)


#: Quotes served by :func:`mock_provider`.
MOCK_RATES: Mapping[Tuple[str, str], float] = {
    ("USD", "YEN"): 107.0,
    ("YEN", "RMB"): 0.066,
}

#: Reference-unit rates served by :func:`mock_provider`.
MOCK_REFERENCE_RATES: Mapping[str, float] = {
    "USD": 1.0,
    "YEN": 0.0094,
    "RMB": 0.14,
}


def mock_provider() -> StaticRateProvider:
    """Return a fixed provider with a handful of fake quotes.

    Unknown pairs and currencies quote at 1.
    """
    return StaticRateProvider(
        rates=dict(MOCK_RATES),
        reference_rates=dict(MOCK_REFERENCE_RATES),
        default_rate=1.0,
        default_reference_rate=1.0,
        reference="USD",
    )
