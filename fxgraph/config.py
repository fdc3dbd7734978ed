"""Configuration classes for fxgraph components."""

from dataclasses import dataclass
from typing import Optional

from fxgraph.lib.search import CostOrder


@dataclass
class SearchConfig:
    """Defaults for arbitrage path search and result rendering."""

    # Frontier ordering used when a caller does not pick one
    cost_order: CostOrder = CostOrder.MAXIMIZE_COST

    # Label of the unit every reference-unit rate converts into
    reference_currency: str = "USD"

    # Indentation of rendered JSON; None renders a single line
    json_indent: Optional[int] = None


# Global configuration instance
SEARCH_CONFIG = SearchConfig()
