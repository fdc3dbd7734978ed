"""YAML loader for rate tables.

Parses a YAML document into a :class:`~fxgraph.providers.StaticRateProvider`.
Expected shape::

    reference: USD
    default_rate: 1.0
    reference_rates:
      USD: 1.0
      YEN: 0.0094
    rates:
      USD: {YEN: 107.0}
      YEN: {RMB: 0.066}
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from fxgraph.config import SEARCH_CONFIG
from fxgraph.logging import get_logger
from fxgraph.providers import StaticRateProvider

logger = get_logger(__name__)

_ALLOWED_KEYS = {
    "reference",
    "default_rate",
    "default_reference_rate",
    "reference_rates",
    "rates",
}


def normalize_yaml_dict_keys(data: Dict[Any, Any]) -> Dict[str, Any]:
    """Normalize dictionary keys from YAML parsing to strings.

    YAML 1.1 turns keys such as ``NO`` or ``ON`` (both real currency-like
    codes) into booleans. They come back as "True"/"False"; quote such codes
    in the YAML file to keep them intact.
    """
    return {str(key): value for key, value in data.items()}


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{where} must be a positive finite number, got {value!r}")
    return float(value)


def _optional_number(data: Dict[str, Any], key: str) -> Optional[float]:
    if data.get(key) is None:
        return None
    return _number(data[key], f"'{key}'")


def load_rates_yaml(yaml_str: str) -> StaticRateProvider:
    """Parse a rate table YAML string.

    Raises:
        ValueError: If the document does not have the expected shape.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    data = normalize_yaml_dict_keys(data)

    unknown = set(data) - _ALLOWED_KEYS
    if unknown:
        raise ValueError(f"Unrecognized top-level keys: {sorted(unknown)}")

    reference_section = data.get("reference_rates") or {}
    if not isinstance(reference_section, dict):
        raise ValueError("'reference_rates' must be a mapping")
    reference_rates = {
        currency: _number(value, f"reference rate of '{currency}'")
        for currency, value in normalize_yaml_dict_keys(reference_section).items()
    }

    rates_section = data.get("rates") or {}
    if not isinstance(rates_section, dict):
        raise ValueError("'rates' must be a mapping")
    rates: Dict[Tuple[str, str], float] = {}
    for base, quotes in normalize_yaml_dict_keys(rates_section).items():
        if not isinstance(quotes, dict):
            raise ValueError(f"Rates of '{base}' must be a mapping of quote -> rate")
        for quote, value in normalize_yaml_dict_keys(quotes).items():
            rates[(base, quote)] = _number(value, f"rate {base}/{quote}")

    provider = StaticRateProvider(
        rates=rates,
        reference_rates=reference_rates,
        default_rate=_optional_number(data, "default_rate"),
        default_reference_rate=_optional_number(data, "default_reference_rate"),
        reference=str(data.get("reference", SEARCH_CONFIG.reference_currency)),
    )
    logger.debug(
        f"Loaded {len(rates)} rates and {len(reference_rates)} reference rates"
    )
    return provider


def load_rates_file(path: Union[str, Path]) -> StaticRateProvider:
    """Read and parse a rate table YAML file."""
    return load_rates_yaml(Path(path).read_text(encoding="utf-8"))
