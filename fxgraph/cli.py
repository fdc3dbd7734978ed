"""Command-line interface for fxgraph."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from fxgraph.config import SEARCH_CONFIG
from fxgraph.lib.search import CostOrder
from fxgraph.loader import load_rates_file
from fxgraph.logging import LOG_LEVEL_ENV, get_logger, set_global_log_level
from fxgraph.providers import ProviderRate, mock_provider
from fxgraph.report import path_to_json
from fxgraph.web import CurrencyWeb, build_web

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))

    return "\n".join(lines)


def _format_rate(value: Any) -> str:
    """Return a rate with up to six decimals, trailing zeros trimmed.

    Examples:
        107.0 -> "107"; 0.0094 -> "0.0094".
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return str(value)

    s = f"{v:,.6f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _emit(json_str: str, output: Optional[Path]) -> None:
    """Print ``json_str`` and optionally write it to ``output``."""
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json_str + "\n", encoding="utf-8")
        logger.info(f"Result written to {output}")
    print(json_str)


def _search(
    rates_path: Path,
    start: str,
    dest: str,
    currencies: Optional[List[str]],
    order: CostOrder,
    output: Optional[Path],
) -> None:
    """Load a rate table, build a web and print the arbitrage path."""
    _start_time = perf_counter()
    try:
        provider = load_rates_file(rates_path)
        selected = currencies or sorted(provider.available_currencies())
        web = build_web(selected, provider)
        path = web.find_path(start, dest, order)
    except FileNotFoundError:
        logger.error(f"Rate table not found: {rates_path}")
        print(f"❌ ERROR: Rate table not found: {rates_path}")
        sys.exit(1)
    except (ValueError, KeyError) as e:
        logger.error(f"Search failed: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Search failed: {type(e).__name__}: {e}")
        sys.exit(1)

    if path is None:
        logger.info(f"No path from {start} to {dest}")
    else:
        logger.info(f"Found {path} with profit {path.cost - 1:.6f}")
    _emit(path_to_json(path), output)

    _elapsed = perf_counter() - _start_time
    logger.info(f"Search completed in {_format_duration(_elapsed)}")


def _inspect(rates_path: Path) -> None:
    """Print the currencies and quotes of a rate table."""
    try:
        provider = load_rates_file(rates_path)
    except FileNotFoundError:
        logger.error(f"Rate table not found: {rates_path}")
        print(f"❌ ERROR: Rate table not found: {rates_path}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Failed to load rate table: {e}")
        print(f"❌ ERROR: Failed to load rate table: {e}")
        sys.exit(1)

    currencies = sorted(provider.available_currencies())
    print(f"Reference unit: {provider.reference}")
    print(f"Currencies: {len(currencies)}")
    rows = []
    for currency in currencies:
        ref = provider.reference_rates.get(currency)
        rows.append([currency, "-" if ref is None else _format_rate(ref)])
    if rows:
        print(_format_table(["Currency", f"To {provider.reference}"], rows))

    print(f"\nQuotes: {len(provider.rates)}")
    quote_rows = [
        [base, quote, _format_rate(rate)]
        for (base, quote), rate in sorted(provider.rates.items())
    ]
    if quote_rows:
        print(_format_table(["Base", "Quote", "Rate"], quote_rows))
    if provider.default_rate is not None:
        print(f"Unlisted pairs quote at {_format_rate(provider.default_rate)}")


def _demo(start: str, dest: str, order: CostOrder) -> None:
    """Search a small web priced by the mock provider."""
    provider = mock_provider()
    web = CurrencyWeb()
    for base, quote in (("USD", "YEN"), ("YEN", "RMB")):
        web.add_exchange_rate(
            base,
            quote,
            ProviderRate(provider, base, quote),
            ProviderRate(provider, quote, base),
        )
    try:
        print(web.arbitrage_path_json(start, dest, order))
    except ValueError as e:
        print(f"❌ ERROR: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``fxgraph`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="fxgraph",
        description="Find arbitrage paths through exchange-rate graphs.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{search,inspect,demo}",
        help="Available commands",
    )

    search_parser = subparsers.add_parser(
        "search", help="Find the arbitrage path between two currencies"
    )
    search_parser.add_argument("rates", type=Path, help="Path to rate table YAML")
    search_parser.add_argument("start", help="Starting currency")
    search_parser.add_argument("dest", help="Destination currency")
    search_parser.add_argument(
        "--currencies",
        "-c",
        nargs="+",
        default=None,
        help="Limit the web to these currencies (default: all in the table)",
    )
    search_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Also write the JSON result to this file",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Show the currencies and quotes of a rate table"
    )
    inspect_parser.add_argument("rates", type=Path, help="Path to rate table YAML")

    demo_parser = subparsers.add_parser(
        "demo", help="Search a built-in web of mock quotes"
    )
    demo_parser.add_argument("start", nargs="?", default="USD")
    demo_parser.add_argument("dest", nargs="?", default="RMB")

    for p in (search_parser, demo_parser):
        p.add_argument(
            "--order",
            choices=[o.name.lower() for o in CostOrder],
            default=None,
            help=f"Frontier ordering (default: {SEARCH_CONFIG.cost_order.name.lower()})",
        )
        p.add_argument(
            "--minimize",
            action="store_true",
            help="Shortcut for --order minimize_cost",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    elif not os.getenv(LOG_LEVEL_ENV):
        set_global_log_level(logging.INFO)

    order = SEARCH_CONFIG.cost_order
    if getattr(args, "order", None):
        order = CostOrder.from_string(args.order)
    if getattr(args, "minimize", False):
        order = CostOrder.MINIMIZE_COST

    if args.command == "search":
        _search(args.rates, args.start, args.dest, args.currencies, order, args.output)
    elif args.command == "inspect":
        _inspect(args.rates)
    elif args.command == "demo":
        _demo(args.start, args.dest, order)


if __name__ == "__main__":
    main()
