"""Rendering of search results."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from fxgraph.config import SEARCH_CONFIG
from fxgraph.lib.path import Path


def path_to_dict(path: Optional[Path]) -> Dict[str, Any]:
    """Return the serializable form of a search result.

    Keys:
        percent_profit: ``cost - 1`` of the path, or None when no path was found.
        path: Node names from start to end, empty when no path was found.
    """
    if path is None:
        return {"percent_profit": None, "path": []}
    return {
        "percent_profit": path.cost - 1,
        "path": [str(node) for node in path.nodes_seq],
    }


def path_to_json(path: Optional[Path], indent: Optional[int] = None) -> str:
    """Render :func:`path_to_dict` as a JSON string.

    Args:
        path: Search result; None renders the not-found form.
        indent: JSON indentation; defaults to ``SEARCH_CONFIG.json_indent``.
    """
    if indent is None:
        indent = SEARCH_CONFIG.json_indent
    return json.dumps(path_to_dict(path), indent=indent)
