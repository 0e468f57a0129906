"""
Shared utilities for loading JSON reference data from plantprop/data/.
"""

from __future__ import annotations
import json
import os
from typing import Any

_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")


def load_data_file(filename: str, default: Any = None) -> Any:
    """Load a JSON data file from plantprop/data/.

    Returns ``default`` (an empty list when not given) if the file is not found.
    """
    filepath = os.path.join(_DATA_DIR, filename)
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return [] if default is None else default
