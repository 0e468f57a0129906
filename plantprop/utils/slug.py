"""
URL slug helpers.

Plant ids are derived from the common name with this one algorithm everywhere
(seed data, Supabase rows, URL lookups) so links stay stable.
"""

from __future__ import annotations
import re
from typing import Any

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: Any) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', trim edge hyphens.

    Example:
        >>> slugify("Swiss Cheese Plant (Monstera)")
        'swiss-cheese-plant-monstera'
    """
    return _NON_ALNUM.sub("-", str(text or "").lower()).strip("-")


def plant_slug(record: dict) -> str:
    """Slug for a raw plant record, preferring `name` then `common_name`."""
    name = record.get("name") or record.get("common_name") or record.get("commonName")
    return slugify(name) or "unknown-plant"
