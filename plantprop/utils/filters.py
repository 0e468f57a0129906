"""
Jinja2 template filters.

Keeps filter logic out of the app factory so it can be unit-tested easily.
"""

from __future__ import annotations

from plantprop.constants import MONTH_NAMES

_DIFFICULTY_CLASSES = {
    "easy": "badge-easy",
    "medium": "badge-medium",
    "hard": "badge-hard",
}


def method_label(value):
    """'stem-cutting' -> 'Stem Cutting'."""
    if not value:
        return ""
    return " ".join(part.capitalize() for part in str(value).split("-") if part)


def month_name(value):
    """Month number (1-12) to its English name; anything else is returned as text."""
    try:
        month = int(value)
    except (TypeError, ValueError):
        return str(value or "")
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return str(value)


def difficulty_class(value):
    """CSS class for a difficulty badge (unknown values render as medium)."""
    return _DIFFICULTY_CLASSES.get((value or "").lower(), _DIFFICULTY_CLASSES["medium"])
