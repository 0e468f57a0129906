"""
Per-visitor zone detection helpers.

The detected zone is cached in the Flask session so the outbound lookups run at
most once per visitor. A failed detection is cached as "" so it is not retried
on every page view.
"""

from __future__ import annotations
from typing import Optional

from flask import current_app, request, session

from plantprop.services.zone_detection import ZoneResolver

SESSION_ZONE_KEY = "detected_zone"


def client_ip() -> Optional[str]:
    """Best guess at the visitor's IP (first X-Forwarded-For hop behind a proxy)."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.remote_addr


def cached_zone() -> Optional[str]:
    return session.get(SESSION_ZONE_KEY) or None


def detect_zone_for_visitor(resolver: ZoneResolver, force: bool = False) -> Optional[str]:
    """
    Session-cached zone, resolving it on first use.

    Args:
        resolver: ZoneResolver from the app's service bundle
        force: Ignore a cached failure and try again

    Returns:
        Zone code like "9a", or None if detection is disabled or failed
    """
    if SESSION_ZONE_KEY in session and not (force and not session[SESSION_ZONE_KEY]):
        return cached_zone()

    if not current_app.config.get("ZONE_AUTO_DETECT", True):
        return None

    zone = resolver.resolve_zone(client_ip())
    session[SESSION_ZONE_KEY] = zone or ""
    return zone
