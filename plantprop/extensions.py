"""
Third-party extensions wiring.

Initializes shared Flask extension instances so other modules can import
configured objects without circular dependencies, and holds the per-app
service bundle (plant store, request store, zone resolver).
"""

from __future__ import annotations
from dataclasses import dataclass

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .services.plant_store import PlantStore
from .services.request_store import RequestStore
from .services.zone_detection import ZoneResolver

# Limiter is initialized by create_app() with app config for storage/limits.
# Routes apply per-endpoint limits with @limiter.limit("X per minute") etc.

limiter = Limiter(key_func=get_remote_address)

EXTENSION_KEY = "plantprop"


@dataclass
class Services:
    """Collaborators built once per app in create_app()."""

    plants: PlantStore
    requests: RequestStore
    zones: ZoneResolver


def init_services(app, services: Services) -> Services:
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services() -> Services:
    """Service bundle for the current app (requires an app context)."""
    return current_app.extensions[EXTENSION_KEY]
