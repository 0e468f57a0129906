"""
Flask CLI commands for quick checks from a shell.

Usage:
    flask detect-zone                       # Resolve the zone for this host's public IP
    flask detect-zone --ip 203.0.113.9      # Resolve the zone for a given IP
    flask plant-windows snake-plant --zone 9a --maturity young --environment inside
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from plantprop.constants import ENVIRONMENT_SYNONYMS, MATURITY_LEVELS


@click.command("detect-zone")
@click.option("--ip", default=None, help="IP address to geolocate (defaults to this host).")
@with_appcontext
def detect_zone_command(ip: str | None) -> None:
    """Run hardiness zone auto-detection and print the result."""
    from plantprop.extensions import get_services

    zone = get_services().zones.resolve_zone(ip)
    click.echo(f"Detected zone: {zone}" if zone else "Zone not detected.")


@click.command("plant-windows")
@click.argument("plant_id")
@click.option("--zone", required=True, help="USDA zone code, e.g. 9a.")
@click.option("--maturity", required=True, type=click.Choice([m[0] for m in MATURITY_LEVELS]))
@click.option("--environment", required=True, type=click.Choice(sorted(ENVIRONMENT_SYNONYMS)))
@click.option("--method", default=None, help="Preferred method hint (cutting, division, layering).")
@with_appcontext
def plant_windows_command(plant_id: str, zone: str, maturity: str, environment: str, method: str | None) -> None:
    """Print the propagation windows for a plant without storing a request."""
    from datetime import datetime, timezone

    from plantprop.extensions import get_services
    from plantprop.models import PropagationRequest
    from plantprop.services.propagation import compute_windows, recommend_method
    from plantprop.utils.validation import normalize_environment, normalize_zone

    result = get_services().plants.get_plant_by_id(plant_id)
    if result.is_failed:
        click.echo(f"Error: plant data unavailable ({result.error})")
        raise SystemExit(1)
    if not result.is_ok:
        click.echo(f"Error: no plant with id '{plant_id}'.")
        raise SystemExit(1)

    plant = result.value
    req = PropagationRequest(
        id="cli",
        plant_id=plant.id,
        zone=normalize_zone(zone),
        maturity=maturity,
        environment=normalize_environment(environment),
        created_at=datetime.now(timezone.utc),
    )
    windows = compute_windows(plant, req)

    click.echo(f"{plant.common_name} ({plant.scientific_name}) - zone {windows.zone}")
    click.echo(f"Adjusted success rate: {windows.adjusted_success_rate}%")
    for window in (windows.primary, windows.secondary):
        if window:
            click.echo(f"  {window.label}: {window.start_date} - {window.end_date} ({window.success_rate}%)")
    click.echo(f"Last frost: {windows.zone_info.last_frost}; first frost: {windows.zone_info.first_frost}")
    click.echo(f"Recommended method: {recommend_method(plant, method)}")
