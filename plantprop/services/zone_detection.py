"""
Hardiness zone auto-detection (ipapi.co + phzmapi.org).

Functions:
- ZoneResolver.detect_location(ip): approximate location for an IP address.
- ZoneResolver.lookup_hardiness_zone(postal_code): USDA zone for a US ZIP code.
- ZoneResolver.resolve_zone(ip): chain both lookups into a zone code or None.

Notes:
- Detection only pre-fills the zone field on the form; users can always pick a
  zone manually, so every failure degrades to None and nothing is raised.
- Each HTTP stage retries exactly once after a short fixed delay. There is no
  retry at the resolve_zone level.
- Worst case latency is about 2 x (timeout + delay) per stage.
"""

from __future__ import annotations
import ipaddress
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from .results import LookupResult

logger = logging.getLogger(__name__)

DEFAULT_GEOLOCATION_URL = "https://ipapi.co/json/"
DEFAULT_GEOLOCATION_IP_URL = "https://ipapi.co/{ip}/json/"
DEFAULT_ZONE_LOOKUP_URL = "https://phzmapi.org/{postal_code}.json"
DEFAULT_TIMEOUT = 5          # seconds per HTTP attempt
DEFAULT_RETRY_DELAY = 0.5    # seconds between the first attempt and the retry

_US_ZIP5 = re.compile(r"^\d{5}$")


@dataclass(frozen=True)
class LocationData:
    """Location fields from the geolocation provider; any may be missing."""

    postal_code: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


def _public_ip(ip_address: str | None) -> Optional[str]:
    """Return the address only if it is a routable public IP."""
    if not ip_address:
        return None
    try:
        addr = ipaddress.ip_address(ip_address.strip())
    except ValueError:
        return None
    return str(addr) if addr.is_global else None


class ZoneResolver:
    """Best-effort IP -> location -> hardiness zone lookup."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        geolocation_url: str = DEFAULT_GEOLOCATION_URL,
        geolocation_ip_url: str = DEFAULT_GEOLOCATION_IP_URL,
        zone_lookup_url: str = DEFAULT_ZONE_LOOKUP_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session or requests.Session()
        self.geolocation_url = geolocation_url
        self.geolocation_ip_url = geolocation_ip_url
        self.zone_lookup_url = zone_lookup_url
        self.timeout = timeout
        self.retry_delay = retry_delay
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: Mapping[str, Any], session: Optional[requests.Session] = None) -> "ZoneResolver":
        """Build a resolver from Flask config keys (see plantprop.config)."""
        return cls(
            session=session,
            geolocation_url=config.get("GEOLOCATION_URL", DEFAULT_GEOLOCATION_URL),
            geolocation_ip_url=config.get("GEOLOCATION_IP_URL", DEFAULT_GEOLOCATION_IP_URL),
            zone_lookup_url=config.get("ZONE_LOOKUP_URL", DEFAULT_ZONE_LOOKUP_URL),
            timeout=float(config.get("ZONE_LOOKUP_TIMEOUT", DEFAULT_TIMEOUT)),
            retry_delay=float(config.get("ZONE_RETRY_DELAY", DEFAULT_RETRY_DELAY)),
        )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _attempt(self, url: str) -> LookupResult[Dict[str, Any]]:
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            return LookupResult.failed(f"network error: {e}")
        if not 200 <= r.status_code < 300:
            return LookupResult.failed(f"status {r.status_code}")
        try:
            data = r.json()
        except ValueError as e:
            return LookupResult.failed(f"invalid JSON: {e}")
        if not isinstance(data, dict):
            return LookupResult.failed("unexpected payload shape")
        if data.get("error") is True:
            return LookupResult.failed(f"provider error: {data.get('reason', 'unknown')}")
        return LookupResult.ok(data)

    def _get_json(self, url: str, what: str) -> LookupResult[Dict[str, Any]]:
        """GET with one retry after `retry_delay` on any failure."""
        result = self._attempt(url)
        if result.is_failed:
            logger.warning(f"[Zone Detection] {what} failed ({result.error}), retrying once")
            self._sleep(self.retry_delay)
            result = self._attempt(url)
            if result.is_failed:
                logger.error(f"[Zone Detection] {what} failed after retry: {result.error}")
        return result

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def detect_location(self, ip_address: str | None = None) -> Optional[LocationData]:
        """
        Geolocate an IP address.

        Args:
            ip_address: Caller IP. Private/invalid/missing addresses fall back to
                        the provider's view of the requesting host.

        Returns:
            LocationData, or None when both attempts failed
        """
        ip = _public_ip(ip_address)
        url = self.geolocation_ip_url.format(ip=ip) if ip else self.geolocation_url

        result = self._get_json(url, "Location lookup")
        if not result.is_ok:
            return None

        data = result.value
        postal = data.get("postal")
        return LocationData(
            postal_code=str(postal).strip() if postal else None,
            city=data.get("city"),
            region=data.get("region"),
            country=data.get("country_name"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )

    def lookup_hardiness_zone(self, postal_code: str) -> Optional[str]:
        """
        USDA hardiness zone for a 5-digit postal code.

        Returns:
            Lowercase trimmed zone like "6a", or None if the lookup failed or the
            payload had no zone field
        """
        result = self._get_json(self.zone_lookup_url.format(postal_code=postal_code), f"Zone lookup for {postal_code}")
        if not result.is_ok:
            return None

        zone = result.value.get("zone")
        if not zone:
            logger.info(f"[Zone Detection] No zone in response for {postal_code}")
            return None

        clean = str(zone).strip().lower()
        logger.info(f"[Zone Detection] Hardiness zone from API: {clean}")
        return clean or None

    def resolve_zone(self, ip_address: str | None = None) -> Optional[str]:
        """
        Detect the caller's hardiness zone, or None.

        Never raises. A missing location or a postal code that is not five
        digits short-circuits to None without a zone lookup.
        """
        try:
            location = self.detect_location(ip_address)
            if not location:
                logger.info("[Zone Detection] Could not detect location")
                return None

            logger.info(f"[Zone Detection] Location detected: {location.city}, {location.region}")

            postal = location.postal_code
            if not postal or not _US_ZIP5.match(postal):
                logger.info("[Zone Detection] No valid 5-digit postal code; skipping zone lookup")
                return None

            zone = self.lookup_hardiness_zone(postal)
            if zone:
                logger.info(f"[Zone Detection] Detected USDA zone: {zone}")
            return zone
        except Exception as e:
            logger.exception(f"[Zone Detection] Unexpected error in auto-detection: {e}")
            return None
