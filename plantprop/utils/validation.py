"""
Input validation and normalization.

Trims and bounds field lengths, normalizes select values (zone, maturity,
environment synonyms), and builds a clean payload for the request store.
Validation failures come back as a field -> message dict so forms and the JSON
API can show per-field errors.
"""

from __future__ import annotations
import re
from typing import Any, Dict, Mapping, Tuple

from plantprop.constants import ENVIRONMENT_SYNONYMS, MATURITY_LEVELS, USDA_ZONES

# Allowlist regex: we REMOVE anything NOT in this set.
_SAFE_CHARS_PATTERN = re.compile(r"[^a-zA-Z0-9\s\-\.,'()/&]+")
_PLANT_ID_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

MAX_SEARCH_LEN = 80
MAX_PLANT_ID_LEN = 120

ZONE_CHOICES = {z[0] for z in USDA_ZONES}
MATURITY_CHOICES = {m[0] for m in MATURITY_LEVELS}

REQUIRED_MESSAGES = {
    "plant_id": "Plant is required.",
    "zone": "Growing zone is required.",
    "maturity": "Plant maturity is required.",
    "environment": "Environment is required.",
}


def soft_sanitize(text: str | None, max_len: int = MAX_SEARCH_LEN) -> str:
    """
    Normalizes search text:
    - strip whitespace
    - bound length
    - remove disallowed characters via allowlist
    - collapse double spaces
    """
    t = (text or "").strip()
    if not t:
        return ""
    t = t[:max_len]
    t = _SAFE_CHARS_PATTERN.sub("", t)
    t = re.sub(r"\s{2,}", " ", t)
    return t.strip()


def normalize_zone(value: str | None) -> str:
    """'Zone 9A ' -> '9a'. Unknown codes are returned normalized but unvalidated."""
    v = (value or "").strip().lower()
    if v.startswith("zone"):
        v = v[4:].strip()
    return v


def normalize_environment(value: str | None) -> str:
    """Map synonyms (indoor, outdoors, ...) to inside/outside/greenhouse; '' if unknown."""
    v = (value or "").strip().lower()
    return ENVIRONMENT_SYNONYMS.get(v, "")


def normalize_maturity(value: str | None) -> str:
    v = (value or "").strip().lower()
    return v if v in MATURITY_CHOICES else ""


def validate_propagation_form(form: Mapping[str, Any]) -> Tuple[Dict[str, str], Dict[str, str]]:
    """
    Validates a propagation request submission.

    Returns (payload, errors). On success errors is empty and payload has:
      - plant_id (slug)
      - zone (known USDA zone code, lowercase)
      - maturity (seedling | young | mature | established)
      - environment (inside | outside | greenhouse)
    """
    errors: Dict[str, str] = {}
    raw = {key: str(form.get(key) or "").strip() for key in REQUIRED_MESSAGES}

    for key, message in REQUIRED_MESSAGES.items():
        if not raw[key]:
            errors[key] = message

    plant_id = raw["plant_id"].lower()[:MAX_PLANT_ID_LEN]
    if "plant_id" not in errors and not _PLANT_ID_PATTERN.match(plant_id):
        errors["plant_id"] = "Unknown plant."

    zone = normalize_zone(raw["zone"])
    if "zone" not in errors and zone not in ZONE_CHOICES:
        errors["zone"] = "Choose a USDA zone between 1a and 13b."

    maturity = normalize_maturity(raw["maturity"])
    if "maturity" not in errors and not maturity:
        errors["maturity"] = "Choose seedling, young, mature or established."

    environment = normalize_environment(raw["environment"])
    if "environment" not in errors and not environment:
        errors["environment"] = "Choose inside, outside or greenhouse."

    if errors:
        return {}, errors

    return {
        "plant_id": plant_id,
        "zone": zone,
        "maturity": maturity,
        "environment": environment,
    }, {}
