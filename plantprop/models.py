"""
Domain records for plants and propagation requests.

Plant rows arrive from external sources (Supabase table rows or the bundled
seed JSON) with loose shapes. `plant_from_record()` is the single boundary
where those rows become validated `Plant` objects; every field that can be
defaulted is defaulted there and nowhere else.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field as dataclass_field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .constants import DIFFICULTY_LEVELS
from .utils.slug import plant_slug

__all__ = [
    "CareInstructions",
    "PlantRecordError",
    "Plant",
    "PropagationRequest",
    "PropagationStep",
    "plant_from_record",
]

DEFAULT_DIFFICULTY = "medium"
DEFAULT_SUCCESS_RATE = 80
DEFAULT_METHODS = ("stem-cutting",)
DEFAULT_TIME_TO_ROOT = "2-4 weeks"
DEFAULT_ZONE_RECOMMENDATIONS = {"all": "Suitable for most zones"}
DEFAULT_CARE = {
    "light": "Bright indirect light",
    "watering": "Keep soil moderately moist",
    "fertilizer": "Feed monthly during growing season",
    "humidity": "Average household humidity",
}


class PlantRecordError(ValueError):
    """Raised when an external plant row cannot become a valid Plant."""


@dataclass(frozen=True)
class CareInstructions:
    light: str
    watering: str
    fertilizer: str
    humidity: str


@dataclass(frozen=True)
class PropagationStep:
    """One numbered step of a propagation method."""

    step: int
    title: str
    description: str
    tip: Optional[str] = None
    options: Tuple[Dict[str, str], ...] = ()
    requirements: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Plant:
    """Read-only plant reference data."""

    id: str
    common_name: str
    scientific_name: str
    difficulty: str
    success_rate: int
    methods: Tuple[str, ...]
    time_to_root: str
    optimal_months: Tuple[int, ...]
    care_instructions: CareInstructions
    image_url: Optional[str] = None
    secondary_months: Optional[Tuple[int, ...]] = None
    zone_recommendations: Dict[str, str] = dataclass_field(default_factory=dict)
    propagation_steps: Dict[str, Tuple[PropagationStep, ...]] = dataclass_field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return the plant as JSON-friendly primitives."""
        data = asdict(self)
        data["methods"] = list(self.methods)
        data["optimal_months"] = list(self.optimal_months)
        data["secondary_months"] = list(self.secondary_months) if self.secondary_months else None
        data["propagation_steps"] = {
            method: [asdict(s) for s in steps]
            for method, steps in self.propagation_steps.items()
        }
        return data


@dataclass(frozen=True)
class PropagationRequest:
    """A user's submitted growing conditions for one plant.

    Never mutated after creation; changing the zone creates a new request.
    """

    id: str
    plant_id: str
    zone: str
    maturity: str
    environment: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "plant_id": self.plant_id,
            "zone": self.zone,
            "maturity": self.maturity,
            "environment": self.environment,
            "created_at": self.created_at.isoformat(),
        }


# ---------------------------------------------------------------------------
# Boundary mapping
# ---------------------------------------------------------------------------

def _pick(record: dict, *keys: str) -> Any:
    """First non-None value among snake_case / camelCase spellings."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _normalize_difficulty(value: Any) -> str:
    d = str(value).strip().lower() if value else ""
    return d if d in DIFFICULTY_LEVELS else DEFAULT_DIFFICULTY


def _normalize_success_rate(value: Any) -> int:
    try:
        rate = int(value)
    except (TypeError, ValueError):
        return DEFAULT_SUCCESS_RATE
    if rate <= 0:
        return DEFAULT_SUCCESS_RATE
    return min(100, rate)


def _normalize_months(value: Any) -> Tuple[int, ...]:
    """Keep valid calendar months (1-12) in order, dropping duplicates."""
    if not isinstance(value, (list, tuple)):
        return ()
    months: List[int] = []
    for m in value:
        try:
            month = int(m)
        except (TypeError, ValueError):
            continue
        if 1 <= month <= 12 and month not in months:
            months.append(month)
    return tuple(months)


def _normalize_methods(value: Any) -> Tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        methods = tuple(str(m).strip() for m in value if m and str(m).strip())
        if methods:
            return methods
    return DEFAULT_METHODS


def _step_number(value: Any, index: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return index + 1
    return number if number > 0 else index + 1


def _normalize_zone_recommendations(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict) or not value:
        return dict(DEFAULT_ZONE_RECOMMENDATIONS)
    return {str(zone).strip().lower(): advice for zone, advice in value.items()}


def _step_from_record(raw: dict, index: int) -> PropagationStep:
    return PropagationStep(
        step=_step_number(raw.get("step"), index),
        title=str(raw.get("title") or f"Step {index + 1}"),
        description=str(raw.get("description") or ""),
        tip=raw.get("tip") or None,
        options=tuple(o for o in (raw.get("options") or []) if isinstance(o, dict)),
        requirements=tuple(str(r) for r in (raw.get("requirements") or [])),
    )


def _normalize_steps(value: Any) -> Dict[str, Tuple[PropagationStep, ...]]:
    if not isinstance(value, dict):
        return {}
    steps: Dict[str, Tuple[PropagationStep, ...]] = {}
    for method, raw_steps in value.items():
        if not isinstance(raw_steps, list):
            continue
        steps[method] = tuple(
            _step_from_record(raw, i) for i, raw in enumerate(raw_steps) if isinstance(raw, dict)
        )
    return steps


def _normalize_care(value: Any) -> CareInstructions:
    raw = value if isinstance(value, dict) else {}
    return CareInstructions(**{key: raw.get(key) or default for key, default in DEFAULT_CARE.items()})


def plant_from_record(record: dict) -> Plant:
    """
    Map an external plant row to a validated Plant.

    Accepts snake_case (database) or camelCase (legacy JSON) keys.

    Defaults:
        id: slug of name/common name ("unknown-plant" if neither)
        scientific_name: the common name
        image_url: None
        difficulty: "medium" when missing or unrecognized
        success_rate: 80 when missing or invalid, capped at 100
        methods: ["stem-cutting"]
        time_to_root: "2-4 weeks"
        secondary_months: None (an empty list also becomes None)
        zone_recommendations: {"all": "Suitable for most zones"}; zone keys lowercased
        propagation_steps: {}
        care_instructions: default text per missing key

    Raises:
        PlantRecordError: if the row has no usable optimal months
    """
    common_name = str(_pick(record, "common_name", "commonName", "name") or "Unknown plant").strip()
    optimal_months = _normalize_months(_pick(record, "optimal_months", "optimalMonths"))
    if not optimal_months:
        raise PlantRecordError(f"Plant '{common_name}' has no optimal propagation months")

    secondary_months = _normalize_months(_pick(record, "secondary_months", "secondaryMonths"))
    zone_recs = _pick(record, "zone_recommendations", "zoneRecommendations")

    return Plant(
        id=plant_slug(record),
        common_name=common_name,
        scientific_name=str(_pick(record, "scientific_name", "scientificName") or common_name),
        image_url=_pick(record, "image_url", "imageUrl") or None,
        difficulty=_normalize_difficulty(record.get("difficulty")),
        success_rate=_normalize_success_rate(_pick(record, "success_rate", "successRate")),
        methods=_normalize_methods(record.get("methods")),
        time_to_root=str(_pick(record, "time_to_root", "timeToRoot") or DEFAULT_TIME_TO_ROOT),
        optimal_months=optimal_months,
        secondary_months=secondary_months or None,
        zone_recommendations=_normalize_zone_recommendations(zone_recs),
        propagation_steps=_normalize_steps(_pick(record, "propagation_steps", "propagationSteps")),
        care_instructions=_normalize_care(_pick(record, "care_instructions", "careInstructions")),
    )
