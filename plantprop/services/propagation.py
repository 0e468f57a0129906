"""
Propagation window calculator.

Functions:
- get_zone_info(zone): climate reference for a hardiness zone (falls back to 7a).
- success_adjustment(maturity, environment): success-rate delta for the conditions.
- compute_windows(plant, request): primary/secondary windows and adjusted success rate.
- recommend_method(plant, preferred): pick the propagation method to show first.
- zone_recommendation(plant, zone): zone-specific advice text for a plant.
- steps_for_method(plant, method): ordered steps for one method.

Notes:
- Everything here is pure and synchronous; identical inputs give identical output.
- Window end dates always use day 30 ("February 30" included). This matches the
  published guides and is kept as-is; see DESIGN.md.
- Unknown zones use 7a's climate description, but the result still carries the
  zone the user asked for so headings show their zone.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from functools import lru_cache
from typing import Any, Dict, Iterable, Optional, Tuple

from ..constants import DEFAULT_ZONE, METHOD_HINTS, MONTH_NAMES
from ..models import Plant, PropagationRequest, PropagationStep
from ..utils.data import load_data_file

MIN_SUCCESS_RATE = 50
MAX_SUCCESS_RATE = 100
SECONDARY_PENALTY = 15
SECONDARY_FLOOR = 60

PRIMARY_LABEL = "Spring Growth Period"
SECONDARY_LABEL = "Late Summer"

MATURITY_ADJUSTMENTS = {"seedling": -10, "established": 5}
ENVIRONMENT_ADJUSTMENTS = {"greenhouse": 5, "outside": -5}


@dataclass(frozen=True)
class ZoneInfo:
    last_frost: str
    first_frost: str
    growing_season: str
    ideal_humidity: str


@dataclass(frozen=True)
class PropagationWindow:
    type: str
    label: str
    start_month: int
    end_month: int
    start_date: str
    end_date: str
    success_rate: int


@dataclass(frozen=True)
class PropagationResult:
    """Rendering-ready output of compute_windows()."""

    zone: str
    zone_info: ZoneInfo
    adjusted_success_rate: int
    primary: Optional[PropagationWindow]
    secondary: Optional[PropagationWindow]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@lru_cache(maxsize=1)
def _zone_table() -> Dict[str, ZoneInfo]:
    raw = load_data_file("zones.json", default={})
    return {code: ZoneInfo(**info) for code, info in raw.items()}


def get_zone_info(zone: str | None) -> ZoneInfo:
    """
    Climate reference for a zone code.

    Args:
        zone: Hardiness zone code like "9a" (case-insensitive)

    Returns:
        ZoneInfo for the zone, or the 7a entry when the zone is not in the table
    """
    table = _zone_table()
    key = (zone or "").strip().lower()
    return table.get(key) or table[DEFAULT_ZONE]


def success_adjustment(maturity: str, environment: str) -> int:
    """Sum of the maturity and environment deltas (young/mature/inside are neutral)."""
    return MATURITY_ADJUSTMENTS.get(maturity, 0) + ENVIRONMENT_ADJUSTMENTS.get(environment, 0)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _date_range(months: Iterable[int]) -> Tuple[int, int, str, str]:
    start, end = min(months), max(months)
    return start, end, f"{MONTH_NAMES[start - 1]} 1", f"{MONTH_NAMES[end - 1]} 30"


def _window(kind: str, label: str, months: Iterable[int], success_rate: int) -> PropagationWindow:
    start, end, start_date, end_date = _date_range(months)
    return PropagationWindow(
        type=kind,
        label=label,
        start_month=start,
        end_month=end,
        start_date=start_date,
        end_date=end_date,
        success_rate=success_rate,
    )


def compute_windows(plant: Plant, request: PropagationRequest) -> PropagationResult:
    """
    Compute propagation windows for a plant under the requested conditions.

    Adjusted success rate is the plant's base rate plus the condition delta,
    clamped to 50-100. The secondary window (only when the plant lists
    secondary months) gets the adjusted rate minus 15, floored at 60.

    Args:
        plant: Plant with non-empty optimal months
        request: The user's propagation request

    Returns:
        PropagationResult with zone, zone_info, adjusted_success_rate, primary, secondary
    """
    adjusted = _clamp(
        plant.success_rate + success_adjustment(request.maturity, request.environment),
        MIN_SUCCESS_RATE,
        MAX_SUCCESS_RATE,
    )

    primary = _window("primary", PRIMARY_LABEL, plant.optimal_months, adjusted)

    secondary = None
    if plant.secondary_months:
        secondary = _window(
            "secondary",
            SECONDARY_LABEL,
            plant.secondary_months,
            max(SECONDARY_FLOOR, adjusted - SECONDARY_PENALTY),
        )

    return PropagationResult(
        zone=request.zone,
        zone_info=get_zone_info(request.zone),
        adjusted_success_rate=adjusted,
        primary=primary,
        secondary=secondary,
    )


def recommend_method(plant: Plant, preferred: str | None = None) -> str:
    """
    Choose the propagation method to show first.

    A hint ("cutting", "division", "layering") wins only if the mapped method
    is one the plant supports; otherwise the plant's first listed method.
    """
    if preferred and preferred != "any":
        mapped = METHOD_HINTS.get(preferred.strip().lower())
        if mapped in plant.methods:
            return mapped
    return plant.methods[0]


def zone_recommendation(plant: Plant, zone: str | None) -> Optional[str]:
    """Advice for the zone, else the plant's 'default' or 'all' advice."""
    recs = plant.zone_recommendations or {}
    key = (zone or "").strip().lower()
    return recs.get(key) or recs.get("default") or recs.get("all")


def steps_for_method(plant: Plant, method: str) -> Tuple[PropagationStep, ...]:
    return plant.propagation_steps.get(method, ())
