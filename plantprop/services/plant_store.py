"""
Plant reference data access.

Two interchangeable stores:
- SeedPlantStore: the bundled plantprop/data/plants.json catalogue.
- SupabasePlantStore: the `plants` table in Supabase.

Both map raw rows through `plant_from_record()` and return LookupResult so the
UI can tell "no matches" from "plant data unavailable". Rows that cannot be
mapped (no optimal months) are skipped with a warning.

Stores are built once by `create_plant_store()` in the app factory and passed
to callers explicitly.
"""

from __future__ import annotations
import logging
import re
from typing import Any, Iterable, List, Mapping, Optional

from supabase import create_client

from ..models import Plant, PlantRecordError, plant_from_record
from ..utils.data import load_data_file
from ..utils.slug import slugify
from .results import LookupResult

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 20

# Characters with meaning in PostgREST filter strings
_FILTER_UNSAFE = re.compile(r"[,()%*\\]")


def _map_rows(rows: Iterable[dict]) -> List[Plant]:
    plants = []
    for row in rows:
        if not isinstance(row, dict):
            logger.warning(f"[Plant Store] Skipping non-object plant row: {row!r}")
            continue
        try:
            plants.append(plant_from_record(row))
        except (PlantRecordError, ValueError, TypeError) as e:
            logger.warning(f"[Plant Store] Skipping plant row: {e}")
    return plants


def _matches(plant: Plant, needle: str) -> bool:
    return needle in plant.common_name.lower() or needle in plant.scientific_name.lower()


class PlantStore:
    """Read-only plant lookups."""

    def get_all_plants(self) -> LookupResult[List[Plant]]:
        raise NotImplementedError

    def get_plant_by_id(self, plant_id: str) -> LookupResult[Plant]:
        """Find a plant by slug id (case-insensitive)."""
        result = self.get_all_plants()
        if result.is_failed:
            return LookupResult.failed(result.error)
        wanted = slugify(plant_id)
        for plant in result.value_or([]):
            if plant.id == wanted:
                return LookupResult.ok(plant)
        return LookupResult.empty()

    def search_plants(self, text: str) -> LookupResult[List[Plant]]:
        """Case-insensitive substring search over common and scientific names."""
        needle = (text or "").strip().lower()
        if not needle:
            return LookupResult.empty()
        result = self.get_all_plants()
        if result.is_failed:
            return result
        found = [p for p in result.value_or([]) if _matches(p, needle)][:SEARCH_LIMIT]
        return LookupResult.ok(found) if found else LookupResult.empty()


class SeedPlantStore(PlantStore):
    """Plants from the bundled JSON catalogue."""

    def __init__(self, rows: Optional[Iterable[dict]] = None, filename: str = "plants.json"):
        raw = list(rows) if rows is not None else load_data_file(filename)
        self._plants = sorted(_map_rows(raw), key=lambda p: p.common_name.lower())

    def get_all_plants(self) -> LookupResult[List[Plant]]:
        if not self._plants:
            return LookupResult.empty()
        return LookupResult.ok(list(self._plants))


class SupabasePlantStore(PlantStore):
    """Plants from the Supabase `plants` table."""

    def __init__(self, client: Any, table: str = "plants"):
        self.client = client
        self.table = table

    def get_all_plants(self) -> LookupResult[List[Plant]]:
        try:
            response = (self.client
                        .table(self.table)
                        .select("*")
                        .order("common_name")
                        .execute())
            rows = response.data or []
        except Exception as e:
            logger.error(f"[Plant Store] Error fetching plants: {e}")
            return LookupResult.failed(str(e))

        logger.info(f"[Plant Store] Supabase returned {len(rows)} plants")
        plants = _map_rows(rows)
        return LookupResult.ok(plants) if plants else LookupResult.empty()

    def search_plants(self, text: str) -> LookupResult[List[Plant]]:
        needle = _FILTER_UNSAFE.sub("", (text or "").strip())
        if not needle:
            return LookupResult.empty()
        try:
            response = (self.client
                        .table(self.table)
                        .select("*")
                        .or_(f"common_name.ilike.%{needle}%,scientific_name.ilike.%{needle}%")
                        .limit(SEARCH_LIMIT)
                        .execute())
            rows = response.data or []
        except Exception as e:
            logger.error(f"[Plant Store] Error searching plants for '{needle}': {e}")
            return LookupResult.failed(str(e))

        plants = _map_rows(rows)
        return LookupResult.ok(plants) if plants else LookupResult.empty()


def create_plant_store(config: Mapping[str, Any]) -> PlantStore:
    """
    Build the configured plant store.

    PLANT_SOURCE="supabase" uses SUPABASE_URL / SUPABASE_ANON_KEY; if those are
    missing the seed catalogue is used instead.
    """
    source = (config.get("PLANT_SOURCE") or "seed").strip().lower()
    if source == "supabase":
        url = config.get("SUPABASE_URL", "")
        key = config.get("SUPABASE_ANON_KEY", "")
        if url and key:
            try:
                client = create_client(url, key)
                logger.info("[Plant Store] Using Supabase plant table")
                return SupabasePlantStore(client)
            except Exception as e:
                logger.error(f"[Plant Store] Failed to initialize Supabase client: {e}")
        else:
            logger.warning("[Plant Store] Supabase URL or ANON_KEY not configured; using seed plants")
    return SeedPlantStore()
