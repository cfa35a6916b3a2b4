"""Supabase implementation for saved food records."""

import logging
import math
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from smartfood.domain.errors import StoreError
from smartfood.domain.foods import DEFAULT_SERVING_GRAMS, FoodRecord, NutritionFacts
from smartfood.domain.nutrition_codec import (
    decode_nutrition_facts,
    encode_nutrition_facts,
    nutrition_facts_from_dict,
)
from smartfood.services.pantry import FoodRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for saved foods."""

    client: Client
    table_name: str = "foods"

    def save_food(self, record: FoodRecord) -> FoodRecord:
        """Insert or replace a food record and return it."""
        response = self._execute(
            self.client.table(self.table_name).upsert(_to_row(record)),
            action="save",
        )
        if not response.data:
            raise StoreError("Failed to save food entry")
        return _parse_food(response.data[0])

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food record, returning False if it did not exist."""
        response = self._execute(
            self.client.table(self.table_name).delete().eq("id", str(food_id)),
            action="delete",
        )
        return bool(response.data)

    def get_food(self, food_id: UUID) -> FoodRecord | None:
        """Return a food record by id, if present."""
        response = self._execute(
            self.client.table(self.table_name)
            .select("*")
            .eq("id", str(food_id))
            .limit(1),
            action="get",
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def list_foods(self) -> list[FoodRecord]:
        """Return all food records ordered by name."""
        response = self._execute(
            self.client.table(self.table_name).select("*").order("name"),
            action="list",
        )
        return [_parse_food(row) for row in response.data or []]

    def _execute(self, query: Any, *, action: str) -> Any:
        """Run a query, translating client failures into StoreError."""
        try:
            return query.execute()
        except (APIError, httpx.HTTPError) as exc:
            _logger.warning("Food store %s failed: %s", action, exc)
            raise StoreError(f"Food store {action} failed") from exc


def _to_row(record: FoodRecord) -> dict[str, object]:
    """Serialize a food record into a table row."""
    return {
        "id": str(record.id),
        "barcode": record.barcode,
        "name": record.name,
        "serving_size": record.serving_size,
        "serving_size_grams": record.serving_size_grams,
        "nutrition_facts": encode_nutrition_facts(record.nutrition_facts),
    }


def _parse_food(row: dict[str, object]) -> FoodRecord:
    """Parse a food row into a domain model."""
    return FoodRecord(
        id=UUID(str(row["id"])),
        barcode=str(row.get("barcode") or ""),
        name=str(row.get("name") or ""),
        serving_size=str(row.get("serving_size") or ""),
        serving_size_grams=_parse_serving_grams(row.get("serving_size_grams")),
        nutrition_facts=_parse_facts(row.get("nutrition_facts")),
    )


def _parse_serving_grams(raw: object) -> float:
    """Read stored serving grams, using the default for unusable values."""
    try:
        grams = float(raw) if raw is not None else None
    except (TypeError, ValueError):
        grams = None
    if grams is None or not math.isfinite(grams) or grams <= 0:
        _logger.warning("Stored serving grams are unusable: %r", raw)
        return DEFAULT_SERVING_GRAMS
    return grams


def _parse_facts(raw: object) -> NutritionFacts:
    """Decode the stored facts blob, falling back to empty facts."""
    try:
        if isinstance(raw, dict):
            return nutrition_facts_from_dict(raw)
        if isinstance(raw, str | bytes) and raw:
            return decode_nutrition_facts(raw)
    except ValueError:
        _logger.warning("Stored nutrition facts could not be decoded")
    return NutritionFacts.empty()
