"""Services for the saved food pantry."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from smartfood.domain.foods import FoodRecord

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for saved food records."""

    def save_food(self, record: FoodRecord) -> FoodRecord:
        """Insert or replace a food record and return it."""

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food record, returning False if it did not exist."""

    def get_food(self, food_id: UUID) -> FoodRecord | None:
        """Return a food record by id, if present."""

    def list_foods(self) -> list[FoodRecord]:
        """Return all saved food records."""


@dataclass
class PantryService:
    """Application service for saving and browsing scanned foods."""

    repository: FoodRepository

    def save(self, record: FoodRecord) -> FoodRecord:
        """Persist a confirmed food record."""
        _check_record(record)
        saved = self.repository.save_food(record)
        _logger.info("Saved food: id=%s name=%s", saved.id, saved.name)
        return saved

    def delete(self, food_id: UUID) -> bool:
        """Delete a saved food record."""
        deleted = self.repository.delete_food(food_id)
        if deleted:
            _logger.info("Deleted food: id=%s", food_id)
        return deleted

    def get(self, food_id: UUID) -> FoodRecord | None:
        """Return a saved food record."""
        return self.repository.get_food(food_id)

    def list_all(self) -> list[FoodRecord]:
        """Return saved foods sorted by name."""
        return sorted(
            self.repository.list_foods(),
            key=lambda record: (record.name.casefold(), record.name, str(record.id)),
        )


def _check_record(record: FoodRecord) -> None:
    """Reject edits that break record invariants."""
    if not math.isfinite(record.serving_size_grams) or record.serving_size_grams <= 0:
        raise ValueError("Serving size grams must be a positive number")
    facts = record.nutrition_facts
    if not _is_amount(facts.calories):
        raise ValueError("Calories must be a non-negative number")
    for spec, info in facts.nutrients():
        if not _is_amount(info.amount):
            raise ValueError(f"{spec.label} amount must be a non-negative number")
        percent = info.percent_daily_value
        if percent is not None and not _is_amount(percent):
            raise ValueError(f"{spec.label} daily value must be a non-negative number")


def _is_amount(value: float) -> bool:
    return math.isfinite(value) and value >= 0
