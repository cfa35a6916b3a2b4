"""Tests for the Supabase food repository."""

import json
from dataclasses import dataclass, field
from uuid import uuid4

import httpx
import pytest
from postgrest.exceptions import APIError

from smartfood.adapters.supabase_food_repository import SupabaseFoodRepository
from smartfood.domain.errors import StoreError
from smartfood.domain.foods import NutritionFacts
from smartfood.domain.nutrition_codec import encode_nutrition_facts
from smartfood.services.normalizer import normalize
from tests.conftest import product_payload


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    orders: list[str] = field(default_factory=list)
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.orders.append(column)
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "barcode": "5000159484695",
        "name": "Crunchy Oat Cereal",
        "serving_size": "30 g",
        "serving_size_grams": 30.0,
        "nutrition_facts": encode_nutrition_facts(NutritionFacts.empty()),
    }
    row.update(overrides)
    return row


def test_save_food_upserts_row_with_encoded_facts() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("foods")
    record = normalize("5000159484695", product_payload())
    row = {
        "id": str(record.id),
        "barcode": record.barcode,
        "name": record.name,
        "serving_size": record.serving_size,
        "serving_size_grams": record.serving_size_grams,
        "nutrition_facts": encode_nutrition_facts(record.nutrition_facts),
    }
    foods_table.queue("upsert", [row])

    saved = SupabaseFoodRepository(client).save_food(record)

    assert saved == record
    assert foods_table.last_payload == row
    stored_facts = json.loads(foods_table.last_payload["nutrition_facts"])
    assert stored_facts["totalFat"]["unit"] == "g"


def test_save_food_without_returned_row_raises_store_error() -> None:
    client = FakeSupabaseClient()
    record = normalize("5000159484695", product_payload())

    with pytest.raises(StoreError):
        SupabaseFoodRepository(client).save_food(record)


def test_list_foods_orders_by_name_and_parses_rows() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("pantry")
    foods_table.queue("select", [_row(name="Apple"), _row(name="Bread")])

    foods = SupabaseFoodRepository(client, table_name="pantry").list_foods()

    assert [food.name for food in foods] == ["Apple", "Bread"]
    assert foods_table.orders == ["name"]
    assert foods[0].nutrition_facts == NutritionFacts.empty()


def test_get_food_returns_none_when_missing() -> None:
    client = FakeSupabaseClient()
    food_id = uuid4()

    assert SupabaseFoodRepository(client).get_food(food_id) is None
    assert client.table("foods").last_filters == [("id", str(food_id))]


def test_get_food_falls_back_to_empty_facts_for_corrupt_blob() -> None:
    client = FakeSupabaseClient()
    row = _row(nutrition_facts="{not json", serving_size=None)
    client.table("foods").queue("select", [row])

    food = SupabaseFoodRepository(client).get_food(uuid4())

    assert food is not None
    assert food.nutrition_facts == NutritionFacts.empty()
    assert food.serving_size == ""


def test_get_food_accepts_json_column() -> None:
    client = FakeSupabaseClient()
    record = normalize("5000159484695", product_payload())
    facts_json = json.loads(encode_nutrition_facts(record.nutrition_facts))
    client.table("foods").queue("select", [_row(nutrition_facts=facts_json)])

    food = SupabaseFoodRepository(client).get_food(uuid4())

    assert food is not None
    assert food.nutrition_facts == record.nutrition_facts


def test_delete_food_reports_whether_row_existed() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("foods")
    foods_table.queue("delete", [_row()])
    repository = SupabaseFoodRepository(client)

    assert repository.delete_food(uuid4()) is True
    assert repository.delete_food(uuid4()) is False


@pytest.mark.parametrize(
    "error",
    [
        APIError({"message": "permission denied", "code": "42501"}),
        httpx.ConnectError("offline"),
    ],
)
def test_client_failures_raise_store_error(error: Exception) -> None:
    client = FakeSupabaseClient()
    client.table("foods").error = error

    with pytest.raises(StoreError):
        SupabaseFoodRepository(client).list_foods()


@pytest.mark.parametrize("grams", [None, 0, -5, "abc", "Infinity"])
def test_get_food_uses_default_for_unusable_serving_grams(grams: object) -> None:
    client = FakeSupabaseClient()
    client.table("foods").queue("select", [_row(serving_size_grams=grams)])

    food = SupabaseFoodRepository(client).get_food(uuid4())

    assert food is not None
    assert food.serving_size_grams == 100.0
