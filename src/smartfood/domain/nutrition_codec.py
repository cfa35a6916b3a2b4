"""JSON encoding for nutrition facts."""

import json

from smartfood.domain.foods import NUTRIENT_TABLE, NutrientInfo, NutritionFacts


def nutrition_facts_to_dict(facts: NutritionFacts) -> dict[str, object]:
    """Convert facts to a JSON-ready dict in label order."""
    data: dict[str, object] = {"calories": facts.calories}
    for spec, info in facts.nutrients():
        data[spec.json_name] = {
            "amount": info.amount,
            "unit": info.unit,
            "percentDailyValue": info.percent_daily_value,
        }
    return data


def nutrition_facts_from_dict(data: dict[str, object]) -> NutritionFacts:
    """Build facts from a dict produced by nutrition_facts_to_dict.

    Raises ValueError when a field is missing or has the wrong shape.
    """
    nutrients: dict[str, NutrientInfo] = {}
    for spec in NUTRIENT_TABLE:
        raw = data.get(spec.json_name)
        if not isinstance(raw, dict):
            raise ValueError(f"Missing nutrient '{spec.json_name}'")
        percent = raw.get("percentDailyValue")
        nutrients[spec.field_name] = NutrientInfo(
            amount=_to_float(raw.get("amount"), spec.json_name),
            unit=str(raw.get("unit") or spec.unit),
            percent_daily_value=(
                None if percent is None else _to_float(percent, spec.json_name)
            ),
        )
    return NutritionFacts(
        calories=_to_float(data.get("calories"), "calories"), **nutrients
    )


def encode_nutrition_facts(facts: NutritionFacts) -> str:
    """Serialize facts to a JSON string."""
    return json.dumps(nutrition_facts_to_dict(facts), ensure_ascii=False)


def decode_nutrition_facts(raw: str | bytes) -> NutritionFacts:
    """Parse facts from a JSON string."""
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Nutrition facts must be a JSON object")
    return nutrition_facts_from_dict(data)


def _to_float(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"Invalid number for '{name}'")
    return float(value)
