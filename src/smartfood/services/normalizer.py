"""Normalize Open Food Facts product payloads into food records."""

import logging
import math
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, StrictStr, ValidationError, field_validator

from smartfood.domain.errors import (
    MalformedPayload,
    MissingRequiredField,
    ProductNotFound,
)
from smartfood.domain.foods import (
    DEFAULT_SERVING_GRAMS,
    ENERGY_API_KEY,
    NUTRIENT_TABLE,
    FoodRecord,
    NutrientInfo,
    NutritionFacts,
)

MISSING_SERVING_LABEL = "N/A"

_REQUIRED_FIELDS = ("product_name", "nutriments")

_logger = logging.getLogger(__name__)


class ProductEnvelope(BaseModel):
    """Top-level product lookup response."""

    status: Any = None
    product: dict[str, Any]


class ProductPayload(BaseModel):
    """Fields of a product used to build a food record."""

    product_name: StrictStr
    nutriments: dict[str, Any]
    serving_size: str = MISSING_SERVING_LABEL
    serving_quantity: float | None = None

    @field_validator("serving_size", mode="before")
    @classmethod
    def _serving_label(cls, value: object) -> str:
        return value if isinstance(value, str) else MISSING_SERVING_LABEL

    @field_validator("serving_quantity", mode="before")
    @classmethod
    def _serving_quantity(cls, value: object) -> float | None:
        quantity = as_number(value)
        if quantity is None or quantity <= 0:
            return None
        return quantity


def normalize(
    barcode: str,
    raw_payload: object,
    fallback_serving_grams: float = DEFAULT_SERVING_GRAMS,
) -> FoodRecord:
    """Turn a raw product payload into a per-serving food record.

    Nutrient amounts are reported per 100 g and are scaled to the product's
    serving quantity; percent daily values are kept as reported. Raises
    MalformedPayload when there is no product object and MissingRequiredField
    when the product name or nutriments are unusable. A scaled amount that
    overflows a float is reported as MalformedPayload.
    """
    if fallback_serving_grams <= 0:
        raise ValueError("fallback_serving_grams must be positive")

    product = _decode_product(barcode, raw_payload)
    serving_grams = product.serving_quantity or fallback_serving_grams
    scale = serving_grams / 100.0
    nutriments = product.nutriments

    nutrients = {
        spec.field_name: NutrientInfo(
            amount=_scaled(nutriments, spec.api_key, scale),
            unit=spec.unit,
            percent_daily_value=_daily_value(nutriments, spec.api_key),
        )
        for spec in NUTRIENT_TABLE
    }
    facts = NutritionFacts(
        calories=_scaled(nutriments, ENERGY_API_KEY, scale), **nutrients
    )
    _logger.debug(
        "Normalized product: barcode=%s serving_grams=%s", barcode, serving_grams
    )
    return FoodRecord(
        id=uuid4(),
        barcode=barcode,
        name=product.product_name,
        serving_size=product.serving_size,
        serving_size_grams=serving_grams,
        nutrition_facts=facts,
    )


def as_number(value: object) -> float | None:
    """Return a finite float for JSON numbers and numeric strings."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _decode_product(barcode: str, raw_payload: object) -> ProductPayload:
    """Validate the payload shape and map failures to normalization errors."""
    try:
        envelope = ProductEnvelope.model_validate(raw_payload)
    except ValidationError as exc:
        if isinstance(raw_payload, dict) and raw_payload.get("status") in (0, "0"):
            raise ProductNotFound(barcode) from exc
        raise MalformedPayload("Payload has no product object") from exc

    try:
        return ProductPayload.model_validate(envelope.product)
    except ValidationError as exc:
        for error in exc.errors():
            location = error["loc"]
            if location and location[0] in _REQUIRED_FIELDS:
                raise MissingRequiredField(str(location[0])) from exc
        raise MalformedPayload("Product object could not be read") from exc


def _per_100g(nutriments: dict[str, Any], key: str) -> float:
    amount = as_number(nutriments.get(f"{key}_100g"))
    if amount is None or amount < 0:
        return 0.0
    return amount


def _scaled(nutriments: dict[str, Any], key: str, scale: float) -> float:
    """Scale a per-100 g amount, rejecting values too large to represent."""
    amount = _per_100g(nutriments, key) * scale
    if not math.isfinite(amount):
        raise MalformedPayload(f"Scaled amount for '{key}' is out of range")
    return amount


def _daily_value(nutriments: dict[str, Any], key: str) -> float | None:
    value = as_number(nutriments.get(f"{key}_value"))
    if value is None or value < 0:
        return None
    return value
