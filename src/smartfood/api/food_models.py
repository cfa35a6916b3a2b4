"""Pydantic models for the food HTTP API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from smartfood.domain.barcodes import Symbology
from smartfood.domain.foods import (
    NUTRIENT_TABLE,
    FoodRecord,
    NutrientInfo,
    NutritionFacts,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )


class NutrientInfoModel(_CamelModel):
    """Nutrient payload; the unit is informational and fixed per nutrient."""

    amount: float = Field(ge=0)
    unit: str | None = None
    percent_daily_value: float | None = Field(default=None, ge=0)


class NutritionFactsModel(_CamelModel):
    """Nutrition facts payload."""

    calories: float = Field(ge=0)
    total_fat: NutrientInfoModel
    saturated_fat: NutrientInfoModel
    trans_fat: NutrientInfoModel
    cholesterol: NutrientInfoModel
    sodium: NutrientInfoModel
    total_carbohydrate: NutrientInfoModel
    dietary_fiber: NutrientInfoModel
    total_sugars: NutrientInfoModel
    added_sugars: NutrientInfoModel
    protein: NutrientInfoModel
    vitamin_d: NutrientInfoModel
    calcium: NutrientInfoModel
    iron: NutrientInfoModel
    potassium: NutrientInfoModel

    @classmethod
    def from_domain(cls, facts: NutritionFacts) -> "NutritionFactsModel":
        nutrients = {
            spec.field_name: NutrientInfoModel(
                amount=info.amount,
                unit=info.unit,
                percent_daily_value=info.percent_daily_value,
            )
            for spec, info in facts.nutrients()
        }
        return cls(calories=facts.calories, **nutrients)

    def to_domain(self) -> NutritionFacts:
        nutrients = {}
        for spec in NUTRIENT_TABLE:
            model: NutrientInfoModel = getattr(self, spec.field_name)
            nutrients[spec.field_name] = NutrientInfo(
                amount=model.amount,
                unit=spec.unit,
                percent_daily_value=model.percent_daily_value,
            )
        return NutritionFacts(calories=self.calories, **nutrients)


class FoodRecordModel(_CamelModel):
    """Food record payload, used both for scan drafts and saved foods."""

    id: UUID
    barcode: str = Field(min_length=1)
    name: str
    serving_size: str
    serving_size_grams: float = Field(gt=0)
    nutrition_facts: NutritionFactsModel

    @classmethod
    def from_domain(cls, record: FoodRecord) -> "FoodRecordModel":
        return cls(
            id=record.id,
            barcode=record.barcode,
            name=record.name,
            serving_size=record.serving_size,
            serving_size_grams=record.serving_size_grams,
            nutrition_facts=NutritionFactsModel.from_domain(record.nutrition_facts),
        )

    def to_domain(self) -> FoodRecord:
        return FoodRecord(
            id=self.id,
            barcode=self.barcode,
            name=self.name,
            serving_size=self.serving_size,
            serving_size_grams=self.serving_size_grams,
            nutrition_facts=self.nutrition_facts.to_domain(),
        )

    def to_response(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class ScanRequest(BaseModel):
    """Barcode decoded by the client camera."""

    barcode: str
    symbology: Symbology | None = None
