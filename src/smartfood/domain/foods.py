"""Food record domain models."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class NutrientSpec:
    """Fixed description of one nutrient on the label."""

    field_name: str
    json_name: str
    api_key: str
    unit: str
    label: str


ENERGY_API_KEY = "energy-kcal"
DEFAULT_SERVING_GRAMS = 100.0

NUTRIENT_TABLE: tuple[NutrientSpec, ...] = (
    NutrientSpec("total_fat", "totalFat", "fat", "g", "Total Fat"),
    NutrientSpec(
        "saturated_fat", "saturatedFat", "saturated-fat", "g", "Saturated Fat"
    ),
    NutrientSpec("trans_fat", "transFat", "trans-fat", "g", "Trans Fat"),
    NutrientSpec("cholesterol", "cholesterol", "cholesterol", "mg", "Cholesterol"),
    NutrientSpec("sodium", "sodium", "sodium", "mg", "Sodium"),
    NutrientSpec(
        "total_carbohydrate",
        "totalCarbohydrate",
        "carbohydrates",
        "g",
        "Total Carbohydrate",
    ),
    NutrientSpec("dietary_fiber", "dietaryFiber", "fiber", "g", "Dietary Fiber"),
    NutrientSpec("total_sugars", "totalSugars", "sugars", "g", "Total Sugars"),
    NutrientSpec("added_sugars", "addedSugars", "added-sugars", "g", "Added Sugars"),
    NutrientSpec("protein", "protein", "proteins", "g", "Protein"),
    NutrientSpec("vitamin_d", "vitaminD", "vitamin-d", "µg", "Vitamin D"),
    NutrientSpec("calcium", "calcium", "calcium", "mg", "Calcium"),
    NutrientSpec("iron", "iron", "iron", "mg", "Iron"),
    NutrientSpec("potassium", "potassium", "potassium", "mg", "Potassium"),
)


@dataclass(frozen=True)
class NutrientInfo:
    """Amount of one nutrient per serving."""

    amount: float
    unit: str
    percent_daily_value: float | None = None


@dataclass(frozen=True)
class NutritionFacts:
    """Energy plus the fourteen label nutrients, scaled to one serving."""

    calories: float
    total_fat: NutrientInfo
    saturated_fat: NutrientInfo
    trans_fat: NutrientInfo
    cholesterol: NutrientInfo
    sodium: NutrientInfo
    total_carbohydrate: NutrientInfo
    dietary_fiber: NutrientInfo
    total_sugars: NutrientInfo
    added_sugars: NutrientInfo
    protein: NutrientInfo
    vitamin_d: NutrientInfo
    calcium: NutrientInfo
    iron: NutrientInfo
    potassium: NutrientInfo

    @classmethod
    def empty(cls) -> "NutritionFacts":
        """Return facts with zero amounts and no daily values."""
        nutrients = {
            spec.field_name: NutrientInfo(amount=0.0, unit=spec.unit)
            for spec in NUTRIENT_TABLE
        }
        return cls(calories=0.0, **nutrients)

    def nutrients(self) -> list[tuple[NutrientSpec, NutrientInfo]]:
        """Return nutrients in label order paired with their spec."""
        return [(spec, getattr(self, spec.field_name)) for spec in NUTRIENT_TABLE]


@dataclass(frozen=True)
class FoodRecord:
    """A scanned product with its per-serving nutrition facts."""

    id: UUID
    barcode: str
    name: str
    serving_size: str
    serving_size_grams: float
    nutrition_facts: NutritionFacts
