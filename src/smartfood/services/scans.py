"""Barcode scan lookups."""

import logging
from dataclasses import dataclass

from smartfood.adapters.openfoodfacts_client import OpenFoodFactsClient
from smartfood.domain.barcodes import Symbology, detect_symbology, validate_barcode
from smartfood.domain.errors import MissingRequiredField, SmartFoodError
from smartfood.domain.foods import DEFAULT_SERVING_GRAMS, FoodRecord
from smartfood.services.normalizer import normalize

_logger = logging.getLogger(__name__)

_FAILURE_MESSAGES = {
    "invalid_barcode": "That code can't be looked up. Please scan again.",
    "network_error": "Couldn't reach the food database. Please try again.",
    "product_not_found": "No product was found for this barcode.",
    "malformed_payload": "The food database returned an unreadable product.",
    "missing_required_field": "The product is missing nutrition data.",
}


@dataclass(frozen=True)
class ScanSuccess:
    """A draft food record ready for user edits."""

    record: FoodRecord
    symbology: Symbology


@dataclass(frozen=True)
class ScanFailure:
    """A lookup that produced no record."""

    kind: str
    message: str
    barcode: str
    field_name: str | None = None


ScanResult = ScanSuccess | ScanFailure


@dataclass
class ScanService:
    """Look up scanned barcodes and normalize the product data."""

    client: OpenFoodFactsClient
    fallback_serving_grams: float = DEFAULT_SERVING_GRAMS

    async def lookup(
        self, barcode: str, symbology: Symbology | None = None
    ) -> ScanResult:
        """Fetch and normalize a product, returning a failure value on error."""
        try:
            code = validate_barcode(barcode, symbology)
            payload = await self.client.get_product(code)
            record = normalize(code, payload, self.fallback_serving_grams)
        except SmartFoodError as exc:
            _logger.warning(
                "Scan failed: barcode=%s kind=%s: %s", barcode, exc.kind, exc
            )
            return _failure(barcode, exc)
        _logger.info(
            "Scan succeeded: barcode=%s name=%s", record.barcode, record.name
        )
        return ScanSuccess(record=record, symbology=detect_symbology(record.barcode))


def _failure(barcode: str, exc: SmartFoodError) -> ScanFailure:
    field_name = exc.field_name if isinstance(exc, MissingRequiredField) else None
    message = _FAILURE_MESSAGES.get(exc.kind, str(exc))
    if field_name:
        message = f"{message} ({field_name})"
    return ScanFailure(
        kind=exc.kind,
        message=message,
        barcode=barcode,
        field_name=field_name,
    )
