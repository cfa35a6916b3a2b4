"""Error taxonomy for scanning and storing foods."""


class SmartFoodError(Exception):
    """Base error with a stable machine-readable kind."""

    kind = "error"


class NetworkError(SmartFoodError):
    """The food database could not be reached or answered with an error."""

    kind = "network_error"


class InvalidBarcode(SmartFoodError):
    """The scanned code cannot be used for a lookup."""

    kind = "invalid_barcode"


class NormalizationError(SmartFoodError):
    """The product payload could not be turned into a food record."""

    kind = "normalization_error"


class MalformedPayload(NormalizationError):
    """Payload is not an object or carries no product object."""

    kind = "malformed_payload"


class ProductNotFound(MalformedPayload):
    """The food database has no product for the barcode."""

    kind = "product_not_found"

    def __init__(self, barcode: str) -> None:
        super().__init__(f"No product found for barcode {barcode}")
        self.barcode = barcode


class MissingRequiredField(NormalizationError):
    """A required product field is absent or has the wrong type."""

    kind = "missing_required_field"

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Product is missing required field '{field_name}'")
        self.field_name = field_name


class StoreError(SmartFoodError):
    """The record store rejected or failed an operation."""

    kind = "store_error"
