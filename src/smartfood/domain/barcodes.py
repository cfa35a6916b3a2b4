"""Barcode validation for codes decoded by the client camera."""

from enum import StrEnum

from smartfood.domain.errors import InvalidBarcode


class Symbology(StrEnum):
    """Symbologies the scanner accepts."""

    EAN_8 = "ean8"
    EAN_13 = "ean13"
    QR = "qr"


_EAN_LENGTHS = {Symbology.EAN_8: 8, Symbology.EAN_13: 13}


def has_valid_check_digit(code: str) -> bool:
    """Return True if the GS1 check digit of a numeric code is correct."""
    if not code.isdigit() or len(code) < 2:
        return False
    digits = [int(char) for char in code]
    body, check = digits[:-1], digits[-1]
    total = sum(
        digit * (3 if index % 2 == 0 else 1)
        for index, digit in enumerate(reversed(body))
    )
    return (10 - total % 10) % 10 == check


def detect_symbology(code: str) -> Symbology:
    """Classify a decoded code, treating anything that is not EAN as QR text."""
    for symbology, length in _EAN_LENGTHS.items():
        if len(code) == length and has_valid_check_digit(code):
            return symbology
    return Symbology.QR


def validate_barcode(code: str, declared: Symbology | None = None) -> str:
    """Return the cleaned code, raising InvalidBarcode if it cannot be looked up."""
    cleaned = code.strip()
    if not cleaned:
        raise InvalidBarcode("Barcode is empty")
    if declared in _EAN_LENGTHS and detect_symbology(cleaned) != declared:
        raise InvalidBarcode(f"'{cleaned}' is not a valid {declared.value} barcode")
    return cleaned
