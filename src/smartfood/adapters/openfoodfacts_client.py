"""Open Food Facts product API client."""

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

from smartfood.domain.errors import MalformedPayload, NetworkError, ProductNotFound

_logger = logging.getLogger(__name__)


class OpenFoodFactsClient(Protocol):
    """Interface for product lookups by barcode."""

    async def get_product(self, barcode: str) -> object:
        """Fetch a product by barcode and return the raw JSON payload."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls, base_url: str, timeout_seconds: float, user_agent: str
    ) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(headers={"User-Agent": user_agent}),
            timeout_seconds=timeout_seconds,
        )

    async def get_product(self, barcode: str) -> object:
        """Fetch a product by barcode."""
        url = f"{self.base_url}/api/v0/product/{quote(barcode, safe='')}.json"
        try:
            response = await self.http_client.get(url, timeout=self.timeout_seconds)
        except httpx.TimeoutException as exc:
            raise NetworkError("Food database request timed out") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Food database request failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise ProductNotFound(barcode)
        if response.is_error:
            _logger.warning(
                "Food database error: barcode=%s status=%s",
                barcode,
                response.status_code,
            )
            raise NetworkError(
                f"Food database answered with status {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedPayload("Food database response is not JSON") from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
