"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from smartfood.api.food_models import FoodRecordModel, ScanRequest
from smartfood.app_logging import configure_logging
from smartfood.containers import AppContainer
from smartfood.domain.errors import StoreError
from smartfood.services.scans import ScanFailure

_SCAN_FAILURE_STATUS = {
    "invalid_barcode": status.HTTP_400_BAD_REQUEST,
    "product_not_found": status.HTTP_404_NOT_FOUND,
    "malformed_payload": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "missing_required_field": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "network_error": status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(
            "Store operation failed: %s %s", request.method, request.url.path
        )
        return _error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            kind=exc.kind,
            message="Your pantry couldn't be updated. Please try again.",
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/scan", response_model=None)
    async def scan(
        scan_request: ScanRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Look up a scanned barcode and return an editable draft record."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.scan_service.lookup(
            scan_request.barcode, scan_request.symbology
        )
        if isinstance(result, ScanFailure):
            return _error_response(
                _SCAN_FAILURE_STATUS.get(result.kind, status.HTTP_502_BAD_GATEWAY),
                kind=result.kind,
                message=result.message,
                field=result.field_name,
            )
        return {
            "food": FoodRecordModel.from_domain(result.record).to_response(),
            "symbology": result.symbology.value,
        }

    @app.get("/foods")
    async def list_foods(request: Request) -> dict[str, object]:
        """Return saved foods sorted by name."""
        state_container: AppContainer = request.app.state.container
        foods = state_container.pantry_service.list_all()
        return {
            "foods": [FoodRecordModel.from_domain(food).to_response() for food in foods]
        }

    @app.post("/foods", status_code=status.HTTP_201_CREATED, response_model=None)
    async def save_food(
        food: FoodRecordModel, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Save a scanned food after the user has reviewed it."""
        state_container: AppContainer = request.app.state.container
        try:
            saved = state_container.pantry_service.save(food.to_domain())
        except ValueError as exc:
            return _error_response(
                status.HTTP_422_UNPROCESSABLE_ENTITY,
                kind="invalid_record",
                message=str(exc),
            )
        return {"food": FoodRecordModel.from_domain(saved).to_response()}

    @app.get("/foods/{food_id}", response_model=None)
    async def get_food(
        food_id: UUID, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Return one saved food."""
        state_container: AppContainer = request.app.state.container
        food = state_container.pantry_service.get(food_id)
        if food is None:
            return _not_found(food_id)
        return {"food": FoodRecordModel.from_domain(food).to_response()}

    @app.delete("/foods/{food_id}", response_model=None)
    async def delete_food(
        food_id: UUID, request: Request
    ) -> dict[str, str] | JSONResponse:
        """Delete a saved food."""
        state_container: AppContainer = request.app.state.container
        if not state_container.pantry_service.delete(food_id):
            return _not_found(food_id)
        return {"status": "deleted"}

    return app


def _not_found(food_id: UUID) -> JSONResponse:
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        kind="food_not_found",
        message=f"No saved food with id {food_id}",
    )


def _error_response(
    status_code: int, *, kind: str, message: str, field: str | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"kind": kind, "message": message, "field": field}},
    )
