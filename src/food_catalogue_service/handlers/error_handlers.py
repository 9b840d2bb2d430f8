"""Maps catalogue service errors to JSON error responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from food_catalogue_service.exceptions import CatalogueServiceError, InvalidRestaurantIdError

logger = logging.getLogger(__name__)

RESTAURANT_ID_LOCATION = ("path", "restaurant_id")


def _error_response(request: Request, exc: CatalogueServiceError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} failed with {exc.code}: {exc.message}")
    headers = {"Retry-After": "1"} if exc.retryable else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    """Install the error handlers shared by both services.

    ``CatalogueServiceError`` maps to its own status and JSON body. A
    ``restaurant_id`` path segment that is not an integer gets the same 400
    ``VALIDATION_ERROR`` body as a non-positive id; other request validation
    failures keep FastAPI's 422 response.
    """

    @app.exception_handler(CatalogueServiceError)
    async def handle_catalogue_error(request: Request, exc: CatalogueServiceError) -> JSONResponse:
        return _error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
        if any(tuple(error.get("loc", ())) == RESTAURANT_ID_LOCATION for error in exc.errors()):
            raw_id = request.path_params.get("restaurant_id")
            return _error_response(request, InvalidRestaurantIdError(raw_id))

        return await request_validation_exception_handler(request, exc)
