"""
Restaurants API — Restaurant Route Handlers
============================================

What:  JSON CRUD endpoints under /api/restaurants.
How:   Validation dependencies run first; handlers delegate to
       RestaurantService and return response models. Errors raised by the
       service are mapped to status codes by the global exception handlers.

Endpoints:
    POST   /api/restaurants          → 201 created record
    GET    /api/restaurants          → 200 page of records
    GET    /api/restaurants/{id}     → 200 {message, data}
    PUT    /api/restaurants/{id}     → 200 {message, data}
    DELETE /api/restaurants/{id}     → 200 {message}
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from app.dependencies import get_restaurant_service, list_query_params, valid_restaurant_id
from app.schemas.restaurant import (
    ErrorResponse,
    ListQuery,
    MessageResponse,
    RestaurantEnvelope,
    RestaurantRecord,
)
from app.services.restaurant_service import RestaurantService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Restaurants"])

_BY_ID_ERRORS = {
    400: {"description": "Malformed restaurant id", "model": ErrorResponse},
    404: {"description": "Restaurant not found", "model": ErrorResponse},
    500: {"description": "Database error", "model": ErrorResponse},
}


@router.post(
    "/restaurants",
    status_code=201,
    response_model=RestaurantRecord,
    response_model_exclude_unset=True,
    responses={
        400: {"description": "Body is not a JSON object", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Add a restaurant",
)
async def create_restaurant(
    fields: Dict[str, Any] = Body(description="Restaurant fields (name, borough, cuisine, ...)"),
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantRecord:
    """
    Insert a new restaurant and echo it back with its assigned `_id`.

    The body is passed through as-is; any `_id` it contains is ignored.
    """
    return await service.create_restaurant(fields)


@router.get(
    "/restaurants",
    response_model=List[RestaurantRecord],
    response_model_exclude_unset=True,
    responses={
        400: {"description": "Invalid page, perPage or borough", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="List restaurants with pagination and an optional borough filter",
)
async def list_restaurants(
    query: ListQuery = Depends(list_query_params),
    service: RestaurantService = Depends(get_restaurant_service),
) -> List[RestaurantRecord]:
    """
    Return one page of restaurants.

    Example:
        GET /api/restaurants?page=2&perPage=5&borough=Queens
        → records 5..9 of the Queens restaurants, in natural order

    An empty page returns 200 with `[]`.
    """
    return await service.list_restaurants(query)


@router.get(
    "/restaurants/{restaurant_id}",
    response_model=RestaurantEnvelope,
    response_model_exclude_unset=True,
    responses=_BY_ID_ERRORS,
    summary="Get a restaurant by id",
)
async def get_restaurant(
    restaurant_id: str = Depends(valid_restaurant_id),
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantEnvelope:
    record = await service.get_restaurant(restaurant_id)
    return RestaurantEnvelope(
        message="Successfully retrieved restaurant details for the specific _id.",
        data=record,
    )


@router.put(
    "/restaurants/{restaurant_id}",
    response_model=RestaurantEnvelope,
    response_model_exclude_unset=True,
    responses=_BY_ID_ERRORS,
    summary="Update a restaurant by id (partial merge)",
)
async def update_restaurant(
    restaurant_id: str = Depends(valid_restaurant_id),
    fields: Dict[str, Any] = Body(description="Fields to change; omitted fields keep their values"),
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantEnvelope:
    """
    Merge the supplied fields into the stored restaurant.

    Fields not present in the body keep their stored values.
    """
    record = await service.update_restaurant(restaurant_id, fields)
    return RestaurantEnvelope(message="Restaurant successfully updated.", data=record)


@router.delete(
    "/restaurants/{restaurant_id}",
    response_model=MessageResponse,
    responses=_BY_ID_ERRORS,
    summary="Delete a restaurant by id",
)
async def delete_restaurant(
    restaurant_id: str = Depends(valid_restaurant_id),
    service: RestaurantService = Depends(get_restaurant_service),
) -> MessageResponse:
    await service.delete_restaurant(restaurant_id)
    return MessageResponse(message="Restaurant successfully deleted.")
