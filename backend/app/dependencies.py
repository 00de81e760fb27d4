"""
Restaurants API — Request Dependencies (Validation Layer)
==========================================================

What:  FastAPI dependencies that validate request input and provide services.
Why:   Validation runs before the handler body, so a rejected request never
       reaches the storage adapter.
How:   Each dependency either returns a validated value or raises a
       ValidationError / InvalidIdentifierError, which the global exception
       handlers turn into a 400 response.

Dependency Inventory:
    - get_restaurant_store:    the RestaurantStore attached to app.state
    - get_restaurant_service:  a RestaurantService over that store
    - list_query_params:       page/perPage/borough from the query string
    - valid_restaurant_id:     ObjectId format check on the path id
"""

from typing import Any, Optional

from bson import ObjectId
from fastapi import Depends, Path, Query, Request
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import InvalidIdentifierError, ValidationError
from app.schemas.restaurant import ListQuery, validation_messages
from app.services.restaurant_service import RestaurantService
from app.services.restaurant_store import RestaurantStore


def get_restaurant_store(request: Request) -> RestaurantStore:
    store = getattr(request.app.state, "restaurant_store", None)
    if store is None:
        raise RuntimeError("RestaurantStore is not configured")
    return store


def get_restaurant_service(
    store: RestaurantStore = Depends(get_restaurant_store),
) -> RestaurantService:
    return RestaurantService(store)


def parse_list_query(page: Any, per_page: Any, borough: Any) -> ListQuery:
    """
    Validate raw page/perPage/borough values.

    Raises:
        ValidationError: one {field, message} entry per failing field
    """
    try:
        return ListQuery.model_validate(
            {"page": page, "perPage": per_page, "borough": borough}
        )
    except PydanticValidationError as exc:
        raise ValidationError(errors=validation_messages(exc)) from exc


async def list_query_params(
    page: Optional[str] = Query(default=None, description="1-based page number"),
    per_page: Optional[str] = Query(
        default=None, alias="perPage", description="Number of restaurants per page"
    ),
    borough: Optional[str] = Query(
        default=None, description="Only include restaurants in this borough (exact match)"
    ),
) -> ListQuery:
    # Parameters arrive as raw strings so that "abc" produces our own
    # per-field message instead of FastAPI's int parsing error
    return parse_list_query(page, per_page, borough)


async def valid_restaurant_id(
    restaurant_id: str = Path(description="Restaurant ObjectId (24 hex characters)"),
) -> str:
    if not ObjectId.is_valid(restaurant_id):
        raise InvalidIdentifierError(restaurant_id=restaurant_id)
    return restaurant_id
