"""
Restaurants API — Restaurant Service
=====================================

What:  Turns tagged StoreResults into response models or application exceptions.
Why:   Route handlers stay thin; error mapping lives in one place and is
       shared by the JSON API and the HTML form.
How:   OK → response model, NOT_FOUND → NotFoundError,
       INVALID_IDENTIFIER → InvalidIdentifierError, ERROR → DatabaseError.
Who:   Constructed per request by the `get_restaurant_service` dependency.
"""

import logging
from typing import Any, Dict, List, Optional

from app.exceptions import DatabaseError, InvalidIdentifierError, NotFoundError
from app.schemas.restaurant import ListQuery, RestaurantRecord
from app.services.restaurant_store import RestaurantStore, StoreOutcome, StoreResult

logger = logging.getLogger(__name__)


def _unwrap(result: StoreResult, restaurant_id: Optional[str] = None) -> Any:
    if result.is_ok:
        return result.value
    if result.outcome is StoreOutcome.NOT_FOUND:
        raise NotFoundError(resource="Restaurant", resource_id=restaurant_id)
    if result.outcome is StoreOutcome.INVALID_IDENTIFIER:
        raise InvalidIdentifierError(
            restaurant_id=restaurant_id,
            context={"reason": result.message},
        )
    raise DatabaseError(
        message=f"Database error: {result.message}",
        context={"restaurant_id": restaurant_id} if restaurant_id else None,
    )


class RestaurantService:
    """
    Business logic layer for restaurant operations.

    Responsibilities:
        - create_restaurant(): insert and echo the record with its new id
        - list_restaurants(): one page of the borough-filtered collection
        - get_restaurant() / update_restaurant() / delete_restaurant():
          by-id operations with not-found and bad-id handling
    """

    def __init__(self, store: RestaurantStore):
        self.store = store

    async def create_restaurant(self, fields: Dict[str, Any]) -> RestaurantRecord:
        document = _unwrap(await self.store.create(fields))
        return RestaurantRecord.from_document(document)

    async def list_restaurants(self, query: ListQuery) -> List[RestaurantRecord]:
        """
        Return records [(page-1)*perPage, page*perPage) of the filtered set.

        An empty page is a normal result, never a NotFoundError.
        """
        documents = _unwrap(
            await self.store.list(query.page, query.per_page, query.borough)
        )
        return [RestaurantRecord.from_document(doc) for doc in documents]

    async def get_restaurant(self, restaurant_id: str) -> RestaurantRecord:
        document = _unwrap(await self.store.get(restaurant_id), restaurant_id)
        return RestaurantRecord.from_document(document)

    async def update_restaurant(
        self, restaurant_id: str, fields: Dict[str, Any]
    ) -> RestaurantRecord:
        document = _unwrap(await self.store.update(restaurant_id, fields), restaurant_id)
        return RestaurantRecord.from_document(document)

    async def delete_restaurant(self, restaurant_id: str) -> None:
        """
        Delete a restaurant.

        Raises:
            NotFoundError: nothing was deleted (already gone or never existed)
        """
        deleted = _unwrap(await self.store.delete(restaurant_id), restaurant_id)
        if not deleted:
            raise NotFoundError(resource="Restaurant", resource_id=restaurant_id)
