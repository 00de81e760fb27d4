"""
Restaurants API — Restaurant Service Unit Tests
================================================

What:  Tests that tagged store results become the right exceptions.
How:   The store is an AsyncMock returning hand-built StoreResults.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from app.exceptions import DatabaseError, InvalidIdentifierError, NotFoundError
from app.schemas.restaurant import ListQuery
from app.services.restaurant_service import RestaurantService
from app.services.restaurant_store import StoreResult


def _service(**methods):
    store = MagicMock()
    for name, result in methods.items():
        setattr(store, name, AsyncMock(return_value=result))
    return RestaurantService(store), store


class TestRestaurantServiceMapping:

    @pytest.mark.asyncio
    async def test_get_ok_serializes_object_id(self):
        object_id = ObjectId()
        service, _ = _service(get=StoreResult.ok({"_id": object_id, "name": "A", "cuisine": "Thai"}))

        record = await service.get_restaurant(str(object_id))

        dumped = record.model_dump(by_alias=True, exclude_unset=True)
        assert dumped == {"_id": str(object_id), "name": "A", "cuisine": "Thai"}

    @pytest.mark.asyncio
    async def test_get_not_found(self):
        service, _ = _service(get=StoreResult.not_found())

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_restaurant(str(ObjectId()))
        assert exc_info.value.message == "Restaurant not found by this id."

    @pytest.mark.asyncio
    async def test_update_invalid_identifier(self):
        service, _ = _service(update=StoreResult.invalid_identifier("bad id"))

        with pytest.raises(InvalidIdentifierError):
            await service.update_restaurant("bad", {"name": "B"})

    @pytest.mark.asyncio
    async def test_storage_error_carries_underlying_message(self):
        service, _ = _service(delete=StoreResult.error("connection reset by peer"))

        with pytest.raises(DatabaseError) as exc_info:
            await service.delete_restaurant(str(ObjectId()))
        assert "connection reset by peer" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_delete_false_is_not_found(self):
        service, _ = _service(delete=StoreResult.ok(False))

        with pytest.raises(NotFoundError):
            await service.delete_restaurant(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_delete_true_returns_none(self):
        service, _ = _service(delete=StoreResult.ok(True))

        assert await service.delete_restaurant(str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_list_passes_query_through(self):
        service, store = _service(list=StoreResult.ok([]))
        query = ListQuery.model_validate({"page": "2", "perPage": "5", "borough": "Bronx"})

        result = await service.list_restaurants(query)

        assert result == []
        store.list.assert_awaited_once_with(2, 5, "Bronx")
