"""
Restaurants API — Restaurant Store (Storage Adapter)
=====================================================

What:  The five storage operations over the restaurants collection:
       create, list (paginated + borough filter), get, update, delete.
Why:   Keeps every MongoDB call in one class so the rest of the application
       never imports the driver.
How:   Each operation performs exactly one round-trip and returns a tagged
       StoreResult instead of raising:

           OK(value)            → operation succeeded
           NOT_FOUND            → no document matched the id
           INVALID_IDENTIFIER   → the id could not be converted to an ObjectId
           ERROR(message)       → any other driver or BSON encoding failure

Who:   Constructed once in the lifespan handler with the collection handle,
       stored on `app.state`, and used by RestaurantService.

Pagination:
    skip((page - 1) * perPage).limit(perPage) over the borough-filtered cursor.
    No sort is applied; results follow the collection's natural order.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from bson import ObjectId
from bson.errors import BSONError, InvalidId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Document = Dict[str, Any]

# Driver failures plus client-side BSON encoding errors (NUL in keys, ints wider than 8 bytes)
STORAGE_ERRORS = (PyMongoError, BSONError, OverflowError)


class StoreOutcome(str, enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID_IDENTIFIER = "invalid_identifier"
    ERROR = "error"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Tagged result of a storage operation."""

    outcome: StoreOutcome
    value: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "StoreResult[T]":
        return cls(StoreOutcome.OK, value=value)

    @classmethod
    def not_found(cls) -> "StoreResult[T]":
        return cls(StoreOutcome.NOT_FOUND)

    @classmethod
    def invalid_identifier(cls, message: str) -> "StoreResult[T]":
        return cls(StoreOutcome.INVALID_IDENTIFIER, message=message)

    @classmethod
    def error(cls, message: str) -> "StoreResult[T]":
        return cls(StoreOutcome.ERROR, message=message)

    @property
    def is_ok(self) -> bool:
        return self.outcome is StoreOutcome.OK


def _without_id(fields: Mapping[str, Any]) -> Document:
    # _id is assigned by MongoDB and immutable afterwards
    return {key: value for key, value in fields.items() if key != "_id"}


class RestaurantStore:
    """
    Storage adapter for restaurant documents.

    Args:
        collection: An async collection handle (pymongo AsyncCollection or any
                    object exposing the same coroutine methods).
    """

    def __init__(self, collection):
        self.collection = collection

    @property
    def database(self):
        """The database the collection lives in (used by the health check)."""
        return self.collection.database

    async def create(self, fields: Mapping[str, Any]) -> StoreResult[Document]:
        document = _without_id(fields)
        try:
            result = await self.collection.insert_one(document)
        except STORAGE_ERRORS as e:
            logger.error("Failed to insert restaurant: %s", str(e))
            return StoreResult.error(str(e))

        # insert_one sets _id on the dict it was given; copy it explicitly
        # so callers always see the assigned id
        document["_id"] = result.inserted_id
        logger.info("Restaurant created: %s", result.inserted_id)
        return StoreResult.ok(document)

    async def list(
        self,
        page: int,
        per_page: int,
        borough: Optional[str] = None,
    ) -> StoreResult[List[Document]]:
        query: Document = {}
        if borough is not None:
            query["borough"] = borough
        skip = (page - 1) * per_page

        try:
            cursor = self.collection.find(query).skip(skip).limit(per_page)
            documents = await cursor.to_list(length=per_page)
        except STORAGE_ERRORS as e:
            logger.error(
                "Failed to list restaurants (page=%d, perPage=%d, borough=%s): %s",
                page, per_page, borough, str(e),
            )
            return StoreResult.error(str(e))

        logger.debug(
            "Listed %d restaurants (page=%d, perPage=%d, borough=%s)",
            len(documents), page, per_page, borough,
        )
        return StoreResult.ok(documents)

    async def get(self, restaurant_id: str) -> StoreResult[Document]:
        try:
            object_id = ObjectId(restaurant_id)
        except (InvalidId, TypeError) as e:
            return StoreResult.invalid_identifier(str(e))

        try:
            document = await self.collection.find_one({"_id": object_id})
        except STORAGE_ERRORS as e:
            logger.error("Failed to fetch restaurant %s: %s", restaurant_id, str(e))
            return StoreResult.error(str(e))

        if document is None:
            return StoreResult.not_found()
        return StoreResult.ok(document)

    async def update(
        self,
        restaurant_id: str,
        fields: Mapping[str, Any],
    ) -> StoreResult[Document]:
        """
        Partial merge: only the supplied fields are `$set`; all others keep
        their stored values. An empty field set returns the stored document.
        """
        try:
            object_id = ObjectId(restaurant_id)
        except (InvalidId, TypeError) as e:
            return StoreResult.invalid_identifier(str(e))

        changes = _without_id(fields)
        try:
            if changes:
                document = await self.collection.find_one_and_update(
                    {"_id": object_id},
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                # MongoDB rejects an empty $set
                document = await self.collection.find_one({"_id": object_id})
        except STORAGE_ERRORS as e:
            logger.error("Failed to update restaurant %s: %s", restaurant_id, str(e))
            return StoreResult.error(str(e))

        if document is None:
            return StoreResult.not_found()
        logger.info(
            "Restaurant updated: %s (name=%s, borough=%s, fields=%s)",
            restaurant_id,
            document.get("name"),
            document.get("borough"),
            sorted(changes),
        )
        return StoreResult.ok(document)

    async def delete(self, restaurant_id: str) -> StoreResult[bool]:
        try:
            object_id = ObjectId(restaurant_id)
        except (InvalidId, TypeError) as e:
            return StoreResult.invalid_identifier(str(e))

        try:
            result = await self.collection.delete_one({"_id": object_id})
        except STORAGE_ERRORS as e:
            logger.error("Failed to delete restaurant %s: %s", restaurant_id, str(e))
            return StoreResult.error(str(e))

        deleted = result.deleted_count == 1
        if deleted:
            logger.info("Restaurant deleted: %s", restaurant_id)
        return StoreResult.ok(deleted)
