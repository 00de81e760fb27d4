"""
Restaurants API — MongoDB Connection Management
================================================

What:  Creates the async MongoDB client, verifies connectivity, and hands out
       the restaurants collection.
Why:   Centralizes all connection logic in one place. The rest of the
       application only ever sees a collection handle.
How:   PyMongo's native asyncio client (AsyncMongoClient) with its built-in
       connection pool. A `ping` command proves the server is reachable
       before the application accepts traffic.
Who:   Called by the lifespan handler in main.py.
When:  Once at startup (connect) and once at shutdown (close).

Architecture Decision:
    The client is created lazily by PyMongo, so constructing it never fails
    for an unreachable server. We issue an explicit `ping` at startup so that
    a bad connection string aborts the process instead of surfacing as a 500
    on the first request.

Connection Pooling:
    AsyncMongoClient keeps a pool per server (maxPoolSize=100 by default).
    Concurrent requests interleave on the pool; no operation here holds a
    connection across requests.
"""

import logging
from typing import Optional, Tuple

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from app.config import Settings, settings as default_settings
from app.exceptions import StartupError

logger = logging.getLogger(__name__)


def create_client(config: Optional[Settings] = None) -> AsyncMongoClient:
    """Build an AsyncMongoClient from settings without touching the network."""
    config = config or default_settings
    return AsyncMongoClient(
        config.mongodb_uri,
        serverSelectionTimeoutMS=config.mongodb_server_selection_timeout_ms,
        # Hand back plain dicts; ObjectIds are serialized by the schema layer
        document_class=dict,
        tz_aware=True,
    )


async def connect(config: Optional[Settings] = None) -> Tuple[AsyncMongoClient, AsyncCollection]:
    """
    Connect to MongoDB and return (client, restaurants collection).

    What:    Creates the client and pings the server.
    When:    Called during application startup (lifespan).
    Why:     A failure to connect is fatal: the process must not partially serve.

    Raises:
        StartupError: The server could not be reached or rejected the ping.
    """
    config = config or default_settings
    client = create_client(config)
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        await client.close()
        logger.error("MongoDB connection failed: %s", str(e))
        raise StartupError(
            message=f"Could not connect to MongoDB: {e}",
            context={"database": config.mongodb_database},
        ) from e

    collection = client[config.mongodb_database][config.mongodb_collection]
    logger.info(
        "Connected to MongoDB (database=%s, collection=%s)",
        config.mongodb_database,
        config.mongodb_collection,
    )
    return client, collection


async def close_client(client: Optional[AsyncMongoClient]) -> None:
    """
    What:  Gracefully closes all pooled connections.
    When:  Called during application shutdown (lifespan handler).
    """
    if client is None:
        return
    await client.close()
    logger.info("MongoDB client closed")
