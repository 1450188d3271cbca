"""MongoDB booking store."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from booking_analytics.config import settings
from booking_analytics.errors import CorruptRecordError, StoreUnavailableError
from booking_analytics.models import Appointment, Employee, Establishment, Service

# Thread pool for sync MongoDB operations
_executor = ThreadPoolExecutor(max_workers=4)

# Mongo's own _id is never part of the records
_PROJECTION = {"_id": 0}


class MongoBookingStore:
    """Booking store over the ``establishments``, ``services``, ``employees``
    and ``appointments`` collections.

    Documents use the same camelCase layout as the flat-file store and are
    looked up by their integer ``id`` / ``establishmentId`` fields.
    """

    def __init__(self, client: MongoClient, database: str | None = None) -> None:
        self._db = client[database or settings.mongodb_database]

    def _find_sync(self, collection: str, query: dict[str, Any]) -> list[dict[str, Any]]:
        """Synchronous query - runs in thread pool."""
        try:
            return list(self._db[collection].find(query, _PROJECTION))
        except PyMongoError as exc:
            raise StoreUnavailableError(f"MongoDB query on {collection} failed: {exc}") from exc

    async def _find(self, collection: str, query: dict[str, Any]) -> list[dict[str, Any]]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_executor, partial(self._find_sync, collection, query))

    async def _find_as(self, model: type, collection: str, query: dict[str, Any]) -> list:
        documents = await self._find(collection, query)
        try:
            return TypeAdapter(list[model]).validate_python(documents)
        except ValidationError as exc:
            raise CorruptRecordError(f"Invalid document in {collection}: {exc}") from exc

    async def find_establishment(self, establishment_id: int) -> Establishment | None:
        found = await self._find_as(Establishment, "establishments", {"id": establishment_id})
        return found[0] if found else None

    async def find_services(self) -> list[Service]:
        return await self._find_as(Service, "services", {})

    async def find_employees(self, establishment_id: int) -> list[Employee]:
        return await self._find_as(Employee, "employees", {"establishmentId": establishment_id})

    async def find_appointments(self, establishment_id: int) -> list[Appointment]:
        return await self._find_as(
            Appointment, "appointments", {"establishmentId": establishment_id}
        )


def get_mongo_client() -> MongoClient:
    """Get synchronous MongoDB client."""
    return MongoClient(settings.mongodb_uri)
