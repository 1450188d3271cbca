"""Flat-file booking store reading one JSON array per collection."""

import asyncio
import json
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from booking_analytics.errors import CorruptRecordError, StoreUnavailableError
from booking_analytics.models import Appointment, Employee, Establishment, Service

# Thread pool for blocking file reads
_executor = ThreadPoolExecutor(max_workers=4)

_establishments = TypeAdapter(list[Establishment])
_services = TypeAdapter(list[Service])
_employees = TypeAdapter(list[Employee])
_appointments = TypeAdapter(list[Appointment])


class JsonBookingStore:
    """Booking store over ``<collection>.json`` files in a data directory.

    A missing file reads as an empty collection. Records are filtered by
    establishment before validation, so a bad record of another tenant does
    not break this tenant's report.
    """

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)

    def _read_sync(self, collection: str) -> list[dict[str, Any]]:
        """Blocking read of a collection file - runs in thread pool."""
        path = self._data_dir / f"{collection}.json"
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Collection file missing, reading as empty", collection=collection)
            return []
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot read {path.name}: {exc}") from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise CorruptRecordError(f"{path.name} is not valid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise CorruptRecordError(f"{path.name} must contain a JSON array")
        return data

    async def _read(self, collection: str) -> list[dict[str, Any]]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_executor, partial(self._read_sync, collection))

    @staticmethod
    def _validate(adapter: TypeAdapter, records: list[dict[str, Any]], collection: str):
        try:
            return adapter.validate_python(records)
        except ValidationError as exc:
            raise CorruptRecordError(f"Invalid record in {collection}: {exc}") from exc

    async def find_establishment(self, establishment_id: int) -> Establishment | None:
        records = [r for r in await self._read("establishments") if r.get("id") == establishment_id]
        found = self._validate(_establishments, records[:1], "establishments")
        return found[0] if found else None

    async def find_services(self) -> list[Service]:
        return self._validate(_services, await self._read("services"), "services")

    async def find_employees(self, establishment_id: int) -> list[Employee]:
        records = [
            r for r in await self._read("employees") if r.get("establishmentId") == establishment_id
        ]
        return self._validate(_employees, records, "employees")

    async def find_appointments(self, establishment_id: int) -> list[Appointment]:
        records = [
            r
            for r in await self._read("appointments")
            if r.get("establishmentId") == establishment_id
        ]
        return self._validate(_appointments, records, "appointments")
