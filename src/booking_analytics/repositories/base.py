"""Read-only data-access interface shared by all booking stores."""

import asyncio
from dataclasses import dataclass
from typing import Protocol

from booking_analytics.models import Appointment, Employee, Establishment, Service


class BookingStore(Protocol):
    """Read access to the records the analytics engine needs.

    Implementations raise ``BookingStoreError`` subclasses when the backing
    store cannot be read.
    """

    async def find_establishment(self, establishment_id: int) -> Establishment | None: ...

    async def find_services(self) -> list[Service]: ...

    async def find_employees(self, establishment_id: int) -> list[Employee]: ...

    async def find_appointments(self, establishment_id: int) -> list[Appointment]: ...


@dataclass(frozen=True)
class Snapshot:
    """Everything a report reads, fetched once per request."""

    establishment_id: int
    establishment: Establishment | None
    services: list[Service]
    employees: list[Employee]
    appointments: list[Appointment]


async def load_snapshot(store: BookingStore, establishment_id: int) -> Snapshot:
    """Fetch the establishment, catalog, roster and appointments concurrently."""
    establishment, services, employees, appointments = await asyncio.gather(
        store.find_establishment(establishment_id),
        store.find_services(),
        store.find_employees(establishment_id),
        store.find_appointments(establishment_id),
    )
    return Snapshot(
        establishment_id=establishment_id,
        establishment=establishment,
        services=services,
        employees=employees,
        appointments=appointments,
    )
