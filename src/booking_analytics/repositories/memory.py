"""In-memory booking store."""

from dataclasses import dataclass, field

from booking_analytics.models import Appointment, Employee, Establishment, Service


@dataclass
class InMemoryBookingStore:
    """Booking store backed by plain lists, used for tests and embedding."""

    establishments: list[Establishment] = field(default_factory=list)
    services: list[Service] = field(default_factory=list)
    employees: list[Employee] = field(default_factory=list)
    appointments: list[Appointment] = field(default_factory=list)

    async def find_establishment(self, establishment_id: int) -> Establishment | None:
        return next((e for e in self.establishments if e.id == establishment_id), None)

    async def find_services(self) -> list[Service]:
        return list(self.services)

    async def find_employees(self, establishment_id: int) -> list[Employee]:
        return [e for e in self.employees if e.establishment_id == establishment_id]

    async def find_appointments(self, establishment_id: int) -> list[Appointment]:
        return [a for a in self.appointments if a.establishment_id == establishment_id]
