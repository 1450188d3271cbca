"""
Test configuration and fixtures.

Provides a small salon: three catalog services, one establishment with
price/commission preferences, a three-person roster and helpers to build
appointments.
"""

from datetime import date

import pytest

from booking_analytics.models import (
    Appointment,
    AppointmentStatus,
    Assignment,
    Employee,
    Establishment,
    Service,
    ServicePreference,
)
from booking_analytics.repositories.base import Snapshot
from booking_analytics.repositories.memory import InMemoryBookingStore

ESTABLISHMENT_ID = 1

CUT, BRUSH, MANICURE = 1, 2, 3
ANA, BRUNO, CARLA = 10, 11, 12


def make_appointment(
    appointment_id: int,
    day: str,
    assignments: list[tuple[int, int | None]] = (),
    *,
    services: list[int] | None = None,
    status: AppointmentStatus = AppointmentStatus.COMPLETED,
    total_price: float = 0.0,
    establishment_id: int = ESTABLISHMENT_ID,
) -> Appointment:
    """Build an appointment; ``services`` defaults to the assigned services."""
    if services is None:
        services = [service_id for service_id, _ in assignments]
    return Appointment(
        id=appointment_id,
        establishment_id=establishment_id,
        date=date.fromisoformat(day),
        time="10:00",
        status=status,
        services=services,
        assignments=[
            Assignment(service_id=service_id, employee_id=employee_id)
            for service_id, employee_id in assignments
        ],
        total_price=total_price,
    )


@pytest.fixture
def services() -> list[Service]:
    return [
        Service(id=CUT, name="Corte", price=100.0, duration=60, category_id=1),
        Service(id=BRUSH, name="Escova", price=50.0, duration=30, category_id=1),
        Service(id=MANICURE, name="Manicure", price=30.0, duration=45, category_id=2),
    ]


@pytest.fixture
def establishment() -> Establishment:
    return Establishment(
        id=ESTABLISHMENT_ID,
        name="Studio Bela",
        services=[CUT, BRUSH, MANICURE],
        service_preferences={
            CUT: ServicePreference(commission=40),
            MANICURE: ServicePreference(price=40.0, duration=50),
        },
    )


@pytest.fixture
def employees() -> list[Employee]:
    return [
        Employee(id=ANA, establishment_id=ESTABLISHMENT_ID, name="Ana", services=[CUT, BRUSH]),
        Employee(id=BRUNO, establishment_id=ESTABLISHMENT_ID, name="Bruno", services=[MANICURE]),
        Employee(id=CARLA, establishment_id=ESTABLISHMENT_ID, name="Carla", services=[CUT]),
    ]


@pytest.fixture
def snapshot_factory(establishment, services, employees):
    """Build a snapshot of the fixture salon with the given appointments."""

    def build(appointments: list[Appointment]) -> Snapshot:
        return Snapshot(
            establishment_id=ESTABLISHMENT_ID,
            establishment=establishment,
            services=services,
            employees=employees,
            appointments=appointments,
        )

    return build


@pytest.fixture
def store_factory(establishment, services, employees):
    """Build an in-memory store of the fixture salon with the given appointments."""

    def build(appointments: list[Appointment]) -> InMemoryBookingStore:
        return InMemoryBookingStore(
            establishments=[establishment],
            services=list(services),
            employees=list(employees),
            appointments=list(appointments),
        )

    return build
