"""Effective price, duration and commission resolution per establishment."""

from collections.abc import Iterable
from dataclasses import dataclass

import polars as pl

from booking_analytics.models import Establishment, Service, ServicePreference

DEFAULT_COMMISSION_PERCENT = 50.0
REMOVED_SERVICE_NAME = "Serviço removido"

PRICE_SCHEMA = {
    "service_id": pl.Int64,
    "service_name": pl.Utf8,
    "price": pl.Float64,
    "commission_percent": pl.Float64,
}

_NO_PREFERENCE = ServicePreference()


@dataclass(frozen=True)
class CommissionSplit:
    """Price of one performed service and how it is shared."""

    price: float
    commission_percent: float

    @property
    def employee_revenue(self) -> float:
        return self.price * self.commission_percent / 100

    @property
    def establishment_revenue(self) -> float:
        return self.price - self.employee_revenue


class PriceResolver:
    """Resolve effective service terms for one establishment.

    Establishment preferences win over catalog defaults. Services missing from
    the catalog resolve to a sentinel name and a zero price so that reports
    over historical data never fail on a deleted service.
    """

    def __init__(self, establishment: Establishment | None, services: Iterable[Service]) -> None:
        self._preferences = establishment.service_preferences if establishment else {}
        self._catalog = {service.id: service for service in services}

    def _preference(self, service_id: int) -> ServicePreference:
        return self._preferences.get(service_id, _NO_PREFERENCE)

    def service_name(self, service_id: int) -> str:
        service = self._catalog.get(service_id)
        return service.name if service else REMOVED_SERVICE_NAME

    def effective_price(self, service_id: int) -> float:
        preference = self._preference(service_id)
        if preference.price is not None:
            return preference.price
        service = self._catalog.get(service_id)
        if service is not None and service.price is not None:
            return service.price
        return 0.0

    def effective_duration(self, service_id: int) -> int | None:
        preference = self._preference(service_id)
        if preference.duration is not None:
            return preference.duration
        service = self._catalog.get(service_id)
        return service.duration if service else None

    def effective_commission_percent(self, service_id: int) -> float:
        commission = self._preference(service_id).commission
        return DEFAULT_COMMISSION_PERCENT if commission is None else commission

    def split(self, service_id: int) -> CommissionSplit:
        return CommissionSplit(
            price=self.effective_price(service_id),
            commission_percent=self.effective_commission_percent(service_id),
        )

    def price_frame(self, service_ids: Iterable[int]) -> pl.DataFrame:
        """Resolved terms for the given service ids, one row per id."""
        ids = sorted(set(service_ids))
        return pl.DataFrame(
            {
                "service_id": ids,
                "service_name": [self.service_name(sid) for sid in ids],
                "price": [float(self.effective_price(sid)) for sid in ids],
                "commission_percent": [
                    float(self.effective_commission_percent(sid)) for sid in ids
                ],
            },
            schema=PRICE_SCHEMA,
        )
