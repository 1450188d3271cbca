"""Unit tests for effective price, duration and commission resolution."""

import pytest

from booking_analytics.models import Establishment, Service, ServicePreference
from booking_analytics.pricing import (
    DEFAULT_COMMISSION_PERCENT,
    REMOVED_SERVICE_NAME,
    CommissionSplit,
    PriceResolver,
)
from conftest import BRUSH, CUT, MANICURE

REMOVED = 99


@pytest.fixture
def resolver(establishment, services) -> PriceResolver:
    return PriceResolver(establishment, services)


# ============================================================================
# Price precedence
# ============================================================================


def test_preference_price_overrides_catalog(resolver):
    assert resolver.effective_price(MANICURE) == 40.0


def test_catalog_price_used_without_preference(resolver):
    assert resolver.effective_price(BRUSH) == 50.0


def test_preference_without_price_falls_back_to_catalog(resolver):
    # CUT only overrides commission
    assert resolver.effective_price(CUT) == 100.0


def test_price_defaults_to_zero_when_catalog_has_none():
    resolver = PriceResolver(None, [Service(id=5, name="Consulta")])
    assert resolver.effective_price(5) == 0.0


def test_preference_price_of_zero_is_respected(services):
    establishment = Establishment(id=1, service_preferences={CUT: ServicePreference(price=0)})
    assert PriceResolver(establishment, services).effective_price(CUT) == 0.0


# ============================================================================
# Duration and commission precedence
# ============================================================================


def test_duration_precedence(resolver):
    assert resolver.effective_duration(MANICURE) == 50
    assert resolver.effective_duration(BRUSH) == 30
    assert resolver.effective_duration(REMOVED) is None


def test_commission_override(resolver):
    assert resolver.effective_commission_percent(CUT) == 40


def test_commission_defaults_to_fifty(resolver):
    assert resolver.effective_commission_percent(BRUSH) == DEFAULT_COMMISSION_PERCENT == 50


def test_commission_of_zero_is_not_replaced_by_default(services):
    establishment = Establishment(id=1, service_preferences={CUT: ServicePreference(commission=0)})
    assert PriceResolver(establishment, services).effective_commission_percent(CUT) == 0


def test_commission_outside_percent_range_is_rejected():
    with pytest.raises(ValueError):
        ServicePreference(commission=120)


def test_missing_establishment_uses_catalog_and_defaults(services):
    resolver = PriceResolver(None, services)
    assert resolver.effective_price(MANICURE) == 30.0
    assert resolver.effective_commission_percent(CUT) == 50


# ============================================================================
# Removed services and commission split
# ============================================================================


def test_removed_service_fails_soft(resolver):
    assert resolver.service_name(REMOVED) == REMOVED_SERVICE_NAME
    assert resolver.effective_price(REMOVED) == 0.0
    assert resolver.split(REMOVED).employee_revenue == 0.0


def test_split_shares_price(resolver):
    split = resolver.split(CUT)
    assert split == CommissionSplit(price=100.0, commission_percent=40)
    assert split.employee_revenue == 40.0
    assert split.establishment_revenue == 60.0


@pytest.mark.parametrize("price,percent", [(100.0, 50), (37.5, 33), (80.0, 0), (19.9, 100)])
def test_split_parts_add_up_to_price(price, percent):
    split = CommissionSplit(price=price, commission_percent=percent)
    assert split.employee_revenue + split.establishment_revenue == pytest.approx(price)


def test_price_frame_has_one_row_per_service(resolver):
    frame = resolver.price_frame([BRUSH, CUT, CUT, REMOVED])

    assert frame["service_id"].to_list() == [CUT, BRUSH, REMOVED]
    assert frame["price"].to_list() == [100.0, 50.0, 0.0]
    assert frame["commission_percent"].to_list() == [40.0, 50.0, 50.0]
    assert frame["service_name"].to_list() == ["Corte", "Escova", REMOVED_SERVICE_NAME]


def test_price_frame_empty(resolver):
    assert resolver.price_frame([]).height == 0
