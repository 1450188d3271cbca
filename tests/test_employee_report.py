"""Tests for the per-employee financial and detail reports."""

from datetime import date

import pytest

from booking_analytics.models import AppointmentStatus
from booking_analytics.services.employee_report import (
    ALL_PERIODS,
    UNASSIGNED_NAME,
    EmployeeReportService,
    build_employee_detail_report,
    build_employee_report,
)
from conftest import ANA, BRUNO, BRUSH, CARLA, CUT, ESTABLISHMENT_ID, MANICURE, make_appointment


@pytest.fixture
def bookings():
    return [
        make_appointment(1, "2025-03-10", [(CUT, ANA), (BRUSH, ANA)], total_price=150.0),
        make_appointment(2, "2025-03-11", services=[CUT, BRUSH], total_price=150.0),
        make_appointment(3, "2025-02-01", [(MANICURE, BRUNO)], total_price=40.0),
        make_appointment(
            4, "2025-03-12", [(CUT, BRUNO)], status=AppointmentStatus.CANCELLED, total_price=100.0
        ),
    ]


def _rows(report):
    return {row.employee_id: row for row in report.report}


# ============================================================================
# Financial report
# ============================================================================


def test_report_covers_whole_roster_and_unassigned(snapshot_factory, bookings):
    report = build_employee_report(snapshot_factory(bookings), month=None, year=None)

    assert [row.employee_id for row in report.report] == [ANA, BRUNO, CARLA, None]
    rows = _rows(report)

    ana = rows[ANA]
    assert (ana.appointment_count, ana.total_revenue) == (1, 150.0)
    assert (ana.employee_revenue, ana.establishment_revenue) == (65.0, 85.0)

    assert (rows[BRUNO].appointment_count, rows[BRUNO].employee_revenue) == (1, 20.0)
    assert (rows[CARLA].appointment_count, rows[CARLA].total_revenue) == (0, 0.0)

    unassigned = rows[None]
    assert unassigned.employee_name == UNASSIGNED_NAME
    assert unassigned.appointment_count == 1


def test_unassigned_appointment_is_counted_once(snapshot_factory, bookings):
    unassigned = _rows(build_employee_report(snapshot_factory(bookings), None, None))[None]

    assert unassigned.total_revenue == 150.0
    assert unassigned.employee_revenue == 65.0
    assert unassigned.establishment_revenue == 85.0


def test_report_summary(snapshot_factory, bookings):
    summary = build_employee_report(snapshot_factory(bookings), None, None).summary

    assert summary.total_appointments == 3
    assert summary.total_revenue == 340.0  # stored booking prices
    assert summary.total_employee_revenue == 150.0
    assert summary.total_establishment_revenue == 190.0
    assert summary.period == ALL_PERIODS


def test_report_for_one_month(snapshot_factory, bookings):
    report = build_employee_report(snapshot_factory(bookings), month=3, year=2025)

    rows = _rows(report)
    assert rows[ANA].employee_revenue == 65.0
    assert rows[BRUNO].appointment_count == 0
    assert report.summary.total_appointments == 2
    assert report.summary.total_revenue == 300.0
    assert report.summary.period == "3/2025"


def test_report_omits_idle_unassigned_row(snapshot_factory, bookings):
    report = build_employee_report(snapshot_factory(bookings), month=2, year=2025)

    assert [row.employee_id for row in report.report] == [ANA, BRUNO, CARLA]
    assert report.summary.total_employee_revenue == 20.0


def test_appointment_without_services_has_no_unassigned_work(snapshot_factory):
    snapshot = snapshot_factory([make_appointment(1, "2025-03-10", total_price=80.0)])

    report = build_employee_report(snapshot, month=None, year=None)

    assert None not in _rows(report)
    assert report.summary.total_appointments == 1
    assert report.summary.total_revenue == 80.0
    assert report.summary.total_employee_revenue == 0.0


def test_month_without_year_reports_all_periods(snapshot_factory, bookings):
    report = build_employee_report(snapshot_factory(bookings), month=3, year=None)

    assert report.summary.period == ALL_PERIODS
    assert report.summary.total_appointments == 3


def test_empty_report(snapshot_factory):
    report = build_employee_report(snapshot_factory([]), None, None)

    assert [row.employee_id for row in report.report] == [ANA, BRUNO, CARLA]
    assert report.summary.total_appointments == 0
    assert report.summary.total_employee_revenue == 0.0


# ============================================================================
# Detail report
# ============================================================================


def test_detail_report_lists_active_employees_only(snapshot_factory, bookings):
    report = build_employee_detail_report(snapshot_factory(bookings), frozenset({3}), 2025)

    [ana] = report.report
    assert ana.employee_id == ANA
    assert [(s.service_id, s.count) for s in ana.services] == [(CUT, 1), (BRUSH, 1)]
    assert (ana.total_count, ana.total_revenue, ana.total_commission) == (2, 150.0, 65.0)
    assert report.selected_months == [3]
    assert report.year == 2025


def test_detail_report_sorts_services_by_count(snapshot_factory):
    snapshot = snapshot_factory(
        [
            make_appointment(1, "2025-03-10", [(CUT, ANA), (BRUSH, ANA)]),
            make_appointment(2, "2025-03-17", [(BRUSH, ANA)]),
        ]
    )

    [ana] = build_employee_detail_report(snapshot, frozenset({3}), 2025).report

    assert [(s.service_name, s.count) for s in ana.services] == [("Escova", 2), ("Corte", 1)]
    assert ana.total_revenue == 200.0


def test_detail_report_count_ties_go_to_lower_service_id(snapshot_factory):
    snapshot = snapshot_factory([make_appointment(1, "2025-03-10", [(BRUSH, ANA), (CUT, ANA)])])

    [ana] = build_employee_detail_report(snapshot, frozenset({3}), 2025).report

    assert [s.service_id for s in ana.services] == [CUT, BRUSH]


def test_detail_report_over_several_months(snapshot_factory, bookings):
    report = build_employee_detail_report(snapshot_factory(bookings), frozenset({2, 3}), 2025)

    assert [e.employee_id for e in report.report] == [ANA, BRUNO]
    assert report.selected_months == [2, 3]


@pytest.mark.asyncio
async def test_detail_report_defaults_to_current_month(store_factory):
    today = date.today()
    store = store_factory([make_appointment(1, today.isoformat(), [(CUT, CARLA)])])

    report = await EmployeeReportService(store).employee_detail_report(ESTABLISHMENT_ID)

    assert report.year == today.year
    assert report.selected_months == [today.month]
    assert [e.employee_id for e in report.report] == [CARLA]


@pytest.mark.asyncio
async def test_service_report(store_factory, bookings):
    service = EmployeeReportService(store_factory(bookings))

    report = await service.employee_report(ESTABLISHMENT_ID, month=3, year=2025)

    assert report.summary.period == "3/2025"
    assert _rows(report)[ANA].total_revenue == 150.0
