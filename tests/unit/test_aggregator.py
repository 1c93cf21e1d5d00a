"""Tests for period aggregation.

Covers:
1. Single-employee end-to-end day (breaks, day pay, service, net)
2. Holiday day pay through the aggregator into net pay and grand total
3. Service distribution across employees sums to the pooled amount
4. Vacation crediting capped by worked minutes, ratio split of base pay
5. 96h period tier including vacation minutes
6. Negative net pay is reported as-is
7. Unknown employees paid at rate 0
8. Merging isolated accumulators equals folding everything into one
"""

from datetime import date, datetime, timedelta

import pytest

from clockpay.sdk.aggregator import PeriodAccumulator, aggregate_period, finalize
from clockpay.sdk.roster import Roster, holiday_calendar
from clockpay.sdk.schemas import EmployeeProfile
from clockpay.sdk.sessions import Session

DAY = date(2025, 7, 21)
HOLIDAY = date(2025, 7, 25)


def make_session(employee: str, day: date, start: str, end: str, minutes: int) -> Session:
    def at(hhmm):
        hour, minute = (int(p) for p in hhmm.split(":"))
        return datetime(day.year, day.month, day.day, hour, minute)

    return Session(employee, day, at(start), at(end), minutes)


def make_roster(*employees) -> Roster:
    return Roster(EmployeeProfile(**e) for e in employees)


@pytest.fixture
def dani_roster():
    return make_roster({"name": "Dani", "hourly_rate": 1800, "mandatory_deduction": 0, "vacation_days": 0})


class TestSingleEmployeeDay:
    """Two 4h sessions with a 1h break, service goes entirely to one employee."""

    def test_end_to_end(self, dani_roster):
        sessions = [
            make_session("Dani", DAY, "14:00", "18:00", 240),
            make_session("Dani", DAY, "09:00", "13:00", 240),
        ]
        employees, totals = aggregate_period(sessions, dani_roster, 10000)

        assert len(employees) == 1
        dani = employees[0]
        assert dani.worked_minutes == 480
        assert dani.break_minutes == 60
        assert dani.day_pay_total == 14400
        assert dani.base_pay == 14400
        assert dani.service_share == 10000
        assert dani.mandatory_deduction == 0
        assert dani.net_pay == 24400

        assert totals.total_worked_minutes == 480
        assert totals.grand_total == 24400

    def test_day_sessions_sorted_by_entry(self, dani_roster):
        sessions = [
            make_session("Dani", DAY, "14:00", "18:00", 240),
            make_session("Dani", DAY, "09:00", "13:00", 240),
        ]
        employees, _ = aggregate_period(sessions, dani_roster, 0)

        day = employees[0].days[0]
        assert [s.entry.hour for s in day.sessions] == [9, 14]

    def test_days_are_separate(self, dani_roster):
        sessions = [
            make_session("Dani", DAY, "09:00", "13:00", 240),
            make_session("Dani", DAY + timedelta(days=1), "14:00", "18:00", 240),
        ]
        employees, _ = aggregate_period(sessions, dani_roster, 0)

        days = employees[0].days
        assert [d.day for d in days] == [DAY, DAY + timedelta(days=1)]
        assert all(d.break_minutes == 0 for d in days)


class TestHoliday:
    """Holiday days use the injected predicate and their pay reaches net pay."""

    def test_ten_hours_on_holiday(self, dani_roster):
        sessions = [make_session("Dani", HOLIDAY, "08:00", "18:00", 600)]
        employees, totals = aggregate_period(
            sessions, dani_roster, 0, is_holiday=holiday_calendar([HOLIDAY])
        )

        day = employees[0].days[0]
        assert day.is_holiday
        assert day.pay == 39600
        assert employees[0].day_pay_total == 39600
        assert employees[0].holiday_premium == pytest.approx(21600)
        assert employees[0].net_pay == pytest.approx(39600)
        assert totals.grand_total == pytest.approx(39600)

    def test_holiday_pays_more_than_normal_day(self, dani_roster):
        sessions = [make_session("Dani", HOLIDAY, "08:00", "18:00", 600)]
        holiday, _ = aggregate_period(
            sessions, dani_roster, 0, is_holiday=holiday_calendar([HOLIDAY])
        )
        normal, _ = aggregate_period(sessions, dani_roster, 0)

        assert holiday[0].net_pay > normal[0].net_pay

    def test_same_day_not_holiday_without_calendar(self, dani_roster):
        sessions = [make_session("Dani", HOLIDAY, "08:00", "18:00", 600)]
        employees, totals = aggregate_period(sessions, dani_roster, 0)

        assert not employees[0].days[0].is_holiday
        assert employees[0].day_pay_total == 18000
        assert employees[0].holiday_premium == 0
        assert employees[0].net_pay == pytest.approx(18000)
        assert totals.grand_total == pytest.approx(18000)

    def test_daily_tier_uses_day_total_not_session(self, dani_roster):
        """Two 5h sessions on a holiday are a 10h day."""
        sessions = [
            make_session("Dani", HOLIDAY, "06:00", "11:00", 300),
            make_session("Dani", HOLIDAY, "12:00", "17:00", 300),
        ]
        employees, _ = aggregate_period(
            sessions, dani_roster, 0, is_holiday=holiday_calendar([HOLIDAY])
        )
        assert employees[0].day_pay_total == 39600
        assert employees[0].net_pay == pytest.approx(39600)

    def test_premium_kept_with_vacation_split(self):
        """Vacation is split from the plain-rate base; the premium stays with worked pay."""
        roster = make_roster({"name": "Dani", "hourly_rate": 1800, "vacation_days": 1})
        sessions = [make_session("Dani", HOLIDAY, "08:00", "18:00", 600)]
        employees, _ = aggregate_period(
            sessions, roster, 0, is_holiday=holiday_calendar([HOLIDAY])
        )

        dani = employees[0]
        assert dani.vacation_pay == pytest.approx(480 * 30)
        assert dani.worked_pay == pytest.approx(600 * 30 + 21600)
        assert dani.net_pay == pytest.approx(1080 * 30 + 21600)


class TestServiceDistribution:
    """Service is split by worked minutes only."""

    def test_shares_sum_to_service_amount(self):
        roster = make_roster(
            {"name": "Dani", "hourly_rate": 1800},
            {"name": "Vero", "hourly_rate": 1300},
            {"name": "Leidy", "hourly_rate": 2000},
        )
        sessions = [
            make_session("Dani", DAY, "09:00", "16:00", 417),
            make_session("Vero", DAY, "09:00", "12:00", 173),
            make_session("Leidy", DAY, "09:00", "18:00", 541),
        ]
        employees, totals = aggregate_period(sessions, roster, 12345.67)

        assert sum(e.service_share for e in employees) == pytest.approx(12345.67)
        assert totals.total_worked_minutes == 417 + 173 + 541

        vero = next(e for e in employees if e.employee_id == "Vero")
        assert vero.service_share == pytest.approx(173 / 1131 * 12345.67)

    def test_no_worked_minutes_gives_zero_shares(self):
        roster = make_roster({"name": "Dani", "hourly_rate": 1800})
        sessions = [make_session("Dani", DAY, "09:00", "09:00", 0)]
        employees, totals = aggregate_period(sessions, roster, 10000)

        assert employees[0].service_share == 0
        assert totals.total_worked_minutes == 0

    def test_vacation_excluded_from_service(self):
        roster = make_roster(
            {"name": "Dani", "hourly_rate": 1800, "vacation_days": 1},
            {"name": "Vero", "hourly_rate": 1800},
        )
        sessions = [
            make_session("Dani", DAY, "09:00", "17:00", 480),
            make_session("Vero", DAY, "09:00", "17:00", 480),
        ]
        employees, _ = aggregate_period(sessions, roster, 1000)

        assert [e.service_share for e in employees] == [500, 500]


class TestVacation:
    """Vacation crediting and the ratio split of period base pay."""

    def test_vacation_capped_by_worked_minutes(self):
        roster = make_roster({"name": "Dani", "hourly_rate": 1800, "vacation_days": 9})
        sessions = [make_session("Dani", DAY, "09:00", "10:40", 100)]
        employees, _ = aggregate_period(sessions, roster, 0)

        dani = employees[0]
        assert dani.vacation_minutes == 100
        assert dani.vacation_minutes <= min(9 * 480, dani.worked_minutes)

    def test_vacation_pay_is_ratio_of_base(self):
        roster = make_roster({"name": "Dani", "hourly_rate": 1800, "vacation_days": 1})
        sessions = [make_session("Dani", DAY, "09:00", "17:00", 480)]
        employees, _ = aggregate_period(sessions, roster, 0)

        dani = employees[0]
        assert dani.vacation_minutes == 480
        assert dani.base_pay == pytest.approx(960 * 30)
        assert dani.worked_pay == pytest.approx(dani.base_pay / 2)
        assert dani.vacation_pay == pytest.approx(dani.base_pay / 2)

    def test_vacation_counts_toward_period_tier(self):
        """93h worked + 1 vacation day = 101h, 5h past the 96h threshold."""
        roster = make_roster({"name": "Dani", "hourly_rate": 1800, "vacation_days": 1})
        sessions = [
            make_session("Dani", DAY + timedelta(days=i), "08:00", "17:18", 558)
            for i in range(10)
        ]
        employees, _ = aggregate_period(sessions, roster, 0)

        dani = employees[0]
        assert dani.worked_minutes == 5580
        assert dani.total_pay_minutes == 6060
        assert dani.normal_minutes == 5760
        assert dani.extra_minutes == 300
        assert dani.normal_pay == pytest.approx(5760 * 30)
        assert dani.extra_pay == pytest.approx(300 * 45)

        expected_base = 5760 * 30 + 300 * 45
        assert dani.base_pay == pytest.approx(expected_base)
        assert dani.vacation_pay == pytest.approx(expected_base * 480 / 6060)


class TestNetPay:
    """Net pay = worked + vacation + service - deduction."""

    def test_deduction_can_make_net_negative(self):
        roster = make_roster({"name": "Nayi", "hourly_rate": 3125, "mandatory_deduction": 10000})
        sessions = [make_session("Nayi", DAY, "09:00", "10:00", 60)]
        employees, totals = aggregate_period(sessions, roster, 0)

        nayi = employees[0]
        assert nayi.net_pay == pytest.approx(3125 - 10000)
        assert nayi.net_pay < 0
        assert totals.grand_total == pytest.approx(nayi.net_pay)

    def test_net_pay_identity(self):
        roster = make_roster(
            {"name": "Dani", "hourly_rate": 1800, "mandatory_deduction": 10000, "vacation_days": 2},
            {"name": "Vero", "hourly_rate": 1300},
        )
        sessions = [
            make_session("Dani", DAY, "08:00", "19:00", 660),
            make_session("Vero", DAY, "09:00", "15:00", 360),
        ]
        employees, totals = aggregate_period(sessions, roster, 5000)

        for e in employees:
            assert e.net_pay == pytest.approx(
                e.worked_pay + e.vacation_pay + e.service_share - e.mandatory_deduction
            )
        assert totals.grand_total == pytest.approx(sum(e.net_pay for e in employees))


class TestUnknownEmployees:
    """Names missing from the roster are paid at rate 0 but still listed."""

    def test_unknown_employee(self, dani_roster):
        sessions = [
            make_session("Dani", DAY, "09:00", "17:00", 480),
            make_session("Ghost", DAY, "09:00", "17:00", 480),
        ]
        employees, _ = aggregate_period(sessions, dani_roster, 1000)

        ghost = next(e for e in employees if e.employee_id == "Ghost")
        assert not ghost.on_roster
        assert ghost.base_pay == 0
        assert ghost.service_share == 500


class TestAccumulatorMerge:
    """Isolated period accumulators merge into the same result."""

    def test_merge_matches_single_fold(self):
        roster = make_roster(
            {"name": "Dani", "hourly_rate": 1800, "vacation_days": 1},
            {"name": "Vero", "hourly_rate": 1300},
        )
        period_a = [
            make_session("Dani", DAY, "09:00", "13:00", 240),
            make_session("Vero", DAY, "10:00", "14:00", 240),
        ]
        period_b = [
            make_session("Dani", DAY, "14:00", "18:00", 240),
            make_session("Dani", DAY + timedelta(days=1), "09:00", "19:00", 600),
        ]

        merged = PeriodAccumulator().add_sessions(period_a)
        merged.merge(PeriodAccumulator().add_sessions(period_b))
        single = PeriodAccumulator().add_sessions(period_a + period_b)

        merged_employees, merged_totals = finalize(merged, roster, 7000)
        single_employees, single_totals = finalize(single, roster, 7000)

        assert [e.to_dict() for e in merged_employees] == [e.to_dict() for e in single_employees]
        assert merged_totals == single_totals
        assert merged.session_count == 4

    def test_merge_joins_sessions_on_same_day(self):
        """A day split across two exports still gets its break computed."""
        roster = make_roster({"name": "Dani", "hourly_rate": 1800})
        merged = PeriodAccumulator().add_sessions([make_session("Dani", DAY, "09:00", "13:00", 240)])
        merged.merge(PeriodAccumulator().add_sessions([make_session("Dani", DAY, "14:00", "18:00", 240)]))

        employees, _ = finalize(merged, roster, 0)
        assert employees[0].days[0].break_minutes == 60
        assert len(employees[0].days[0].sessions) == 2
