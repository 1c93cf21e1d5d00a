"""Period aggregation: fold sessions into payable amounts.

Accumulation and finalization are separate steps. A PeriodAccumulator
only collects sessions and minutes; finalize() turns an accumulator into
per-employee totals once every session is in. Each period can therefore
fold into its own accumulator, and accumulators can be merged at a single
point before finalizing.

Finalization order per employee:

1. worked minutes (sum of session durations)
2. vacation minutes = min(vacation_days x 8h, worked minutes)
3. 96h period tier over worked + vacation minutes
4. worked/vacation pay = ratio split of the tiered base pay
5. holiday premium (day pay above the plain rate) added to worked pay
6. service share from worked minutes only
7. net = worked pay + vacation pay + service - deduction (may be negative)
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Tuple

from .breaks import compute_breaks, sort_sessions
from .pay import (
    compute_day_pay,
    compute_period_pay,
    credited_vacation_minutes,
    holiday_premium,
    proportional_share,
    split_period_pay,
)
from .roster import HolidayPredicate, Roster, no_holidays
from .sessions import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayAggregate:
    """One employee's day: sessions in entry order, minutes, breaks, pay."""

    employee_id: str
    day: date
    sessions: Tuple[Session, ...]
    worked_minutes: int
    break_minutes: float
    pay: float
    is_holiday: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day.isoformat(),
            "worked_minutes": self.worked_minutes,
            "break_minutes": self.break_minutes,
            "pay": round(self.pay, 2),
            "is_holiday": self.is_holiday,
            "sessions": [
                {
                    "entry": s.entry.isoformat(),
                    "exit": s.exit.isoformat(),
                    "minutes": s.minutes,
                }
                for s in self.sessions
            ],
        }


@dataclass
class EmployeePeriodTotals:
    """Final payable amounts for one employee."""

    employee_id: str
    worked_minutes: int
    vacation_minutes: int
    vacation_days: int
    normal_minutes: int
    extra_minutes: int
    normal_pay: float
    extra_pay: float
    worked_pay: float
    vacation_pay: float
    day_pay_total: float
    holiday_premium: float
    service_share: float
    mandatory_deduction: float
    net_pay: float
    break_minutes: float
    days: List[DayAggregate] = field(default_factory=list)
    on_roster: bool = True

    @property
    def base_pay(self) -> float:
        """Tiered period pay plus holiday premium, before service and deduction."""
        return self.worked_pay + self.vacation_pay

    @property
    def total_pay_minutes(self) -> int:
        return self.worked_minutes + self.vacation_minutes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employee": self.employee_id,
            "on_roster": self.on_roster,
            "worked_minutes": self.worked_minutes,
            "break_minutes": self.break_minutes,
            "vacation_days": self.vacation_days,
            "vacation_minutes": self.vacation_minutes,
            "normal_minutes": self.normal_minutes,
            "extra_minutes": self.extra_minutes,
            "normal_pay": round(self.normal_pay, 2),
            "extra_pay": round(self.extra_pay, 2),
            "worked_pay": round(self.worked_pay, 2),
            "vacation_pay": round(self.vacation_pay, 2),
            "base_pay": round(self.base_pay, 2),
            "day_pay_total": round(self.day_pay_total, 2),
            "holiday_premium": round(self.holiday_premium, 2),
            "service_share": round(self.service_share, 2),
            "mandatory_deduction": round(self.mandatory_deduction, 2),
            "net_pay": round(self.net_pay, 2),
            "days": [d.to_dict() for d in self.days],
        }


@dataclass
class PeriodTotals:
    """Organization-wide totals."""

    total_worked_minutes: int = 0
    grand_total: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_worked_minutes": self.total_worked_minutes,
            "grand_total": round(self.grand_total, 2),
        }


class PeriodAccumulator:
    """Sessions and worked minutes keyed by employee and (employee, day)."""

    def __init__(self):
        self._sessions: Dict[str, Dict[date, List[Session]]] = defaultdict(lambda: defaultdict(list))
        self._worked: Dict[str, int] = defaultdict(int)
        self.total_worked_minutes = 0
        self.session_count = 0

    def add_session(self, session: Session) -> None:
        self._sessions[session.employee_id][session.day].append(session)
        self._worked[session.employee_id] += session.minutes
        self.total_worked_minutes += session.minutes
        self.session_count += 1

    def add_sessions(self, sessions: Iterable[Session]) -> "PeriodAccumulator":
        for session in sessions:
            self.add_session(session)
        return self

    def merge(self, other: "PeriodAccumulator") -> "PeriodAccumulator":
        """Fold another accumulator's sessions into this one."""
        for days in other._sessions.values():
            for sessions in days.values():
                self.add_sessions(sessions)
        return self

    def employees(self) -> List[str]:
        return sorted(self._sessions)

    def worked_minutes(self, employee_id: str) -> int:
        return self._worked.get(employee_id, 0)

    def day_aggregates(
        self,
        employee_id: str,
        hourly_rate: float,
        is_holiday: HolidayPredicate = no_holidays,
    ) -> List[DayAggregate]:
        """Per-day aggregates for an employee, in date order."""
        aggregates = []
        for day in sorted(self._sessions.get(employee_id, {})):
            sessions = sort_sessions(self._sessions[employee_id][day])
            worked = sum(s.minutes for s in sessions)
            holiday = is_holiday(day)
            aggregates.append(DayAggregate(
                employee_id=employee_id,
                day=day,
                sessions=tuple(sessions),
                worked_minutes=worked,
                break_minutes=compute_breaks(sessions),
                pay=compute_day_pay(worked, hourly_rate, holiday),
                is_holiday=holiday,
            ))
        return aggregates


def finalize_employee(
    accumulator: PeriodAccumulator,
    employee_id: str,
    roster: Roster,
    service_amount: float,
    is_holiday: HolidayPredicate = no_holidays,
) -> EmployeePeriodTotals:
    """Compute final amounts for one employee of a fully folded accumulator."""
    rate = roster.rate_for(employee_id)
    vacation_days = roster.vacation_days_for(employee_id)
    deduction = roster.deduction_for(employee_id)

    days = accumulator.day_aggregates(employee_id, rate, is_holiday)
    worked = accumulator.worked_minutes(employee_id)
    vacation = credited_vacation_minutes(vacation_days, worked)

    period_pay = compute_period_pay(worked + vacation, rate)
    worked_pay, vacation_pay = split_period_pay(period_pay.total, worked, vacation)
    day_pay_total = sum(d.pay for d in days)
    premium = holiday_premium(day_pay_total, worked, rate)
    worked_pay += premium
    service = proportional_share(worked, accumulator.total_worked_minutes, service_amount)

    return EmployeePeriodTotals(
        employee_id=employee_id,
        worked_minutes=worked,
        vacation_minutes=vacation,
        vacation_days=vacation_days,
        normal_minutes=period_pay.normal_minutes,
        extra_minutes=period_pay.extra_minutes,
        normal_pay=period_pay.normal_pay,
        extra_pay=period_pay.extra_pay,
        worked_pay=worked_pay,
        vacation_pay=vacation_pay,
        day_pay_total=day_pay_total,
        holiday_premium=premium,
        service_share=service,
        mandatory_deduction=deduction,
        net_pay=worked_pay + vacation_pay + service - deduction,
        break_minutes=sum(d.break_minutes for d in days),
        days=days,
        on_roster=employee_id in roster,
    )


def finalize(
    accumulator: PeriodAccumulator,
    roster: Roster,
    service_amount: float,
    is_holiday: HolidayPredicate = no_holidays,
) -> Tuple[List[EmployeePeriodTotals], PeriodTotals]:
    """Turn a fully folded accumulator into per-employee and overall totals.

    Employees are returned sorted by name. Names missing from the roster
    are paid at rate 0 and logged; callers decide whether that is fatal.
    """
    for name in roster.unknown(accumulator.employees()):
        logger.warning(f"'{name}' is not on the roster; paying at rate 0")

    employees = [
        finalize_employee(accumulator, name, roster, service_amount, is_holiday)
        for name in accumulator.employees()
    ]

    totals = PeriodTotals(total_worked_minutes=accumulator.total_worked_minutes)
    for employee in employees:
        totals.grand_total += employee.net_pay

    return employees, totals


def aggregate_period(
    sessions: Iterable[Session],
    roster: Roster,
    service_amount: float,
    is_holiday: HolidayPredicate = no_holidays,
) -> Tuple[List[EmployeePeriodTotals], PeriodTotals]:
    """Fold sessions into a fresh accumulator and finalize it."""
    accumulator = PeriodAccumulator().add_sessions(sessions)
    return finalize(accumulator, roster, service_amount, is_holiday)
