"""Pay rules.

There are two overtime tiers and they are deliberately separate:

- Daily: the first 8 hours of a day are paid at the regular rate. Past
  that, a normal day keeps paying the regular rate, while a holiday pays
  1.5x its (already doubled) holiday rate.
- Period: the first 96 hours of a period, vacation included, are paid at
  the plain hourly rate and anything beyond at 1.5x.
"""

from dataclasses import dataclass
from typing import Tuple

DAILY_OVERTIME_THRESHOLD = 8 * 60
PERIOD_OVERTIME_THRESHOLD = 96 * 60
VACATION_DAY_MINUTES = 8 * 60

HOLIDAY_MULTIPLIER = 2.0
OVERTIME_MULTIPLIER = 1.5


def compute_day_pay(worked_minutes: int, hourly_rate: float, is_holiday: bool) -> float:
    """Gross pay for one day of work.

    Args:
        worked_minutes: Minutes worked that day
        hourly_rate: Employee's hourly rate
        is_holiday: Whether the day is on the holiday calendar

    Returns:
        Pay for the day
    """
    regular_rate = hourly_rate / 60
    overtime_rate = regular_rate

    if is_holiday:
        regular_rate = hourly_rate * HOLIDAY_MULTIPLIER / 60
        overtime_rate = OVERTIME_MULTIPLIER * regular_rate

    if worked_minutes > DAILY_OVERTIME_THRESHOLD:
        overtime_minutes = worked_minutes - DAILY_OVERTIME_THRESHOLD
        return DAILY_OVERTIME_THRESHOLD * regular_rate + overtime_minutes * overtime_rate
    return worked_minutes * regular_rate


@dataclass(frozen=True)
class PeriodPay:
    """Period-level pay split at the 96-hour threshold."""

    normal_minutes: int
    extra_minutes: int
    normal_pay: float
    extra_pay: float

    @property
    def total(self) -> float:
        return self.normal_pay + self.extra_pay


def compute_period_pay(total_pay_minutes: int, hourly_rate: float) -> PeriodPay:
    """Apply the 96-hour period tier to worked plus vacation minutes."""
    normal_minutes = min(total_pay_minutes, PERIOD_OVERTIME_THRESHOLD)
    extra_minutes = max(0, total_pay_minutes - PERIOD_OVERTIME_THRESHOLD)

    per_minute = hourly_rate / 60
    return PeriodPay(
        normal_minutes=normal_minutes,
        extra_minutes=extra_minutes,
        normal_pay=normal_minutes * per_minute,
        extra_pay=extra_minutes * per_minute * OVERTIME_MULTIPLIER,
    )


def credited_vacation_minutes(vacation_days: int, worked_minutes: int) -> int:
    """Vacation minutes to credit, capped by what was actually worked."""
    return min(vacation_days * VACATION_DAY_MINUTES, worked_minutes)


def split_period_pay(
    base_pay: float,
    worked_minutes: int,
    vacation_minutes: int,
) -> Tuple[float, float]:
    """Split tiered base pay into (worked, vacation) by share of minutes.

    Vacation pay is not re-derived from its own rate; it is the vacation
    fraction of the already-tiered total.
    """
    total = worked_minutes + vacation_minutes
    if total <= 0:
        return 0.0, 0.0
    return base_pay * worked_minutes / total, base_pay * vacation_minutes / total


def holiday_premium(day_pay_total: float, worked_minutes: int, hourly_rate: float) -> float:
    """Daily pay above the plain rate for the same minutes.

    Normal days pay the plain rate at every minute, so only holiday days
    contribute. The period tier already pays the plain rate; this is what
    the holiday multipliers add on top of it.
    """
    return max(0.0, day_pay_total - worked_minutes * hourly_rate / 60)


def proportional_share(minutes: int, total_minutes: int, amount: float) -> float:
    """Share of a pooled amount for `minutes` out of `total_minutes`."""
    if total_minutes <= 0:
        return 0.0
    return minutes / total_minutes * amount
