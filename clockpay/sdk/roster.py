"""Employee roster and holiday calendar.

Both are reference data handed to the aggregator at startup. The roster
is a plain lookup keyed by the employee name used in the clock export.
"""

from datetime import date
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from .schemas import EmployeeProfile, PayrollProfile

HolidayPredicate = Callable[[date], bool]


class UnknownEmployeeError(Exception):
    """Raised when attendance data names employees missing from the roster."""

    def __init__(self, names: Iterable[str]):
        self.names = sorted(names)
        super().__init__(
            f"Employee(s) not in roster: {', '.join(self.names)}\n\n"
            f"Add them under 'roster:' in profile.yaml."
        )


class Roster:
    """Immutable name -> EmployeeProfile lookup."""

    def __init__(self, employees: Iterable[EmployeeProfile] = ()):
        self._employees: Dict[str, EmployeeProfile] = {}
        for employee in employees:
            if employee.name in self._employees:
                raise ValueError(f"Duplicate roster entry: {employee.name}")
            self._employees[employee.name] = employee

    @classmethod
    def from_profile(cls, profile: PayrollProfile) -> "Roster":
        return cls(profile.employees())

    def __contains__(self, name: str) -> bool:
        return name in self._employees

    def __iter__(self) -> Iterator[EmployeeProfile]:
        return iter(self._employees.values())

    def __len__(self) -> int:
        return len(self._employees)

    def get(self, name: str) -> Optional[EmployeeProfile]:
        return self._employees.get(name)

    def rate_for(self, name: str) -> float:
        """Hourly rate, or 0 for names not on the roster."""
        employee = self.get(name)
        return employee.hourly_rate if employee else 0.0

    def deduction_for(self, name: str) -> float:
        employee = self.get(name)
        return employee.mandatory_deduction if employee else 0.0

    def vacation_days_for(self, name: str) -> int:
        employee = self.get(name)
        return employee.vacation_days if employee else 0

    def unknown(self, names: Iterable[str]) -> List[str]:
        """Names from attendance data that are not on the roster."""
        return sorted({name for name in names if name not in self._employees})


def holiday_calendar(dates: Iterable[date]) -> HolidayPredicate:
    """Build an is-holiday predicate from a fixed set of dates."""
    holidays = frozenset(dates)

    def is_holiday(day: date) -> bool:
        return day in holidays

    return is_holiday


def no_holidays(day: date) -> bool:
    return False
