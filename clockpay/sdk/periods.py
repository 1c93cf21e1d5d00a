"""Period discovery and payroll runs.

Each attendance export matching the input pattern is one period. A run
loads every period into its own accumulator, merges them, and finalizes
once so the service amount is shared across everyone in the run.

Failures are handled at three levels:
- row: unparsable duration -> row skipped, RowWarning recorded
- file: unreadable/undecodable export -> file skipped, FileError recorded
- run: no input files or bad service amount -> exception, nothing processed
"""

import csv
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .aggregator import EmployeePeriodTotals, PeriodAccumulator, PeriodTotals, finalize
from .roster import HolidayPredicate, Roster, UnknownEmployeeError, no_holidays
from .schemas import DEFAULT_INPUT_PATTERN
from .sessions import RowWarning, iter_raw_rows, read_sessions

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

FILE_ENCODING = "utf-8-sig"


class AttendanceFileError(Exception):
    """Raised when an attendance export cannot be read as a whole."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class NoInputFilesError(Exception):
    """Raised when a run has no attendance exports to process."""
    pass


class InvalidServiceAmountError(ValueError):
    """Raised when the pooled service amount is negative or not a number."""
    pass


@dataclass
class FileError:
    path: str
    message: str


@dataclass
class PeriodLoad:
    """One export folded into its own accumulator."""

    path: Path
    accumulator: PeriodAccumulator
    warnings: List[RowWarning] = field(default_factory=list)


@dataclass
class PayrollRun:
    """Everything a report needs about one run."""

    service_amount: float
    employees: List[EmployeePeriodTotals]
    totals: PeriodTotals
    files: List[str] = field(default_factory=list)
    file_errors: List[FileError] = field(default_factory=list)
    warnings: List[RowWarning] = field(default_factory=list)
    unknown_employees: List[str] = field(default_factory=list)

    @property
    def grand_total(self) -> float:
        return self.totals.grand_total

    def employee(self, employee_id: str) -> Optional[EmployeePeriodTotals]:
        for totals in self.employees:
            if totals.employee_id == employee_id:
                return totals
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service_amount": self.service_amount,
            "files": self.files,
            "employees": [e.to_dict() for e in self.employees],
            "totals": self.totals.to_dict(),
            "file_errors": [{"path": e.path, "message": e.message} for e in self.file_errors],
            "warnings": [
                {
                    "source": w.source,
                    "line": w.line_number,
                    "employee": w.employee_id,
                    "message": w.message,
                    "skipped": w.skipped,
                }
                for w in self.warnings
            ],
            "unknown_employees": self.unknown_employees,
        }


def discover_period_files(
    directory: Union[str, Path] = ".",
    pattern: str = DEFAULT_INPUT_PATTERN,
) -> List[Path]:
    """List attendance exports in a directory, sorted by name."""
    return sorted(p for p in Path(directory).glob(pattern) if p.is_file())


def validate_service_amount(amount: float) -> float:
    if amount is None or math.isnan(amount) or math.isinf(amount):
        raise InvalidServiceAmountError(f"Service amount must be a number, got {amount!r}")
    if amount < 0:
        raise InvalidServiceAmountError(f"Service amount cannot be negative, got {amount}")
    return float(amount)


def load_period(path: Union[str, Path]) -> PeriodLoad:
    """Read one export into a fresh accumulator.

    Raises:
        AttendanceFileError: If the file cannot be opened, decoded or parsed
    """
    path = Path(path)
    logger.debug(f"loading period {path}")

    try:
        with open(path, "r", encoding=FILE_ENCODING, newline="") as f:
            rows = list(iter_raw_rows(f))
    except OSError as e:
        raise AttendanceFileError(path, f"cannot read file: {e}")
    except UnicodeDecodeError as e:
        raise AttendanceFileError(path, f"not valid {FILE_ENCODING} text: {e}")
    except csv.Error as e:
        raise AttendanceFileError(path, f"malformed export: {e}")

    sessions, warnings = read_sessions(rows, source=path.name)
    accumulator = PeriodAccumulator().add_sessions(sessions)
    logger.debug(f"{path.name}: {accumulator.session_count} session(s), {len(warnings)} warning(s)")

    return PeriodLoad(path=path, accumulator=accumulator, warnings=warnings)


def run_payroll(
    paths: Iterable[Union[str, Path]],
    roster: Roster,
    service_amount: float,
    is_holiday: HolidayPredicate = no_holidays,
    strict: bool = False,
) -> PayrollRun:
    """Process every period and produce final totals.

    Each file is folded into its own accumulator and all of them are merged
    before one finalization. The 96h period tier and the vacation credit
    therefore apply to the run as a whole, not to each file. Run one file at
    a time for strict per-period tiers.

    Args:
        paths: Attendance exports, processed in the given order
        roster: Employee lookup
        service_amount: Pooled service amount shared by worked minutes
        is_holiday: Holiday predicate over calendar days
        strict: If True, employees missing from the roster abort the run

    Raises:
        NoInputFilesError: If paths is empty
        InvalidServiceAmountError: If service_amount is negative or NaN
        UnknownEmployeeError: If strict and attendance names unknown employees
    """
    paths = [Path(p) for p in paths]
    if not paths:
        raise NoInputFilesError("No matching attendance files found")
    service_amount = validate_service_amount(service_amount)

    run_accumulator = PeriodAccumulator()
    files: List[str] = []
    file_errors: List[FileError] = []
    warnings: List[RowWarning] = []

    for path in paths:
        try:
            period = load_period(path)
        except AttendanceFileError as e:
            logger.error(f"Skipping {path}: {e.reason}")
            file_errors.append(FileError(path=str(path), message=e.reason))
            continue

        run_accumulator.merge(period.accumulator)
        warnings.extend(period.warnings)
        files.append(str(path))

    unknown = roster.unknown(run_accumulator.employees())
    if unknown and strict:
        raise UnknownEmployeeError(unknown)

    employees, totals = finalize(run_accumulator, roster, service_amount, is_holiday)

    return PayrollRun(
        service_amount=service_amount,
        employees=employees,
        totals=totals,
        files=files,
        file_errors=file_errors,
        warnings=warnings,
        unknown_employees=unknown,
    )
