"""Session building from raw attendance rows.

A time-clock export is a pipe-delimited file:

    Colaborador|Entrada|Salida|Total
    Dani|25/7/2025 09:00|25/7/2025 13:00|4h
    ...
    <footer>

The first row is a header and the last row is a footer; both are dropped,
as is any row with fewer than four fields.
"""

import csv
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Iterator, List, Optional, Tuple

from .timeparse import ParseError, is_zero_timestamp, parse_duration, parse_timestamp

logger = logging.getLogger(__name__)

DELIMITER = "|"
MIN_FIELDS = 4


@dataclass(frozen=True)
class RawAttendanceRow:
    """One data line of an export, before any parsing."""

    employee_id: str
    entry_text: str
    exit_text: str
    duration_text: str
    line_number: int = 0


@dataclass(frozen=True)
class Session:
    """One clock-in/clock-out interval.

    minutes comes from the exported duration, not exit - entry; the clock
    does not always agree with itself.
    """

    employee_id: str
    day: date
    entry: datetime
    exit: datetime
    minutes: int

    @property
    def has_valid_timestamps(self) -> bool:
        return not (is_zero_timestamp(self.entry) or is_zero_timestamp(self.exit))


@dataclass(frozen=True)
class RowWarning:
    """A row that was skipped or kept with a data-quality problem."""

    line_number: int
    employee_id: str
    message: str
    skipped: bool = True
    source: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.source}:" if self.source else "line "
        return f"{prefix}{self.line_number} ({self.employee_id}): {self.message}"


def iter_raw_rows(lines: Iterable[str]) -> Iterator[RawAttendanceRow]:
    """Yield data rows of an export, dropping header, footer and short rows.

    Blank lines are dropped before the header and footer are picked, so a
    trailing empty line never turns the footer into data.
    """
    records = [
        (index + 1, record)
        for index, record in enumerate(csv.reader(lines, delimiter=DELIMITER))
        if any(field.strip() for field in record)
    ]

    for line_number, record in records[1:-1]:
        if len(record) < MIN_FIELDS:
            logger.debug(f"line {line_number}: {len(record)} field(s), skipping")
            continue
        yield RawAttendanceRow(
            employee_id=record[0],
            entry_text=record[1],
            exit_text=record[2],
            duration_text=record[3],
            line_number=line_number,
        )


def build_session(row: RawAttendanceRow) -> Session:
    """Build a Session from a raw row.

    Unreadable timestamps fall back to ZERO_TIMESTAMP rather than failing;
    the session is filed under its entry date even when the shift runs
    past midnight.

    Raises:
        ParseError: If the duration text cannot be parsed
    """
    entry = parse_timestamp(row.entry_text)
    exit_ = parse_timestamp(row.exit_text)
    minutes = parse_duration(row.duration_text)

    return Session(
        employee_id=row.employee_id.strip(),
        day=entry.date(),
        entry=entry,
        exit=exit_,
        minutes=minutes,
    )


def read_sessions(
    rows: Iterable[RawAttendanceRow],
    source: Optional[str] = None,
) -> Tuple[List[Session], List[RowWarning]]:
    """Build sessions for every row, collecting warnings instead of failing.

    Rows whose duration cannot be parsed are skipped. Rows with unreadable
    timestamps are kept but reported.

    Args:
        rows: Raw rows, typically from iter_raw_rows()
        source: Optional file name used to label warnings

    Returns:
        Tuple of (sessions, warnings)
    """
    sessions: List[Session] = []
    warnings: List[RowWarning] = []

    for row in rows:
        employee_id = row.employee_id.strip()
        try:
            session = build_session(row)
        except ParseError as e:
            warning = RowWarning(row.line_number, employee_id, str(e), source=source)
            logger.warning(f"Skipping row: {warning}")
            warnings.append(warning)
            continue

        if not session.has_valid_timestamps:
            warning = RowWarning(
                row.line_number,
                employee_id,
                f"unreadable timestamp (entry='{row.entry_text}', exit='{row.exit_text}')",
                skipped=False,
                source=source,
            )
            logger.warning(f"Data quality: {warning}")
            warnings.append(warning)

        sessions.append(session)

    return sessions, warnings
