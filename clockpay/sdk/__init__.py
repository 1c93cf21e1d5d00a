"""clockpay SDK - Attendance parsing and payroll computation."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_profile_path,
    load_profile,
    save_profile,
    ProfileNotFoundError,
    ProfileValidationError,
)

from .schemas import (
    EmployeeProfile,
    PayrollProfile,
    DEFAULT_INPUT_PATTERN,
)

from .roster import (
    Roster,
    UnknownEmployeeError,
    holiday_calendar,
    no_holidays,
)

from .timeparse import (
    ParseError,
    parse_duration,
    parse_timestamp,
    format_minutes,
)

from .sessions import (
    RawAttendanceRow,
    Session,
    RowWarning,
    build_session,
    iter_raw_rows,
    read_sessions,
)

from .breaks import compute_breaks, break_segments, sort_sessions

from .pay import (
    compute_day_pay,
    compute_period_pay,
    holiday_premium,
    DAILY_OVERTIME_THRESHOLD,
    PERIOD_OVERTIME_THRESHOLD,
)

from .aggregator import (
    DayAggregate,
    EmployeePeriodTotals,
    PeriodTotals,
    PeriodAccumulator,
    aggregate_period,
    finalize,
)

from .periods import (
    AttendanceFileError,
    NoInputFilesError,
    InvalidServiceAmountError,
    PayrollRun,
    discover_period_files,
    load_period,
    run_payroll,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "ProfileNotFoundError",
    "ProfileValidationError",
    # Schemas
    "EmployeeProfile",
    "PayrollProfile",
    "DEFAULT_INPUT_PATTERN",
    # Roster
    "Roster",
    "UnknownEmployeeError",
    "holiday_calendar",
    "no_holidays",
    # Parsing
    "ParseError",
    "parse_duration",
    "parse_timestamp",
    "format_minutes",
    "RawAttendanceRow",
    "Session",
    "RowWarning",
    "build_session",
    "iter_raw_rows",
    "read_sessions",
    # Breaks and pay
    "compute_breaks",
    "break_segments",
    "sort_sessions",
    "compute_day_pay",
    "compute_period_pay",
    "holiday_premium",
    "DAILY_OVERTIME_THRESHOLD",
    "PERIOD_OVERTIME_THRESHOLD",
    # Aggregation
    "DayAggregate",
    "EmployeePeriodTotals",
    "PeriodTotals",
    "PeriodAccumulator",
    "aggregate_period",
    "finalize",
    # Runs
    "AttendanceFileError",
    "NoInputFilesError",
    "InvalidServiceAmountError",
    "PayrollRun",
    "discover_period_files",
    "load_period",
    "run_payroll",
]
